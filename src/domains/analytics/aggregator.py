# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Instructor report aggregation module.

This module turns raw per-student records into per-course summaries:
- Grade distribution (A-F) of student average scores
- Course completion distribution of student progress
- Per-assignment and per-quiz completion/average-score tables
- Course-level average quiz score, assignment score and progress

Aggregation is pure and runs one pass over each course's students.
Courses are independent of each other, so the per-course step can be
mapped over courses in any order or in parallel.

Usage:
    from src.domains.analytics import InstructorReportAggregator

    aggregator = InstructorReportAggregator()
    summaries = aggregator.summarize(instructor_record)

    # Or use convenience function
    from src.domains.analytics.aggregator import summarize

    summaries = summarize(instructor_record)
"""

import logging
import math
from dataclasses import dataclass, field
from decimal import ROUND_HALF_UP, Decimal
from typing import Any

from src.domains.analytics.records import CourseRecord, InstructorRecord, StudentRecord

logger = logging.getLogger(__name__)

GRADE_LABELS: tuple[str, ...] = ("A", "B", "C", "D", "F")
COMPLETION_LABELS: tuple[str, ...] = ("0-25%", "26-50%", "51-75%", "76-100%")

# Lower bounds, checked from highest to lowest
GRADE_THRESHOLDS: tuple[tuple[float, str], ...] = (
    (90.0, "A"),
    (80.0, "B"),
    (70.0, "C"),
    (60.0, "D"),
)
COMPLETION_THRESHOLDS: tuple[tuple[float, str], ...] = (
    (76.0, "76-100%"),
    (51.0, "51-75%"),
    (26.0, "26-50%"),
)

DEFAULT_COMPLETION_MIN_AVERAGE = 70.0
DEFAULT_COMPLETION_MIN_PROGRESS = 80.0

_ONE_DECIMAL = Decimal("0.1")

# Floats at or above this magnitude carry no fractional part
_INTEGRAL_FLOAT = 2.0**52


def round_one(value: float) -> float:
    """Round to one decimal place, halves away from zero.

    Works on the exact binary value, so 72.25 becomes 72.3 while
    0.15 (stored as 0.1499...) becomes 0.1.
    """
    if not math.isfinite(value) or abs(value) >= _INTEGRAL_FLOAT:
        return value
    return float(Decimal(value).quantize(_ONE_DECIMAL, rounding=ROUND_HALF_UP))


def classify_grade(average_score: float) -> str:
    """Map a 0-100 average score to a letter grade bucket."""
    for threshold, label in GRADE_THRESHOLDS:
        if average_score >= threshold:
            return label
    return "F"


def classify_completion(progress: float) -> str:
    """Map a 0-100 progress value to a completion bucket label."""
    for threshold, label in COMPLETION_THRESHOLDS:
        if progress >= threshold:
            return label
    return "0-25%"


@dataclass(frozen=True)
class CompletionPolicy:
    """Thresholds a student must reach to count as having completed a course.

    Attributes:
        min_average: Minimum average score (inclusive).
        min_progress: Minimum course progress (inclusive).
    """

    min_average: float = DEFAULT_COMPLETION_MIN_AVERAGE
    min_progress: float = DEFAULT_COMPLETION_MIN_PROGRESS

    def is_complete(self, average_score: float, progress: float) -> bool:
        """Check whether a student's average and progress meet the policy."""
        return average_score >= self.min_average and progress >= self.min_progress


@dataclass(frozen=True)
class GradeBucket:
    """Number of students whose average falls in a letter grade."""

    name: str
    students: int

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {"name": self.name, "students": self.students}


@dataclass(frozen=True)
class CompletionBucket:
    """Number of students whose progress falls in a completion range."""

    name: str
    students: int

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {"name": self.name, "students": self.students}


@dataclass(frozen=True)
class ItemStat:
    """Completion and score breakdown for one assignment or quiz.

    Attributes:
        title: Master title of the item.
        completed: Students who have a usable grade/score for it.
        pending: Course students minus completed.
        average_score: Mean percentage among completions, 0 if none.
    """

    title: str
    completed: int
    pending: int
    average_score: float

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "title": self.title,
            "completed": self.completed,
            "pending": self.pending,
            "average_score": self.average_score,
        }


@dataclass(frozen=True)
class CourseSummary:
    """Report-ready statistics for one course.

    Attributes:
        course_id: Course identifier.
        title: Course title.
        description: Course description.
        total_students: Number of students in the course.
        overall_progress: Mean student progress (0-100).
        average_quiz_score: Unweighted mean of per-quiz averages.
        average_assignment_score: Unweighted mean of per-assignment averages.
        students_completed_course: Students meeting the completion policy.
        grade_distribution: Five buckets, A to F.
        course_completion_distribution: Four buckets, 0-25% to 76-100%.
        assignment_completion: One row per master assignment.
        quiz_completion: One row per master quiz.
    """

    course_id: str
    title: str
    total_students: int
    overall_progress: float
    average_quiz_score: float
    average_assignment_score: float
    students_completed_course: int
    grade_distribution: tuple[GradeBucket, ...]
    course_completion_distribution: tuple[CompletionBucket, ...]
    assignment_completion: tuple[ItemStat, ...]
    quiz_completion: tuple[ItemStat, ...]
    description: str = ""

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for API response."""
        return {
            "course_id": self.course_id,
            "title": self.title,
            "description": self.description,
            "total_students": self.total_students,
            "overall_progress": self.overall_progress,
            "average_quiz_score": self.average_quiz_score,
            "average_assignment_score": self.average_assignment_score,
            "students_completed_course": self.students_completed_course,
            "grade_distribution": [b.to_dict() for b in self.grade_distribution],
            "course_completion_distribution": [
                b.to_dict() for b in self.course_completion_distribution
            ],
            "assignment_completion": [s.to_dict() for s in self.assignment_completion],
            "quiz_completion": [s.to_dict() for s in self.quiz_completion],
        }


@dataclass
class _ItemTally:
    """Running statistic for one master item while a course is summarized."""

    title: str
    pending: int
    completed: int = 0
    scores: list[float] = field(default_factory=list)

    def record(self, percentage: float) -> None:
        self.completed += 1
        self.pending -= 1
        self.scores.append(percentage)

    @property
    def average(self) -> float:
        return _mean(self.scores)

    def to_stat(self) -> ItemStat:
        return ItemStat(
            title=self.title,
            completed=self.completed,
            pending=self.pending,
            average_score=round_one(self.average),
        )


@dataclass
class _CourseTally:
    """Call-local accumulators for one course."""

    assignments: dict[str, _ItemTally]
    quizzes: dict[str, _ItemTally]
    grade_counts: dict[str, int] = field(
        default_factory=lambda: dict.fromkeys(GRADE_LABELS, 0)
    )
    completion_counts: dict[str, int] = field(
        default_factory=lambda: dict.fromkeys(COMPLETION_LABELS, 0)
    )
    progress_total: float = 0.0
    completed_course: int = 0


def _mean(values: list[float]) -> float:
    """Arithmetic mean, 0 for no values.

    Finite inputs always give a finite mean, even when their running
    total overflows.
    """
    if not values:
        return 0.0
    total = sum(values)
    if math.isfinite(total):
        return total / len(values)
    # Total overflowed; scale each term first
    return sum(value / len(values) for value in values)


def _mean_of_item_averages(items: dict[str, _ItemTally]) -> float:
    return _mean([item.average for item in items.values()])


class InstructorReportAggregator:
    """Aggregates raw instructor records into per-course summaries.

    The aggregator holds no state between calls apart from its
    completion policy, so one instance can be shared freely.

    Attributes:
        policy: Course completion thresholds.
    """

    def __init__(self, policy: CompletionPolicy | None = None) -> None:
        """Initialize the aggregator.

        Args:
            policy: Completion policy (defaults to 70% average, 80% progress).
        """
        self.policy = policy or CompletionPolicy()

    def summarize(self, instructor: InstructorRecord) -> list[CourseSummary]:
        """Summarize every course of an instructor.

        Args:
            instructor: Raw instructor record.

        Returns:
            One CourseSummary per course, in input order. Empty when the
            instructor has no courses.

        Example:
            >>> aggregator = InstructorReportAggregator()
            >>> summaries = aggregator.summarize(record)
            >>> [s.title for s in summaries]
            ['Algebra I', 'Geometry']
        """
        summaries = [self.summarize_course(course) for course in instructor.courses]

        logger.info(
            "Summarized instructor courses: instructor=%s, courses=%d",
            instructor.instructor_id,
            len(summaries),
        )
        return summaries

    def summarize_course(self, course: CourseRecord) -> CourseSummary:
        """Summarize a single course.

        Args:
            course: Raw course record.

        Returns:
            Fully populated CourseSummary.
        """
        total_students = len(course.students)
        master_assignments, master_quizzes = self._discover_items(course)

        tally = _CourseTally(
            assignments={
                item_id: _ItemTally(title=title, pending=total_students)
                for item_id, title in master_assignments.items()
            },
            quizzes={
                item_id: _ItemTally(title=title, pending=total_students)
                for item_id, title in master_quizzes.items()
            },
        )

        for student in course.students:
            self._tally_student(student, tally)

        overall_progress = (
            tally.progress_total / total_students if total_students > 0 else 0.0
        )

        summary = CourseSummary(
            course_id=course.course_id,
            title=course.title,
            description=course.description,
            total_students=total_students,
            overall_progress=round_one(overall_progress),
            average_quiz_score=round_one(_mean_of_item_averages(tally.quizzes)),
            average_assignment_score=round_one(_mean_of_item_averages(tally.assignments)),
            students_completed_course=tally.completed_course,
            grade_distribution=tuple(
                GradeBucket(name=label, students=tally.grade_counts[label])
                for label in GRADE_LABELS
            ),
            course_completion_distribution=tuple(
                CompletionBucket(name=label, students=tally.completion_counts[label])
                for label in COMPLETION_LABELS
            ),
            assignment_completion=tuple(t.to_stat() for t in tally.assignments.values()),
            quiz_completion=tuple(t.to_stat() for t in tally.quizzes.values()),
        )

        logger.debug(
            "Summarized course: id=%s, students=%d, assignments=%d, quizzes=%d, completed=%d",
            course.course_id,
            total_students,
            len(master_assignments),
            len(master_quizzes),
            tally.completed_course,
        )
        return summary

    @staticmethod
    def _discover_items(course: CourseRecord) -> tuple[dict[str, str], dict[str, str]]:
        """Collect master assignment and quiz titles, first title wins.

        Returns:
            Tuple of (assignment id -> title, quiz id -> title), both in
            first-seen order.
        """
        assignments: dict[str, str] = {}
        quizzes: dict[str, str] = {}

        for student in course.students:
            for quiz in student.quizzes:
                quizzes.setdefault(quiz.quiz_id, quiz.quiz_title)
            for assignment in student.assignments:
                assignments.setdefault(assignment.assignment_id, assignment.assignment_title)

        return assignments, quizzes

    def _tally_student(self, student: StudentRecord, tally: _CourseTally) -> None:
        """Fold one student's entries into the course accumulators."""
        scores: list[float] = []
        quizzes_completed = 0
        assignments_completed = 0

        for quiz in student.quizzes:
            if quiz.score is None or quiz.score < 0:
                continue
            percentage = quiz.percentage
            if not math.isfinite(percentage):
                # Overflowed conversion, e.g. a vanishing maxScore; stays pending
                continue
            scores.append(percentage)
            quizzes_completed += 1
            tally.quizzes[quiz.quiz_id].record(percentage)

        for assignment in student.assignments:
            if assignment.grade is None or assignment.grade < 0:
                continue
            scores.append(assignment.grade)
            assignments_completed += 1
            tally.assignments[assignment.assignment_id].record(assignment.grade)

        if not scores:
            # Ungraded students sit in the lowest buckets without touching totals
            tally.grade_counts["F"] += 1
            tally.completion_counts["0-25%"] += 1
            return

        average_score = _mean(scores)
        tally.grade_counts[classify_grade(average_score)] += 1

        progress = self._student_progress(
            quizzes_completed=quizzes_completed,
            quiz_universe=len(tally.quizzes),
            assignments_completed=assignments_completed,
            assignment_universe=len(tally.assignments),
        )
        tally.progress_total += progress
        tally.completion_counts[classify_completion(progress)] += 1

        if self.policy.is_complete(average_score, progress):
            tally.completed_course += 1

    @staticmethod
    def _student_progress(
        quizzes_completed: int,
        quiz_universe: int,
        assignments_completed: int,
        assignment_universe: int,
    ) -> float:
        """Combine quiz and assignment completion rates into one percentage.

        Averages the two rates when the course has both kinds of items,
        otherwise uses whichever kind exists.
        """
        quiz_progress = (
            quizzes_completed / quiz_universe * 100 if quiz_universe > 0 else 0.0
        )
        assignment_progress = (
            assignments_completed / assignment_universe * 100
            if assignment_universe > 0
            else 0.0
        )

        if quiz_universe > 0 and assignment_universe > 0:
            return (quiz_progress + assignment_progress) / 2
        if quiz_universe > 0:
            return quiz_progress
        if assignment_universe > 0:
            return assignment_progress
        return 0.0


def summarize(
    instructor: InstructorRecord,
    policy: CompletionPolicy | None = None,
) -> list[CourseSummary]:
    """Summarize an instructor's courses with a one-off aggregator.

    Args:
        instructor: Raw instructor record.
        policy: Optional completion policy override.

    Returns:
        One CourseSummary per course, in input order.
    """
    return InstructorReportAggregator(policy=policy).summarize(instructor)
