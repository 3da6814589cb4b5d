# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Unit tests for instructor analytics record parsing."""

import math

import pytest
from pydantic import ValidationError

from src.domains.analytics.records import (
    AssignmentEntry,
    CourseRecord,
    InstructorRecord,
    QuizEntry,
    StudentRecord,
)


class TestAssignmentEntry:
    """Tests for assignment entry parsing."""

    def test_parse_camel_case(self) -> None:
        """Test backend field names map to attributes."""
        entry = AssignmentEntry.model_validate(
            {
                "assignmentId": "a1",
                "assignmentTitle": "Essay",
                "grade": 88,
                "submittedAt": "2025-03-01T10:00:00Z",
            }
        )

        assert entry.assignment_id == "a1"
        assert entry.assignment_title == "Essay"
        assert entry.grade == 88.0
        assert entry.submitted_at == "2025-03-01T10:00:00Z"

    def test_missing_grade_is_pending(self) -> None:
        """Test absent and null grades both become None."""
        assert AssignmentEntry.model_validate({"assignmentId": "a1"}).grade is None
        assert AssignmentEntry.model_validate({"assignmentId": "a1", "grade": None}).grade is None

    @pytest.mark.parametrize("grade", ["90", True, math.nan, math.inf, 10**400, -(10**400), [], {}])
    def test_malformed_grade_is_pending(self, grade) -> None:
        """Test non-numeric and non-finite grades become None."""
        entry = AssignmentEntry.model_validate({"assignmentId": "a1", "grade": grade})

        assert entry.grade is None

    def test_negative_grade_is_kept(self) -> None:
        """Test negative grades survive parsing for the aggregator to exclude."""
        entry = AssignmentEntry.model_validate({"assignmentId": "a1", "grade": -3})

        assert entry.grade == -3.0

    def test_numeric_identifier(self) -> None:
        """Test numeric IDs are rendered as strings."""
        entry = AssignmentEntry.model_validate({"assignmentId": 42})

        assert entry.assignment_id == "42"

    def test_null_title_is_blank(self) -> None:
        """Test a null title becomes an empty string."""
        entry = AssignmentEntry.model_validate({"assignmentId": "a1", "assignmentTitle": None})

        assert entry.assignment_title == ""

    def test_missing_id_rejected(self) -> None:
        """Test an entry without an ID is invalid."""
        with pytest.raises(ValidationError):
            AssignmentEntry.model_validate({"assignmentTitle": "Essay", "grade": 90})

    def test_is_frozen(self) -> None:
        """Test entries are read-only."""
        entry = AssignmentEntry(assignment_id="a1", grade=50)

        with pytest.raises(ValidationError):
            entry.grade = 60


class TestQuizEntry:
    """Tests for quiz entry parsing and percentage conversion."""

    def test_percentage(self) -> None:
        """Test score is converted against maxScore."""
        quiz = QuizEntry.model_validate({"quizId": "q1", "score": 8, "maxScore": 10})

        assert quiz.percentage == 80.0

    def test_percentage_zero_max(self) -> None:
        """Test a zero maxScore converts to 0%."""
        quiz = QuizEntry.model_validate({"quizId": "q1", "score": 8, "maxScore": 0})

        assert quiz.percentage == 0.0

    def test_percentage_negative_max(self) -> None:
        """Test a negative maxScore converts to 0%."""
        quiz = QuizEntry.model_validate({"quizId": "q1", "score": 8, "maxScore": -5})

        assert quiz.percentage == 0.0

    @pytest.mark.parametrize("max_score", [None, "ten", "", "nan", False, 10**400])
    def test_malformed_max_score_is_zero(self, max_score) -> None:
        """Test missing or non-numeric maxScore becomes 0."""
        quiz = QuizEntry.model_validate({"quizId": "q1", "score": 5, "maxScore": max_score})

        assert quiz.max_score == 0.0
        assert quiz.percentage == 0.0

    def test_numeric_string_max_score(self) -> None:
        """Test a numeric-string maxScore still converts the score."""
        quiz = QuizEntry.model_validate({"quizId": "q1", "score": 8, "maxScore": "10"})

        assert quiz.max_score == 10.0
        assert quiz.percentage == 80.0

    def test_numeric_string_score_is_pending(self) -> None:
        """Test a numeric-string score is still treated as not taken."""
        quiz = QuizEntry.model_validate({"quizId": "q1", "score": "8", "maxScore": 10})

        assert quiz.score is None

    def test_missing_max_score_is_zero(self) -> None:
        """Test absent maxScore defaults to 0."""
        quiz = QuizEntry.model_validate({"quizId": "q1", "score": 5})

        assert quiz.max_score == 0.0

    def test_score_above_max(self) -> None:
        """Test scores above the maximum are not clamped."""
        quiz = QuizEntry.model_validate({"quizId": "q1", "score": 12, "maxScore": 10})

        assert quiz.percentage == pytest.approx(120.0)


class TestStudentRecord:
    """Tests for student record parsing."""

    @pytest.mark.parametrize("key", ["student", "studentId", "student_id"])
    def test_student_id_aliases(self, key: str) -> None:
        """Test every accepted student ID key."""
        record = StudentRecord.model_validate({key: "stu-1"})

        assert record.student_id == "stu-1"

    def test_null_lists_become_empty(self) -> None:
        """Test null assignment and quiz lists become empty tuples."""
        record = StudentRecord.model_validate(
            {"student": "stu-1", "assignments": None, "quizzes": None}
        )

        assert record.assignments == ()
        assert record.quizzes == ()

    def test_entries_keep_order(self) -> None:
        """Test entries are kept in backend order."""
        record = StudentRecord.model_validate(
            {
                "student": "stu-1",
                "quizzes": [{"quizId": "q2"}, {"quizId": "q1"}],
            }
        )

        assert [q.quiz_id for q in record.quizzes] == ["q2", "q1"]

    def test_ignores_unknown_fields(self) -> None:
        """Test extra backend fields are ignored."""
        record = StudentRecord.model_validate({"student": "stu-1", "email": "x@example.com"})

        assert not hasattr(record, "email")


class TestCourseRecord:
    """Tests for course record parsing."""

    def test_nested_shape(self, sample_course_payload) -> None:
        """Test the backend's nested course shape is flattened."""
        course = CourseRecord.model_validate(sample_course_payload)

        assert course.course_id == "course-algebra"
        assert course.title == "Algebra I"
        assert course.description == "Linear equations and inequalities"
        assert [s.student_id for s in course.students] == ["stu-1", "stu-2"]

    def test_flat_shape(self) -> None:
        """Test a flat course shape is accepted."""
        course = CourseRecord.model_validate(
            {"id": "c1", "title": "Biology", "students": []}
        )

        assert course.course_id == "c1"
        assert course.title == "Biology"
        assert course.description == ""

    def test_null_description(self) -> None:
        """Test a null description becomes an empty string."""
        course = CourseRecord.model_validate(
            {"course": {"_id": "c1", "title": "Biology", "description": None}}
        )

        assert course.description == ""
        assert course.students == ()

    def test_missing_course_id_rejected(self) -> None:
        """Test a course without an ID is invalid."""
        with pytest.raises(ValidationError):
            CourseRecord.model_validate({"course": {"title": "Biology"}, "students": []})


class TestInstructorRecord:
    """Tests for instructor record parsing."""

    def test_from_payload_unwraps_envelope(self, sample_instructor_payload, sample_instructor_id) -> None:
        """Test the data envelope is unwrapped."""
        record = InstructorRecord.from_payload(sample_instructor_payload)

        assert record.instructor_id == sample_instructor_id
        assert [c.course_id for c in record.courses] == ["course-algebra", "course-empty"]

    def test_from_payload_bare(self, sample_instructor_payload) -> None:
        """Test an unwrapped payload parses the same way."""
        bare = sample_instructor_payload["data"]

        assert InstructorRecord.from_payload(bare) == InstructorRecord.from_payload(
            sample_instructor_payload
        )

    def test_empty_and_null_courses(self) -> None:
        """Test empty and null course lists become empty."""
        assert InstructorRecord.from_payload({"courses": []}).courses == ()
        assert InstructorRecord.from_payload({"courses": None}).courses == ()

    @pytest.mark.parametrize(
        "payload",
        [
            {},
            {"success": False, "message": "Instructor not found"},
            {"data": {"instructor": "inst-1"}},
        ],
    )
    def test_missing_courses_rejected(self, payload) -> None:
        """Test a body without a courses list is not an instructor record."""
        with pytest.raises(ValidationError) as exc_info:
            InstructorRecord.from_payload(payload)

        assert exc_info.value.errors()[0]["loc"] == ("courses",)
        assert exc_info.value.errors()[0]["type"] == "missing"

    def test_instructor_id_optional(self) -> None:
        """Test the instructor ID may be absent."""
        record = InstructorRecord.from_payload({"courses": []})

        assert record.instructor_id is None

    def test_courses_not_a_list_rejected(self) -> None:
        """Test a malformed course list is invalid."""
        with pytest.raises(ValidationError):
            InstructorRecord.from_payload({"courses": "nope"})

    def test_non_dict_payload_rejected(self) -> None:
        """Test a payload that is not an object is invalid."""
        with pytest.raises(ValidationError):
            InstructorRecord.from_payload(["not", "an", "object"])
