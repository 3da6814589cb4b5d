# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Raw instructor analytics records.

This module defines the read-only input records for the report
aggregator. They mirror the analytics backend's JSON payload:

    {
        "instructor": "<user id>",
        "courses": [
            {
                "course": {"_id": "...", "title": "...", "description": "..."},
                "students": [
                    {
                        "student": "<user id>",
                        "assignments": [{"assignmentId", "assignmentTitle", "grade", "submittedAt"}],
                        "quizzes": [{"quizId", "quizTitle", "score", "maxScore"}],
                    }
                ],
            }
        ],
    }

Grades and scores are normalized while parsing: anything that is not a
real, finite number becomes None (pending). Negative values are kept and
left for the aggregator to exclude. maxScore also accepts numeric
strings; a missing or non-numeric one becomes 0, which converts to a
0% score. The courses list itself is required: a body without it is
not an instructor record.

Usage:
    from src.domains.analytics.records import InstructorRecord

    record = InstructorRecord.from_payload(response_json)
"""

import logging
import math
from typing import Annotated, Any

from pydantic import AliasChoices, BaseModel, BeforeValidator, Field, field_validator, model_validator

logger = logging.getLogger(__name__)


def _as_number(value: Any) -> float | None:
    """Return value as float if it is a real, finite number, else None."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    try:
        number = float(value)
    except OverflowError:
        return None
    if not math.isfinite(number):
        return None
    return number


def _as_max_score(value: Any) -> float:
    """Numeric strings are accepted here, anything else non-numeric is 0."""
    if isinstance(value, str):
        try:
            value = float(value)
        except ValueError:
            logger.debug("Quiz maxScore %r is not numeric, using 0", value)
            return 0.0
    number = _as_number(value)
    if number is None:
        logger.debug("Quiz maxScore %r is not numeric, using 0", value)
        return 0.0
    return number


def _as_identifier(value: Any) -> Any:
    """Render numeric identifiers as str; leave everything else to pydantic."""
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return value


def _none_as_empty(value: Any) -> Any:
    return () if value is None else value


def _none_as_blank(value: Any) -> Any:
    return "" if value is None else value


Identifier = Annotated[str, BeforeValidator(_as_identifier)]
Mark = Annotated[float | None, BeforeValidator(_as_number)]
MaxScore = Annotated[float, BeforeValidator(_as_max_score)]
Text = Annotated[str, BeforeValidator(_none_as_blank)]


class AssignmentEntry(BaseModel):
    """A student's record for one assignment.

    Attributes:
        assignment_id: Assignment identifier.
        assignment_title: Assignment title.
        grade: Grade on a 0-100 scale, None if not graded/submitted.
        submitted_at: Raw submission timestamp, if the backend sent one.
    """

    assignment_id: Identifier = Field(alias="assignmentId", description="Assignment identifier")
    assignment_title: Text = Field(default="", alias="assignmentTitle", description="Assignment title")
    grade: Mark = Field(default=None, description="Grade 0-100, None when pending")
    submitted_at: str | None = Field(
        default=None, alias="submittedAt", description="Submission timestamp"
    )

    model_config = {"frozen": True, "populate_by_name": True, "extra": "ignore"}


class QuizEntry(BaseModel):
    """A student's record for one quiz.

    Attributes:
        quiz_id: Quiz identifier.
        quiz_title: Quiz title.
        score: Raw score, None if not taken.
        max_score: Maximum score, the denominator for percentages.
    """

    quiz_id: Identifier = Field(alias="quizId", description="Quiz identifier")
    quiz_title: Text = Field(default="", alias="quizTitle", description="Quiz title")
    score: Mark = Field(default=None, description="Raw score, None when pending")
    max_score: MaxScore = Field(default=0.0, alias="maxScore", description="Maximum score")

    model_config = {"frozen": True, "populate_by_name": True, "extra": "ignore"}

    @property
    def percentage(self) -> float:
        """Score as a percentage of max_score (0 when max_score <= 0)."""
        if self.max_score <= 0:
            return 0.0
        return (self.score or 0.0) / self.max_score * 100


class StudentRecord(BaseModel):
    """One student's graded items within a course."""

    student_id: Identifier = Field(
        validation_alias=AliasChoices("student", "studentId", "student_id"),
        description="Student identifier",
    )
    assignments: tuple[AssignmentEntry, ...] = Field(default=(), description="Assignment entries")
    quizzes: tuple[QuizEntry, ...] = Field(default=(), description="Quiz entries")

    model_config = {"frozen": True, "populate_by_name": True, "extra": "ignore"}

    @field_validator("assignments", "quizzes", mode="before")
    @classmethod
    def default_empty(cls, v: Any) -> Any:
        return _none_as_empty(v)


class CourseRecord(BaseModel):
    """A course and its enrolled students' records.

    Accepts both the backend's nested shape
    ``{"course": {"_id", "title", "description"}, "students": [...]}``
    and a flat ``{"_id", "title", "description", "students"}`` shape.

    Attributes:
        course_id: Course identifier.
        title: Course title.
        description: Course description.
        students: Student records in backend order.
    """

    course_id: Identifier = Field(
        validation_alias=AliasChoices("_id", "id", "course_id"),
        description="Course identifier",
    )
    title: Text = Field(default="", description="Course title")
    description: Text = Field(default="", description="Course description")
    students: tuple[StudentRecord, ...] = Field(default=(), description="Student records")

    model_config = {"frozen": True, "populate_by_name": True, "extra": "ignore"}

    @model_validator(mode="before")
    @classmethod
    def flatten_course(cls, data: Any) -> Any:
        """Lift nested course metadata to the top level."""
        if isinstance(data, dict) and isinstance(data.get("course"), dict):
            flat = {k: v for k, v in data.items() if k != "course"}
            flat.update(data["course"])
            return flat
        return data

    @field_validator("students", mode="before")
    @classmethod
    def default_empty(cls, v: Any) -> Any:
        return _none_as_empty(v)


class InstructorRecord(BaseModel):
    """All courses taught by one instructor.

    Attributes:
        instructor_id: Instructor identifier, if the backend reports it.
        courses: Course records in backend order.
    """

    instructor_id: Identifier | None = Field(
        default=None,
        validation_alias=AliasChoices("instructor", "instructorId", "instructor_id"),
        description="Instructor identifier",
    )
    courses: tuple[CourseRecord, ...] = Field(description="Course records")

    model_config = {"frozen": True, "populate_by_name": True, "extra": "ignore"}

    @field_validator("courses", mode="before")
    @classmethod
    def default_empty(cls, v: Any) -> Any:
        return _none_as_empty(v)

    @classmethod
    def from_payload(cls, payload: Any) -> "InstructorRecord":
        """Parse a backend payload, unwrapping a ``{"data": {...}}`` envelope.

        Args:
            payload: Decoded JSON body from the analytics backend.

        Returns:
            Parsed InstructorRecord.

        Raises:
            pydantic.ValidationError: If the payload structure is invalid.
        """
        if (
            isinstance(payload, dict)
            and "courses" not in payload
            and isinstance(payload.get("data"), dict)
        ):
            payload = payload["data"]
        return cls.model_validate(payload)
