# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Instructor report API endpoints.

This module provides endpoints for instructor reporting:
- GET /instructors/{instructor_id} - Per-course report for an instructor

Example:
    GET /api/v1/reports/instructors/64b7f0c2
"""

import logging
from datetime import datetime

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel, Field

from src.api.dependencies import get_report_service
from src.domains.analytics import (
    AnalyticsRetrievalError,
    CourseSummary,
    InstructorReport,
    InstructorReportService,
    InvalidInstructorRecordError,
    ItemStat,
    MissingInstructorIdError,
)
from src.utils.logging import bind_context, clear_context

logger = logging.getLogger(__name__)

router = APIRouter()


# ============================================================================
# Response Models
# ============================================================================


class BucketResponse(BaseModel):
    """Student count for one distribution bucket."""

    name: str = Field(description="Bucket label, e.g. 'A' or '76-100%'")
    students: int = Field(description="Students in this bucket")


class ItemStatResponse(BaseModel):
    """Completion breakdown for one assignment or quiz."""

    title: str = Field(description="Item title")
    completed: int = Field(description="Students who completed the item")
    pending: int = Field(description="Students who have not completed it")
    average_score: float = Field(description="Average percentage among completions")

    @classmethod
    def from_stat(cls, stat: ItemStat) -> "ItemStatResponse":
        return cls(
            title=stat.title,
            completed=stat.completed,
            pending=stat.pending,
            average_score=stat.average_score,
        )


class CourseSummaryResponse(BaseModel):
    """Report statistics for one course."""

    course_id: str = Field(description="Course ID")
    title: str = Field(description="Course title")
    description: str = Field(description="Course description")
    total_students: int = Field(description="Students enrolled")
    overall_progress: float = Field(description="Average student progress (0-100)")
    average_quiz_score: float = Field(description="Mean of per-quiz averages")
    average_assignment_score: float = Field(description="Mean of per-assignment averages")
    students_completed_course: int = Field(description="Students meeting the completion policy")
    grade_distribution: list[BucketResponse] = Field(description="A-F grade buckets")
    course_completion_distribution: list[BucketResponse] = Field(
        description="Progress range buckets"
    )
    assignment_completion: list[ItemStatResponse] = Field(description="Per-assignment rows")
    quiz_completion: list[ItemStatResponse] = Field(description="Per-quiz rows")

    @classmethod
    def from_summary(cls, summary: CourseSummary) -> "CourseSummaryResponse":
        return cls(
            course_id=summary.course_id,
            title=summary.title,
            description=summary.description,
            total_students=summary.total_students,
            overall_progress=summary.overall_progress,
            average_quiz_score=summary.average_quiz_score,
            average_assignment_score=summary.average_assignment_score,
            students_completed_course=summary.students_completed_course,
            grade_distribution=[
                BucketResponse(name=b.name, students=b.students)
                for b in summary.grade_distribution
            ],
            course_completion_distribution=[
                BucketResponse(name=b.name, students=b.students)
                for b in summary.course_completion_distribution
            ],
            assignment_completion=[
                ItemStatResponse.from_stat(s) for s in summary.assignment_completion
            ],
            quiz_completion=[ItemStatResponse.from_stat(s) for s in summary.quiz_completion],
        )


class InstructorReportResponse(BaseModel):
    """Instructor report response."""

    instructor_id: str = Field(description="Instructor ID")
    courses: list[CourseSummaryResponse] = Field(description="Per-course statistics")
    generated_at: datetime = Field(description="When the report was built")

    @classmethod
    def from_report(cls, report: InstructorReport) -> "InstructorReportResponse":
        return cls(
            instructor_id=report.instructor_id,
            courses=[CourseSummaryResponse.from_summary(c) for c in report.courses],
            generated_at=report.generated_at,
        )


# ============================================================================
# Endpoints
# ============================================================================


@router.get(
    "/instructors/{instructor_id}",
    response_model=InstructorReportResponse,
    summary="Get instructor report",
    description="Build per-course grade, completion and progress statistics for an instructor.",
)
async def get_instructor_report(
    instructor_id: str,
    service: InstructorReportService = Depends(get_report_service),
) -> InstructorReportResponse:
    """Get the report for an instructor.

    Args:
        instructor_id: The instructor ID.
        service: Report service.

    Returns:
        InstructorReportResponse with one entry per course.

    Raises:
        HTTPException: 400 for a blank ID, 502 if the analytics backend
            fails or returns malformed data.
    """
    bind_context(instructor_id=instructor_id)
    try:
        report = await service.get_report(instructor_id)
    except MissingInstructorIdError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=e.message,
        ) from e
    except AnalyticsRetrievalError as e:
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail=f"Failed to load instructor analytics: {e.message}",
        ) from e
    except InvalidInstructorRecordError as e:
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail=e.message,
        ) from e
    finally:
        clear_context()

    return InstructorReportResponse.from_report(report)
