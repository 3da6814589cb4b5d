# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Analytics domain services.

This module provides the instructor report pipeline:
- Raw record parsing (courses, students, assignments, quizzes)
- Per-course aggregation (grade/completion distributions, item tables)
- Fetching raw records from the analytics backend
- Report assembly with a small error taxonomy

Usage:
    # Aggregation only
    from src.domains.analytics import InstructorRecord, InstructorReportAggregator

    record = InstructorRecord.from_payload(payload)
    summaries = InstructorReportAggregator().summarize(record)

    # Full report
    from src.domains.analytics import InstructorAnalyticsClient, InstructorReportService

    service = InstructorReportService(source=InstructorAnalyticsClient(settings))
    report = await service.get_report(instructor_id)
"""

from src.domains.analytics.aggregator import (
    COMPLETION_LABELS,
    GRADE_LABELS,
    CompletionBucket,
    CompletionPolicy,
    CourseSummary,
    GradeBucket,
    InstructorReportAggregator,
    ItemStat,
    summarize,
)
from src.domains.analytics.exceptions import (
    AnalyticsRetrievalError,
    InvalidInstructorRecordError,
    MissingInstructorIdError,
    ReportServiceError,
)
from src.domains.analytics.records import (
    AssignmentEntry,
    CourseRecord,
    InstructorRecord,
    QuizEntry,
    StudentRecord,
)
from src.domains.analytics.service import InstructorReport, InstructorReportService
from src.domains.analytics.source import (
    InstructorAnalyticsClient,
    InstructorAnalyticsSource,
)

__all__ = [
    # Records
    "InstructorRecord",
    "CourseRecord",
    "StudentRecord",
    "AssignmentEntry",
    "QuizEntry",
    # Aggregation
    "InstructorReportAggregator",
    "CompletionPolicy",
    "CourseSummary",
    "GradeBucket",
    "CompletionBucket",
    "ItemStat",
    "GRADE_LABELS",
    "COMPLETION_LABELS",
    "summarize",
    # Sources
    "InstructorAnalyticsSource",
    "InstructorAnalyticsClient",
    # Service
    "InstructorReportService",
    "InstructorReport",
    # Errors
    "ReportServiceError",
    "MissingInstructorIdError",
    "AnalyticsRetrievalError",
    "InvalidInstructorRecordError",
]
