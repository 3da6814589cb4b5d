# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Instructor report service module.

This module provides the service that builds an instructor's report:
1. Validate the instructor identifier
2. Fetch the raw payload from an InstructorAnalyticsSource
3. Parse it into InstructorRecord
4. Summarize each course with InstructorReportAggregator

The service produces either a complete report or an exception from
src.domains.analytics.exceptions; it never returns partial output.

Usage:
    from src.domains.analytics import InstructorReportService

    service = InstructorReportService(source=client)
    report = await service.get_report(instructor_id)
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

from pydantic import ValidationError

from src.domains.analytics.aggregator import (
    CompletionPolicy,
    CourseSummary,
    InstructorReportAggregator,
)
from src.domains.analytics.exceptions import (
    AnalyticsRetrievalError,
    InvalidInstructorRecordError,
    MissingInstructorIdError,
)
from src.domains.analytics.records import InstructorRecord
from src.domains.analytics.source import InstructorAnalyticsSource

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class InstructorReport:
    """Complete report for one instructor."""

    instructor_id: str
    courses: list[CourseSummary] = field(default_factory=list)
    generated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for API response."""
        return {
            "instructor_id": self.instructor_id,
            "courses": [course.to_dict() for course in self.courses],
            "generated_at": self.generated_at.isoformat(),
        }


class InstructorReportService:
    """Service for building instructor reports.

    Attributes:
        _source: Where raw instructor payloads come from.
        _aggregator: Aggregator turning records into course summaries.

    Example:
        >>> service = InstructorReportService(source=client)
        >>> report = await service.get_report("64b7f0c2")
        >>> print(report.courses[0].overall_progress)
    """

    def __init__(
        self,
        source: InstructorAnalyticsSource,
        aggregator: InstructorReportAggregator | None = None,
        policy: CompletionPolicy | None = None,
    ) -> None:
        """Initialize the report service.

        Args:
            source: Analytics source used to fetch raw payloads.
            aggregator: Aggregator instance (built from policy if omitted).
            policy: Completion policy for the default aggregator.
        """
        self._source = source
        self._aggregator = aggregator or InstructorReportAggregator(policy=policy)

    @property
    def source(self) -> InstructorAnalyticsSource:
        """Get the analytics source."""
        return self._source

    async def close(self) -> None:
        """Close the underlying analytics source."""
        await self._source.close()

    async def get_report(self, instructor_id: str | None) -> InstructorReport:
        """Build the report for an instructor.

        Args:
            instructor_id: Instructor identifier.

        Returns:
            InstructorReport with one CourseSummary per course.

        Raises:
            MissingInstructorIdError: If instructor_id is missing or blank.
            AnalyticsRetrievalError: If the source fails.
            InvalidInstructorRecordError: If the payload cannot be parsed.
        """
        if instructor_id is None or not str(instructor_id).strip():
            logger.warning("Report requested without instructor id")
            raise MissingInstructorIdError("Instructor ID is required")

        instructor_id = str(instructor_id).strip()
        payload = await self._fetch(instructor_id)
        record = self._parse(instructor_id, payload)

        courses = self._aggregator.summarize(record)

        logger.info(
            "Built instructor report: instructor=%s, courses=%d, students=%d",
            instructor_id,
            len(courses),
            sum(course.total_students for course in courses),
        )

        return InstructorReport(instructor_id=instructor_id, courses=courses)

    async def _fetch(self, instructor_id: str) -> dict[str, Any]:
        """Fetch the raw payload, normalizing source failures."""
        try:
            return await self._source.fetch_instructor_analytics(instructor_id)
        except AnalyticsRetrievalError:
            raise
        except Exception as e:
            logger.error(
                "Analytics source failed: instructor=%s, error=%s",
                instructor_id,
                str(e),
                exc_info=True,
            )
            raise AnalyticsRetrievalError(
                f"Failed to load instructor analytics: {e}",
                details={"instructor_id": instructor_id},
            ) from e

    @staticmethod
    def _parse(instructor_id: str, payload: dict[str, Any]) -> InstructorRecord:
        """Parse the payload into records."""
        try:
            return InstructorRecord.from_payload(payload)
        except ValidationError as e:
            logger.error(
                "Invalid instructor analytics payload: instructor=%s, errors=%d",
                instructor_id,
                e.error_count(),
            )
            raise InvalidInstructorRecordError(
                "Instructor analytics payload is malformed",
                errors=e.errors(include_url=False),
                details={"instructor_id": instructor_id},
            ) from e
