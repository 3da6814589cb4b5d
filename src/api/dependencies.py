# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""FastAPI dependency injection definitions.

This module owns the process-wide InstructorReportService and exposes it
to endpoints through get_report_service(). Tests override that
dependency with a service backed by an in-memory source.

Example:
    @router.get("/instructors/{instructor_id}")
    async def get_report(
        instructor_id: str,
        service: InstructorReportService = Depends(get_report_service),
    ):
        ...
"""

import logging

from fastapi import HTTPException, status

from src.core.config.settings import Settings
from src.domains.analytics import InstructorAnalyticsClient, InstructorReportService

logger = logging.getLogger(__name__)

# Report service singleton
_report_service: InstructorReportService | None = None


async def init_report_service(settings: Settings) -> InstructorReportService:
    """Create the report service and its HTTP analytics client.

    Args:
        settings: Application settings.

    Returns:
        The initialized service.
    """
    global _report_service

    if _report_service is not None:
        return _report_service

    client = InstructorAnalyticsClient(settings.instructor_analytics)
    _report_service = InstructorReportService(
        source=client,
        policy=settings.report_policy.to_policy(),
    )
    logger.info(
        "Report service initialized: backend=%s",
        settings.instructor_analytics.base_url,
    )
    return _report_service


async def close_report_service() -> None:
    """Close the report service and release its HTTP client."""
    global _report_service

    if _report_service is None:
        return

    await _report_service.close()
    _report_service = None
    logger.info("Report service closed")


def get_report_service() -> InstructorReportService:
    """Get the report service.

    Returns:
        The process-wide InstructorReportService.

    Raises:
        HTTPException: 503 if the service has not been initialized.
    """
    if _report_service is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Report service not initialized",
        )
    return _report_service
