# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Custom exceptions for instructor reports.

This module defines the exception hierarchy for report generation:
- ReportServiceError: Base exception for all report errors
- MissingInstructorIdError: No instructor identifier was supplied
- AnalyticsRetrievalError: The analytics backend fetch failed
- InvalidInstructorRecordError: The fetched payload has the wrong shape

Malformed grades and scores are not errors; the record model and the
aggregator treat them as pending items.
"""


class ReportServiceError(Exception):
    """Base exception for all instructor report errors.

    Attributes:
        message: Human-readable error description.
        details: Optional dictionary with additional error context.
    """

    def __init__(self, message: str, details: dict | None = None):
        """Initialize report error.

        Args:
            message: Human-readable error description.
            details: Optional dictionary with additional error context.
        """
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        """Return string representation with details if available."""
        if self.details:
            return f"{self.message} - Details: {self.details}"
        return self.message


class MissingInstructorIdError(ReportServiceError):
    """Raised when a report is requested without an instructor identifier."""

    pass


class AnalyticsRetrievalError(ReportServiceError):
    """Error fetching raw records from the analytics backend.

    Raised when the backend returns an error response, is unreachable,
    or answers with a body that is not a JSON object.

    Attributes:
        status_code: HTTP status code from the backend, if any.
        response_body: Raw response body if available.
    """

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        response_body: str | None = None,
        details: dict | None = None,
    ):
        """Initialize retrieval error.

        Args:
            message: Human-readable error description.
            status_code: HTTP status code from the backend.
            response_body: Raw response body if available.
            details: Optional dictionary with additional error context.
        """
        self.status_code = status_code
        self.response_body = response_body
        super().__init__(message, details)

    def __str__(self) -> str:
        """Return string representation with status code."""
        base = f"{self.message}"
        if self.status_code:
            base = f"[{self.status_code}] {base}"
        if self.details:
            base = f"{base} - Details: {self.details}"
        return base


class InvalidInstructorRecordError(ReportServiceError):
    """Raised when the backend payload cannot be parsed into records.

    Attributes:
        errors: Validation errors reported by the record model.
    """

    def __init__(
        self,
        message: str,
        errors: list[dict] | None = None,
        details: dict | None = None,
    ):
        """Initialize invalid record error.

        Args:
            message: Human-readable error description.
            errors: Validation error entries.
            details: Optional dictionary with additional error context.
        """
        self.errors = errors or []
        super().__init__(message, details)
