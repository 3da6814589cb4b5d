# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Instructor analytics sources.

This module defines where raw instructor records come from:
- InstructorAnalyticsSource: ABC for anything that can return the raw
  payload for an instructor identifier
- InstructorAnalyticsClient: HTTP implementation talking to the
  analytics backend

The client only fetches. Parsing and aggregation happen in the report
service, so a source can be swapped for a fixture in tests.

Example:
    >>> client = InstructorAnalyticsClient(get_settings().instructor_analytics)
    >>> payload = await client.fetch_instructor_analytics("64b7...")
    >>> await client.close()
"""

import logging
from abc import ABC, abstractmethod
from typing import Any
from urllib.parse import quote

import httpx

from src.core.config.settings import InstructorAnalyticsSettings
from src.domains.analytics.exceptions import AnalyticsRetrievalError

logger = logging.getLogger(__name__)


class InstructorAnalyticsSource(ABC):
    """Abstract source of raw instructor analytics payloads."""

    @abstractmethod
    async def fetch_instructor_analytics(self, instructor_id: str) -> dict[str, Any]:
        """Fetch the raw analytics payload for an instructor.

        Args:
            instructor_id: Instructor identifier.

        Returns:
            Decoded JSON object as returned by the backend.

        Raises:
            AnalyticsRetrievalError: If the payload cannot be fetched.
        """

    async def close(self) -> None:
        """Release any held resources."""
        return None


class InstructorAnalyticsClient(InstructorAnalyticsSource):
    """HTTP client for the instructor analytics backend.

    Attributes:
        _settings: Backend configuration.
        _client: Underlying async HTTP client.
        _owns_client: Whether close() should close _client.

    Example:
        client = InstructorAnalyticsClient(settings.instructor_analytics)
        payload = await client.fetch_instructor_analytics(instructor_id)
    """

    def __init__(
        self,
        settings: InstructorAnalyticsSettings,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize the analytics client.

        Args:
            settings: Backend configuration.
            client: Optional preconfigured HTTP client (not closed by us).
        """
        self._settings = settings
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(
            base_url=settings.base_url,
            headers=settings.auth_headers,
            timeout=settings.timeout,
        )

    def _path_for(self, instructor_id: str) -> str:
        return self._settings.path.format(instructor_id=quote(instructor_id, safe=""))

    async def close(self) -> None:
        """Close the HTTP client if this instance created it."""
        if self._owns_client:
            await self._client.aclose()

    async def fetch_instructor_analytics(self, instructor_id: str) -> dict[str, Any]:
        """Fetch the raw analytics payload for an instructor.

        Args:
            instructor_id: Instructor identifier.

        Returns:
            Decoded JSON object.

        Raises:
            AnalyticsRetrievalError: On HTTP errors, connection failures
                or a body that is not a JSON object.
        """
        path = self._path_for(instructor_id)
        logger.debug("Fetching instructor analytics: instructor=%s, path=%s", instructor_id, path)

        try:
            response = await self._client.get(path)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            logger.error(
                "Analytics backend returned error: instructor=%s, status=%d",
                instructor_id,
                e.response.status_code,
            )
            raise AnalyticsRetrievalError(
                f"Analytics backend returned {e.response.status_code}",
                status_code=e.response.status_code,
                response_body=e.response.text,
                details={"instructor_id": instructor_id},
            ) from e
        except httpx.HTTPError as e:
            logger.error("Analytics backend unreachable: instructor=%s, error=%s", instructor_id, str(e))
            raise AnalyticsRetrievalError(
                f"Analytics backend unreachable: {e}",
                details={"instructor_id": instructor_id},
            ) from e

        try:
            data = response.json()
        except ValueError as e:
            logger.error("Analytics backend sent non-JSON body: instructor=%s", instructor_id)
            raise AnalyticsRetrievalError(
                "Analytics backend sent a non-JSON body",
                status_code=response.status_code,
                response_body=response.text,
                details={"instructor_id": instructor_id},
            ) from e

        if not isinstance(data, dict):
            raise AnalyticsRetrievalError(
                "Analytics backend sent a non-object JSON body",
                status_code=response.status_code,
                details={"instructor_id": instructor_id, "type": type(data).__name__},
            )

        return data
