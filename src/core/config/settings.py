# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Application configuration settings using Pydantic Settings.

This module provides centralized configuration management for the
instructor report service. Settings are loaded from environment variables
with sensible defaults.

The Settings class is the main entry point and aggregates all subsettings.
A singleton instance is provided via get_settings() for dependency injection.

Example:
    >>> from src.core.config.settings import get_settings
    >>> settings = get_settings()
    >>> print(settings.report_policy.completion_min_average)
    70.0
"""

from functools import lru_cache
from typing import TYPE_CHECKING, Literal

from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

if TYPE_CHECKING:
    from src.domains.analytics.aggregator import CompletionPolicy


class ReportPolicySettings(BaseSettings):
    """Course completion policy used by the report aggregator.

    A student counts as having completed a course when both their
    average score and their progress reach these thresholds.

    Attributes:
        completion_min_average: Minimum average score (0-100).
        completion_min_progress: Minimum course progress (0-100).
    """

    model_config = SettingsConfigDict(
        env_prefix="REPORT_POLICY_",
        extra="ignore",
    )

    completion_min_average: float = Field(default=70.0, ge=0.0, le=100.0)
    completion_min_progress: float = Field(default=80.0, ge=0.0, le=100.0)

    def to_policy(self) -> "CompletionPolicy":
        """Build the aggregator's completion policy from these settings."""
        from src.domains.analytics.aggregator import CompletionPolicy

        return CompletionPolicy(
            min_average=self.completion_min_average,
            min_progress=self.completion_min_progress,
        )


class InstructorAnalyticsSettings(BaseSettings):
    """Instructor analytics backend configuration.

    The backend returns the raw course/student/grade records for an
    instructor. The report service fetches from it over HTTP.

    Attributes:
        base_url: Base URL of the analytics backend API.
        path: Request path template, must contain ``{instructor_id}``.
        api_key: Optional API key sent as X-API-Key.
        timeout: Request timeout in seconds.
    """

    model_config = SettingsConfigDict(
        env_prefix="INSTRUCTOR_ANALYTICS_",
        extra="ignore",
    )

    base_url: str = "http://localhost:5000/api"
    path: str = "/analytics/instructor/{instructor_id}"
    api_key: SecretStr = SecretStr("")
    timeout: float = 30.0

    @field_validator("path")
    @classmethod
    def validate_path(cls, v: str) -> str:
        """Ensure the path template carries the instructor placeholder."""
        if "{instructor_id}" not in v:
            raise ValueError("path must contain the '{instructor_id}' placeholder")
        return v

    @property
    def auth_headers(self) -> dict[str, str]:
        """Build authentication headers for API requests."""
        key = self.api_key.get_secret_value()
        if not key:
            return {}
        return {"X-API-Key": key}


class APISettings(BaseSettings):
    """API server configuration.

    Attributes:
        title: OpenAPI title.
        host: Server bind address.
        port: Server port.
    """

    model_config = SettingsConfigDict(
        env_prefix="API_",
        extra="ignore",
    )

    title: str = "Instructor Report API"
    host: str = "0.0.0.0"
    port: int = 8000


class Settings(BaseSettings):
    """Main application settings aggregating all subsettings.

    Use get_settings() to obtain a cached singleton instance.

    Attributes:
        environment: Current environment (development, staging, production).
        debug: Enable debug mode.
        log_level: Logging level.
        report_policy: Course completion policy settings.
        instructor_analytics: Analytics backend settings.
        api: API server settings.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    # Environment
    environment: Literal["development", "staging", "production"] = "development"
    debug: bool = True
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "DEBUG"

    # Subsettings - loaded with their own env prefixes
    report_policy: ReportPolicySettings = Field(default_factory=ReportPolicySettings)
    instructor_analytics: InstructorAnalyticsSettings = Field(
        default_factory=InstructorAnalyticsSettings
    )
    api: APISettings = Field(default_factory=APISettings)

    @property
    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.environment == "development"

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment == "production"


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    Call clear_settings_cache() if you need to reload settings.

    Returns:
        Cached Settings instance.
    """
    return Settings()


def clear_settings_cache() -> None:
    """Clear the settings cache.

    Call this if you need to reload settings from environment.
    Useful for testing or dynamic configuration updates.
    """
    get_settings.cache_clear()
