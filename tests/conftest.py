# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Pytest configuration and shared fixtures.

This module provides fixtures used across all test types:
- Unit tests
- Integration tests
"""

from collections.abc import Generator
from typing import Any

import pytest

from src.core.config import clear_settings_cache


# =============================================================================
# Marker Configuration
# =============================================================================


def pytest_configure(config: pytest.Config) -> None:
    """Configure custom pytest markers."""
    config.addinivalue_line(
        "markers", "unit: mark test as a unit test"
    )
    config.addinivalue_line(
        "markers", "integration: mark test as an integration test"
    )


# =============================================================================
# Settings Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def fresh_settings() -> Generator[None, None, None]:
    """Make every test read settings from its own environment."""
    clear_settings_cache()
    yield
    clear_settings_cache()


# =============================================================================
# Payload Fixtures
# =============================================================================


@pytest.fixture
def sample_instructor_id() -> str:
    """Provide a sample instructor ID for testing."""
    return "64b7f0c2a1d3e4f5a6b7c8d9"


@pytest.fixture
def sample_course_payload() -> dict[str, Any]:
    """Provide one course in the backend's nested shape.

    Two students, one quiz (max 10) and one assignment:
    - stu-1: quiz 9/10 (90%), assignment 80
    - stu-2: quiz not taken, assignment 60
    """
    return {
        "course": {
            "_id": "course-algebra",
            "title": "Algebra I",
            "description": "Linear equations and inequalities",
        },
        "students": [
            {
                "student": "stu-1",
                "assignments": [
                    {
                        "assignmentId": "a1",
                        "assignmentTitle": "Homework 1",
                        "grade": 80,
                        "submittedAt": "2025-03-01T10:00:00Z",
                    },
                ],
                "quizzes": [
                    {"quizId": "q1", "quizTitle": "Quiz 1", "score": 9, "maxScore": 10},
                ],
            },
            {
                "student": "stu-2",
                "assignments": [
                    {"assignmentId": "a1", "assignmentTitle": "Homework 1", "grade": 60},
                ],
                "quizzes": [
                    {"quizId": "q1", "quizTitle": "Quiz 1", "maxScore": 10},
                ],
            },
        ],
    }


@pytest.fixture
def sample_instructor_payload(
    sample_instructor_id: str,
    sample_course_payload: dict[str, Any],
) -> dict[str, Any]:
    """Provide a full backend response wrapped in its data envelope."""
    return {
        "success": True,
        "data": {
            "instructor": sample_instructor_id,
            "courses": [
                sample_course_payload,
                {
                    "course": {
                        "_id": "course-empty",
                        "title": "Geometry",
                        "description": "",
                    },
                    "students": [],
                },
            ],
        },
    }
