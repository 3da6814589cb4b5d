# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""API v1 routes package.

This package contains all v1 API endpoint definitions.

Modules:
    reports: Instructor report endpoints (per-course statistics).
"""

from fastapi import APIRouter

from src.api.v1 import reports

# Create the main v1 router
router = APIRouter(prefix="/api/v1")

# Include domain routers
router.include_router(reports.router, prefix="/reports", tags=["Reports"])

__all__ = ["router"]
