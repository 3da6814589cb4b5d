# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Server entry point.

Runs the instructor report API with uvicorn using the API_* settings.

Usage:
    instructor-report
    # or
    uvicorn src.api.app:create_app --factory
"""

import uvicorn

from src.core.config import get_settings


def run() -> None:
    """Start the API server."""
    settings = get_settings()
    uvicorn.run(
        "src.api.app:create_app",
        factory=True,
        host=settings.api.host,
        port=settings.api.port,
        log_config=None,
    )


if __name__ == "__main__":
    run()
