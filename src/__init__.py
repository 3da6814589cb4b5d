"""Instructor Report Backend.

Turns raw per-student grades and quiz scores into per-course reporting
statistics for instructors: grade and completion distributions,
per-item completion tables, and course progress.

Copyright (C) 2025 Global Digital Labs (gdlabs.io)
SPDX-License-Identifier: LGPL-3.0-or-later
"""

__version__ = "1.0.0"
