# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Faculty domain package."""

from campusdesk.domains.faculty.service import FacultyExistsError, FacultyService

__all__ = [
    "FacultyService",
    "FacultyExistsError",
]
