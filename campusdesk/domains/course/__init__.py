# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Course catalogue domain package."""

from campusdesk.domains.course.service import (
    CatalogueEntryExistsError,
    CategoryNotFoundError,
    CourseService,
    DepartmentNotFoundError,
)

__all__ = [
    "CourseService",
    "DepartmentNotFoundError",
    "CategoryNotFoundError",
    "CatalogueEntryExistsError",
]
