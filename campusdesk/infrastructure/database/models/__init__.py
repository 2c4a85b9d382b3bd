# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""ORM models for the CampusDesk database.

Importing this package registers every table on Base.metadata.
"""

from campusdesk.infrastructure.database.models.academics import (
    Admission,
    Category,
    Course,
    Department,
    Document,
)
from campusdesk.infrastructure.database.models.base import Base, IdMixin, TimestampMixin, new_id
from campusdesk.infrastructure.database.models.notification import Notification
from campusdesk.infrastructure.database.models.people import AdminUser, Faculty, Student
from campusdesk.infrastructure.database.models.result import Result, ResultSubject

__all__ = [
    "Base",
    "IdMixin",
    "TimestampMixin",
    "new_id",
    # People
    "Student",
    "Faculty",
    "AdminUser",
    # Academics
    "Department",
    "Category",
    "Course",
    "Admission",
    "Document",
    # Results
    "Result",
    "ResultSubject",
    # Notifications
    "Notification",
]
