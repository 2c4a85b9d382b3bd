# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Database infrastructure.

This package provides SQLAlchemy async database access:
- Database: engine, sessionmaker and schema management
- EntityStore: find/insert/update-by-id over a session
- models: ORM table definitions

Example:
    from campusdesk.infrastructure.database import Database, EntityStore

    db = Database.from_settings(settings.database)
    async with db.session() as session:
        store = EntityStore(session)
        student = await store.find_one(Student, roll_number="S1")
"""

from campusdesk.infrastructure.database.connection import (
    Database,
    DatabaseError,
    UniqueViolationError,
)
from campusdesk.infrastructure.database.store import EntityStore

__all__ = [
    "Database",
    "DatabaseError",
    "UniqueViolationError",
    "EntityStore",
]
