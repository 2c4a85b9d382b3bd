# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Generic entity store over an async session.

EntityStore gives services the find/insert/update-by-id operations they
need without repeating query boilerplate. Lookups that find nothing return
None; an insert that violates a uniqueness constraint raises
UniqueViolationError so callers can tell it apart from other failures.
"""

import logging
from typing import Any, TypeVar

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from campusdesk.infrastructure.database.connection import DatabaseError, UniqueViolationError
from campusdesk.infrastructure.database.models.base import Base

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=Base)

# PostgreSQL unique_violation; SQLite reports unique and primary key
# failures under their own extended error names.
_UNIQUE_SQLSTATE = "23505"
_SQLITE_UNIQUE_ERRORS = frozenset({"SQLITE_CONSTRAINT_UNIQUE", "SQLITE_CONSTRAINT_PRIMARYKEY"})


def is_unique_violation(error: IntegrityError) -> bool:
    """Tell a uniqueness violation apart from NOT NULL, foreign key or CHECK failures."""
    orig = error.orig
    sqlstate = getattr(orig, "sqlstate", None) or getattr(orig, "pgcode", None)
    if sqlstate:
        return sqlstate == _UNIQUE_SQLSTATE
    sqlite_name = getattr(orig, "sqlite_errorname", None)
    if sqlite_name:
        return sqlite_name in _SQLITE_UNIQUE_ERRORS
    return "UNIQUE constraint failed" in str(orig)


def integrity_error(error: IntegrityError, subject: str) -> DatabaseError:
    """Map an IntegrityError to UniqueViolationError or a plain DatabaseError."""
    if is_unique_violation(error):
        return UniqueViolationError(f"{subject} violates a uniqueness constraint", error)
    return DatabaseError(f"{subject} violates an integrity constraint", error)


class EntityStore:
    """Find, insert and update entities within one session.

    Attributes:
        session: The session all operations run in.
    """

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def find_one(self, model: type[ModelT], **filters: Any) -> ModelT | None:
        """Find the first entity whose columns equal the given values.

        Args:
            model: ORM model class.
            **filters: Column name to value equality filters.

        Returns:
            The entity, or None if nothing matches.
        """
        query = select(model).filter_by(**filters).limit(1)
        result = await self.session.execute(query)
        return result.scalars().first()

    async def find_all(self, model: type[ModelT], **filters: Any) -> list[ModelT]:
        """Find every entity whose columns equal the given values.

        Args:
            model: ORM model class.
            **filters: Column name to value equality filters.

        Returns:
            Matching entities (possibly empty).
        """
        query = select(model).filter_by(**filters)
        result = await self.session.execute(query)
        return list(result.scalars().all())

    async def find_by_id(self, model: type[ModelT], entity_id: str) -> ModelT | None:
        """Get an entity by primary key.

        Args:
            model: ORM model class.
            entity_id: Primary key value.

        Returns:
            The entity, or None if absent.
        """
        return await self.session.get(model, str(entity_id))

    async def insert(self, entity: ModelT) -> ModelT:
        """Add an entity and flush it so constraints are checked now.

        Args:
            entity: New ORM instance.

        Returns:
            The flushed entity.

        Raises:
            UniqueViolationError: If a uniqueness constraint is violated.
            DatabaseError: If any other integrity constraint is violated.
        """
        self.session.add(entity)
        try:
            await self.session.flush()
        except IntegrityError as e:
            logger.debug("Insert of %s rejected: %s", type(entity).__name__, e.orig)
            raise integrity_error(e, type(entity).__name__) from e
        return entity

    async def update_by_id(
        self,
        model: type[ModelT],
        entity_id: str,
        patch: dict[str, Any],
    ) -> ModelT | None:
        """Apply a partial update to an entity.

        Keys whose value is None are left untouched.

        Args:
            model: ORM model class.
            entity_id: Primary key value.
            patch: Column name to new value.

        Returns:
            The updated entity, or None if absent.

        Raises:
            UniqueViolationError: If the update violates a uniqueness constraint.
            DatabaseError: If the update violates another integrity constraint.
        """
        entity = await self.find_by_id(model, entity_id)
        if entity is None:
            return None

        for key, value in patch.items():
            if value is not None:
                setattr(entity, key, value)

        try:
            await self.session.flush()
        except IntegrityError as e:
            raise integrity_error(e, f"{model.__name__} update") from e
        return entity
