# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Database connection management using SQLAlchemy async.

The Database object owns one async engine and its sessionmaker. It is
created from DatabaseSettings and handed to services at construction;
there is no module-level connection state.

Uses SQLAlchemy 2.0 async API with asyncpg (production) or aiosqlite.

Example:
    db = Database.from_settings(settings.database)
    await db.create_all()

    async with db.session() as session:
        result = await session.execute(select(Student))
        students = result.scalars().all()
"""

from contextlib import asynccontextmanager
from typing import TYPE_CHECKING, AsyncIterator, Optional

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from campusdesk.infrastructure.database.models.base import Base

if TYPE_CHECKING:
    from campusdesk.core.config.settings import DatabaseSettings


class DatabaseError(Exception):
    """Base exception for database operations.

    Attributes:
        message: Human-readable error description.
        original_error: The underlying SQLAlchemy or database error.
    """

    def __init__(self, message: str, original_error: Optional[Exception] = None) -> None:
        """Initialize the database error.

        Args:
            message: Human-readable error description.
            original_error: The underlying exception that caused this error.
        """
        super().__init__(message)
        self.message = message
        self.original_error = original_error

    def __str__(self) -> str:
        """Return string representation of the error."""
        if self.original_error:
            return f"{self.message}: {self.original_error}"
        return self.message


class UniqueViolationError(DatabaseError):
    """Raised when an insert violates a uniqueness constraint."""


class Database:
    """Async engine and session factory for the back office store.

    Attributes:
        engine: The SQLAlchemy async engine.
    """

    def __init__(self, url: str, echo: bool = False, **engine_kwargs: object) -> None:
        """Create the engine and sessionmaker.

        Args:
            url: Async SQLAlchemy database URL.
            echo: Log every SQL statement.
            **engine_kwargs: Extra create_async_engine arguments.

        Raises:
            DatabaseError: If engine creation fails.
        """
        try:
            self.engine: AsyncEngine = create_async_engine(url, echo=echo, **engine_kwargs)
        except SQLAlchemyError as e:
            raise DatabaseError("Failed to initialize database connection", e) from e

        self._sessionmaker = async_sessionmaker(
            bind=self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
            autoflush=False,
        )

    @classmethod
    def from_settings(cls, settings: "DatabaseSettings", echo: bool = False) -> "Database":
        """Build a Database from settings.

        Pool sizing only applies to server databases; SQLite URLs use
        SQLAlchemy's defaults.

        Args:
            settings: Database settings.
            echo: Log every SQL statement.

        Returns:
            Configured Database.
        """
        url = settings.url
        if url.startswith("sqlite"):
            return cls(url, echo=echo)
        return cls(
            url,
            echo=echo,
            pool_size=settings.pool_size,
            max_overflow=settings.max_overflow,
            pool_pre_ping=True,
            pool_recycle=1800,
        )

    @asynccontextmanager
    async def session(self) -> AsyncIterator[AsyncSession]:
        """Get an async session.

        The session is committed on success and rolled back on exception.

        Yields:
            AsyncSession for database operations.

        Raises:
            DatabaseError: If a database operation fails.
        """
        async with self._sessionmaker() as session:
            try:
                yield session
                await session.commit()
            except SQLAlchemyError as e:
                await session.rollback()
                raise DatabaseError("Database operation failed", e) from e
            except Exception:
                await session.rollback()
                raise

    async def create_all(self) -> None:
        """Create every table known to the ORM metadata."""
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def drop_all(self) -> None:
        """Drop every table known to the ORM metadata."""
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.drop_all)

    async def dispose(self) -> None:
        """Close all pooled connections."""
        await self.engine.dispose()

    async def check_connection(self) -> bool:
        """Check if the database is reachable.

        Returns:
            True if the database is reachable, False otherwise.
        """
        try:
            async with self.engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
            return True
        except SQLAlchemyError:
            return False
