# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Back office application container.

BackOffice builds every service from one Settings object and owns the
database engine. An HTTP or CLI layer creates one BackOffice at startup
and calls its services; nothing here is module-level state.

Example:
    async with BackOffice.from_settings(get_settings()).lifespan() as office:
        result = await office.results.upload("S1", 3, [], 450, actor_id)
"""

from contextlib import asynccontextmanager
from typing import AsyncIterator

from campusdesk.core.config.settings import Settings
from campusdesk.domains.admission import AdmissionService
from campusdesk.domains.course import CourseService
from campusdesk.domains.document import DocumentService
from campusdesk.domains.faculty import FacultyService
from campusdesk.domains.notification import NotificationDispatcher
from campusdesk.domains.result import ResultStore
from campusdesk.infrastructure.database import Database, DatabaseError
from campusdesk.infrastructure.notifications import EmailChannel
from campusdesk.utils.logging import get_logger, setup_logging

logger = get_logger(__name__)


class BackOffice:
    """Wires the database, email channel and domain services together.

    Attributes:
        settings: Settings every component was built from.
        db: Shared database.
        email: Shared outbound email channel.
        notifications: Notification dispatcher.
        results: Result store.
        admissions: Admission service.
        courses: Course catalogue service.
        faculty: Faculty service.
        documents: Document service.
    """

    def __init__(self, settings: Settings, db: Database, email: EmailChannel) -> None:
        self.settings = settings
        self.db = db
        self.email = email

        self.notifications = NotificationDispatcher(db, email, settings.notifications)
        self.results = ResultStore(
            db,
            self.notifications,
            settings.grading,
            settings.notifications,
        )
        self.admissions = AdmissionService(
            db,
            email,
            self.notifications,
            settings.notifications,
        )
        self.courses = CourseService(db)
        self.faculty = FacultyService(db, email, settings.notifications)
        self.documents = DocumentService(db)

    @classmethod
    def from_settings(cls, settings: Settings) -> "BackOffice":
        """Build a BackOffice with a real database and SMTP channel."""
        db = Database.from_settings(settings.database, echo=settings.debug and settings.is_development)
        email = EmailChannel(settings.smtp, settings.notifications.default_email_subject)
        return cls(settings, db, email)

    async def startup(self, create_schema: bool = False) -> None:
        """Configure logging and verify the database.

        Args:
            create_schema: Create missing tables (development and tests).

        Raises:
            DatabaseError: If the database is unreachable.
        """
        setup_logging(self.settings)
        logger.info(
            "Starting CampusDesk back office",
            environment=self.settings.environment,
            smtp_configured=self.settings.smtp.is_configured,
        )

        if create_schema:
            await self.db.create_all()

        if not await self.db.check_connection():
            raise DatabaseError("Database is not reachable")
        logger.info("Database connection verified")

    async def shutdown(self) -> None:
        """Release database connections."""
        await self.db.dispose()
        logger.info("CampusDesk back office stopped")

    @asynccontextmanager
    async def lifespan(self, create_schema: bool = False) -> AsyncIterator["BackOffice"]:
        """Run startup, yield self, then shut down."""
        await self.startup(create_schema=create_schema)
        try:
            yield self
        finally:
            await self.shutdown()
