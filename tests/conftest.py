# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Pytest configuration and shared fixtures.

This module provides fixtures used across all test types:
- Unit tests (settings, fake email channel)
- Integration tests (temporary SQLite database, seeded people, services)
"""

import io
import json
import logging
from pathlib import Path

import pytest
import pytest_asyncio
import structlog

from campusdesk.core.config.settings import DatabaseSettings, Settings
from campusdesk.domains.admission import AdmissionService
from campusdesk.domains.course import CourseService
from campusdesk.domains.document import DocumentService
from campusdesk.domains.faculty import FacultyService
from campusdesk.domains.notification import NotificationDispatcher
from campusdesk.domains.result import ResultStore
from campusdesk.infrastructure.database import Database, EntityStore
from campusdesk.infrastructure.database.models import AdminUser, Course, Faculty, Student
from campusdesk.utils.logging import setup_logging
from tests.fakes import RecordingEmailChannel, configured_smtp_settings


# =============================================================================
# Marker Configuration
# =============================================================================


def pytest_configure(config: pytest.Config) -> None:
    """Configure custom pytest markers."""
    config.addinivalue_line(
        "markers", "unit: mark test as a unit test"
    )
    config.addinivalue_line(
        "markers", "integration: mark test as an integration test (uses a SQLite file)"
    )


# =============================================================================
# Settings and Channels
# =============================================================================


@pytest.fixture
def database_path(tmp_path: Path) -> Path:
    """Path of the per-test SQLite database file."""
    return tmp_path / "campusdesk.db"


@pytest.fixture
def settings(database_path: Path) -> Settings:
    """Provide test settings pointing at a temporary SQLite file."""
    return Settings(
        environment="test",
        debug=False,
        log_level="DEBUG",
        database=DatabaseSettings(dsn=f"sqlite+aiosqlite:///{database_path}"),
        smtp=configured_smtp_settings(),
    )


@pytest.fixture
def structured_logs(settings: Settings):
    """Install JSON logging on an in-memory buffer and yield a reader of the records."""
    root = logging.getLogger()
    saved_handlers, saved_level = list(root.handlers), root.level
    setup_logging(settings)
    buffer = io.StringIO()
    for handler in root.handlers:
        if isinstance(handler.formatter, structlog.stdlib.ProcessorFormatter):
            handler.setStream(buffer)

    def read() -> list[dict]:
        lines = buffer.getvalue().splitlines()
        buffer.seek(0)
        buffer.truncate()
        return [json.loads(line) for line in lines if line.startswith("{")]

    yield read

    root.handlers[:] = saved_handlers
    root.setLevel(saved_level)


@pytest.fixture
def mailer() -> RecordingEmailChannel:
    """Provide an email channel that records instead of sending."""
    return RecordingEmailChannel()


# =============================================================================
# Database Fixtures
# =============================================================================


@pytest_asyncio.fixture
async def db(settings: Settings):
    """Create the schema in a fresh SQLite file and yield the database."""
    database = Database.from_settings(settings.database)
    await database.create_all()
    yield database
    await database.dispose()


@pytest_asyncio.fixture
async def students(db: Database) -> list[Student]:
    """Seed three students with email addresses."""
    seeded = [
        Student(roll_number="S1", name="Asha Rao", email="asha@northfield.edu"),
        Student(roll_number="S2", name="Ben Okafor", email="ben@northfield.edu"),
        Student(roll_number="S3", name="Chen Wei", email="chen@northfield.edu"),
    ]
    async with db.session() as session:
        store = EntityStore(session)
        for student in seeded:
            await store.insert(student)
    return seeded


@pytest_asyncio.fixture
async def faculty_member(db: Database) -> Faculty:
    """Seed one faculty member."""
    member = Faculty(name="Dr. Mira Patel", email="mira@northfield.edu", department="Physics")
    async with db.session() as session:
        await EntityStore(session).insert(member)
    return member


@pytest_asyncio.fixture
async def admin_user(db: Database) -> AdminUser:
    """Seed one administrator without an email address."""
    admin = AdminUser(name="Registrar")
    async with db.session() as session:
        await EntityStore(session).insert(admin)
    return admin


@pytest_asyncio.fixture
async def course(db: Database) -> Course:
    """Seed one course."""
    seeded = Course(name="B.Sc. Physics", form_url="https://northfield.edu/forms/bsc-physics")
    async with db.session() as session:
        await EntityStore(session).insert(seeded)
    return seeded


# =============================================================================
# Service Fixtures
# =============================================================================


@pytest.fixture
def dispatcher(
    db: Database,
    mailer: RecordingEmailChannel,
    settings: Settings,
) -> NotificationDispatcher:
    """Provide a dispatcher wired to the fake email channel."""
    return NotificationDispatcher(db, mailer, settings.notifications)


@pytest.fixture
def result_store(
    db: Database,
    dispatcher: NotificationDispatcher,
    settings: Settings,
) -> ResultStore:
    """Provide a result store wired to the test dispatcher."""
    return ResultStore(db, dispatcher, settings.grading, settings.notifications)


@pytest.fixture
def admission_service(
    db: Database,
    mailer: RecordingEmailChannel,
    dispatcher: NotificationDispatcher,
    settings: Settings,
) -> AdmissionService:
    """Provide an admission service wired to the fake email channel."""
    return AdmissionService(db, mailer, dispatcher, settings.notifications)


@pytest.fixture
def faculty_service(
    db: Database,
    mailer: RecordingEmailChannel,
    settings: Settings,
) -> FacultyService:
    """Provide a faculty service wired to the fake email channel."""
    return FacultyService(db, mailer, settings.notifications)


@pytest.fixture
def course_service(db: Database) -> CourseService:
    """Provide a course catalogue service."""
    return CourseService(db)


@pytest.fixture
def document_service(db: Database) -> DocumentService:
    """Provide a document service."""
    return DocumentService(db)


@pytest.fixture
def actor_id() -> str:
    """Provide a sample administrator ID for uploaded-by stamps."""
    return "550e8400-e29b-41d4-a716-446655440000"
