# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Integration tests for BackOffice wiring and lifecycle."""

import pytest

from campusdesk.backoffice import BackOffice
from campusdesk.infrastructure.database import Database, DatabaseError
from campusdesk.infrastructure.database.models import Student

pytestmark = pytest.mark.integration


class TestBackOffice:
    """Tests for building and running the back office container."""

    def test_services_share_dispatcher(self, settings, mailer) -> None:
        office = BackOffice(settings, Database.from_settings(settings.database), mailer)

        assert office.results._dispatcher is office.notifications
        assert office.admissions._dispatcher is office.notifications
        assert office.notifications._email is mailer
        assert office.courses.db is office.db

    @pytest.mark.asyncio
    async def test_lifespan_creates_schema(self, settings, mailer) -> None:
        """Test startup creates tables and the services can use them."""
        office = BackOffice(settings, Database.from_settings(settings.database), mailer)

        async with office.lifespan(create_schema=True) as running:
            async with running.db.session() as session:
                session.add(Student(roll_number="S1", name="Asha Rao", email="asha@northfield.edu"))

            result = await running.results.upload("S1", 1, [], 410, "admin-1")

        assert result.grade == "A"
        assert len(mailer.delivered) == 1

    @pytest.mark.asyncio
    async def test_startup_fails_when_database_unreachable(self, settings, mailer, tmp_path) -> None:
        unreachable = tmp_path / "missing" / "campusdesk.db"
        db = Database(f"sqlite+aiosqlite:///{unreachable}")
        office = BackOffice(settings, db, mailer)

        with pytest.raises(DatabaseError):
            await office.startup()

        await office.shutdown()

    def test_from_settings(self, settings) -> None:
        office = BackOffice.from_settings(settings)

        assert office.settings is settings
        assert office.email._settings.host == settings.smtp.host
