# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Faculty service for onboarding faculty members."""

from __future__ import annotations

import logging
from typing import Any

import pydantic

from campusdesk.core.config.settings import NotificationSettings
from campusdesk.core.exceptions import ConflictError, ValidationError
from campusdesk.infrastructure.database.connection import Database, UniqueViolationError
from campusdesk.infrastructure.database.models import Faculty
from campusdesk.infrastructure.database.store import EntityStore
from campusdesk.infrastructure.notifications.channels import EmailChannel
from campusdesk.models.faculty import FacultyCreateRequest, FacultyResponse
from campusdesk.models.notification import RecipientKind

logger = logging.getLogger(__name__)


class FacultyExistsError(ConflictError):
    """Raised when a faculty member with the email already exists."""

    pass


class FacultyService:
    """Service for faculty accounts.

    Attributes:
        db: Database holding faculty records.
    """

    def __init__(
        self,
        db: Database,
        email_channel: EmailChannel,
        notifications: NotificationSettings,
    ) -> None:
        self.db = db
        self._email = email_channel
        self._notifications = notifications

    async def add_faculty(self, request: FacultyCreateRequest | dict[str, Any]) -> FacultyResponse:
        """Create a faculty member and send a welcome email.

        The welcome email is best-effort and sent after the record is
        committed.

        Args:
            request: Faculty details.

        Returns:
            The created faculty member.

        Raises:
            ValidationError: If the details are malformed.
            FacultyExistsError: If the email is already registered.
        """
        if not isinstance(request, FacultyCreateRequest):
            try:
                request = FacultyCreateRequest.model_validate(request)
            except pydantic.ValidationError as e:
                raise ValidationError(
                    "Invalid faculty data",
                    details={"errors": e.errors(include_url=False, include_context=False)},
                ) from e

        email = str(request.email).lower()

        async with self.db.session() as session:
            store = EntityStore(session)
            if await store.find_one(Faculty, email=email):
                raise FacultyExistsError("Faculty already exists", details={"email": email})

            try:
                faculty = await store.insert(
                    Faculty(**request.model_dump(exclude={"email"}), email=email)
                )
            except UniqueViolationError as e:
                raise FacultyExistsError("Faculty already exists", details={"email": email}) from e

            response = FacultyResponse.model_validate(faculty)

        logger.info("Created faculty %s (%s)", response.email, response.id)

        try:
            result = await self._email.send_email(
                response.email,
                self._notifications.faculty_welcome_subject,
                f"Hello {response.name}, your faculty account has been created. "
                f"You can sign in with {response.email}.",
                recipient_id=response.id,
                recipient_kind=RecipientKind.FACULTY.value,
            )
        except Exception:
            logger.error("Welcome email for faculty %s raised unexpectedly", response.id, exc_info=True)
            return response

        if not result.succeeded:
            logger.warning(
                "Welcome email for faculty %s %s: %s",
                response.id,
                result.status.value,
                result.error_message,
            )

        return response
