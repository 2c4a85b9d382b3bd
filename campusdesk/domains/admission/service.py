# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Admission service for deciding admission applications.

This module provides the AdmissionService class for:
- Approving or rejecting pending admissions
- Emailing the applicant the decision
- Recording an in-app notice of the decision

An admission moves from pending to approved or rejected exactly once.
The transition is a conditional UPDATE, so two concurrent decisions on
the same admission cannot both succeed.
"""

from __future__ import annotations

import logging

from sqlalchemy import select, update
from sqlalchemy.orm import selectinload

from campusdesk.core.config.settings import NotificationSettings
from campusdesk.core.exceptions import (
    CampusDeskError,
    ConflictError,
    NotFoundError,
    ValidationError,
)
from campusdesk.domains.notification.recipients import Recipient
from campusdesk.domains.notification.service import NotificationDispatcher
from campusdesk.infrastructure.database.connection import Database, DatabaseError
from campusdesk.infrastructure.database.models import Admission
from campusdesk.infrastructure.notifications.channels import ChannelType, EmailChannel
from campusdesk.models.admission import AdmissionDecisionRequest, AdmissionResponse
from campusdesk.models.common import AdmissionStatus
from campusdesk.models.notification import RecipientKind
from campusdesk.utils.datetime import utc_now
from campusdesk.utils.logging import log_context

logger = logging.getLogger(__name__)

DECISION_STATUSES = frozenset({AdmissionStatus.APPROVED, AdmissionStatus.REJECTED})


class AdmissionNotFoundError(NotFoundError):
    """Raised when admission is not found."""

    pass


class AdmissionTransitionError(ConflictError):
    """Raised when an admission has already been decided."""

    pass


def decision_email_body(course_name: str, status: AdmissionStatus) -> str:
    """Email text for an admission decision."""
    body = f"Your admission for {course_name} is {status.value}."
    if status == AdmissionStatus.APPROVED:
        body += " Please pay the full fee."
    return body


class AdmissionService:
    """Service for admission decisions.

    The status change is committed first. The decision email and the
    in-app notice are then attempted independently; neither can undo
    the decision or fail the call.
    """

    def __init__(
        self,
        db: Database,
        email_channel: EmailChannel,
        dispatcher: NotificationDispatcher,
        notifications: NotificationSettings,
    ) -> None:
        """Initialize admission service.

        Args:
            db: Database holding admissions.
            email_channel: Channel for the decision email.
            dispatcher: Dispatcher for the in-app notice.
            notifications: Email subject settings.
        """
        self._db = db
        self._email = email_channel
        self._dispatcher = dispatcher
        self._notifications = notifications

    async def decide(
        self,
        admission_id: str,
        status: AdmissionStatus | str,
        actor_id: str,
    ) -> AdmissionResponse:
        """Approve or reject a pending admission.

        Args:
            admission_id: Admission to decide.
            status: approved or rejected.
            actor_id: Who is deciding.

        Returns:
            The decided admission.

        Raises:
            ValidationError: If status is not approved or rejected.
            AdmissionNotFoundError: If the admission does not exist.
            AdmissionTransitionError: If the admission is not pending.
        """
        try:
            status = AdmissionStatus(status)
        except ValueError as e:
            raise ValidationError(f"Invalid admission status: {status}") from e
        if status not in DECISION_STATUSES:
            raise ValidationError("Admission status must be approved or rejected")

        with log_context(actor_id=str(actor_id), admission_id=admission_id):
            return await self._apply_decision(admission_id, status, actor_id)

    async def _apply_decision(
        self,
        admission_id: str,
        status: AdmissionStatus,
        actor_id: str,
    ) -> AdmissionResponse:
        async with self._db.session() as session:
            outcome = await session.execute(
                update(Admission)
                .where(
                    Admission.id == admission_id,
                    Admission.status == AdmissionStatus.PENDING.value,
                )
                .values(status=status.value, decided_by=str(actor_id), decided_at=utc_now())
            )
            if outcome.rowcount == 0:
                existing = await session.get(Admission, admission_id)
                if existing is None:
                    raise AdmissionNotFoundError(
                        "Admission not found",
                        details={"admission_id": admission_id},
                    )
                raise AdmissionTransitionError(
                    f"Admission is already {existing.status}",
                    details={"admission_id": admission_id, "status": existing.status},
                )

            query = (
                select(Admission)
                .options(selectinload(Admission.student), selectinload(Admission.course))
                .where(Admission.id == admission_id)
            )
            admission = (await session.execute(query)).scalar_one()
            response = AdmissionResponse(
                id=admission.id,
                student_id=admission.student_id,
                course_id=admission.course_id,
                course_name=admission.course.name,
                status=AdmissionStatus(admission.status),
                decided_by=admission.decided_by,
                decided_at=admission.decided_at,
            )
            recipient = Recipient(
                recipient_id=admission.student.id,
                kind=RecipientKind.STUDENT,
                email=admission.student.email,
            )

        logger.info("Admission %s %s by %s", admission_id, status.value, actor_id)

        await self._send_decision_email(recipient, response)
        await self._notify_in_app(recipient, response)
        return response

    async def decide_request(
        self,
        admission_id: str,
        request: AdmissionDecisionRequest,
        actor_id: str,
    ) -> AdmissionResponse:
        """Decide an admission from a validated request."""
        return await self.decide(admission_id, request.status, actor_id)

    async def _send_decision_email(self, recipient: Recipient, admission: AdmissionResponse) -> None:
        try:
            result = await self._email.send_email(
                recipient.email,
                self._notifications.admission_email_subject,
                decision_email_body(admission.course_name, admission.status),
                recipient_id=recipient.recipient_id,
                recipient_kind=recipient.kind.value,
            )
        except Exception:
            logger.error(
                "Admission %s decision email raised unexpectedly",
                admission.id,
                exc_info=True,
            )
            return

        if not result.succeeded:
            logger.warning(
                "Admission %s decision email %s: %s",
                admission.id,
                result.status.value,
                result.error_message,
            )

    async def _notify_in_app(self, recipient: Recipient, admission: AdmissionResponse) -> None:
        try:
            await self._dispatcher.dispatch(
                [recipient],
                f"Admission {admission.status.value}",
                ChannelType.IN_APP,
            )
        except (CampusDeskError, DatabaseError):
            logger.error(
                "Failed to record in-app notice for admission %s",
                admission.id,
                exc_info=True,
            )
