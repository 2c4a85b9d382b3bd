# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Notification dispatcher for fanning one message out to many recipients.

For each recipient the dispatcher:
1. Writes an in-app notification record and commits it
2. Resolves the recipient's email address if email was requested
3. Attempts email delivery, recording the outcome

The in-app record of a recipient is always committed before that
recipient's email attempt, so a failed email never leaves a recipient
without a record of the event. Email outcomes never fail the dispatch;
they are collected in the returned DispatchReport.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field

from sqlalchemy import select

from campusdesk.core.config.settings import NotificationSettings
from campusdesk.core.exceptions import ValidationError
from campusdesk.domains.notification.recipients import (
    Recipient,
    resolve_email,
    resolve_population,
)
from campusdesk.infrastructure.database.connection import Database
from campusdesk.infrastructure.database.models import Notification
from campusdesk.infrastructure.database.store import EntityStore
from campusdesk.infrastructure.notifications.channels import (
    ChannelResult,
    ChannelType,
    DeliveryStatus,
    EmailChannel,
    InAppChannel,
    NotificationPayload,
)
from campusdesk.models.notification import (
    BroadcastRequest,
    NotificationResponse,
    NotificationSendRequest,
    RecipientKind,
)
from campusdesk.utils.datetime import utc_now

logger = logging.getLogger(__name__)


@dataclass
class RecipientDelivery:
    """Outcome of a dispatch for one recipient.

    Attributes:
        recipient: Who was notified.
        notification: The persisted in-app record.
        email: Email outcome, or None when email was not requested.
    """

    recipient: Recipient
    notification: NotificationResponse
    email: ChannelResult | None = None


@dataclass
class DispatchReport:
    """Result of a dispatch or broadcast call.

    Attributes:
        deliveries: One entry per processed recipient, in input order.
    """

    deliveries: list[RecipientDelivery] = field(default_factory=list)

    @property
    def records(self) -> list[NotificationResponse]:
        """Persisted in-app records, one per recipient."""
        return [d.notification for d in self.deliveries]

    def _count_emails(self, status: DeliveryStatus) -> int:
        return sum(1 for d in self.deliveries if d.email is not None and d.email.status == status)

    @property
    def emails_delivered(self) -> int:
        return self._count_emails(DeliveryStatus.DELIVERED)

    @property
    def emails_failed(self) -> int:
        return self._count_emails(DeliveryStatus.FAILED)

    @property
    def emails_skipped(self) -> int:
        return self._count_emails(DeliveryStatus.SKIPPED)

    @property
    def errors(self) -> list[str]:
        """Reasons for every failed email attempt."""
        return [
            f"{d.recipient.kind.value} {d.recipient.recipient_id}: {d.email.error_message}"
            for d in self.deliveries
            if d.email is not None and d.email.status == DeliveryStatus.FAILED
        ]


class NotificationDispatcher:
    """Fans a message out to recipients over in-app and email channels.

    Attributes:
        settings: Notification defaults such as the email subject.
    """

    def __init__(
        self,
        db: Database,
        email_channel: EmailChannel,
        settings: NotificationSettings,
    ) -> None:
        """Initialize the dispatcher.

        Args:
            db: Database used for in-app records and recipient lookups.
            email_channel: Outbound email channel.
            settings: Notification defaults.
        """
        self._db = db
        self._email = email_channel
        self.settings = settings

    async def dispatch(
        self,
        recipients: Iterable[Recipient],
        message: str,
        channel: ChannelType | str = ChannelType.IN_APP,
        email_subject: str | None = None,
    ) -> DispatchReport:
        """Notify every recipient in the input.

        Duplicate recipients are each processed and each get a record.

        Args:
            recipients: Recipients to notify.
            message: Notification body.
            channel: in-app, email, or both. The in-app record is written
                whatever the channel.
            email_subject: Email subject; the configured default when None.

        Returns:
            DispatchReport with one delivery per recipient.

        Raises:
            ValidationError: If the message or a recipient ID is empty, or
                the channel is unknown. Nothing is written in that case.
            DatabaseError: If an in-app record cannot be written.
        """
        channel = self._validate(message, channel)
        targets = list(recipients)
        for recipient in targets:
            if not recipient.recipient_id:
                raise ValidationError("Recipient ID is required")

        subject = email_subject or self.settings.default_email_subject
        report = DispatchReport()
        for recipient in targets:
            report.deliveries.append(
                await self._notify_one(recipient, message, channel, subject)
            )

        logger.info(
            "Dispatched %d notifications via %s (emails: %d delivered, %d failed, %d skipped)",
            len(report.deliveries),
            channel.value,
            report.emails_delivered,
            report.emails_failed,
            report.emails_skipped,
        )
        return report

    async def broadcast(
        self,
        kind: RecipientKind | str,
        message: str,
        channel: ChannelType | str = ChannelType.IN_APP,
        email_subject: str | None = None,
    ) -> DispatchReport:
        """Notify every member of a population.

        Membership is read once, before any record is written. Members
        added after that point are not notified by this call.

        Args:
            kind: Population to notify.
            message: Notification body.
            channel: in-app, email, or both.
            email_subject: Email subject; the configured default when None.

        Returns:
            DispatchReport with one delivery per member.

        Raises:
            ValidationError: If the kind, message or channel is invalid.
        """
        try:
            kind = RecipientKind(kind)
        except ValueError as e:
            raise ValidationError(f"Unknown recipient kind: {kind}") from e
        self._validate(message, channel)

        async with self._db.session() as session:
            population = await resolve_population(EntityStore(session), kind)

        logger.info("Broadcasting to %d %s recipients", len(population), kind.value)
        return await self.dispatch(population, message, channel, email_subject)

    async def send(self, request: NotificationSendRequest) -> DispatchReport:
        """Dispatch from a validated send request."""
        recipients = [
            Recipient(recipient_id=recipient_id, kind=request.recipient_kind)
            for recipient_id in request.recipient_ids
        ]
        return await self.dispatch(
            recipients,
            request.message,
            request.channel,
            request.email_subject,
        )

    async def broadcast_request(self, request: BroadcastRequest) -> DispatchReport:
        """Broadcast from a validated broadcast request."""
        return await self.broadcast(
            request.recipient_kind,
            request.message,
            request.channel,
            request.email_subject,
        )

    async def list_for_recipient(self, recipient: Recipient) -> list[NotificationResponse]:
        """List a recipient's in-app notifications, newest first.

        Args:
            recipient: Whose inbox to read.

        Returns:
            Notification records (possibly empty).
        """
        query = (
            select(Notification)
            .where(
                Notification.recipient_kind == recipient.kind.value,
                Notification.recipient_id == recipient.recipient_id,
            )
            .order_by(Notification.created_at.desc(), Notification.id.desc())
        )
        async with self._db.session() as session:
            result = await session.execute(query)
            return [NotificationResponse.model_validate(n) for n in result.scalars().all()]

    def _validate(self, message: str, channel: ChannelType | str) -> ChannelType:
        if not message or not message.strip():
            raise ValidationError("Notification message is required")
        try:
            return ChannelType(channel)
        except ValueError as e:
            raise ValidationError(f"Unknown notification channel: {channel}") from e

    async def _notify_one(
        self,
        recipient: Recipient,
        message: str,
        channel: ChannelType,
        subject: str,
    ) -> RecipientDelivery:
        """Write the in-app record, then attempt email if requested."""
        async with self._db.session() as session:
            record = await InAppChannel(session).send(
                NotificationPayload(
                    message=message,
                    recipient_id=recipient.recipient_id,
                    recipient_kind=recipient.kind.value,
                )
            )
            address = None
            if channel.includes_email:
                address = await resolve_email(EntityStore(session), recipient)

        notification = NotificationResponse(
            id=record.message_id,
            recipient_id=recipient.recipient_id,
            recipient_kind=recipient.kind,
            message=message,
            created_at=record.sent_at,
        )
        delivery = RecipientDelivery(recipient=recipient, notification=notification)
        if not channel.includes_email:
            return delivery

        payload = NotificationPayload(
            message=message,
            subject=subject,
            recipient_id=recipient.recipient_id,
            recipient_kind=recipient.kind.value,
            recipient_email=address,
        )
        try:
            delivery.email = await self._email.send(payload)
        except Exception as e:
            logger.error(
                "Email to %s %s raised unexpectedly",
                recipient.kind.value,
                recipient.recipient_id,
                exc_info=True,
            )
            delivery.email = ChannelResult(
                channel=ChannelType.EMAIL,
                status=DeliveryStatus.FAILED,
                error_message=str(e),
                sent_at=utc_now(),
            )
        return delivery
