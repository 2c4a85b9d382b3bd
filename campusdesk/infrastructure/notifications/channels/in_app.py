# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""In-app notification channel.

This channel creates notification records in the database that the
recipient reads through their own interface. It is the primary record
of every dispatch, so database failures are not converted into a failed
ChannelResult: they propagate to the caller.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from campusdesk.infrastructure.database.models.notification import Notification
from campusdesk.infrastructure.database.store import EntityStore
from campusdesk.infrastructure.notifications.channels.base import (
    BaseChannel,
    ChannelResult,
    ChannelType,
    NotificationPayload,
)
from campusdesk.utils.datetime import utc_now


class InAppChannel(BaseChannel):
    """In-app notification channel bound to one database session.

    A channel instance is created per session so that concurrent
    dispatches never share a session.
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize the in-app channel.

        Args:
            session: Async database session the record is written in.
        """
        super().__init__()
        self._store = EntityStore(session)

    @property
    def channel_type(self) -> ChannelType:
        """Return the channel type."""
        return ChannelType.IN_APP

    async def send(self, payload: NotificationPayload) -> ChannelResult:
        """Create an in-app notification record.

        The persisted row always has channel "in-app", whatever channel
        the dispatch requested.

        Args:
            payload: The notification payload.

        Returns:
            ChannelResult whose message_id is the notification ID.

        Raises:
            ValueError: If the payload has no recipient.
            DatabaseError: If the record cannot be written.
        """
        if not payload.recipient_id or not payload.recipient_kind:
            raise ValueError("In-app notifications need a recipient id and kind")

        notification = Notification(
            recipient_id=str(payload.recipient_id),
            recipient_kind=payload.recipient_kind,
            message=payload.message,
            channel=ChannelType.IN_APP.value,
            created_at=utc_now(),
        )
        await self._store.insert(notification)

        self.logger.info(
            "Created in-app notification %s for %s %s",
            notification.id,
            payload.recipient_kind,
            payload.recipient_id,
        )

        return self.create_success_result(
            message_id=notification.id,
            sent_at=notification.created_at,
        )
