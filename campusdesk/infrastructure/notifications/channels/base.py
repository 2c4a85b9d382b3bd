# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Base classes for notification channels.

This module defines the abstract base class and shared types
for all notification channels. Each channel handles delivery
through a specific medium (in-app record, email).
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any

from campusdesk.utils.datetime import format_iso, utc_now


class ChannelType(str, Enum):
    """Notification channels a caller can request.

    BOTH means an in-app record plus an email. The in-app record is
    written for every request regardless of the channel chosen.
    """

    IN_APP = "in-app"
    EMAIL = "email"
    BOTH = "both"

    @property
    def includes_email(self) -> bool:
        """Whether an email attempt is part of this request."""
        return self in (ChannelType.EMAIL, ChannelType.BOTH)


class DeliveryStatus(str, Enum):
    """Delivery status for a channel."""

    DELIVERED = "delivered"
    FAILED = "failed"
    SKIPPED = "skipped"


@dataclass
class NotificationPayload:
    """Payload for sending a notification through any channel.

    Attributes:
        message: Notification body.
        subject: Email subject line.
        recipient_id: Identifier of the recipient.
        recipient_kind: Recipient population (Student, Faculty, Admin).
        recipient_email: Email address (for email channel).
    """

    message: str
    subject: str | None = None
    recipient_id: str | None = None
    recipient_kind: str | None = None
    recipient_email: str | None = None


@dataclass
class ChannelResult:
    """Result of a channel send operation.

    Attributes:
        channel: Which channel was used.
        status: Delivery status.
        message_id: Record or transport message ID (if available).
        error_message: Error or skip reason.
        sent_at: When the attempt finished.
        metadata: Additional result metadata.
    """

    channel: ChannelType
    status: DeliveryStatus
    message_id: str | None = None
    error_message: str | None = None
    sent_at: datetime | None = None
    metadata: dict[str, Any] = field(default_factory=dict)

    @property
    def succeeded(self) -> bool:
        """Whether the channel delivered the notification."""
        return self.status == DeliveryStatus.DELIVERED

    def to_dict(self) -> dict[str, Any]:
        """Convert to a plain dictionary for logging and reporting."""
        return {
            "channel": self.channel.value,
            "status": self.status.value,
            "message_id": self.message_id,
            "error_message": self.error_message,
            "sent_at": format_iso(self.sent_at),
            "metadata": self.metadata,
        }


class BaseChannel(ABC):
    """Abstract base class for notification channels.

    Attributes:
        channel_type: The type of this channel.
    """

    def __init__(self) -> None:
        """Initialize the channel."""
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    @property
    @abstractmethod
    def channel_type(self) -> ChannelType:
        """Return the channel type."""
        ...

    @abstractmethod
    async def send(self, payload: NotificationPayload) -> ChannelResult:
        """Send a notification through this channel.

        Args:
            payload: The notification payload to send.

        Returns:
            ChannelResult with delivery status.
        """
        ...

    def create_success_result(
        self,
        message_id: str | None = None,
        sent_at: datetime | None = None,
        metadata: dict[str, Any] | None = None,
    ) -> ChannelResult:
        """Create a successful channel result."""
        return ChannelResult(
            channel=self.channel_type,
            status=DeliveryStatus.DELIVERED,
            message_id=message_id,
            sent_at=sent_at or utc_now(),
            metadata=metadata or {},
        )

    def create_failure_result(
        self,
        error_message: str,
        metadata: dict[str, Any] | None = None,
    ) -> ChannelResult:
        """Create a failed channel result."""
        return ChannelResult(
            channel=self.channel_type,
            status=DeliveryStatus.FAILED,
            error_message=error_message,
            sent_at=utc_now(),
            metadata=metadata or {},
        )

    def create_skipped_result(self, reason: str) -> ChannelResult:
        """Create a skipped channel result."""
        return ChannelResult(
            channel=self.channel_type,
            status=DeliveryStatus.SKIPPED,
            error_message=reason,
            sent_at=utc_now(),
        )
