# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Notification channels for delivering notifications.

- InAppChannel: Creates notification records in the database
- EmailChannel: Sends email notifications via SMTP

Usage:
    from campusdesk.infrastructure.notifications.channels import (
        EmailChannel,
        NotificationPayload,
    )

    email = EmailChannel(settings.smtp)
    result = await email.send(
        NotificationPayload(
            message="Your result is available",
            subject="Result Uploaded",
            recipient_email="student@example.com",
        )
    )
"""

from campusdesk.infrastructure.notifications.channels.base import (
    BaseChannel,
    ChannelResult,
    ChannelType,
    DeliveryStatus,
    NotificationPayload,
)
from campusdesk.infrastructure.notifications.channels.email import EmailChannel
from campusdesk.infrastructure.notifications.channels.in_app import InAppChannel

__all__ = [
    # Base types
    "BaseChannel",
    "ChannelResult",
    "ChannelType",
    "DeliveryStatus",
    "NotificationPayload",
    # Channels
    "EmailChannel",
    "InAppChannel",
]
