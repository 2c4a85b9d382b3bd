# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Notification request and response schemas."""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator

from campusdesk.infrastructure.notifications.channels.base import ChannelType
from campusdesk.utils.datetime import ensure_utc


class RecipientKind(str, Enum):
    """Populations that can receive notifications."""

    STUDENT = "Student"
    FACULTY = "Faculty"
    ADMIN = "Admin"


class NotificationResponse(BaseModel):
    """A persisted in-app notification."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    recipient_id: str
    recipient_kind: RecipientKind
    message: str
    channel: ChannelType = ChannelType.IN_APP
    created_at: datetime

    @field_validator("created_at")
    @classmethod
    def normalize_created_at(cls, v: datetime) -> datetime:
        """Treat naive database timestamps as UTC."""
        return ensure_utc(v)


class NotificationSendRequest(BaseModel):
    """Request to notify an explicit list of recipients of one kind.

    Duplicate IDs are kept: each occurrence gets its own record.
    """

    recipient_ids: list[str] = Field(
        default_factory=list,
        description="IDs of the recipients to notify",
    )
    recipient_kind: RecipientKind = Field(
        description="Population the recipient IDs belong to",
    )
    message: str = Field(min_length=1, description="Notification body")
    channel: ChannelType = Field(
        default=ChannelType.IN_APP,
        description="in-app, email, or both",
    )
    email_subject: str | None = Field(
        default=None,
        description="Email subject; a default is used when omitted",
    )


class BroadcastRequest(BaseModel):
    """Request to notify an entire recipient population."""

    recipient_kind: RecipientKind
    message: str = Field(min_length=1)
    channel: ChannelType = ChannelType.IN_APP
    email_subject: str | None = None
