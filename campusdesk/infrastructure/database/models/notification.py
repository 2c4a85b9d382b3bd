# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""In-app notification records.

Rows are written once per recipient per dispatch and never updated; the
table is the read-only audit trail of what each person was told.
"""

from datetime import datetime

from sqlalchemy import DateTime, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from campusdesk.infrastructure.database.models.base import Base, IdMixin
from campusdesk.utils.datetime import utc_now


class Notification(IdMixin, Base):
    """A notification shown in the recipient's in-app inbox."""

    __tablename__ = "notifications"
    __table_args__ = (
        Index("ix_notifications_recipient", "recipient_kind", "recipient_id"),
    )

    recipient_id: Mapped[str] = mapped_column(String(36), nullable=False)
    recipient_kind: Mapped[str] = mapped_column(String(20), nullable=False)
    message: Mapped[str] = mapped_column(Text, nullable=False)
    channel: Mapped[str] = mapped_column(String(20), default="in-app", nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utc_now, nullable=False
    )

    def __repr__(self) -> str:
        return f"<Notification(recipient={self.recipient_kind}:{self.recipient_id})>"
