# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Notification domain package.

This package provides notification fan-out including:
- Dispatch to an explicit recipient list
- Broadcast to a whole population snapshot
- Per-recipient delivery reports
"""

from campusdesk.domains.notification.recipients import (
    RECIPIENT_MODELS,
    Recipient,
    resolve_email,
    resolve_population,
)
from campusdesk.domains.notification.service import (
    DispatchReport,
    NotificationDispatcher,
    RecipientDelivery,
)

__all__ = [
    "NotificationDispatcher",
    "DispatchReport",
    "RecipientDelivery",
    "Recipient",
    "RECIPIENT_MODELS",
    "resolve_email",
    "resolve_population",
]
