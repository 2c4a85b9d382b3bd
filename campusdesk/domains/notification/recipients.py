# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Recipient identities and their resolution against the database.

Each RecipientKind maps to exactly one ORM model in RECIPIENT_MODELS.
The mapping is checked for completeness at import time, so adding a kind
without a model fails immediately rather than at the first dispatch.
"""

import logging
from dataclasses import dataclass

from sqlalchemy import select

from campusdesk.infrastructure.database.models import AdminUser, Faculty, Student
from campusdesk.infrastructure.database.store import EntityStore
from campusdesk.models.notification import RecipientKind

logger = logging.getLogger(__name__)

RECIPIENT_MODELS: dict[RecipientKind, type[Student] | type[Faculty] | type[AdminUser]] = {
    RecipientKind.STUDENT: Student,
    RecipientKind.FACULTY: Faculty,
    RecipientKind.ADMIN: AdminUser,
}

_missing = set(RecipientKind) - set(RECIPIENT_MODELS)
if _missing:
    raise RuntimeError(f"No recipient model registered for: {sorted(k.value for k in _missing)}")


@dataclass(frozen=True)
class Recipient:
    """A notification target.

    Attributes:
        recipient_id: ID of the student, faculty member or admin.
        kind: Population the ID belongs to.
        email: Known email address; looked up on demand when None.
    """

    recipient_id: str
    kind: RecipientKind
    email: str | None = None


async def resolve_email(store: EntityStore, recipient: Recipient) -> str | None:
    """Return the recipient's email address, looking it up if needed.

    Args:
        store: Entity store bound to the current session.
        recipient: The recipient.

    Returns:
        The email address, or None if the recipient has none or does not
        exist.
    """
    if recipient.email:
        return recipient.email

    entity = await store.find_by_id(RECIPIENT_MODELS[recipient.kind], recipient.recipient_id)
    if entity is None:
        logger.warning(
            "%s %s not found while resolving email",
            recipient.kind.value,
            recipient.recipient_id,
        )
        return None
    return entity.email or None


async def resolve_population(store: EntityStore, kind: RecipientKind) -> list[Recipient]:
    """Snapshot every member of a population with their email addresses.

    Args:
        store: Entity store bound to the current session.
        kind: Population to resolve.

    Returns:
        One Recipient per member, with email filled in.
    """
    model = RECIPIENT_MODELS[kind]
    rows = await store.session.execute(select(model.id, model.email).order_by(model.id))
    return [
        Recipient(recipient_id=member_id, kind=kind, email=email)
        for member_id, email in rows.all()
    ]
