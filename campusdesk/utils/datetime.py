# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""DateTime utilities for CampusDesk.

All timestamps are stored in UTC and all Python datetimes are
timezone-aware, so naive and aware values are never mixed.

Usage:
    from campusdesk.utils.datetime import utc_now

    uploaded_at = utc_now()
"""

from datetime import datetime, timezone


def utc_now() -> datetime:
    """Get current UTC time as timezone-aware datetime.

    Returns:
        Timezone-aware datetime representing current UTC time.
    """
    return datetime.now(timezone.utc)


def ensure_utc(dt: datetime | None) -> datetime | None:
    """Ensure a datetime is timezone-aware in UTC.

    Naive datetimes (as returned by SQLite) are assumed to be UTC.

    Args:
        dt: Datetime to normalize, or None.

    Returns:
        UTC-aware datetime, or None if input was None.
    """
    if dt is None:
        return None
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def format_iso(dt: datetime | None) -> str | None:
    """Format a datetime as an ISO 8601 string in UTC.

    Args:
        dt: Datetime to format.

    Returns:
        ISO string, or None if input was None.
    """
    normalized = ensure_utc(dt)
    return normalized.isoformat() if normalized else None
