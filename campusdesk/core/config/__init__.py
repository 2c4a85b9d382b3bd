# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Configuration package for CampusDesk.

Example:
    >>> from campusdesk.core.config import get_settings
    >>> settings = get_settings()
    >>> print(settings.grading.default_max_total)
    500.0
"""

from campusdesk.core.config.settings import (
    DatabaseSettings,
    GradingSettings,
    NotificationSettings,
    Settings,
    SMTPSettings,
    clear_settings_cache,
    get_settings,
)

__all__ = [
    "Settings",
    "get_settings",
    "clear_settings_cache",
    # Subsettings
    "DatabaseSettings",
    "SMTPSettings",
    "GradingSettings",
    "NotificationSettings",
]
