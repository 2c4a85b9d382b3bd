# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Document domain package."""

from campusdesk.domains.document.service import DocumentService

__all__ = ["DocumentService"]
