# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Admission domain package.

This package provides admission decisions including:
- The pending to approved/rejected transition
- Decision email and in-app notice
"""

from campusdesk.domains.admission.service import (
    DECISION_STATUSES,
    AdmissionNotFoundError,
    AdmissionService,
    AdmissionTransitionError,
    decision_email_body,
)

__all__ = [
    "AdmissionService",
    "AdmissionNotFoundError",
    "AdmissionTransitionError",
    "DECISION_STATUSES",
    "decision_email_body",
]
