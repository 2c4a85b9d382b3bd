# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Shared enums used by schemas and services."""

from enum import Enum


class ResultStatus(str, Enum):
    """Outcome of an aggregate result."""

    PASS = "pass"
    FAIL = "fail"
    PENDING = "pending"


class AdmissionStatus(str, Enum):
    """Lifecycle state of an admission application."""

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"
