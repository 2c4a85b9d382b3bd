# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Shared exception hierarchy for CampusDesk operations.

Every failure reported to a caller carries a human-readable message and a
machine-distinguishable kind:

- ValidationError: required input missing or malformed
- NotFoundError: referenced entity does not exist
- ConflictError: uniqueness or state invariant violated
- DeliveryError: an email could not be delivered (never fatal)

Domain packages subclass these to give errors precise names while keeping
the kind stable.
"""

from enum import Enum
from typing import Any, ClassVar


class ErrorKind(str, Enum):
    """Machine-readable failure categories."""

    VALIDATION = "validation"
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    DELIVERY = "delivery"
    INTERNAL = "internal"


class CampusDeskError(Exception):
    """Base exception for all CampusDesk domain errors.

    Attributes:
        message: Human-readable error description.
        details: Optional dictionary with additional error context.
    """

    kind: ClassVar[ErrorKind] = ErrorKind.INTERNAL

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        """Initialize the error.

        Args:
            message: Human-readable error description.
            details: Optional dictionary with additional error context.
        """
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        """Return the human-readable message."""
        return self.message


class ValidationError(CampusDeskError):
    """Raised when required input is missing or malformed."""

    kind = ErrorKind.VALIDATION


class NotFoundError(CampusDeskError):
    """Raised when a referenced entity does not exist."""

    kind = ErrorKind.NOT_FOUND


class ConflictError(CampusDeskError):
    """Raised when a uniqueness or state invariant would be violated."""

    kind = ErrorKind.CONFLICT


class DeliveryError(CampusDeskError):
    """Raised by an email transport when a message could not be delivered.

    Delivery errors are recorded and logged by the caller; they never
    become the overall failure of the enclosing operation.
    """

    kind = ErrorKind.DELIVERY
