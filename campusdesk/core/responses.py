# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Uniform success/failure envelope for service operations.

Every operation result can be reported as either a payload or a
human-readable error with a machine-readable kind:

    response = await respond(results.upload("S1", 3, [], 450, actor_id))
    if not response.success:
        print(response.kind, response.error)
"""

import logging
from collections.abc import Awaitable
from typing import Any, Generic, TypeVar

from pydantic import BaseModel

from campusdesk.core.exceptions import CampusDeskError, ErrorKind
from campusdesk.infrastructure.database.connection import DatabaseError

logger = logging.getLogger(__name__)

T = TypeVar("T")


class ServiceResponse(BaseModel, Generic[T]):
    """Outcome of a service operation.

    Attributes:
        success: Whether the operation succeeded.
        data: Payload on success.
        error: Human-readable reason on failure.
        kind: Failure category on failure.
        details: Extra failure context.
    """

    success: bool
    data: T | None = None
    error: str | None = None
    kind: ErrorKind | None = None
    details: dict[str, Any] | None = None

    @classmethod
    def ok(cls, data: T) -> "ServiceResponse[T]":
        return cls(success=True, data=data)

    @classmethod
    def fail(cls, error: CampusDeskError | DatabaseError) -> "ServiceResponse[T]":
        """Build a failure envelope from a domain or database error."""
        if isinstance(error, CampusDeskError):
            return cls(
                success=False,
                error=error.message,
                kind=error.kind,
                details=error.details or None,
            )
        return cls(success=False, error=error.message, kind=ErrorKind.INTERNAL)


async def respond(operation: Awaitable[T]) -> ServiceResponse[T]:
    """Await an operation and wrap its outcome in a ServiceResponse.

    Domain errors and database errors become failure envelopes. Any other
    exception is a programming error and propagates.

    Args:
        operation: Awaitable service call.

    Returns:
        ServiceResponse with data or error.
    """
    try:
        return ServiceResponse.ok(await operation)
    except CampusDeskError as e:
        logger.info("Operation failed (%s): %s", e.kind.value, e.message)
        return ServiceResponse.fail(e)
    except DatabaseError as e:
        logger.error("Database failure: %s", e, exc_info=True)
        return ServiceResponse.fail(e)
