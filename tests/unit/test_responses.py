# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Unit tests for the error taxonomy and response envelope."""

import pytest

from campusdesk.core.exceptions import (
    CampusDeskError,
    ConflictError,
    DeliveryError,
    ErrorKind,
    NotFoundError,
    ValidationError,
)
from campusdesk.core.responses import ServiceResponse, respond
from campusdesk.domains.admission import AdmissionNotFoundError, AdmissionTransitionError
from campusdesk.domains.faculty import FacultyExistsError
from campusdesk.domains.result import (
    DuplicateResultError,
    ResultNotFoundError,
    ResultValidationError,
    StudentNotFoundError,
)
from campusdesk.infrastructure.database import DatabaseError, UniqueViolationError

pytestmark = pytest.mark.unit


class TestErrorKinds:
    """Tests for machine-readable error kinds."""

    @pytest.mark.parametrize(
        "error_class,kind",
        [
            (ValidationError, ErrorKind.VALIDATION),
            (ResultValidationError, ErrorKind.VALIDATION),
            (NotFoundError, ErrorKind.NOT_FOUND),
            (StudentNotFoundError, ErrorKind.NOT_FOUND),
            (ResultNotFoundError, ErrorKind.NOT_FOUND),
            (AdmissionNotFoundError, ErrorKind.NOT_FOUND),
            (ConflictError, ErrorKind.CONFLICT),
            (DuplicateResultError, ErrorKind.CONFLICT),
            (AdmissionTransitionError, ErrorKind.CONFLICT),
            (FacultyExistsError, ErrorKind.CONFLICT),
            (DeliveryError, ErrorKind.DELIVERY),
            (CampusDeskError, ErrorKind.INTERNAL),
        ],
    )
    def test_kind_is_stable_for_subclasses(self, error_class, kind) -> None:
        """Test domain subclasses keep their category's kind."""
        assert error_class("boom").kind == kind

    def test_message_and_details(self) -> None:
        """Test str() is the message and details default to empty."""
        error = ConflictError("Result already exists")

        assert str(error) == "Result already exists"
        assert error.details == {}

    def test_unique_violation_is_a_database_error(self) -> None:
        """Test uniqueness failures can be told apart from other failures."""
        cause = RuntimeError("UNIQUE constraint failed")
        error = UniqueViolationError("Result violates a uniqueness constraint", cause)

        assert isinstance(error, DatabaseError)
        assert error.original_error is cause
        assert "UNIQUE constraint failed" in str(error)


class TestRespond:
    """Tests for the respond() envelope helper."""

    @pytest.mark.asyncio
    async def test_success_wraps_payload(self) -> None:
        """Test a successful operation yields success with data."""

        async def operation() -> dict[str, int]:
            return {"records": 3}

        response = await respond(operation())

        assert response.success is True
        assert response.data == {"records": 3}
        assert response.error is None
        assert response.kind is None

    @pytest.mark.asyncio
    async def test_domain_error_becomes_failure(self) -> None:
        """Test a domain error yields its message and kind."""

        async def operation() -> None:
            raise DuplicateResultError(
                "Result already exists for this student and semester",
                details={"roll_number": "S1", "term": 3},
            )

        response = await respond(operation())

        assert response.success is False
        assert response.kind == ErrorKind.CONFLICT
        assert response.error == "Result already exists for this student and semester"
        assert response.details == {"roll_number": "S1", "term": 3}

    @pytest.mark.asyncio
    async def test_database_error_is_internal(self) -> None:
        """Test infrastructure failure is reported as a generic failure."""

        async def operation() -> None:
            raise DatabaseError("Database operation failed")

        response = await respond(operation())

        assert response.success is False
        assert response.kind == ErrorKind.INTERNAL
        assert response.error == "Database operation failed"

    @pytest.mark.asyncio
    async def test_programming_errors_propagate(self) -> None:
        """Test unexpected exceptions are not swallowed."""

        async def operation() -> None:
            raise KeyError("bug")

        with pytest.raises(KeyError):
            await respond(operation())

    def test_envelope_serializes_kind_as_string(self) -> None:
        """Test the envelope dumps to plain JSON-ready values."""
        dumped = ServiceResponse.fail(NotFoundError("Student not found")).model_dump(mode="json")

        assert dumped == {
            "success": False,
            "data": None,
            "error": "Student not found",
            "kind": "not_found",
            "details": None,
        }
