# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Unit tests for integrity error classification."""

import pytest
from sqlalchemy.exc import IntegrityError

from campusdesk.infrastructure.database import DatabaseError, UniqueViolationError
from campusdesk.infrastructure.database.store import integrity_error, is_unique_violation

pytestmark = pytest.mark.unit


class DriverError(Exception):
    """Driver exception carrying whatever error attributes a backend sets."""

    def __init__(self, message: str, **attrs: str) -> None:
        super().__init__(message)
        for name, value in attrs.items():
            setattr(self, name, value)


def wrap(orig: Exception) -> IntegrityError:
    return IntegrityError("INSERT INTO students ...", {}, orig)


class TestIsUniqueViolation:
    """Tests for is_unique_violation."""

    @pytest.mark.parametrize(
        "orig,expected",
        [
            (DriverError("duplicate key value", sqlstate="23505"), True),
            (DriverError("null value in column", sqlstate="23502"), False),
            (DriverError("violates foreign key", pgcode="23503"), False),
            (DriverError("UNIQUE constraint failed", sqlite_errorname="SQLITE_CONSTRAINT_UNIQUE"), True),
            (DriverError("UNIQUE constraint failed", sqlite_errorname="SQLITE_CONSTRAINT_PRIMARYKEY"), True),
            (DriverError("NOT NULL constraint failed", sqlite_errorname="SQLITE_CONSTRAINT_NOTNULL"), False),
            (DriverError("UNIQUE constraint failed: students.roll_number"), True),
            (DriverError("FOREIGN KEY constraint failed"), False),
        ],
    )
    def test_classification(self, orig, expected) -> None:
        assert is_unique_violation(wrap(orig)) is expected


class TestIntegrityError:
    """Tests for mapping integrity errors to store errors."""

    def test_unique_maps_to_unique_violation(self) -> None:
        error = integrity_error(wrap(DriverError("dup", sqlstate="23505")), "Student")

        assert isinstance(error, UniqueViolationError)
        assert error.message == "Student violates a uniqueness constraint"

    def test_other_maps_to_database_error(self) -> None:
        error = integrity_error(wrap(DriverError("null", sqlstate="23502")), "Student")

        assert type(error) is DatabaseError
        assert error.message == "Student violates an integrity constraint"
