# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Unit tests for result derivation and upload validation."""

from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock

import pydantic
import pytest

from campusdesk.core.config.settings import GradingSettings, NotificationSettings
from campusdesk.domains.result import (
    ResultStore,
    ResultValidationError,
    build_result_record,
    result_message,
)
from campusdesk.infrastructure.database.models import Student
from campusdesk.models.common import ResultStatus
from campusdesk.models.result import ResultResponse, ResultUploadRequest, SubjectMarks

pytestmark = pytest.mark.unit


@pytest.fixture
def mock_db():
    """Create a database double whose sessions must not be opened."""
    return MagicMock()


@pytest.fixture
def mock_dispatcher():
    """Create a dispatcher double."""
    return AsyncMock()


@pytest.fixture
def result_store(mock_db, mock_dispatcher) -> ResultStore:
    """Create result store with mock collaborators."""
    return ResultStore(mock_db, mock_dispatcher, GradingSettings(), NotificationSettings())


@pytest.fixture
def student() -> Student:
    """Create an unsaved student."""
    return Student(id="student-1", roll_number="S1", name="Asha Rao", email="asha@northfield.edu")


class TestBuildResultRecord:
    """Tests for the explicit derivation step."""

    def test_aggregate_fields_are_derived(self, student) -> None:
        """Test percentage, grade and status come from the totals."""
        request = ResultUploadRequest(roll_number="S1", term=3, total_marks=450, max_total=500)

        record = build_result_record(request, student, "admin-1", GradingSettings())

        assert record.percentage == 90.0
        assert record.grade == "A+"
        assert record.status == "pass"
        assert record.student_id == "student-1"
        assert record.roll_number == "S1"
        assert record.uploaded_by == "admin-1"
        assert record.uploaded_at.tzinfo is not None

    def test_default_maxima_apply(self, student) -> None:
        """Test configured maxima fill in omitted ones."""
        request = ResultUploadRequest(
            roll_number="S1",
            term=1,
            total_marks=240,
            subjects=[SubjectMarks(name="Physics", marks_obtained=72)],
        )

        record = build_result_record(
            request,
            student,
            "admin-1",
            GradingSettings(default_subject_max_marks=80, default_max_total=400),
        )

        assert record.max_total == 400
        assert record.percentage == 60.0
        assert record.subjects[0].max_marks == 80
        assert record.subjects[0].grade == "A+"

    def test_subject_order_and_grades(self, student) -> None:
        """Test subjects keep their order and each gets its own grade."""
        request = ResultUploadRequest(
            roll_number="S1",
            term=2,
            total_marks=209,
            subjects=[
                SubjectMarks(name="Mathematics", marks_obtained=91),
                SubjectMarks(name="Chemistry", marks_obtained=39),
                SubjectMarks(name="Lab", marks_obtained=41, max_marks=50),
            ],
        )

        record = build_result_record(request, student, "admin-1", GradingSettings())

        assert [s.name for s in record.subjects] == ["Mathematics", "Chemistry", "Lab"]
        assert [s.position for s in record.subjects] == [0, 1, 2]
        assert [s.grade for s in record.subjects] == ["A+", "F", "A"]


class TestResultUploadRequest:
    """Tests for the upload schema."""

    def test_derived_fields_cannot_be_supplied(self) -> None:
        """Test callers cannot set grade, percentage or status."""
        with pytest.raises(pydantic.ValidationError):
            ResultUploadRequest(roll_number="S1", term=1, total_marks=100, grade="A+")

    def test_total_above_maximum_rejected(self) -> None:
        with pytest.raises(pydantic.ValidationError, match="exceed maximum"):
            ResultUploadRequest(roll_number="S1", term=1, total_marks=501, max_total=500)

    def test_subject_marks_above_maximum_rejected(self) -> None:
        with pytest.raises(pydantic.ValidationError, match="exceed maximum"):
            SubjectMarks(name="Physics", marks_obtained=55, max_marks=50)

    def test_negative_marks_rejected(self) -> None:
        with pytest.raises(pydantic.ValidationError):
            SubjectMarks(name="Physics", marks_obtained=-1)

    def test_zero_maximum_accepted(self) -> None:
        """Test a zero maximum is allowed; the marks check only applies above zero."""
        request = ResultUploadRequest(
            roll_number="S1",
            term=1,
            total_marks=450,
            max_total=0,
            subjects=[SubjectMarks(name="Viva", marks_obtained=5, max_marks=0)],
        )

        assert request.max_total == 0
        assert request.subjects[0].max_marks == 0

    def test_negative_maximum_rejected(self) -> None:
        with pytest.raises(pydantic.ValidationError):
            ResultUploadRequest(roll_number="S1", term=1, total_marks=0, max_total=-1)


class TestUploadValidation:
    """Tests for validation that happens before any write."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "roll_number,term,total_marks",
        [
            (None, 3, 450),
            ("", 3, 450),
            ("S1", None, 450),
            ("S1", 3, None),
        ],
    )
    async def test_missing_required_input(
        self, result_store, mock_db, roll_number, term, total_marks
    ) -> None:
        """Test missing roll number, term or total is a validation error."""
        with pytest.raises(ResultValidationError, match="required"):
            await result_store.upload(roll_number, term, [], total_marks, "admin-1")

        mock_db.session.assert_not_called()

    @pytest.mark.asyncio
    async def test_malformed_input(self, result_store, mock_db) -> None:
        """Test schema violations surface as a validation error with details."""
        with pytest.raises(ResultValidationError) as exc_info:
            await result_store.upload(
                "S1",
                3,
                [{"name": "Physics", "marks_obtained": 120}],
                450,
                "admin-1",
            )

        assert exc_info.value.details["errors"]
        mock_db.session.assert_not_called()

    @pytest.mark.asyncio
    async def test_term_must_be_positive(self, result_store, mock_db) -> None:
        with pytest.raises(ResultValidationError):
            await result_store.upload("S1", 0, [], 450, "admin-1")

        mock_db.session.assert_not_called()


class TestResultMessage:
    """Tests for the result notification text."""

    def test_message_describes_result(self) -> None:
        """Test the message names the term, totals, grade and status."""
        result = ResultResponse(
            id="result-1",
            student_id="student-1",
            roll_number="S1",
            term=3,
            subjects=[],
            total_marks=450,
            max_total=500,
            percentage=90.0,
            grade="A+",
            status=ResultStatus.PASS,
            remarks=None,
            uploaded_by="admin-1",
            uploaded_at=datetime(2025, 6, 1, tzinfo=timezone.utc),
        )

        assert result_message(result) == (
            "Your result for semester 3 has been uploaded. "
            "Total marks: 450/500 (90.00%), grade A+, status pass."
        )
