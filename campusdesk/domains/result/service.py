# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Result store for uploading and reading academic results.

This module provides the ResultStore class for:
- Result upload with grade derivation
- One result per student and term
- Result lookup by roll number and term

Derived fields are computed by build_result_record() before the insert,
never by the ORM model itself. The (student, term) rule is enforced by a
database unique constraint; the read before the insert only produces a
friendlier error for the common, non-racing case.
"""

from __future__ import annotations

import logging
from typing import Any

import pydantic
from sqlalchemy import select

from campusdesk.core.config.settings import GradingSettings, NotificationSettings
from campusdesk.core.exceptions import (
    CampusDeskError,
    ConflictError,
    NotFoundError,
    ValidationError,
)
from campusdesk.domains.notification.recipients import Recipient
from campusdesk.domains.notification.service import NotificationDispatcher
from campusdesk.domains.result.grading import derive_aggregate, derive_subject
from campusdesk.infrastructure.database.connection import Database, DatabaseError, UniqueViolationError
from campusdesk.infrastructure.database.models import Result, ResultSubject, Student
from campusdesk.infrastructure.database.store import EntityStore
from campusdesk.infrastructure.notifications.channels import ChannelType
from campusdesk.models.notification import RecipientKind
from campusdesk.models.result import ResultResponse, ResultUploadRequest, SubjectMarks
from campusdesk.utils.datetime import utc_now
from campusdesk.utils.logging import log_context

logger = logging.getLogger(__name__)


class ResultValidationError(ValidationError):
    """Raised when upload input is missing or malformed."""

    pass


class StudentNotFoundError(NotFoundError):
    """Raised when no student has the given roll number."""

    pass


class ResultNotFoundError(NotFoundError):
    """Raised when no result exists for a student and term."""

    pass


class DuplicateResultError(ConflictError):
    """Raised when a result already exists for the student and term."""

    pass


def build_result_record(
    request: ResultUploadRequest,
    student: Student,
    actor_id: str,
    grading: GradingSettings,
) -> Result:
    """Build an unsaved Result with every derived field filled in.

    Args:
        request: Validated upload request.
        student: The student the result belongs to.
        actor_id: Who is uploading.
        grading: Default maxima for subjects and totals.

    Returns:
        New Result with its subjects attached.
    """
    max_total = request.max_total if request.max_total is not None else grading.default_max_total
    aggregate = derive_aggregate(request.total_marks, max_total)

    subjects = []
    for position, subject in enumerate(request.subjects):
        max_marks = (
            subject.max_marks
            if subject.max_marks is not None
            else grading.default_subject_max_marks
        )
        subjects.append(
            ResultSubject(
                position=position,
                name=subject.name,
                marks_obtained=subject.marks_obtained,
                max_marks=max_marks,
                grade=derive_subject(subject.marks_obtained, max_marks),
            )
        )

    return Result(
        student_id=student.id,
        roll_number=student.roll_number,
        term=request.term,
        subjects=subjects,
        total_marks=request.total_marks,
        max_total=max_total,
        percentage=aggregate.percentage,
        grade=aggregate.grade,
        status=aggregate.status.value,
        remarks=request.remarks,
        uploaded_by=str(actor_id),
        uploaded_at=utc_now(),
    )


def result_message(result: ResultResponse) -> str:
    """Notification text describing a newly uploaded result."""
    message = (
        f"Your result for semester {result.term} has been uploaded. "
        f"Total marks: {result.total_marks:g}/{result.max_total:g}"
    )
    if result.percentage is not None:
        message += f" ({result.percentage:.2f}%), grade {result.grade}, status {result.status.value}"
    return message + "."


class ResultStore:
    """Store for academic results.

    Uploading a result commits the record first and then notifies the
    student in-app and by email. A notification failure is logged and
    never undoes or fails the upload.

    Attributes:
        grading: Default maxima used for derivation.
    """

    def __init__(
        self,
        db: Database,
        dispatcher: NotificationDispatcher,
        grading: GradingSettings,
        notifications: NotificationSettings,
    ) -> None:
        """Initialize result store.

        Args:
            db: Database holding students and results.
            dispatcher: Dispatcher used to notify the student.
            grading: Default maxima used for derivation.
            notifications: Email subject settings.
        """
        self._db = db
        self._dispatcher = dispatcher
        self.grading = grading
        self._notifications = notifications

    async def upload(
        self,
        roll_number: str | None,
        term: int | None,
        subjects: list[SubjectMarks | dict[str, Any]] | None,
        total_marks: float | None,
        actor_id: str,
        *,
        max_total: float | None = None,
        remarks: str | None = None,
    ) -> ResultResponse:
        """Upload a result for a student and term.

        Args:
            roll_number: Student roll number.
            term: Term (semester) number.
            subjects: Per-subject marks, in display order.
            total_marks: Total marks obtained.
            actor_id: Who is uploading.
            max_total: Maximum total; the configured default when None.
            remarks: Free-text remarks.

        Returns:
            The stored result.

        Raises:
            ResultValidationError: If required input is missing or malformed.
            StudentNotFoundError: If no student has the roll number.
            DuplicateResultError: If a result already exists for the term.
        """
        if not roll_number or term is None or total_marks is None:
            raise ResultValidationError("Roll number, semester, and total marks are required")

        try:
            request = ResultUploadRequest(
                roll_number=roll_number,
                term=term,
                subjects=subjects or [],
                total_marks=total_marks,
                max_total=max_total,
                remarks=remarks,
            )
        except pydantic.ValidationError as e:
            raise ResultValidationError(
                "Invalid result data",
                details={"errors": e.errors(include_url=False, include_context=False)},
            ) from e

        return await self.upload_request(request, actor_id)

    async def upload_request(self, request: ResultUploadRequest, actor_id: str) -> ResultResponse:
        """Upload a result from an already-validated request.

        Args:
            request: Upload request.
            actor_id: Who is uploading.

        Returns:
            The stored result.

        Raises:
            StudentNotFoundError: If no student has the roll number.
            DuplicateResultError: If a result already exists for the term.
        """
        with log_context(
            actor_id=str(actor_id),
            roll_number=request.roll_number,
            term=request.term,
        ):
            return await self._store_and_notify(request, actor_id)

    async def _store_and_notify(self, request: ResultUploadRequest, actor_id: str) -> ResultResponse:
        async with self._db.session() as session:
            store = EntityStore(session)

            student = await self._get_student(store, request.roll_number)
            if await store.find_one(Result, student_id=student.id, term=request.term):
                raise self._duplicate(request)

            try:
                result = await store.insert(
                    build_result_record(request, student, actor_id, self.grading)
                )
            except UniqueViolationError as e:
                raise self._duplicate(request) from e

            response = ResultResponse.model_validate(result)
            recipient = Recipient(
                recipient_id=student.id,
                kind=RecipientKind.STUDENT,
                email=student.email,
            )

        logger.info(
            "Uploaded result %s for %s term %d: %s (%s)",
            response.id,
            response.roll_number,
            response.term,
            response.grade,
            response.status.value,
        )

        await self._notify_student(recipient, response)
        return response

    async def get_result(self, roll_number: str, term: int) -> ResultResponse:
        """Get a student's result for one term.

        Raises:
            StudentNotFoundError: If no student has the roll number.
            ResultNotFoundError: If no result exists for the term.
        """
        async with self._db.session() as session:
            store = EntityStore(session)
            student = await self._get_student(store, roll_number)
            result = await store.find_one(Result, student_id=student.id, term=term)
            if result is None:
                raise ResultNotFoundError(
                    f"No result for {roll_number} in semester {term}",
                    details={"roll_number": roll_number, "term": term},
                )
            return ResultResponse.model_validate(result)

    async def list_for_student(self, roll_number: str) -> list[ResultResponse]:
        """List all of a student's results ordered by term.

        Raises:
            StudentNotFoundError: If no student has the roll number.
        """
        async with self._db.session() as session:
            student = await self._get_student(EntityStore(session), roll_number)
            query = select(Result).where(Result.student_id == student.id).order_by(Result.term)
            rows = await session.execute(query)
            return [ResultResponse.model_validate(r) for r in rows.scalars().all()]

    async def _get_student(self, store: EntityStore, roll_number: str) -> Student:
        student = await store.find_one(Student, roll_number=roll_number)
        if student is None:
            raise StudentNotFoundError(
                "Student not found with this roll number",
                details={"roll_number": roll_number},
            )
        return student

    def _duplicate(self, request: ResultUploadRequest) -> DuplicateResultError:
        return DuplicateResultError(
            "Result already exists for this student and semester",
            details={"roll_number": request.roll_number, "term": request.term},
        )

    async def _notify_student(self, recipient: Recipient, result: ResultResponse) -> None:
        """Best-effort in-app and email notice of a new result."""
        try:
            report = await self._dispatcher.dispatch(
                [recipient],
                result_message(result),
                ChannelType.BOTH,
                self._notifications.result_email_subject,
            )
        except (CampusDeskError, DatabaseError):
            logger.error(
                "Failed to notify student %s of result %s",
                result.roll_number,
                result.id,
                exc_info=True,
            )
            return

        for error in report.errors:
            logger.warning("Result %s email not delivered: %s", result.id, error)
