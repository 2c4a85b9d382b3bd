# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Integration tests for admission decisions."""

import asyncio
from unittest.mock import AsyncMock, patch

import pytest
import pytest_asyncio

from campusdesk.domains.admission import AdmissionNotFoundError, AdmissionTransitionError
from campusdesk.domains.notification import Recipient
from campusdesk.infrastructure.database import DatabaseError, EntityStore
from campusdesk.infrastructure.database.models import Admission, Student
from campusdesk.models.admission import AdmissionDecisionRequest
from campusdesk.models.common import AdmissionStatus
from campusdesk.models.notification import RecipientKind

pytestmark = pytest.mark.integration


@pytest_asyncio.fixture
async def admission(db, students, course) -> Admission:
    """Seed a pending admission for the first student."""
    pending = Admission(student_id=students[0].id, course_id=course.id)
    async with db.session() as session:
        await EntityStore(session).insert(pending)
    return pending


class TestDecide:
    """Tests for the pending to approved/rejected transition."""

    @pytest.mark.asyncio
    async def test_approve(
        self, db, students, admission, admission_service, dispatcher, mailer, actor_id
    ) -> None:
        """Test approval persists, emails a fee reminder and records a notice."""
        decided = await admission_service.decide(admission.id, "approved", actor_id)

        assert decided.status == AdmissionStatus.APPROVED
        assert decided.course_name == "B.Sc. Physics"
        assert decided.decided_by == actor_id
        assert decided.decided_at is not None

        async with db.session() as session:
            stored = await EntityStore(session).find_by_id(Admission, admission.id)
            assert stored.status == "approved"

        assert len(mailer.attempts) == 1
        assert mailer.attempts[0].to == students[0].email
        assert mailer.attempts[0].subject == "Admission Update"
        assert mailer.attempts[0].body == (
            "Your admission for B.Sc. Physics is approved. Please pay the full fee."
        )

        inbox = await dispatcher.list_for_recipient(
            Recipient(recipient_id=students[0].id, kind=RecipientKind.STUDENT)
        )
        assert [n.message for n in inbox] == ["Admission approved"]

    @pytest.mark.asyncio
    async def test_reject(self, admission, admission_service, mailer, actor_id) -> None:
        decided = await admission_service.decide_request(
            admission.id,
            AdmissionDecisionRequest(status=AdmissionStatus.REJECTED),
            actor_id,
        )

        assert decided.status == AdmissionStatus.REJECTED
        assert mailer.attempts[0].body == "Your admission for B.Sc. Physics is rejected."

    @pytest.mark.asyncio
    async def test_decision_is_terminal(self, admission, admission_service, actor_id) -> None:
        """Test a decided admission cannot be decided again."""
        await admission_service.decide(admission.id, "approved", actor_id)

        with pytest.raises(AdmissionTransitionError, match="already approved"):
            await admission_service.decide(admission.id, "rejected", actor_id)

    @pytest.mark.asyncio
    async def test_concurrent_decisions(self, admission, admission_service, mailer, actor_id) -> None:
        """Test only one of two simultaneous decisions wins."""
        outcomes = await asyncio.gather(
            admission_service.decide(admission.id, "approved", actor_id),
            admission_service.decide(admission.id, "rejected", actor_id),
            return_exceptions=True,
        )

        assert sum(isinstance(o, AdmissionTransitionError) for o in outcomes) == 1
        assert len(mailer.attempts) == 1

    @pytest.mark.asyncio
    async def test_unknown_admission(self, db, admission_service, actor_id) -> None:
        with pytest.raises(AdmissionNotFoundError):
            await admission_service.decide("missing-admission", "approved", actor_id)

    @pytest.mark.asyncio
    async def test_email_failure_keeps_decision(
        self, db, students, admission, admission_service, dispatcher, mailer, actor_id
    ) -> None:
        """Test a failed email does not undo the decision or skip the notice."""
        mailer.fail_for.add(students[0].email)

        decided = await admission_service.decide(admission.id, "approved", actor_id)

        assert decided.status == AdmissionStatus.APPROVED
        inbox = await dispatcher.list_for_recipient(
            Recipient(recipient_id=students[0].id, kind=RecipientKind.STUDENT)
        )
        assert len(inbox) == 1


class TestDecisionFanOutFailures:
    """Tests for fan-out steps that fail after the decision is committed."""

    @pytest.mark.asyncio
    async def test_malformed_address_keeps_decision_and_notice(
        self, db, students, admission, admission_service, dispatcher, mailer, actor_id
    ) -> None:
        """Test an address with a header line break fails only the email."""
        async with db.session() as session:
            await EntityStore(session).update_by_id(
                Student, students[0].id, {"email": "asha@northfield.edu\nBcc: other@example.org"}
            )

        decided = await admission_service.decide(admission.id, "approved", actor_id)

        assert decided.status == AdmissionStatus.APPROVED
        assert mailer.attempts == []
        inbox = await dispatcher.list_for_recipient(
            Recipient(recipient_id=students[0].id, kind=RecipientKind.STUDENT)
        )
        assert [n.message for n in inbox] == ["Admission approved"]

    @pytest.mark.asyncio
    async def test_email_channel_raising_keeps_decision_and_notice(
        self, db, students, admission, admission_service, dispatcher, mailer, actor_id
    ) -> None:
        """Test an unexpected email error neither fails the call nor skips the notice."""
        with patch.object(
            mailer, "send_email", AsyncMock(side_effect=RuntimeError("transport crashed"))
        ):
            decided = await admission_service.decide(admission.id, "rejected", actor_id)

        assert decided.status == AdmissionStatus.REJECTED
        async with db.session() as session:
            stored = await EntityStore(session).find_by_id(Admission, admission.id)
            assert stored.status == "rejected"

        inbox = await dispatcher.list_for_recipient(
            Recipient(recipient_id=students[0].id, kind=RecipientKind.STUDENT)
        )
        assert len(inbox) == 1

    @pytest.mark.asyncio
    async def test_in_app_notice_failure_keeps_decision_and_email(
        self, db, admission, admission_service, dispatcher, mailer, actor_id
    ) -> None:
        """Test a failed in-app write does not undo the decision or the email."""
        with patch.object(
            dispatcher, "dispatch", AsyncMock(side_effect=DatabaseError("disk full"))
        ):
            decided = await admission_service.decide(admission.id, "approved", actor_id)

        assert decided.status == AdmissionStatus.APPROVED
        assert len(mailer.delivered) == 1
        async with db.session() as session:
            stored = await EntityStore(session).find_by_id(Admission, admission.id)
            assert stored.status == "approved"
