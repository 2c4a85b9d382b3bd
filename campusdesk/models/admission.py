# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Admission decision schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

from campusdesk.models.common import AdmissionStatus
from campusdesk.utils.datetime import ensure_utc


class AdmissionDecisionRequest(BaseModel):
    """Approve or reject a pending admission."""

    status: AdmissionStatus = Field(description="approved or rejected")


class AdmissionResponse(BaseModel):
    """An admission application with its current status."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    student_id: str
    course_id: str
    course_name: str
    status: AdmissionStatus
    decided_by: str | None = None
    decided_at: datetime | None = None

    @field_validator("decided_at")
    @classmethod
    def normalize_decided_at(cls, v: datetime | None) -> datetime | None:
        return ensure_utc(v)
