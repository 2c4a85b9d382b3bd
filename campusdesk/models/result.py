# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Result upload request and response schemas.

Upload requests carry raw marks only. Percentage, grade and status exist
on responses but never on requests, so a caller cannot set them.
"""

from datetime import datetime
from typing import Self

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from campusdesk.models.common import ResultStatus
from campusdesk.utils.datetime import ensure_utc


class SubjectMarks(BaseModel):
    """Raw marks for one subject."""

    model_config = ConfigDict(extra="forbid")

    name: str = Field(min_length=1, description="Subject name")
    marks_obtained: float = Field(ge=0, description="Marks obtained")
    max_marks: float | None = Field(
        default=None,
        ge=0,
        description="Maximum marks; 0 leaves the grade unset, None uses the default",
    )

    @model_validator(mode="after")
    def check_marks_within_maximum(self) -> Self:
        """Reject marks above a positive subject maximum."""
        if self.max_marks and self.marks_obtained > self.max_marks:
            raise ValueError(
                f"Marks for {self.name} ({self.marks_obtained}) exceed maximum ({self.max_marks})"
            )
        return self


class ResultUploadRequest(BaseModel):
    """Raw result data for one student and term."""

    model_config = ConfigDict(extra="forbid")

    roll_number: str = Field(min_length=1, description="Student roll number")
    term: int = Field(ge=1, description="Academic term (semester) number")
    subjects: list[SubjectMarks] = Field(default_factory=list)
    total_marks: float = Field(ge=0, description="Total marks obtained")
    max_total: float | None = Field(
        default=None,
        ge=0,
        description="Maximum total; 0 leaves the result pending, None uses the default",
    )
    remarks: str | None = None

    @model_validator(mode="after")
    def check_total_within_maximum(self) -> Self:
        """Reject a total above a positive maximum total."""
        if self.max_total and self.total_marks > self.max_total:
            raise ValueError(
                f"Total marks ({self.total_marks}) exceed maximum ({self.max_total})"
            )
        return self


class SubjectResponse(BaseModel):
    """Stored subject marks with derived grade."""

    model_config = ConfigDict(from_attributes=True)

    name: str
    marks_obtained: float
    max_marks: float
    grade: str | None


class ResultResponse(BaseModel):
    """A stored result record."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    student_id: str
    roll_number: str
    term: int
    subjects: list[SubjectResponse]
    total_marks: float
    max_total: float
    percentage: float | None
    grade: str | None
    status: ResultStatus
    remarks: str | None
    uploaded_by: str
    uploaded_at: datetime

    @field_validator("uploaded_at")
    @classmethod
    def normalize_uploaded_at(cls, v: datetime) -> datetime:
        """Treat naive database timestamps as UTC."""
        return ensure_utc(v)
