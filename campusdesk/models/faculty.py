# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Faculty account schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, EmailStr, Field


class FacultyCreateRequest(BaseModel):
    """Details for a new faculty member."""

    name: str = Field(min_length=1, max_length=200)
    email: EmailStr
    mobile: str | None = Field(default=None, max_length=30)
    department: str | None = Field(default=None, max_length=200)
    designation: str | None = Field(default=None, max_length=200)
    qualification: str | None = Field(default=None, max_length=200)
    experience: int | None = Field(default=None, ge=0, description="Years of experience")


class FacultyResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    email: str
    mobile: str | None
    department: str | None
    designation: str | None
    qualification: str | None
    experience: int | None
    created_at: datetime
