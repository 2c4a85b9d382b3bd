# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Course catalogue schemas.

Courses reference their department and category by name on input; the
stored record keeps the resolved IDs.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class NamedEntryCreateRequest(BaseModel):
    """A new department or category."""

    name: str = Field(min_length=1, max_length=200)


class NamedEntryResponse(BaseModel):
    """A stored department or category."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str


class CourseCreateRequest(BaseModel):
    """Details for a new course."""

    name: str = Field(min_length=1, max_length=200)
    department_name: str = Field(min_length=1, description="Existing department name")
    category_name: str = Field(min_length=1, description="Existing category name")
    fee_structure: dict[str, float] | None = Field(
        default=None,
        description="Fee component name to amount, e.g. tuition or exam",
    )
    form_url: str | None = Field(default=None, max_length=500)


class CourseResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    department_id: str | None
    category_id: str | None
    department_name: str | None = None
    category_name: str | None = None
    fee_structure: dict[str, float] | None
    form_url: str | None
    created_at: datetime
