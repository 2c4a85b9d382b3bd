# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Document upload schemas.

The file itself is stored elsewhere; these schemas describe the record
that points at it.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class DocumentUploadRequest(BaseModel):
    """Metadata for an already-stored file."""

    file_url: str | None = Field(default=None, description="Where the stored file lives")
    original_filename: str | None = Field(default=None, description="Name of the uploaded file")
    type: str = Field(default="document", max_length=50)
    title: str | None = Field(default=None, max_length=300)
    description: str = ""
    semester: int | None = Field(default=None, ge=1)
    thumbnail_url: str | None = None
    event_date: datetime | None = None


class DocumentResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    type: str
    title: str
    description: str
    semester: int | None
    file_url: str
    thumbnail_url: str | None
    event_date: datetime | None
    created_by: str
    created_at: datetime
