# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Document service for recording uploaded files.

Files are written by the external file storage layer, which hands back a
URL. This service stores that URL verbatim together with the document
metadata.
"""

from __future__ import annotations

import logging

from campusdesk.core.exceptions import ValidationError
from campusdesk.infrastructure.database.connection import Database
from campusdesk.infrastructure.database.models import Document
from campusdesk.infrastructure.database.store import EntityStore
from campusdesk.models.document import DocumentResponse, DocumentUploadRequest

logger = logging.getLogger(__name__)


class DocumentService:
    """Service for document records."""

    def __init__(self, db: Database) -> None:
        self.db = db

    async def record_upload(
        self,
        request: DocumentUploadRequest,
        actor_id: str,
    ) -> DocumentResponse:
        """Persist a document record for an already-stored file.

        Args:
            request: File URL and document metadata.
            actor_id: Who uploaded the file.

        Returns:
            The created document.

        Raises:
            ValidationError: If there is no file URL or no usable title.
        """
        if not request.file_url:
            raise ValidationError("No file uploaded")

        title = request.title or request.original_filename
        if not title:
            raise ValidationError("Document title is required")

        document = Document(
            type=request.type or "document",
            title=title,
            description=request.description or "",
            semester=request.semester,
            file_url=request.file_url,
            thumbnail_url=request.thumbnail_url,
            event_date=request.event_date,
            created_by=str(actor_id),
        )

        async with self.db.session() as session:
            await EntityStore(session).insert(document)
            response = DocumentResponse.model_validate(document)

        logger.info("Recorded %s %s: %s", response.type, response.id, response.title)
        return response
