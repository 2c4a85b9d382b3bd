# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Pydantic request and response schemas."""

from campusdesk.models.admission import AdmissionDecisionRequest, AdmissionResponse
from campusdesk.models.common import AdmissionStatus, ResultStatus
from campusdesk.models.course import (
    CourseCreateRequest,
    CourseResponse,
    NamedEntryCreateRequest,
    NamedEntryResponse,
)
from campusdesk.models.document import DocumentResponse, DocumentUploadRequest
from campusdesk.models.faculty import FacultyCreateRequest, FacultyResponse
from campusdesk.models.notification import (
    BroadcastRequest,
    NotificationResponse,
    NotificationSendRequest,
    RecipientKind,
)
from campusdesk.models.result import (
    ResultResponse,
    ResultUploadRequest,
    SubjectMarks,
    SubjectResponse,
)

__all__ = [
    # Common
    "AdmissionStatus",
    "ResultStatus",
    # Admission
    "AdmissionDecisionRequest",
    "AdmissionResponse",
    # Course
    "NamedEntryCreateRequest",
    "NamedEntryResponse",
    "CourseCreateRequest",
    "CourseResponse",
    # Document
    "DocumentUploadRequest",
    "DocumentResponse",
    # Faculty
    "FacultyCreateRequest",
    "FacultyResponse",
    # Notification
    "RecipientKind",
    "NotificationResponse",
    "NotificationSendRequest",
    "BroadcastRequest",
    # Result
    "SubjectMarks",
    "ResultUploadRequest",
    "SubjectResponse",
    "ResultResponse",
]
