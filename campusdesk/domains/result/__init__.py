# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Result domain package.

This package provides academic result functionality including:
- Grade derivation for subjects and term totals
- Result upload with one record per student and term
- Result lookup by roll number
"""

from campusdesk.domains.result.grading import (
    FAILING_GRADE,
    GRADE_THRESHOLDS,
    PASS_PERCENTAGE,
    AggregateGrade,
    compute_percentage,
    derive_aggregate,
    derive_subject,
    grade_for_percentage,
    status_for_percentage,
)
from campusdesk.domains.result.service import (
    DuplicateResultError,
    ResultNotFoundError,
    ResultStore,
    ResultValidationError,
    StudentNotFoundError,
    build_result_record,
    result_message,
)

__all__ = [
    # Grading
    "GRADE_THRESHOLDS",
    "FAILING_GRADE",
    "PASS_PERCENTAGE",
    "AggregateGrade",
    "compute_percentage",
    "grade_for_percentage",
    "status_for_percentage",
    "derive_subject",
    "derive_aggregate",
    # Store
    "ResultStore",
    "build_result_record",
    "result_message",
    "ResultValidationError",
    "StudentNotFoundError",
    "ResultNotFoundError",
    "DuplicateResultError",
]
