# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Grade engine: turns raw marks into percentage, letter grade and status.

Everything here is a pure function of its arguments. One threshold table
serves both per-subject and aggregate grading, so a subject and a term
total with the same percentage always receive the same letter.

Thresholds are inclusive lower bounds on the percentage:

    >= 90  A+
    >= 80  A
    >= 70  B+
    >= 60  B
    >= 50  C
    >= 40  D
    else   F

An aggregate passes when its percentage is at least PASS_PERCENTAGE. A
percentage cannot be computed when the maximum is zero or missing; the
grade is then left unset and the status stays pending.

Example:
    >>> derive_aggregate(450, 500)
    AggregateGrade(percentage=90.0, grade='A+', status=<ResultStatus.PASS: 'pass'>)
    >>> derive_subject(39, 100)
    'F'
"""

from dataclasses import dataclass

from campusdesk.models.common import ResultStatus

GRADE_THRESHOLDS: tuple[tuple[float, str], ...] = (
    (90.0, "A+"),
    (80.0, "A"),
    (70.0, "B+"),
    (60.0, "B"),
    (50.0, "C"),
    (40.0, "D"),
)
FAILING_GRADE = "F"
PASS_PERCENTAGE = 40.0

# Percentages are compared after rounding to this many places so that
# float noise in e.g. 0.9 * max_marks cannot push a boundary value down.
_COMPARISON_PRECISION = 9


@dataclass(frozen=True)
class AggregateGrade:
    """Derived fields for a term total.

    Attributes:
        percentage: Percentage of the maximum, or None if not computable.
        grade: Letter grade, or None if not computable.
        status: Pass, fail, or pending when no percentage exists.
    """

    percentage: float | None
    grade: str | None
    status: ResultStatus


def compute_percentage(obtained: float | None, maximum: float | None) -> float | None:
    """Compute 100 * obtained / maximum.

    Args:
        obtained: Marks obtained.
        maximum: Maximum marks.

    Returns:
        The percentage, or None when either input is missing or the
        maximum is zero.
    """
    if obtained is None or not maximum:
        return None
    return 100.0 * obtained / maximum


def grade_for_percentage(percentage: float) -> str:
    """Look up the letter grade for a percentage."""
    value = round(percentage, _COMPARISON_PRECISION)
    for threshold, letter in GRADE_THRESHOLDS:
        if value >= threshold:
            return letter
    return FAILING_GRADE


def status_for_percentage(percentage: float | None) -> ResultStatus:
    """Pass/fail for a computed percentage; pending when there is none."""
    if percentage is None:
        return ResultStatus.PENDING
    if round(percentage, _COMPARISON_PRECISION) >= PASS_PERCENTAGE:
        return ResultStatus.PASS
    return ResultStatus.FAIL


def derive_subject(marks_obtained: float | None, max_marks: float | None) -> str | None:
    """Derive the letter grade for one subject.

    Args:
        marks_obtained: Marks the student obtained.
        max_marks: Maximum marks for the subject.

    Returns:
        Letter grade, or None when no percentage can be computed.
    """
    percentage = compute_percentage(marks_obtained, max_marks)
    if percentage is None:
        return None
    return grade_for_percentage(percentage)


def derive_aggregate(total_marks: float | None, max_total: float | None) -> AggregateGrade:
    """Derive percentage, grade and status for a term total.

    Args:
        total_marks: Total marks obtained.
        max_total: Maximum total marks.

    Returns:
        AggregateGrade with all derived fields.
    """
    percentage = compute_percentage(total_marks, max_total)
    if percentage is None:
        return AggregateGrade(percentage=None, grade=None, status=ResultStatus.PENDING)
    return AggregateGrade(
        percentage=percentage,
        grade=grade_for_percentage(percentage),
        status=status_for_percentage(percentage),
    )
