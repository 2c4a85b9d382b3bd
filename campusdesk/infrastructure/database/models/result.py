# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Academic result records.

A result is stored once per (student, term); the unique constraint is the
authority for that rule, so concurrent uploads cannot both succeed.

Percentage, grade and status columns hold derived values. They are written
by ResultStore from the grade engine and have no other writer.
"""

from datetime import datetime

from sqlalchemy import DateTime, Float, ForeignKey, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from campusdesk.infrastructure.database.models.base import Base, IdMixin, TimestampMixin
from campusdesk.utils.datetime import utc_now


class Result(IdMixin, TimestampMixin, Base):
    """Aggregate marks for one student in one term."""

    __tablename__ = "results"
    __table_args__ = (
        UniqueConstraint("student_id", "term", name="uq_results_student_term"),
    )

    student_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("students.id", ondelete="CASCADE"), index=True, nullable=False
    )
    roll_number: Mapped[str] = mapped_column(String(50), nullable=False)
    term: Mapped[int] = mapped_column(Integer, nullable=False)
    total_marks: Mapped[float] = mapped_column(Float, nullable=False)
    max_total: Mapped[float] = mapped_column(Float, nullable=False)
    percentage: Mapped[float | None] = mapped_column(Float)
    grade: Mapped[str | None] = mapped_column(String(5))
    status: Mapped[str] = mapped_column(String(20), default="pending", nullable=False)
    remarks: Mapped[str | None] = mapped_column(Text)
    uploaded_by: Mapped[str] = mapped_column(String(36), nullable=False)
    uploaded_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utc_now, nullable=False
    )

    subjects: Mapped[list["ResultSubject"]] = relationship(
        back_populates="result",
        order_by="ResultSubject.position",
        cascade="all, delete-orphan",
        lazy="selectin",
    )

    def __repr__(self) -> str:
        return f"<Result(roll_number={self.roll_number}, term={self.term}, grade={self.grade})>"


class ResultSubject(IdMixin, Base):
    """Marks for one subject within a result, kept in upload order."""

    __tablename__ = "result_subjects"

    result_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("results.id", ondelete="CASCADE"), index=True, nullable=False
    )
    position: Mapped[int] = mapped_column(Integer, nullable=False)
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    marks_obtained: Mapped[float] = mapped_column(Float, nullable=False)
    max_marks: Mapped[float] = mapped_column(Float, nullable=False)
    grade: Mapped[str | None] = mapped_column(String(5))

    result: Mapped[Result] = relationship(back_populates="subjects")
