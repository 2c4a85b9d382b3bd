# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Departments, categories, courses, admissions and published documents."""

from datetime import datetime
from typing import Any

from sqlalchemy import JSON, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from campusdesk.infrastructure.database.models.base import Base, IdMixin, TimestampMixin
from campusdesk.infrastructure.database.models.people import Student


class Department(IdMixin, TimestampMixin, Base):
    """An academic department. Names are unique."""

    __tablename__ = "departments"

    name: Mapped[str] = mapped_column(String(200), unique=True, nullable=False)


class Category(IdMixin, TimestampMixin, Base):
    """A course category such as undergraduate or diploma. Names are unique."""

    __tablename__ = "categories"

    name: Mapped[str] = mapped_column(String(200), unique=True, nullable=False)


class Course(IdMixin, TimestampMixin, Base):
    """A course students can apply to."""

    __tablename__ = "courses"

    name: Mapped[str] = mapped_column(String(200), nullable=False)
    department_id: Mapped[str | None] = mapped_column(
        String(36), ForeignKey("departments.id", ondelete="SET NULL"), index=True
    )
    category_id: Mapped[str | None] = mapped_column(
        String(36), ForeignKey("categories.id", ondelete="SET NULL"), index=True
    )
    fee_structure: Mapped[dict[str, Any] | None] = mapped_column(JSON)
    form_url: Mapped[str | None] = mapped_column(String(500))

    department: Mapped[Department | None] = relationship(lazy="raise")
    category: Mapped[Category | None] = relationship(lazy="raise")


class Admission(IdMixin, TimestampMixin, Base):
    """A student's application to a course.

    Status moves from pending to approved or rejected exactly once.
    """

    __tablename__ = "admissions"

    student_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("students.id", ondelete="CASCADE"), index=True, nullable=False
    )
    course_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("courses.id", ondelete="CASCADE"), nullable=False
    )
    status: Mapped[str] = mapped_column(String(20), default="pending", nullable=False)
    decided_by: Mapped[str | None] = mapped_column(String(36))
    decided_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))

    student: Mapped[Student] = relationship(lazy="raise")
    course: Mapped[Course] = relationship(lazy="raise")


class Document(IdMixin, TimestampMixin, Base):
    """A published document, notice or event backed by a stored file."""

    __tablename__ = "documents"

    type: Mapped[str] = mapped_column(String(50), default="document", nullable=False)
    title: Mapped[str] = mapped_column(String(300), nullable=False)
    description: Mapped[str] = mapped_column(Text, default="", nullable=False)
    semester: Mapped[int | None] = mapped_column(Integer)
    file_url: Mapped[str] = mapped_column(String(1000), nullable=False)
    thumbnail_url: Mapped[str | None] = mapped_column(String(1000))
    event_date: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))
    created_by: Mapped[str] = mapped_column(String(36), nullable=False)
