# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""People who can receive notifications: students, faculty and admins."""

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from campusdesk.infrastructure.database.models.base import Base, IdMixin, TimestampMixin


class Student(IdMixin, TimestampMixin, Base):
    """An enrolled or applying student, identified by roll number."""

    __tablename__ = "students"

    roll_number: Mapped[str] = mapped_column(String(50), unique=True, index=True, nullable=False)
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    email: Mapped[str | None] = mapped_column(String(255))
    mobile: Mapped[str | None] = mapped_column(String(30))

    def __repr__(self) -> str:
        return f"<Student(roll_number={self.roll_number}, name={self.name})>"


class Faculty(IdMixin, TimestampMixin, Base):
    """A faculty member. Email addresses are unique across faculty."""

    __tablename__ = "faculty"

    name: Mapped[str] = mapped_column(String(200), nullable=False)
    email: Mapped[str] = mapped_column(String(255), unique=True, index=True, nullable=False)
    mobile: Mapped[str | None] = mapped_column(String(30))
    department: Mapped[str | None] = mapped_column(String(200))
    designation: Mapped[str | None] = mapped_column(String(200))
    qualification: Mapped[str | None] = mapped_column(String(200))
    experience: Mapped[int | None] = mapped_column(Integer)

    def __repr__(self) -> str:
        return f"<Faculty(email={self.email}, name={self.name})>"


class AdminUser(IdMixin, TimestampMixin, Base):
    """A back office administrator."""

    __tablename__ = "admins"

    name: Mapped[str] = mapped_column(String(200), nullable=False)
    email: Mapped[str | None] = mapped_column(String(255))

    def __repr__(self) -> str:
        return f"<AdminUser(name={self.name})>"
