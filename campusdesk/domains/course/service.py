# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Course service for the course catalogue.

This module provides the CourseService class for:
- Department and category creation and listing
- Course creation against an existing department and category
"""

from __future__ import annotations

import logging
from typing import Any

import pydantic
from sqlalchemy import select

from campusdesk.core.exceptions import ConflictError, NotFoundError, ValidationError
from campusdesk.infrastructure.database.connection import Database, UniqueViolationError
from campusdesk.infrastructure.database.models import Category, Course, Department
from campusdesk.infrastructure.database.store import EntityStore
from campusdesk.models.course import (
    CourseCreateRequest,
    CourseResponse,
    NamedEntryCreateRequest,
    NamedEntryResponse,
)

logger = logging.getLogger(__name__)


class DepartmentNotFoundError(NotFoundError):
    """Raised when no department has the given name."""

    pass


class CategoryNotFoundError(NotFoundError):
    """Raised when no category has the given name."""

    pass


class CatalogueEntryExistsError(ConflictError):
    """Raised when a department or category name is already taken."""

    pass


class CourseService:
    """Service for departments, categories and courses.

    Attributes:
        db: Database holding the catalogue.
    """

    def __init__(self, db: Database) -> None:
        self.db = db

    async def add_department(self, name: str) -> NamedEntryResponse:
        """Create a department.

        Raises:
            ValidationError: If the name is empty.
            CatalogueEntryExistsError: If the name is taken.
        """
        return await self._add_named(Department, name)

    async def add_category(self, name: str) -> NamedEntryResponse:
        """Create a course category.

        Raises:
            ValidationError: If the name is empty.
            CatalogueEntryExistsError: If the name is taken.
        """
        return await self._add_named(Category, name)

    async def list_departments(self) -> list[NamedEntryResponse]:
        return await self._list_named(Department)

    async def list_categories(self) -> list[NamedEntryResponse]:
        return await self._list_named(Category)

    async def add_course(self, request: CourseCreateRequest | dict[str, Any]) -> CourseResponse:
        """Create a course in an existing department and category.

        Args:
            request: Course details naming its department and category.

        Returns:
            The created course with resolved department and category.

        Raises:
            ValidationError: If the details are malformed.
            DepartmentNotFoundError: If the department does not exist.
            CategoryNotFoundError: If the category does not exist.
        """
        if not isinstance(request, CourseCreateRequest):
            try:
                request = CourseCreateRequest.model_validate(request)
            except pydantic.ValidationError as e:
                raise ValidationError(
                    "Invalid course data",
                    details={"errors": e.errors(include_url=False, include_context=False)},
                ) from e

        async with self.db.session() as session:
            store = EntityStore(session)

            department = await store.find_one(Department, name=request.department_name)
            if department is None:
                raise DepartmentNotFoundError(
                    "Department not found",
                    details={"department": request.department_name},
                )
            category = await store.find_one(Category, name=request.category_name)
            if category is None:
                raise CategoryNotFoundError(
                    "Category not found",
                    details={"category": request.category_name},
                )

            course = await store.insert(
                Course(
                    name=request.name,
                    department_id=department.id,
                    category_id=category.id,
                    fee_structure=request.fee_structure,
                    form_url=request.form_url,
                )
            )
            response = CourseResponse.model_validate(course).model_copy(
                update={"department_name": department.name, "category_name": category.name}
            )

        logger.info(
            "Created course %s (%s) in %s / %s",
            response.name,
            response.id,
            response.department_name,
            response.category_name,
        )
        return response

    async def _add_named(
        self,
        model: type[Department] | type[Category],
        name: str,
    ) -> NamedEntryResponse:
        try:
            request = NamedEntryCreateRequest(name=(name or "").strip())
        except pydantic.ValidationError as e:
            raise ValidationError(
                f"{model.__name__} name is required",
                details={"errors": e.errors(include_url=False, include_context=False)},
            ) from e

        async with self.db.session() as session:
            store = EntityStore(session)
            if await store.find_one(model, name=request.name):
                raise self._exists(model, request.name)
            try:
                entry = await store.insert(model(name=request.name))
            except UniqueViolationError as e:
                raise self._exists(model, request.name) from e
            response = NamedEntryResponse.model_validate(entry)

        logger.info("Created %s %s (%s)", model.__name__.lower(), response.name, response.id)
        return response

    async def _list_named(
        self,
        model: type[Department] | type[Category],
    ) -> list[NamedEntryResponse]:
        async with self.db.session() as session:
            rows = await session.execute(select(model).order_by(model.name))
            return [NamedEntryResponse.model_validate(r) for r in rows.scalars().all()]

    def _exists(
        self,
        model: type[Department] | type[Category],
        name: str,
    ) -> CatalogueEntryExistsError:
        return CatalogueEntryExistsError(
            f"{model.__name__} already exists",
            details={"name": name},
        )
