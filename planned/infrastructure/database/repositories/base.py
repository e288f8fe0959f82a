"""
Base repository implementation for SQLModel-backed domain repositories.

Concrete repositories translate between domain entities (frozen pydantic
models) and SQLModel rows that carry the same field names. Every
``SQLAlchemyError`` is rolled back and re-raised as ``RepositoryError``.
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Generic, TypeVar
from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import SQLModel

from ....domain.shared.base import Entity
from ....domain.shared.exceptions import EntityNotFoundError, RepositoryError

RowT = TypeVar("RowT", bound=SQLModel)
EntityT = TypeVar("EntityT", bound=Entity)


def _as_aware(value: Any) -> Any:
    # SQLite drops tzinfo on DateTime(timezone=True) columns
    if isinstance(value, datetime) and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def _as_column(value: Any) -> Any:
    if isinstance(value, Enum):
        return value.value
    return value


class SQLRepository(Generic[RowT, EntityT]):
    """
    Generic row/entity mapping and CRUD helpers.

    Subclasses set ``row_class`` and ``entity_class``.
    """

    row_class: type[RowT]
    entity_class: type[EntityT]

    def __init__(self, session: AsyncSession) -> None:
        """
        Initialize repository with database session.

        Args:
            session: Async SQLAlchemy session shared by one unit of work
        """
        self.session = session

    @classmethod
    def _to_entity(cls, row: RowT) -> EntityT:
        data = {key: _as_aware(value) for key, value in row.model_dump().items()}
        return cls.entity_class.model_validate(data)

    def _to_columns(self, entity: EntityT) -> dict[str, Any]:
        return {key: _as_column(value) for key, value in entity.model_dump().items()}

    @asynccontextmanager
    async def _db_errors(self, operation: str) -> AsyncIterator[None]:
        try:
            yield
        except SQLAlchemyError as e:
            await self.session.rollback()
            raise RepositoryError(
                f"Database error during {operation}: {str(e)}", operation
            ) from e

    async def _get_row(self, entity_id: UUID) -> RowT | None:
        return await self.session.get(self.row_class, entity_id)

    async def _get_row_required(self, entity_id: UUID) -> RowT:
        row = await self._get_row(entity_id)
        if row is None:
            raise EntityNotFoundError(self.entity_class.__name__, entity_id)
        return row

    async def _find_by_id(self, entity_id: UUID) -> EntityT | None:
        async with self._db_errors("find_by_id"):
            row = await self._get_row(entity_id)
            return self._to_entity(row) if row is not None else None

    async def _insert(self, entity: EntityT) -> EntityT:
        async with self._db_errors("save"):
            row = self.row_class(**self._to_columns(entity))
            self.session.add(row)
            await self.session.commit()
            return self._to_entity(row)

    async def _insert_many(self, entities: list[EntityT]) -> list[EntityT]:
        async with self._db_errors("save_many"):
            rows = [self.row_class(**self._to_columns(entity)) for entity in entities]
            self.session.add_all(rows)
            await self.session.commit()
            return [self._to_entity(row) for row in rows]

    async def _update(self, entity: EntityT) -> EntityT:
        async with self._db_errors("update"):
            row = await self._get_row_required(entity.id)
            self._apply(row, self._to_columns(entity))
            await self.session.commit()
            return self._to_entity(row)

    @staticmethod
    def _apply(row: SQLModel, values: dict[str, Any]) -> None:
        for key, value in values.items():
            if key in ("id", "created_at"):
                continue
            setattr(row, key, value)
