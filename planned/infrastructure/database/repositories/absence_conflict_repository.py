"""SQL implementation of the absence conflict repository."""

from uuid import UUID

from sqlalchemy import delete, func
from sqlmodel import select

from ....domain.planning.entities.absence_conflict import AbsenceConflict
from ....domain.planning.repositories.absence_conflict_repository import (
    AbsenceConflictRepository,
)
from ....domain.planning.value_objects.enums import ConflictResolution
from ..sqlmodel_entities import AbsenceConflictModel
from .base import SQLRepository


class SQLAbsenceConflictRepository(
    SQLRepository[AbsenceConflictModel, AbsenceConflict], AbsenceConflictRepository
):
    row_class = AbsenceConflictModel
    entity_class = AbsenceConflict

    async def find_by_id(self, conflict_id: UUID) -> AbsenceConflict | None:
        return await self._find_by_id(conflict_id)

    async def find_by_allocation_and_absence(
        self, allocation_id: UUID, absence_id: UUID
    ) -> AbsenceConflict | None:
        async with self._db_errors("find_by_allocation_and_absence"):
            result = await self.session.execute(
                select(AbsenceConflictModel).where(
                    AbsenceConflictModel.allocation_id == allocation_id,
                    AbsenceConflictModel.absence_id == absence_id,
                )
            )
            row = result.scalar_one_or_none()
            return self._to_entity(row) if row is not None else None

    async def find_by_absence_id(self, absence_id: UUID) -> list[AbsenceConflict]:
        async with self._db_errors("find_by_absence_id"):
            result = await self.session.execute(
                select(AbsenceConflictModel)
                .where(AbsenceConflictModel.absence_id == absence_id)
                .order_by(AbsenceConflictModel.date)
            )
            return [self._to_entity(row) for row in result.scalars().all()]

    async def find_unresolved_by_tenant(self, tenant_id: UUID) -> list[AbsenceConflict]:
        async with self._db_errors("find_unresolved_by_tenant"):
            result = await self.session.execute(
                select(AbsenceConflictModel)
                .where(
                    AbsenceConflictModel.tenant_id == tenant_id,
                    AbsenceConflictModel.resolved_at.is_(None),
                )
                .order_by(AbsenceConflictModel.date)
            )
            return [self._to_entity(row) for row in result.scalars().all()]

    async def save_many(self, conflicts: list[AbsenceConflict]) -> list[AbsenceConflict]:
        if not conflicts:
            return []
        return await self._insert_many(conflicts)

    async def resolve(
        self, conflict_id: UUID, resolution: ConflictResolution, resolved_by: UUID
    ) -> AbsenceConflict:
        async with self._db_errors("resolve"):
            row = await self._get_row_required(conflict_id)
            resolved = self._to_entity(row).resolve(resolution, resolved_by)
            self._apply(row, self._to_columns(resolved))
            await self.session.commit()
            return self._to_entity(row)

    async def _delete_where(self, operation: str, *criteria) -> int:
        async with self._db_errors(operation):
            result = await self.session.execute(delete(AbsenceConflictModel).where(*criteria))
            await self.session.commit()
            return result.rowcount or 0

    async def delete_by_ids(self, conflict_ids: list[UUID]) -> int:
        if not conflict_ids:
            return 0
        return await self._delete_where(
            "delete_by_ids", AbsenceConflictModel.id.in_(conflict_ids)
        )

    async def delete_by_absence_id(self, absence_id: UUID) -> int:
        return await self._delete_where(
            "delete_by_absence_id", AbsenceConflictModel.absence_id == absence_id
        )

    async def delete_by_allocation_id(self, allocation_id: UUID) -> int:
        return await self._delete_where(
            "delete_by_allocation_id", AbsenceConflictModel.allocation_id == allocation_id
        )

    async def count_unresolved_by_tenant(self, tenant_id: UUID) -> int:
        async with self._db_errors("count_unresolved_by_tenant"):
            result = await self.session.execute(
                select(func.count(AbsenceConflictModel.id)).where(
                    AbsenceConflictModel.tenant_id == tenant_id,
                    AbsenceConflictModel.resolved_at.is_(None),
                )
            )
            return int(result.scalar_one())
