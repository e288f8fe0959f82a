"""SQL implementations of the absence and allocation repositories."""

from datetime import date
from uuid import UUID

from sqlmodel import select

from ....domain.planning.entities.absence import Absence
from ....domain.planning.entities.allocation import Allocation
from ....domain.planning.repositories.absence_repository import (
    AbsenceRepository,
    AllocationRepository,
)
from ....domain.shared.base import utcnow
from ..sqlmodel_entities import AbsenceModel, AllocationModel
from .base import SQLRepository


class SQLAbsenceRepository(SQLRepository[AbsenceModel, Absence], AbsenceRepository):
    row_class = AbsenceModel
    entity_class = Absence

    async def find_by_id(self, absence_id: UUID) -> Absence | None:
        return await self._find_by_id(absence_id)

    async def find_by_timetac_id(self, timetac_id: str, tenant_id: UUID) -> Absence | None:
        async with self._db_errors("find_by_timetac_id"):
            result = await self.session.execute(
                select(AbsenceModel).where(
                    AbsenceModel.timetac_id == timetac_id,
                    AbsenceModel.tenant_id == tenant_id,
                )
            )
            row = result.scalar_one_or_none()
            return self._to_entity(row) if row is not None else None

    async def find_by_user_and_date_range(
        self, user_id: UUID, start: date, end: date
    ) -> list[Absence]:
        async with self._db_errors("find_by_user_and_date_range"):
            result = await self.session.execute(
                select(AbsenceModel)
                .where(
                    AbsenceModel.user_id == user_id,
                    AbsenceModel.start_date <= end,
                    AbsenceModel.end_date >= start,
                )
                .order_by(AbsenceModel.start_date)
            )
            return [self._to_entity(row) for row in result.scalars().all()]

    async def save(self, absence: Absence) -> Absence:
        return await self._insert(absence)

    async def update(self, absence: Absence) -> Absence:
        return await self._update(absence)


class SQLAllocationRepository(SQLRepository[AllocationModel, Allocation], AllocationRepository):
    row_class = AllocationModel
    entity_class = Allocation

    async def find_by_id(self, allocation_id: UUID) -> Allocation | None:
        return await self._find_by_id(allocation_id)

    async def find_by_user_and_date_range(
        self, user_id: UUID, start: date, end: date
    ) -> list[Allocation]:
        async with self._db_errors("find_by_user_and_date_range"):
            result = await self.session.execute(
                select(AllocationModel)
                .where(
                    AllocationModel.user_id == user_id,
                    AllocationModel.date >= start,
                    AllocationModel.date <= end,
                )
                .order_by(AllocationModel.date)
            )
            return [self._to_entity(row) for row in result.scalars().all()]

    async def save(self, allocation: Allocation) -> Allocation:
        return await self._insert(allocation)

    async def delete(self, allocation_id: UUID) -> bool:
        async with self._db_errors("delete"):
            row = await self._get_row(allocation_id)
            if row is None:
                return False
            await self.session.delete(row)
            await self.session.commit()
            return True

    async def move_to_date(self, allocation_id: UUID, new_date: date) -> Allocation:
        async with self._db_errors("move_to_date"):
            row = await self._get_row_required(allocation_id)
            row.date = new_date
            row.updated_at = utcnow()
            await self.session.commit()
            return self._to_entity(row)
