"""SQL implementation of the time entry repository."""

from uuid import UUID

from sqlalchemy import func
from sqlmodel import select

from ....domain.planning.entities.time_entry import TimeEntry
from ....domain.planning.repositories.time_entry_repository import TimeEntryRepository
from ..sqlmodel_entities import TimeEntryModel
from .base import SQLRepository


class SQLTimeEntryRepository(SQLRepository[TimeEntryModel, TimeEntry], TimeEntryRepository):
    row_class = TimeEntryModel
    entity_class = TimeEntry

    async def _row_by_timetac_id(self, timetac_id: str, tenant_id: UUID) -> TimeEntryModel | None:
        result = await self.session.execute(
            select(TimeEntryModel).where(
                TimeEntryModel.timetac_id == timetac_id,
                TimeEntryModel.tenant_id == tenant_id,
            )
        )
        return result.scalar_one_or_none()

    async def find_by_timetac_id(self, timetac_id: str, tenant_id: UUID) -> TimeEntry | None:
        async with self._db_errors("find_by_timetac_id"):
            row = await self._row_by_timetac_id(timetac_id, tenant_id)
            return self._to_entity(row) if row is not None else None

    async def upsert_by_timetac_id(self, entry: TimeEntry) -> tuple[TimeEntry, bool]:
        async with self._db_errors("upsert_by_timetac_id"):
            row = await self._row_by_timetac_id(entry.timetac_id, entry.tenant_id)
            created = row is None
            if created:
                row = TimeEntryModel(**self._to_columns(entry))
                self.session.add(row)
            else:
                self._apply(row, self._to_columns(entry))
            await self.session.commit()
            return self._to_entity(row), created

    async def sum_hours_by_phase(self, project_phase_id: UUID) -> float:
        async with self._db_errors("sum_hours_by_phase"):
            result = await self.session.execute(
                select(func.coalesce(func.sum(TimeEntryModel.hours), 0.0)).where(
                    TimeEntryModel.project_phase_id == project_phase_id
                )
            )
            return float(result.scalar_one())
