"""SQL implementation of the sync log repository."""

from datetime import datetime
from uuid import UUID

from sqlalchemy import delete
from sqlmodel import select

from ....domain.planning.entities.sync_log import SyncLog
from ....domain.planning.repositories.sync_log_repository import SyncLogRepository
from ....domain.planning.value_objects.enums import (
    IntegrationService,
    SyncStatus,
)
from ..sqlmodel_entities import SyncLogModel
from .base import SQLRepository


class SQLSyncLogRepository(SQLRepository[SyncLogModel, SyncLog], SyncLogRepository):
    row_class = SyncLogModel
    entity_class = SyncLog

    async def create(self, log: SyncLog) -> SyncLog:
        return await self._insert(log)

    async def update(self, log: SyncLog) -> SyncLog:
        return await self._update(log)

    async def find_by_id(self, log_id: UUID) -> SyncLog | None:
        return await self._find_by_id(log_id)

    async def find_by_tenant(
        self,
        tenant_id: UUID,
        limit: int = 20,
        service: IntegrationService | None = None,
    ) -> list[SyncLog]:
        async with self._db_errors("find_by_tenant"):
            statement = select(SyncLogModel).where(SyncLogModel.tenant_id == tenant_id)
            if service is not None:
                statement = statement.where(SyncLogModel.service == service.value)
            result = await self.session.execute(
                statement.order_by(SyncLogModel.started_at.desc()).limit(limit)
            )
            return [self._to_entity(row) for row in result.scalars().all()]

    async def find_last_successful(
        self, tenant_id: UUID, service: IntegrationService, operation: str
    ) -> SyncLog | None:
        async with self._db_errors("find_last_successful"):
            result = await self.session.execute(
                select(SyncLogModel)
                .where(
                    SyncLogModel.tenant_id == tenant_id,
                    SyncLogModel.service == service.value,
                    SyncLogModel.operation == operation,
                    SyncLogModel.status == SyncStatus.SUCCESS.value,
                )
                .order_by(SyncLogModel.started_at.desc())
                .limit(1)
            )
            row = result.scalars().first()
            return self._to_entity(row) if row is not None else None

    async def delete_older_than(self, cutoff: datetime) -> int:
        async with self._db_errors("delete_older_than"):
            result = await self.session.execute(
                delete(SyncLogModel).where(SyncLogModel.started_at < cutoff)
            )
            await self.session.commit()
            return result.rowcount or 0
