"""SQL implementation of the integration credentials repository."""

from typing import Any
from uuid import UUID

from sqlmodel import select

from ....domain.planning.entities.integration_credentials import IntegrationCredentials
from ....domain.planning.repositories.credentials_repository import (
    IntegrationCredentialsRepository,
)
from ....domain.shared.base import utcnow
from ....domain.shared.exceptions import EntityNotFoundError
from ..sqlmodel_entities import IntegrationCredentialsModel
from .base import SQLRepository

ASANA_FIELDS = (
    "asana_access_token",
    "asana_refresh_token",
    "asana_token_expires_at",
    "asana_workspace_id",
    "asana_webhook_secret",
    "asana_project_number_field_id",
    "asana_soll_produktion_field_id",
    "asana_soll_montage_field_id",
    "asana_phase_bereich_field_id",
    "asana_phase_budget_hours_field_id",
)
TIMETAC_FIELDS = ("timetac_account_id", "timetac_api_token")


class SQLIntegrationCredentialsRepository(
    SQLRepository[IntegrationCredentialsModel, IntegrationCredentials],
    IntegrationCredentialsRepository,
):
    row_class = IntegrationCredentialsModel
    entity_class = IntegrationCredentials

    async def _row_by_tenant(self, tenant_id: UUID) -> IntegrationCredentialsModel | None:
        result = await self.session.execute(
            select(IntegrationCredentialsModel).where(
                IntegrationCredentialsModel.tenant_id == tenant_id
            )
        )
        return result.scalar_one_or_none()

    def _check_fields(self, fields: dict[str, Any]) -> None:
        unknown = set(fields) - set(ASANA_FIELDS) - set(TIMETAC_FIELDS)
        if unknown:
            raise ValueError(f"Unknown credential fields: {sorted(unknown)}")

    async def find_by_tenant_id(self, tenant_id: UUID) -> IntegrationCredentials | None:
        async with self._db_errors("find_by_tenant_id"):
            row = await self._row_by_tenant(tenant_id)
            return self._to_entity(row) if row is not None else None

    async def upsert(self, tenant_id: UUID, **fields: Any) -> IntegrationCredentials:
        self._check_fields(fields)
        async with self._db_errors("upsert"):
            row = await self._row_by_tenant(tenant_id)
            if row is None:
                row = IntegrationCredentialsModel(tenant_id=tenant_id, **fields)
                self.session.add(row)
            else:
                self._apply(row, {**fields, "updated_at": utcnow()})
            await self.session.commit()
            return self._to_entity(row)

    async def update(self, tenant_id: UUID, **fields: Any) -> IntegrationCredentials:
        self._check_fields(fields)
        async with self._db_errors("update"):
            row = await self._row_by_tenant(tenant_id)
            if row is None:
                raise EntityNotFoundError("IntegrationCredentials", tenant_id)
            self._apply(row, {**fields, "updated_at": utcnow()})
            await self.session.commit()
            return self._to_entity(row)

    async def clear_asana(self, tenant_id: UUID) -> None:
        await self._clear(tenant_id, ASANA_FIELDS, "clear_asana")

    async def clear_timetac(self, tenant_id: UUID) -> None:
        await self._clear(tenant_id, TIMETAC_FIELDS, "clear_timetac")

    async def _clear(self, tenant_id: UUID, names: tuple[str, ...], operation: str) -> None:
        async with self._db_errors(operation):
            row = await self._row_by_tenant(tenant_id)
            if row is None:
                return
            self._apply(row, {**dict.fromkeys(names), "updated_at": utcnow()})
            await self.session.commit()

    async def find_tenant_ids_with_asana(self) -> list[UUID]:
        async with self._db_errors("find_tenant_ids_with_asana"):
            result = await self.session.execute(
                select(IntegrationCredentialsModel.tenant_id).where(
                    IntegrationCredentialsModel.asana_access_token.isnot(None)
                )
            )
            return list(result.scalars().all())

    async def find_tenant_ids_with_timetac(self) -> list[UUID]:
        async with self._db_errors("find_tenant_ids_with_timetac"):
            result = await self.session.execute(
                select(IntegrationCredentialsModel.tenant_id).where(
                    IntegrationCredentialsModel.timetac_api_token.isnot(None)
                )
            )
            return list(result.scalars().all())
