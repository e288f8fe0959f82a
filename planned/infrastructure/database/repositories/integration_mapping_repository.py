"""SQL implementation of the integration mapping repository."""

from uuid import UUID

from sqlalchemy import delete
from sqlmodel import select

from ....domain.planning.entities.integration_mapping import IntegrationMapping
from ....domain.planning.repositories.integration_mapping_repository import (
    IntegrationMappingRepository,
)
from ....domain.planning.value_objects.enums import IntegrationService, MappingType
from ....domain.shared.base import utcnow
from ..sqlmodel_entities import IntegrationMappingModel
from .base import SQLRepository


class SQLIntegrationMappingRepository(
    SQLRepository[IntegrationMappingModel, IntegrationMapping], IntegrationMappingRepository
):
    row_class = IntegrationMappingModel
    entity_class = IntegrationMapping

    async def _row_by_key(
        self,
        tenant_id: UUID,
        service: IntegrationService,
        mapping_type: MappingType,
        external_id: str,
    ) -> IntegrationMappingModel | None:
        result = await self.session.execute(
            select(IntegrationMappingModel).where(
                IntegrationMappingModel.tenant_id == tenant_id,
                IntegrationMappingModel.service == service.value,
                IntegrationMappingModel.mapping_type == mapping_type.value,
                IntegrationMappingModel.external_id == external_id,
            )
        )
        return result.scalar_one_or_none()

    async def find_by_tenant_and_type(
        self, tenant_id: UUID, service: IntegrationService, mapping_type: MappingType
    ) -> list[IntegrationMapping]:
        async with self._db_errors("find_by_tenant_and_type"):
            result = await self.session.execute(
                select(IntegrationMappingModel)
                .where(
                    IntegrationMappingModel.tenant_id == tenant_id,
                    IntegrationMappingModel.service == service.value,
                    IntegrationMappingModel.mapping_type == mapping_type.value,
                )
                .order_by(IntegrationMappingModel.external_id)
            )
            return [self._to_entity(row) for row in result.scalars().all()]

    async def find_by_external_id(
        self,
        tenant_id: UUID,
        service: IntegrationService,
        mapping_type: MappingType,
        external_id: str,
    ) -> IntegrationMapping | None:
        async with self._db_errors("find_by_external_id"):
            row = await self._row_by_key(tenant_id, service, mapping_type, external_id)
            return self._to_entity(row) if row is not None else None

    async def upsert(self, mapping: IntegrationMapping) -> IntegrationMapping:
        async with self._db_errors("upsert"):
            row = await self._row_by_key(
                mapping.tenant_id, mapping.service, mapping.mapping_type, mapping.external_id
            )
            if row is None:
                row = IntegrationMappingModel(**self._to_columns(mapping))
                self.session.add(row)
            else:
                row.internal_id = mapping.internal_id
                row.external_name = mapping.external_name
                row.updated_at = utcnow()
            await self.session.commit()
            return self._to_entity(row)

    async def delete(self, mapping_id: UUID) -> bool:
        async with self._db_errors("delete"):
            row = await self._get_row(mapping_id)
            if row is None:
                return False
            await self.session.delete(row)
            await self.session.commit()
            return True

    async def delete_by_type(
        self, tenant_id: UUID, service: IntegrationService, mapping_type: MappingType
    ) -> int:
        async with self._db_errors("delete_by_type"):
            result = await self.session.execute(
                delete(IntegrationMappingModel).where(
                    IntegrationMappingModel.tenant_id == tenant_id,
                    IntegrationMappingModel.service == service.value,
                    IntegrationMappingModel.mapping_type == mapping_type.value,
                )
            )
            await self.session.commit()
            return result.rowcount or 0

    async def get_as_map(
        self, tenant_id: UUID, service: IntegrationService, mapping_type: MappingType
    ) -> dict[str, UUID]:
        mappings = await self.find_by_tenant_and_type(tenant_id, service, mapping_type)
        return {mapping.external_id: mapping.internal_id for mapping in mappings}
