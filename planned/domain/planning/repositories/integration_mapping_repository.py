"""Integration id mapping repository interface."""

from abc import ABC, abstractmethod
from uuid import UUID

from ..entities.integration_mapping import IntegrationMapping
from ..value_objects.enums import IntegrationService, MappingType


class IntegrationMappingRepository(ABC):
    """Maps external ids (e.g. TimeTac project ids) to internal UUIDs."""

    @abstractmethod
    async def find_by_tenant_and_type(
        self, tenant_id: UUID, service: IntegrationService, mapping_type: MappingType
    ) -> list[IntegrationMapping]:
        pass

    @abstractmethod
    async def find_by_external_id(
        self,
        tenant_id: UUID,
        service: IntegrationService,
        mapping_type: MappingType,
        external_id: str,
    ) -> IntegrationMapping | None:
        pass

    @abstractmethod
    async def upsert(self, mapping: IntegrationMapping) -> IntegrationMapping:
        """Insert or replace the mapping for its (tenant, service, type, external id) key."""
        pass

    @abstractmethod
    async def delete(self, mapping_id: UUID) -> bool:
        pass

    @abstractmethod
    async def delete_by_type(
        self, tenant_id: UUID, service: IntegrationService, mapping_type: MappingType
    ) -> int:
        pass

    @abstractmethod
    async def get_as_map(
        self, tenant_id: UUID, service: IntegrationService, mapping_type: MappingType
    ) -> dict[str, UUID]:
        """
        All mappings of one type as a lookup table.

        Returns:
            Dictionary from external id to internal id
        """
        pass
