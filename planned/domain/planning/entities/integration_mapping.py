"""IntegrationMapping entity: external id to internal UUID."""

from uuid import UUID

from pydantic import Field

from ...shared.base import Entity
from ..value_objects.enums import IntegrationService, MappingType


class IntegrationMapping(Entity):
    """Keyed by (tenant_id, service, mapping_type, external_id)."""

    tenant_id: UUID
    service: IntegrationService
    mapping_type: MappingType
    external_id: str = Field(min_length=1)
    internal_id: UUID
    external_name: str | None = None
