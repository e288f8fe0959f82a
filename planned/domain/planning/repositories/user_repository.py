"""User repository interface (read-only view used by the TimeTac sync)."""

from abc import ABC, abstractmethod
from uuid import UUID

from ..value_objects.integration import TimeTacUserLink


class UserRepository(ABC):
    @abstractmethod
    async def find_by_tenant_with_timetac_id(self, tenant_id: UUID) -> list[TimeTacUserLink]:
        """Users of a tenant that have a TimeTac user id assigned."""
        pass
