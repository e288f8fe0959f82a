"""Absence conflict repository interface."""

from abc import ABC, abstractmethod
from uuid import UUID

from ..entities.absence_conflict import AbsenceConflict
from ..value_objects.enums import ConflictResolution


class AbsenceConflictRepository(ABC):
    """Abstract repository interface for AbsenceConflict records."""

    @abstractmethod
    async def find_by_id(self, conflict_id: UUID) -> AbsenceConflict | None:
        pass

    @abstractmethod
    async def find_by_allocation_and_absence(
        self, allocation_id: UUID, absence_id: UUID
    ) -> AbsenceConflict | None:
        """
        Find the conflict recorded for one (allocation, absence) pair.

        Returns:
            Existing conflict, resolved or not, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_absence_id(self, absence_id: UUID) -> list[AbsenceConflict]:
        pass

    @abstractmethod
    async def find_unresolved_by_tenant(self, tenant_id: UUID) -> list[AbsenceConflict]:
        pass

    @abstractmethod
    async def save_many(self, conflicts: list[AbsenceConflict]) -> list[AbsenceConflict]:
        """
        Insert several conflicts at once.

        Raises:
            RepositoryError: If database operation fails
        """
        pass

    @abstractmethod
    async def resolve(
        self, conflict_id: UUID, resolution: ConflictResolution, resolved_by: UUID
    ) -> AbsenceConflict:
        """
        Mark a conflict as resolved.

        Raises:
            EntityNotFoundError: If conflict does not exist
        """
        pass

    @abstractmethod
    async def delete_by_ids(self, conflict_ids: list[UUID]) -> int:
        pass

    @abstractmethod
    async def delete_by_absence_id(self, absence_id: UUID) -> int:
        pass

    @abstractmethod
    async def delete_by_allocation_id(self, allocation_id: UUID) -> int:
        pass

    @abstractmethod
    async def count_unresolved_by_tenant(self, tenant_id: UUID) -> int:
        pass
