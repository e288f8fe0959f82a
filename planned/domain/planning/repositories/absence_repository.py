"""Absence and allocation repository interfaces."""

from abc import ABC, abstractmethod
from datetime import date
from uuid import UUID

from ..entities.absence import Absence
from ..entities.allocation import Allocation


class AbsenceRepository(ABC):
    """Abstract repository interface for Absence entities."""

    @abstractmethod
    async def find_by_id(self, absence_id: UUID) -> Absence | None:
        pass

    @abstractmethod
    async def find_by_timetac_id(self, timetac_id: str, tenant_id: UUID) -> Absence | None:
        """
        Find an absence imported from TimeTac.

        Args:
            timetac_id: TimeTac absence id
            tenant_id: Owning tenant

        Returns:
            Absence if already imported, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_user_and_date_range(
        self, user_id: UUID, start: date, end: date
    ) -> list[Absence]:
        """Absences of a user that overlap the inclusive range."""
        pass

    @abstractmethod
    async def save(self, absence: Absence) -> Absence:
        pass

    @abstractmethod
    async def update(self, absence: Absence) -> Absence:
        pass


class AllocationRepository(ABC):
    """Abstract repository interface for Allocation entities."""

    @abstractmethod
    async def find_by_id(self, allocation_id: UUID) -> Allocation | None:
        pass

    @abstractmethod
    async def find_by_user_and_date_range(
        self, user_id: UUID, start: date, end: date
    ) -> list[Allocation]:
        """
        Allocations of a user whose date lies within the range.

        Args:
            user_id: Allocated user
            start: First day, inclusive
            end: Last day, inclusive

        Returns:
            Matching allocations ordered by date
        """
        pass

    @abstractmethod
    async def save(self, allocation: Allocation) -> Allocation:
        pass

    @abstractmethod
    async def delete(self, allocation_id: UUID) -> bool:
        pass

    @abstractmethod
    async def move_to_date(self, allocation_id: UUID, new_date: date) -> Allocation:
        """
        Move an allocation to another day.

        Raises:
            EntityNotFoundError: If allocation does not exist
        """
        pass
