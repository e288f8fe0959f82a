"""Time entry repository interface."""

from abc import ABC, abstractmethod
from uuid import UUID

from ..entities.time_entry import TimeEntry


class TimeEntryRepository(ABC):
    """Abstract repository interface for TimeEntry entities."""

    @abstractmethod
    async def find_by_timetac_id(self, timetac_id: str, tenant_id: UUID) -> TimeEntry | None:
        pass

    @abstractmethod
    async def upsert_by_timetac_id(self, entry: TimeEntry) -> tuple[TimeEntry, bool]:
        """
        Insert or update an entry keyed by (timetac_id, tenant_id).

        An existing row keeps its id; every other field is overwritten.

        Args:
            entry: Entry carrying the TimeTac id

        Returns:
            Tuple of the stored entry and whether it was newly created

        Raises:
            RepositoryError: If database operation fails
        """
        pass

    @abstractmethod
    async def sum_hours_by_phase(self, project_phase_id: UUID) -> float:
        """Total IST hours booked on a phase."""
        pass
