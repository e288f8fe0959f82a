"""TimeTac service port."""

from abc import ABC, abstractmethod
from datetime import date

from ...domain.planning.value_objects.enums import AbsenceType
from ..dtos.timetac_dtos import (
    TimeTacAbsence,
    TimeTacAbsenceType,
    TimeTacAccount,
    TimeTacProject,
    TimeTacTimeEntry,
    TimeTacUser,
)


class ITimeTacService(ABC):
    """Typed client for the TimeTac REST API (static API key, no refresh)."""

    @abstractmethod
    async def validate_api_key(self, api_key: str) -> bool:
        """Return True if the key is accepted; never raises."""
        pass

    @abstractmethod
    async def get_account(self, api_key: str) -> TimeTacAccount:
        pass

    @abstractmethod
    async def get_users(self, api_key: str) -> list[TimeTacUser]:
        pass

    @abstractmethod
    async def get_absence_types(self, api_key: str) -> list[TimeTacAbsenceType]:
        pass

    @abstractmethod
    async def get_absences(
        self, api_key: str, start: date, end: date, user_id: int | None = None
    ) -> list[TimeTacAbsence]:
        """
        Absences overlapping the inclusive range.

        Raises:
            InvalidApiKeyError: If TimeTac rejects the key
            TimeTacApiError: On any other non-success response
        """
        pass

    @abstractmethod
    async def get_time_entries(
        self, api_key: str, start: date, end: date, user_id: int | None = None
    ) -> list[TimeTacTimeEntry]:
        pass

    @abstractmethod
    async def get_projects(self, api_key: str) -> list[TimeTacProject]:
        pass

    @abstractmethod
    def map_absence_type(
        self, absence_type_id: int, mapping: dict[int, AbsenceType] | None = None
    ) -> AbsenceType:
        """Map a TimeTac absence type id; unknown ids become ``other``."""
        pass
