"""
TimeTac REST adapter.

TimeTac authenticates with a static bearer API key and wraps every payload in
a ``{"data": ...}`` envelope.
"""

from datetime import date
from typing import Any

import httpx

from ...application.dtos.timetac_dtos import (
    TimeTacAbsence,
    TimeTacAbsenceType,
    TimeTacAccount,
    TimeTacProject,
    TimeTacTimeEntry,
    TimeTacUser,
)
from ...application.ports.timetac_service import ITimeTacService
from ...core.config import settings
from ...core.observability import get_logger
from ...core.resilience import RetryConfig
from ...domain.planning.value_objects.enums import AbsenceType
from ...domain.planning.value_objects.integration import DEFAULT_ABSENCE_TYPE_MAPPING
from ...domain.shared.exceptions import InvalidApiKeyError, TimeTacApiError
from .http_client import BaseApiClient

logger = get_logger(__name__)


class TimeTacService(BaseApiClient, ITimeTacService):
    """httpx implementation of the TimeTac port."""

    service_name = "timetac"

    def __init__(
        self,
        base_url: str | None = None,
        retry_config: RetryConfig | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        super().__init__(
            base_url or settings.TIMETAC_API_URL,
            retry_config=retry_config,
            transport=transport,
        )

    def _raise_for_error(self, response: httpx.Response) -> None:
        if response.status_code == 401:
            raise InvalidApiKeyError()
        raise TimeTacApiError(
            f"TimeTac API Fehler: {response.status_code} {response.reason_phrase}",
            response.status_code,
        )

    async def _data(
        self, path: str, api_key: str, params: dict[str, Any] | None = None
    ) -> Any:
        payload = await self._get_json(path, api_key, params)
        return payload.get("data") if isinstance(payload, dict) else None

    async def validate_api_key(self, api_key: str) -> bool:
        try:
            return bool(await self._data("/account", api_key))
        except Exception as e:
            logger.info("TimeTac API key rejected", error=str(e))
            return False

    async def get_account(self, api_key: str) -> TimeTacAccount:
        return TimeTacAccount.model_validate(await self._data("/account", api_key))

    async def get_users(self, api_key: str) -> list[TimeTacUser]:
        data = await self._data("/users", api_key) or []
        return [TimeTacUser.model_validate(item) for item in data]

    async def get_absence_types(self, api_key: str) -> list[TimeTacAbsenceType]:
        data = await self._data("/absence_types", api_key) or []
        return [TimeTacAbsenceType.model_validate(item) for item in data]

    async def get_absences(
        self, api_key: str, start: date, end: date, user_id: int | None = None
    ) -> list[TimeTacAbsence]:
        data = await self._data("/absences", api_key, _range_params(start, end, user_id))
        return [TimeTacAbsence.model_validate(item) for item in data or []]

    async def get_time_entries(
        self, api_key: str, start: date, end: date, user_id: int | None = None
    ) -> list[TimeTacTimeEntry]:
        data = await self._data(
            "/time_entries", api_key, _range_params(start, end, user_id)
        )
        return [TimeTacTimeEntry.model_validate(item) for item in data or []]

    async def get_projects(self, api_key: str) -> list[TimeTacProject]:
        data = await self._data("/projects", api_key) or []
        return [TimeTacProject.model_validate(item) for item in data]

    def map_absence_type(
        self, absence_type_id: int, mapping: dict[int, AbsenceType] | None = None
    ) -> AbsenceType:
        table = mapping if mapping is not None else DEFAULT_ABSENCE_TYPE_MAPPING
        return table.get(absence_type_id, AbsenceType.OTHER)


def _range_params(start: date, end: date, user_id: int | None) -> dict[str, Any]:
    params: dict[str, Any] = {
        "date_from": start.isoformat(),
        "date_to": end.isoformat(),
    }
    if user_id is not None:
        params["user_id"] = user_id
    return params
