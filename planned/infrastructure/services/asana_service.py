"""
Asana REST adapter.

Implements ``IAsanaService`` on top of httpx. Requests are throttled to a
minimum spacing, retried on rate limits and server errors, and paginated via
Asana's ``next_page.offset`` cursor.
"""

from typing import Any

import httpx

from ...application.dtos.asana_dtos import (
    AsanaCustomField,
    AsanaProject,
    AsanaSection,
    AsanaTokenResponse,
    AsanaWorkspace,
    MappedPhase,
    MappedProject,
)
from ...application.ports.asana_service import IAsanaService
from ...core.config import settings
from ...core.observability import get_logger
from ...core.resilience import RetryConfig
from ...domain.planning.value_objects.enums import PhaseBereich
from ...domain.planning.value_objects.integration import AsanaFieldConfig
from ...domain.shared.exceptions import AsanaApiError, TokenExpiredError
from .http_client import BaseApiClient

logger = get_logger(__name__)

PAGE_LIMIT = 100

PROJECT_OPT_FIELDS = ",".join(
    [
        "gid",
        "name",
        "archived",
        "notes",
        "custom_fields",
        "custom_fields.gid",
        "custom_fields.name",
        "custom_fields.type",
        "custom_fields.number_value",
        "custom_fields.text_value",
        "custom_fields.display_value",
        "custom_fields.enum_value",
    ]
)

MONTAGE_KEYWORDS = ("montage", "baustelle")


class AsanaService(BaseApiClient, IAsanaService):
    """httpx implementation of the Asana port."""

    service_name = "asana"

    def __init__(
        self,
        base_url: str | None = None,
        token_url: str | None = None,
        client_id: str | None = None,
        client_secret: str | None = None,
        retry_config: RetryConfig | None = None,
        min_request_interval: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        super().__init__(
            base_url or settings.ASANA_API_URL,
            retry_config=retry_config,
            min_request_interval=(
                settings.ASANA_MIN_REQUEST_INTERVAL_SECONDS
                if min_request_interval is None
                else min_request_interval
            ),
            transport=transport,
        )
        self._token_url = token_url or settings.ASANA_TOKEN_URL
        self._client_id = client_id or settings.ASANA_CLIENT_ID
        self._client_secret = client_secret or settings.ASANA_CLIENT_SECRET

    def _raise_for_error(self, response: httpx.Response) -> None:
        if response.status_code == 401:
            raise TokenExpiredError()
        raise AsanaApiError(
            f"Asana API Fehler: {response.status_code} {_error_message(response)}",
            response.status_code,
        )

    async def _get_all(
        self, path: str, token: str, params: dict[str, Any] | None = None
    ) -> list[dict[str, Any]]:
        """Collect every page of a list endpoint."""
        query: dict[str, Any] = {"limit": PAGE_LIMIT, **(params or {})}
        items: list[dict[str, Any]] = []
        while True:
            payload = await self._get_json(path, token, query)
            items.extend(payload.get("data", []))
            next_page = payload.get("next_page") or {}
            offset = next_page.get("offset")
            if not offset:
                return items
            query["offset"] = offset

    async def get_projects(
        self, workspace_id: str, token: str, archived: bool | None = None
    ) -> list[AsanaProject]:
        params: dict[str, Any] = {"workspace": workspace_id, "opt_fields": PROJECT_OPT_FIELDS}
        if archived is not None:
            params["archived"] = str(archived).lower()
        data = await self._get_all("/projects", token, params)
        return [AsanaProject.model_validate(item) for item in data]

    async def get_sections(self, project_gid: str, token: str) -> list[AsanaSection]:
        data = await self._get_all(
            f"/projects/{project_gid}/sections", token, {"opt_fields": "gid,name"}
        )
        return [AsanaSection.model_validate(item) for item in data]

    async def get_workspaces(self, token: str) -> list[AsanaWorkspace]:
        data = await self._get_all("/workspaces", token)
        return [AsanaWorkspace.model_validate(item) for item in data]

    async def get_custom_fields(
        self, workspace_id: str, token: str
    ) -> list[AsanaCustomField]:
        data = await self._get_all(f"/workspaces/{workspace_id}/custom_fields", token)
        return [AsanaCustomField.model_validate(item) for item in data]

    async def refresh_access_token(self, refresh_token: str) -> AsanaTokenResponse:
        response = await self._send(
            "POST",
            self._token_url,
            data={
                "grant_type": "refresh_token",
                "client_id": self._client_id or "",
                "client_secret": self._client_secret or "",
                "refresh_token": refresh_token,
            },
        )
        logger.info("Asana access token refreshed")
        return AsanaTokenResponse.model_validate(response.json())

    async def update_section(self, section_gid: str, name: str, token: str) -> None:
        await self._send(
            "PUT", f"/sections/{section_gid}", token=token, json={"data": {"name": name}}
        )

    async def update_project_custom_field(
        self,
        project_gid: str,
        field_id: str,
        value: float | str | None,
        token: str,
    ) -> None:
        await self._send(
            "PUT",
            f"/projects/{project_gid}",
            token=token,
            json={"data": {"custom_fields": {field_id: value}}},
        )

    def map_to_project(self, project: AsanaProject, config: AsanaFieldConfig) -> MappedProject:
        fields = {field.gid: field for field in project.custom_fields}

        project_number = _field_value(fields, config.project_number_field_id)
        return MappedProject(
            asana_gid=project.gid,
            name=project.name,
            project_number=_as_text(project_number),
            soll_produktion_hours=_as_float(
                _field_value(fields, config.soll_produktion_field_id)
            ),
            soll_montage_hours=_as_float(_field_value(fields, config.soll_montage_field_id)),
            archived=project.archived,
        )

    def map_section_to_phase(
        self, section: AsanaSection, config: AsanaFieldConfig
    ) -> MappedPhase:
        name = section.name.lower()
        bereich = (
            PhaseBereich.MONTAGE
            if any(keyword in name for keyword in MONTAGE_KEYWORDS)
            else PhaseBereich.PRODUKTION
        )
        # Asana sections have no custom fields
        return MappedPhase(asana_gid=section.gid, name=section.name, bereich=bereich)


def _field_value(
    fields: dict[str, AsanaCustomField], field_id: str | None
) -> float | str | None:
    """Read a custom field preferring number over text over display value."""
    if not field_id or field_id not in fields:
        return None
    field = fields[field_id]
    if field.number_value is not None:
        return field.number_value
    if field.text_value:
        return field.text_value
    if field.display_value:
        return field.display_value
    return None


def _as_text(value: float | str | None) -> str | None:
    if value is None:
        return None
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _as_float(value: float | str | None) -> float | None:
    if value is None:
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def _error_message(response: httpx.Response) -> str:
    try:
        errors = response.json().get("errors") or []
    except ValueError:
        return response.text
    return "; ".join(str(err.get("message", "")) for err in errors)
