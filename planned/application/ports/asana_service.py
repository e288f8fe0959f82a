"""Asana service port."""

from abc import ABC, abstractmethod

from ...domain.planning.value_objects.integration import AsanaFieldConfig
from ..dtos.asana_dtos import (
    AsanaCustomField,
    AsanaProject,
    AsanaSection,
    AsanaTokenResponse,
    AsanaWorkspace,
    MappedPhase,
    MappedProject,
)


class IAsanaService(ABC):
    """
    Typed client for the Asana REST API.

    All calls take a decrypted access token; the service never touches stored
    credentials.
    """

    @abstractmethod
    async def get_projects(
        self, workspace_id: str, token: str, archived: bool | None = None
    ) -> list[AsanaProject]:
        """
        List every project of a workspace, following pagination.

        Args:
            workspace_id: Asana workspace GID
            token: Access token
            archived: Filter by archived state, None for all projects

        Raises:
            TokenExpiredError: If Asana rejects the token
            AsanaApiError: On any other non-success response
        """
        pass

    @abstractmethod
    async def get_sections(self, project_gid: str, token: str) -> list[AsanaSection]:
        """Sections of a project in Asana display order."""
        pass

    @abstractmethod
    def map_to_project(self, project: AsanaProject, config: AsanaFieldConfig) -> MappedProject:
        """Extract local project fields using the configured custom fields."""
        pass

    @abstractmethod
    def map_section_to_phase(
        self, section: AsanaSection, config: AsanaFieldConfig
    ) -> MappedPhase:
        pass

    @abstractmethod
    async def refresh_access_token(self, refresh_token: str) -> AsanaTokenResponse:
        """
        Exchange a refresh token for a new access token.

        Raises:
            AsanaApiError: If the refresh grant is rejected
        """
        pass

    @abstractmethod
    async def update_section(self, section_gid: str, name: str, token: str) -> None:
        pass

    @abstractmethod
    async def update_project_custom_field(
        self,
        project_gid: str,
        field_id: str,
        value: float | str | None,
        token: str,
    ) -> None:
        pass

    @abstractmethod
    async def get_workspaces(self, token: str) -> list[AsanaWorkspace]:
        pass

    @abstractmethod
    async def get_custom_fields(
        self, workspace_id: str, token: str
    ) -> list[AsanaCustomField]:
        pass
