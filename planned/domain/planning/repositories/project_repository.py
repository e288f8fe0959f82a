"""
Project repository interfaces.

Covers projects and their phases. Both are tenant scoped; lookups by Asana
GID are the idempotence key of the Asana sync.
"""

from abc import ABC, abstractmethod
from uuid import UUID

from ..entities.project import Project
from ..entities.project_phase import ProjectPhase
from ..value_objects.enums import ProjectStatus


class ProjectRepository(ABC):
    """Abstract repository interface for Project entities."""

    @abstractmethod
    async def find_by_id(self, project_id: UUID) -> Project | None:
        """
        Get project by ID.

        Args:
            project_id: Unique project identifier

        Returns:
            Project if found, None otherwise

        Raises:
            RepositoryError: If database operation fails
        """
        pass

    @abstractmethod
    async def find_by_asana_gid(self, asana_gid: str, tenant_id: UUID) -> Project | None:
        """
        Find the local project linked to an Asana project.

        Args:
            asana_gid: Asana project GID
            tenant_id: Owning tenant

        Returns:
            Project if linked, None otherwise
        """
        pass

    @abstractmethod
    async def find_all_by_tenant(self, tenant_id: UUID) -> list[Project]:
        """Get all projects of a tenant."""
        pass

    @abstractmethod
    async def save(self, project: Project) -> Project:
        """
        Persist a new project.

        Raises:
            RepositoryError: If database operation fails
        """
        pass

    @abstractmethod
    async def update(self, project: Project) -> Project:
        """
        Persist changes to an existing project.

        Raises:
            EntityNotFoundError: If project does not exist
            RepositoryError: If database operation fails
        """
        pass

    @abstractmethod
    async def update_status(self, project_id: UUID, status: ProjectStatus) -> None:
        """Change only the status of a project."""
        pass


class ProjectPhaseRepository(ABC):
    """Abstract repository interface for ProjectPhase entities."""

    @abstractmethod
    async def find_by_id(self, phase_id: UUID) -> ProjectPhase | None:
        pass

    @abstractmethod
    async def find_by_id_with_project(
        self, phase_id: UUID
    ) -> tuple[ProjectPhase, Project] | None:
        """
        Load a phase together with its project.

        Returns:
            (phase, project) if the phase exists, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_asana_gid(
        self, asana_gid: str, project_id: UUID
    ) -> ProjectPhase | None:
        """Find the phase of a project that is linked to an Asana section."""
        pass

    @abstractmethod
    async def find_all_by_project(self, project_id: UUID) -> list[ProjectPhase]:
        """Phases of a project ordered by sort order."""
        pass

    @abstractmethod
    async def save(self, phase: ProjectPhase) -> ProjectPhase:
        pass

    @abstractmethod
    async def update(self, phase: ProjectPhase) -> ProjectPhase:
        pass
