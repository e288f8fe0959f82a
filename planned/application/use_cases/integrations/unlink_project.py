"""Remove the Asana link of a project."""

from uuid import UUID

from ....core.observability import get_logger
from ....domain.planning.entities.project import Project
from ....domain.planning.repositories.project_repository import ProjectRepository
from ...common.error_codes import ErrorCodes
from ...common.result import Result
from .base import error_message

logger = get_logger(__name__)


class UnlinkProjectUseCase:
    """
    Detaches a project from Asana.

    The project stays in planned. with its phases and allocations; it is just
    no longer touched by the Asana sync.
    """

    def __init__(self, project_repository: ProjectRepository) -> None:
        self._projects = project_repository

    async def execute(self, project_id: UUID, tenant_id: UUID) -> Result[Project]:
        try:
            project = await self._projects.find_by_id(project_id)
            if project is None:
                return Result.fail(ErrorCodes.NOT_FOUND, "Projekt nicht gefunden")

            if project.tenant_id != tenant_id:
                return Result.fail(
                    ErrorCodes.FORBIDDEN, "Keine Berechtigung für dieses Projekt"
                )

            if not project.asana_gid:
                return Result.fail(
                    ErrorCodes.NOT_LINKED, "Projekt ist nicht mit Asana verknüpft"
                )

            unlinked = await self._projects.update(project.without_asana_link())
            logger.info(
                "Project unlinked from Asana",
                project_id=str(project_id),
                asana_gid=project.asana_gid,
            )
            return Result.ok(unlinked)
        except Exception as e:
            logger.error("Unlinking project failed", project_id=str(project_id), error=str(e))
            return Result.fail(ErrorCodes.UNLINK_PROJECT_FAILED, error_message(e))
