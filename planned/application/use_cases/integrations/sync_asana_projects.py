"""
Asana project and phase synchronization.

Pulls every project of the tenant's Asana workspace and reconciles it into
local Projects (keyed by Asana GID), then mirrors each project's sections as
ProjectPhases in section order. Local projects that disappeared from Asana are
completed, never deleted.
"""

from uuid import UUID

from ....core.observability import get_logger
from ....domain.planning.entities.project import Project
from ....domain.planning.entities.project_phase import ProjectPhase
from ....domain.planning.repositories.credentials_repository import (
    IntegrationCredentialsRepository,
)
from ....domain.planning.repositories.project_repository import (
    ProjectPhaseRepository,
    ProjectRepository,
)
from ....domain.planning.repositories.sync_log_repository import SyncLogRepository
from ....domain.planning.value_objects.enums import (
    IntegrationService,
    ProjectStatus,
    SyncOperation,
)
from ....domain.planning.value_objects.integration import AsanaFieldConfig
from ....domain.shared.base import utcnow
from ...dtos.asana_dtos import AsanaProject
from ...dtos.sync_dtos import SyncProjectsResult
from ...ports.asana_service import IAsanaService
from ...ports.encryption_service import IEncryptionService
from ...services.asana_token_service import MSG_NOT_CONNECTED, AsanaTokenService
from .base import BaseSyncUseCase, SyncPreconditionError, error_message

logger = get_logger(__name__)

MSG_NO_WORKSPACE = "Kein Asana Workspace konfiguriert"


class SyncAsanaProjectsUseCase(BaseSyncUseCase):
    """Synchronizes Asana projects and sections into Projects and ProjectPhases."""

    service = IntegrationService.ASANA
    operation = SyncOperation.SYNC_PROJECTS

    def __init__(
        self,
        asana_service: IAsanaService,
        project_repository: ProjectRepository,
        phase_repository: ProjectPhaseRepository,
        credentials_repository: IntegrationCredentialsRepository,
        sync_log_repository: SyncLogRepository,
        encryption_service: IEncryptionService,
    ) -> None:
        super().__init__(sync_log_repository)
        self._asana = asana_service
        self._projects = project_repository
        self._phases = phase_repository
        self._credentials = credentials_repository
        self._tokens = AsanaTokenService(
            asana_service, credentials_repository, encryption_service
        )

    async def execute(self, tenant_id: UUID) -> SyncProjectsResult:
        """
        Run one Asana sync for a tenant.

        Args:
            tenant_id: Tenant to synchronize

        Returns:
            Counters and accumulated errors; ``success`` is False only when
            the run could not start or aborted as a whole
        """
        result = SyncProjectsResult()
        return await self._execute_logged(
            tenant_id, result, lambda: self._sync(tenant_id, result)
        )

    async def _sync(self, tenant_id: UUID, result: SyncProjectsResult) -> None:
        credentials = await self._credentials.find_by_tenant_id(tenant_id)
        if credentials is None or not credentials.asana_access_token:
            raise SyncPreconditionError(MSG_NOT_CONNECTED)

        token = await self._tokens.get_access_token(credentials)

        workspace_id = credentials.asana_workspace_id
        if not workspace_id:
            raise SyncPreconditionError(MSG_NO_WORKSPACE)

        config = credentials.asana_field_config()
        remote_projects = await self._asana.get_projects(workspace_id, token)
        logger.info("Fetched Asana projects", count=len(remote_projects))

        seen_gids: set[str] = set()
        for remote in remote_projects:
            seen_gids.add(remote.gid)
            try:
                project = await self._sync_project(tenant_id, remote, config, result)
            except Exception as e:
                self._record_item_error(result, f"Projekt {remote.name}: {error_message(e)}")
                continue

            await self._sync_phases(tenant_id, project, token, config, result)

        await self._complete_missing_projects(tenant_id, seen_gids, result)

    async def _sync_project(
        self,
        tenant_id: UUID,
        remote: AsanaProject,
        config: AsanaFieldConfig,
        result: SyncProjectsResult,
    ) -> Project:
        mapped = self._asana.map_to_project(remote, config)
        existing = await self._projects.find_by_asana_gid(remote.gid, tenant_id)

        if existing is None:
            project = Project(
                tenant_id=tenant_id,
                name=mapped.name,
                project_number=mapped.project_number,
                status=ProjectStatus.COMPLETED if mapped.archived else ProjectStatus.ACTIVE,
                asana_gid=remote.gid,
                synced_at=utcnow(),
                soll_produktion_hours=mapped.soll_produktion_hours,
                soll_montage_hours=mapped.soll_montage_hours,
            )
            saved = await self._projects.save(project)
            result.projects_created += 1
            return saved

        # Archived in Asana always wins over the local status
        status = ProjectStatus.COMPLETED if mapped.archived else existing.status
        updated = await self._projects.update(
            existing.with_asana_data(
                name=mapped.name,
                project_number=mapped.project_number,
                soll_produktion_hours=mapped.soll_produktion_hours,
                soll_montage_hours=mapped.soll_montage_hours,
                status=status,
            )
        )
        result.projects_updated += 1
        return updated

    async def _sync_phases(
        self,
        tenant_id: UUID,
        project: Project,
        token: str,
        config: AsanaFieldConfig,
        result: SyncProjectsResult,
    ) -> None:
        """Mirror the sections of one project; failures never propagate."""
        try:
            sections = await self._asana.get_sections(project.asana_gid, token)
            for sort_order, section in enumerate(sections):
                mapped = self._asana.map_section_to_phase(section, config)
                existing = await self._phases.find_by_asana_gid(section.gid, project.id)

                if existing is None:
                    await self._phases.save(
                        ProjectPhase(
                            tenant_id=tenant_id,
                            project_id=project.id,
                            name=mapped.name,
                            bereich=mapped.bereich,
                            sort_order=sort_order,
                            budget_hours=mapped.budget_hours,
                            asana_gid=section.gid,
                        )
                    )
                    result.phases_created += 1
                else:
                    await self._phases.update(
                        existing.with_asana_data(
                            name=mapped.name,
                            bereich=mapped.bereich,
                            sort_order=sort_order,
                            budget_hours=(
                                mapped.budget_hours
                                if mapped.budget_hours is not None
                                else existing.budget_hours
                            ),
                        )
                    )
                    result.phases_updated += 1
        except Exception as e:
            self._record_item_error(
                result, f"Phasen-Sync für Projekt {project.id}: {error_message(e)}"
            )

    async def _complete_missing_projects(
        self, tenant_id: UUID, seen_gids: set[str], result: SyncProjectsResult
    ) -> None:
        """Complete linked local projects that no longer exist in Asana."""
        for project in await self._projects.find_all_by_tenant(tenant_id):
            if (
                not project.asana_gid
                or project.asana_gid in seen_gids
                or project.status == ProjectStatus.COMPLETED
            ):
                continue
            try:
                await self._projects.update_status(project.id, ProjectStatus.COMPLETED)
                result.projects_archived += 1
                logger.info(
                    "Project missing in Asana marked completed",
                    project_id=str(project.id),
                    asana_gid=project.asana_gid,
                )
            except Exception as e:
                self._record_item_error(result, f"Projekt {project.name}: {error_message(e)}")
