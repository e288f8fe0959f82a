"""SQL implementations of the project and project phase repositories."""

from uuid import UUID

from sqlmodel import select

from ....domain.planning.entities.project import Project
from ....domain.planning.entities.project_phase import ProjectPhase
from ....domain.planning.repositories.project_repository import (
    ProjectPhaseRepository,
    ProjectRepository,
)
from ....domain.planning.value_objects.enums import ProjectStatus
from ....domain.shared.base import utcnow
from ..sqlmodel_entities import ProjectModel, ProjectPhaseModel
from .base import SQLRepository


class SQLProjectRepository(SQLRepository[ProjectModel, Project], ProjectRepository):
    row_class = ProjectModel
    entity_class = Project

    async def find_by_id(self, project_id: UUID) -> Project | None:
        return await self._find_by_id(project_id)

    async def find_by_asana_gid(self, asana_gid: str, tenant_id: UUID) -> Project | None:
        async with self._db_errors("find_by_asana_gid"):
            result = await self.session.execute(
                select(ProjectModel).where(
                    ProjectModel.asana_gid == asana_gid,
                    ProjectModel.tenant_id == tenant_id,
                )
            )
            row = result.scalar_one_or_none()
            return self._to_entity(row) if row is not None else None

    async def find_all_by_tenant(self, tenant_id: UUID) -> list[Project]:
        async with self._db_errors("find_all_by_tenant"):
            result = await self.session.execute(
                select(ProjectModel)
                .where(ProjectModel.tenant_id == tenant_id)
                .order_by(ProjectModel.name)
            )
            return [self._to_entity(row) for row in result.scalars().all()]

    async def save(self, project: Project) -> Project:
        return await self._insert(project)

    async def update(self, project: Project) -> Project:
        return await self._update(project)

    async def update_status(self, project_id: UUID, status: ProjectStatus) -> None:
        async with self._db_errors("update_status"):
            row = await self._get_row_required(project_id)
            row.status = status.value
            row.updated_at = utcnow()
            await self.session.commit()


class SQLProjectPhaseRepository(
    SQLRepository[ProjectPhaseModel, ProjectPhase], ProjectPhaseRepository
):
    row_class = ProjectPhaseModel
    entity_class = ProjectPhase

    async def find_by_id(self, phase_id: UUID) -> ProjectPhase | None:
        return await self._find_by_id(phase_id)

    async def find_by_id_with_project(
        self, phase_id: UUID
    ) -> tuple[ProjectPhase, Project] | None:
        async with self._db_errors("find_by_id_with_project"):
            result = await self.session.execute(
                select(ProjectPhaseModel, ProjectModel)
                .join(ProjectModel, ProjectModel.id == ProjectPhaseModel.project_id)
                .where(ProjectPhaseModel.id == phase_id)
            )
            found = result.first()
            if found is None:
                return None
            phase_row, project_row = found
            return (
                self._to_entity(phase_row),
                SQLProjectRepository._to_entity(project_row),
            )

    async def find_by_asana_gid(self, asana_gid: str, project_id: UUID) -> ProjectPhase | None:
        async with self._db_errors("find_by_asana_gid"):
            result = await self.session.execute(
                select(ProjectPhaseModel).where(
                    ProjectPhaseModel.asana_gid == asana_gid,
                    ProjectPhaseModel.project_id == project_id,
                )
            )
            row = result.scalar_one_or_none()
            return self._to_entity(row) if row is not None else None

    async def find_all_by_project(self, project_id: UUID) -> list[ProjectPhase]:
        async with self._db_errors("find_all_by_project"):
            result = await self.session.execute(
                select(ProjectPhaseModel)
                .where(ProjectPhaseModel.project_id == project_id)
                .order_by(ProjectPhaseModel.sort_order)
            )
            return [self._to_entity(row) for row in result.scalars().all()]

    async def save(self, phase: ProjectPhase) -> ProjectPhase:
        return await self._insert(phase)

    async def update(self, phase: ProjectPhase) -> ProjectPhase:
        return await self._update(phase)
