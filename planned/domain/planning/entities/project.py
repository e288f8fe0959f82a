"""Project domain entity."""

from datetime import datetime
from uuid import UUID

from pydantic import field_validator

from ...shared.base import Entity, utcnow
from ..value_objects.enums import ProjectStatus


class Project(Entity):
    """
    Tenant-scoped construction project.

    A project may be linked to an Asana project via ``asana_gid``; the link is
    the only thing the sync core owns besides name, number and SOLL hours.
    """

    tenant_id: UUID
    name: str
    project_number: str | None = None
    status: ProjectStatus = ProjectStatus.PLANNING
    address: str | None = None
    asana_gid: str | None = None
    synced_at: datetime | None = None
    soll_produktion_hours: float | None = None
    soll_montage_hours: float | None = None

    @field_validator("name")
    @classmethod
    def _name_required(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("Projektname ist erforderlich")
        return v.strip()

    @property
    def is_from_asana(self) -> bool:
        return self.asana_gid is not None

    @property
    def can_be_modified(self) -> bool:
        return self.status != ProjectStatus.COMPLETED

    def with_status(self, status: ProjectStatus) -> "Project":
        return self._copy_with(status=status)

    def with_synced_at(self, synced_at: datetime | None = None) -> "Project":
        return self._copy_with(synced_at=synced_at or utcnow())

    def without_asana_link(self) -> "Project":
        """Detach from Asana; phases and allocations stay untouched."""
        return self._copy_with(asana_gid=None, synced_at=None)

    def with_asana_data(
        self,
        *,
        name: str,
        project_number: str | None,
        soll_produktion_hours: float | None,
        soll_montage_hours: float | None,
        status: ProjectStatus,
    ) -> "Project":
        """Apply fields pulled from Asana and stamp the sync time.

        Unmapped values (None) keep the local project number and hour budgets.
        """
        return self._copy_with(
            name=name,
            project_number=(
                project_number if project_number is not None else self.project_number
            ),
            soll_produktion_hours=(
                soll_produktion_hours
                if soll_produktion_hours is not None
                else self.soll_produktion_hours
            ),
            soll_montage_hours=(
                soll_montage_hours
                if soll_montage_hours is not None
                else self.soll_montage_hours
            ),
            status=status,
            synced_at=utcnow(),
        )
