"""TimeEntry domain entity (IST hours imported from TimeTac)."""

import datetime
from uuid import UUID

from pydantic import Field, field_validator

from ...shared.base import Entity


class TimeEntry(Entity):
    tenant_id: UUID
    user_id: UUID
    date: datetime.date
    hours: float = Field(ge=0, le=24)
    timetac_id: str
    project_phase_id: UUID | None = None
    description: str | None = None

    @field_validator("timetac_id")
    @classmethod
    def _timetac_id_required(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("TimeTac-ID ist erforderlich")
        return v

    def with_phase(self, project_phase_id: UUID | None) -> "TimeEntry":
        return self._copy_with(project_phase_id=project_phase_id)

    def with_hours(self, hours: float) -> "TimeEntry":
        return self._copy_with(hours=hours)
