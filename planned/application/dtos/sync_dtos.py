"""
Sync Data Transfer Objects.

Result objects returned by the background sync use cases and request/response
objects of the interactive integration use cases.
"""

from datetime import date
from uuid import UUID

from pydantic import BaseModel, Field

from ...domain.planning.entities.project_phase import ProjectPhase


class SyncResultBase(BaseModel):
    """Fields shared by every sync result."""

    success: bool = False
    errors: list[str] = Field(default_factory=list)


class SyncProjectsResult(SyncResultBase):
    projects_created: int = 0
    projects_updated: int = 0
    projects_archived: int = 0
    phases_created: int = 0
    phases_updated: int = 0


class SyncAbsencesResult(SyncResultBase):
    created: int = 0
    updated: int = 0
    skipped: int = 0
    conflicts_detected: int = 0


class SyncTimeEntriesResult(SyncResultBase):
    created: int = 0
    updated: int = 0
    skipped: int = 0


class ConnectTimeTacResult(BaseModel):
    account_id: str
    account_name: str


class UpdateAsanaPhaseRequest(BaseModel):
    """Local edit of a phase; ``None`` means the field is left unchanged."""

    phase_id: UUID
    tenant_id: UUID
    name: str | None = Field(None, min_length=1)
    budget_hours: float | None = Field(None, ge=0)
    start_date: date | None = None
    end_date: date | None = None


class UpdateAsanaPhaseResult(BaseModel):
    phase: ProjectPhase
    synced: bool
    asana_gid: str | None = None
