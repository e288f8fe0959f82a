"""
SQLModel table definitions for the planning and integration domain.

Rows mirror the domain entities field by field; enum values are stored as
plain strings and timestamps as timezone-aware DateTime columns. Mapping
between rows and entities lives in ``repositories.base``.
"""

import datetime as dt
from typing import Any
from uuid import UUID, uuid4

from sqlalchemy import JSON, Column, DateTime, UniqueConstraint
from sqlmodel import Field, SQLModel


def _utcnow() -> dt.datetime:
    return dt.datetime.now(dt.timezone.utc)


class TimestampedModel(SQLModel):
    """Base model with UUID primary key and timestamp fields."""

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    created_at: dt.datetime = Field(
        default_factory=_utcnow, sa_type=DateTime(timezone=True), nullable=False
    )
    updated_at: dt.datetime = Field(
        default_factory=_utcnow, sa_type=DateTime(timezone=True), nullable=False
    )


class UserModel(TimestampedModel, table=True):
    """Users of a tenant; only the TimeTac link is read by the sync core."""

    __tablename__ = "users"

    tenant_id: UUID = Field(index=True)
    name: str
    email: str | None = None
    timetac_id: str | None = Field(default=None, index=True)


class ProjectModel(TimestampedModel, table=True):
    __tablename__ = "projects"
    __table_args__ = (UniqueConstraint("tenant_id", "asana_gid"),)

    tenant_id: UUID = Field(index=True)
    name: str
    project_number: str | None = None
    status: str = "planning"
    address: str | None = None
    asana_gid: str | None = Field(default=None, index=True)
    synced_at: dt.datetime | None = Field(default=None, sa_type=DateTime(timezone=True))
    soll_produktion_hours: float | None = None
    soll_montage_hours: float | None = None


class ProjectPhaseModel(TimestampedModel, table=True):
    __tablename__ = "project_phases"
    __table_args__ = (UniqueConstraint("project_id", "asana_gid"),)

    tenant_id: UUID = Field(index=True)
    project_id: UUID = Field(foreign_key="projects.id", index=True)
    name: str
    bereich: str = "produktion"
    start_date: dt.date | None = None
    end_date: dt.date | None = None
    sort_order: int = 0
    budget_hours: float | None = None
    planned_hours: float = 0.0
    actual_hours: float = 0.0
    status: str = "active"
    asana_gid: str | None = None
    deleted_at: dt.datetime | None = Field(default=None, sa_type=DateTime(timezone=True))


class AbsenceModel(TimestampedModel, table=True):
    __tablename__ = "absences"
    __table_args__ = (UniqueConstraint("tenant_id", "timetac_id"),)

    tenant_id: UUID = Field(index=True)
    user_id: UUID = Field(index=True)
    type: str
    start_date: dt.date
    end_date: dt.date
    notes: str | None = None
    timetac_id: str | None = None
    asana_gid: str | None = None


class AllocationModel(TimestampedModel, table=True):
    __tablename__ = "allocations"

    tenant_id: UUID = Field(index=True)
    project_phase_id: UUID = Field(foreign_key="project_phases.id", index=True)
    date: dt.date = Field(index=True)
    user_id: UUID | None = Field(default=None, index=True)
    resource_id: UUID | None = None
    planned_hours: float | None = None
    notes: str | None = None


class TimeEntryModel(TimestampedModel, table=True):
    __tablename__ = "time_entries"
    __table_args__ = (UniqueConstraint("tenant_id", "timetac_id"),)

    tenant_id: UUID = Field(index=True)
    user_id: UUID = Field(index=True)
    date: dt.date
    hours: float
    timetac_id: str
    project_phase_id: UUID | None = Field(default=None, index=True)
    description: str | None = None


class IntegrationCredentialsModel(TimestampedModel, table=True):
    __tablename__ = "integration_credentials"

    tenant_id: UUID = Field(unique=True, index=True)
    asana_access_token: str | None = None
    asana_refresh_token: str | None = None
    asana_token_expires_at: dt.datetime | None = Field(
        default=None, sa_type=DateTime(timezone=True)
    )
    asana_workspace_id: str | None = None
    asana_webhook_secret: str | None = None
    asana_project_number_field_id: str | None = None
    asana_soll_produktion_field_id: str | None = None
    asana_soll_montage_field_id: str | None = None
    asana_phase_bereich_field_id: str | None = None
    asana_phase_budget_hours_field_id: str | None = None
    timetac_account_id: str | None = None
    timetac_api_token: str | None = None


class SyncLogModel(TimestampedModel, table=True):
    __tablename__ = "sync_logs"

    tenant_id: UUID = Field(index=True)
    service: str
    operation: str
    status: str = "running"
    result: dict[str, Any] | None = Field(default=None, sa_column=Column(JSON))
    error_message: str | None = None
    started_at: dt.datetime = Field(
        default_factory=_utcnow, sa_type=DateTime(timezone=True), nullable=False, index=True
    )
    completed_at: dt.datetime | None = Field(default=None, sa_type=DateTime(timezone=True))


class IntegrationMappingModel(TimestampedModel, table=True):
    __tablename__ = "integration_mappings"
    __table_args__ = (
        UniqueConstraint("tenant_id", "service", "mapping_type", "external_id"),
    )

    tenant_id: UUID = Field(index=True)
    service: str
    mapping_type: str
    external_id: str
    internal_id: UUID
    external_name: str | None = None


class AbsenceConflictModel(TimestampedModel, table=True):
    __tablename__ = "absence_conflicts"
    __table_args__ = (UniqueConstraint("absence_id", "allocation_id"),)

    tenant_id: UUID = Field(index=True)
    allocation_id: UUID = Field(index=True)
    absence_id: UUID = Field(index=True)
    user_id: UUID
    date: dt.date
    absence_type: str
    resolved_at: dt.datetime | None = Field(default=None, sa_type=DateTime(timezone=True))
    resolved_by: UUID | None = None
    resolution: str | None = None
