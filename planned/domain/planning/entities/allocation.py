"""Allocation domain entity."""

import datetime
from uuid import UUID

from pydantic import model_validator

from ...shared.base import Entity


class Allocation(Entity):
    """
    Day-based assignment of a user or a resource to a project phase.

    Exactly one of ``user_id`` and ``resource_id`` is set. Planned hours only
    exist for user allocations; they are dropped for resources.
    """

    tenant_id: UUID
    project_phase_id: UUID
    date: datetime.date
    user_id: UUID | None = None
    resource_id: UUID | None = None
    planned_hours: float | None = None
    notes: str | None = None

    @model_validator(mode="before")
    @classmethod
    def _drop_hours_for_resources(cls, data):
        if isinstance(data, dict) and data.get("resource_id") and not data.get("user_id"):
            data = {**data, "planned_hours": None}
        return data

    @model_validator(mode="after")
    def _validate_assignee(self) -> "Allocation":
        if self.user_id is not None and self.resource_id is not None:
            raise ValueError("Allocation kann nicht User UND Resource haben")
        if self.user_id is None and self.resource_id is None:
            raise ValueError("Allocation braucht User ODER Resource")
        if self.planned_hours is not None and self.planned_hours < 0:
            raise ValueError("Geplante Stunden dürfen nicht negativ sein")
        return self

    @property
    def is_user_allocation(self) -> bool:
        return self.user_id is not None

    @property
    def is_resource_allocation(self) -> bool:
        return self.resource_id is not None

    def with_planned_hours(self, hours: float) -> "Allocation":
        if self.is_resource_allocation:
            raise ValueError("Resource-Allocations haben keine geplanten Stunden")
        if hours < 0:
            raise ValueError("Geplante Stunden dürfen nicht negativ sein")
        return self._copy_with(planned_hours=hours)

    def with_notes(self, notes: str | None) -> "Allocation":
        return self._copy_with(notes=notes)

    def with_date(self, new_date: datetime.date) -> "Allocation":
        return self._copy_with(date=new_date)
