"""
ProjectPhase domain entity.

A phase carries three hour figures:

* SOLL (``budget_hours``) - budget, synced from an Asana custom field
* PLAN (``planned_hours``) - derived from allocations
* IST (``actual_hours``) - derived from synced TimeTac time entries
"""

from datetime import date, datetime
from uuid import UUID

from pydantic import Field, model_validator

from ...shared.base import Entity, utcnow
from ..value_objects.enums import PhaseBereich, PhaseStatus


class ProjectPhase(Entity):
    """Phase of a project, 1:1 with an Asana section when linked."""

    tenant_id: UUID
    project_id: UUID
    name: str = Field(min_length=1)
    bereich: PhaseBereich = PhaseBereich.PRODUKTION
    start_date: date | None = None
    end_date: date | None = None
    sort_order: int = Field(default=0, ge=0)
    budget_hours: float | None = Field(default=None, ge=0)
    planned_hours: float = 0.0
    actual_hours: float = 0.0
    status: PhaseStatus = PhaseStatus.ACTIVE
    asana_gid: str | None = None
    deleted_at: datetime | None = None

    @model_validator(mode="after")
    def _validate_dates(self) -> "ProjectPhase":
        if self.start_date and self.end_date and self.end_date < self.start_date:
            raise ValueError("Enddatum muss nach oder gleich Startdatum sein")
        return self

    @property
    def utilization_percent(self) -> float | None:
        """PLAN as a percentage of SOLL, None without a budget."""
        if not self.budget_hours:
            return None
        return round(self.planned_hours / self.budget_hours * 100, 1)

    @property
    def delta(self) -> float | None:
        """SOLL minus IST; negative when over budget."""
        if self.budget_hours is None:
            return None
        return self.budget_hours - self.actual_hours

    @property
    def is_over_budget(self) -> bool:
        return self.budget_hours is not None and self.actual_hours > self.budget_hours

    @property
    def is_over_planned(self) -> bool:
        return self.budget_hours is not None and self.planned_hours > self.budget_hours

    def with_name(self, name: str) -> "ProjectPhase":
        return self._copy_with(name=name)

    def with_bereich(self, bereich: PhaseBereich) -> "ProjectPhase":
        return self._copy_with(bereich=bereich)

    def with_sort_order(self, sort_order: int) -> "ProjectPhase":
        return self._copy_with(sort_order=sort_order)

    def with_status(self, status: PhaseStatus) -> "ProjectPhase":
        deleted_at = utcnow() if status == PhaseStatus.DELETED else None
        return self._copy_with(status=status, deleted_at=deleted_at)

    def with_dates(self, start_date: date | None, end_date: date | None) -> "ProjectPhase":
        return self._copy_with(start_date=start_date, end_date=end_date)

    def with_budget_hours(self, budget_hours: float | None) -> "ProjectPhase":
        if budget_hours is not None and budget_hours < 0:
            raise ValueError("Budget-Stunden dürfen nicht negativ sein")
        return self._copy_with(budget_hours=budget_hours)

    def with_asana_data(
        self,
        *,
        name: str,
        bereich: PhaseBereich,
        sort_order: int,
        budget_hours: float | None,
    ) -> "ProjectPhase":
        return self._copy_with(
            name=name, bereich=bereich, sort_order=sort_order, budget_hours=budget_hours
        )
