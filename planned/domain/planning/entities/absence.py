"""
Absence domain entity.

An absence blocks nobody: it only produces warnings (AbsenceConflict) when an
allocation for the same user falls inside its inclusive date range.
"""

from datetime import date
from uuid import UUID

from pydantic import Field, model_validator

from ...shared.base import Entity
from ..value_objects.enums import AbsenceType


class Absence(Entity):
    """Vacation, sick leave, holiday or training of one user."""

    tenant_id: UUID
    user_id: UUID
    type: AbsenceType
    start_date: date
    end_date: date
    notes: str | None = None
    timetac_id: str | None = Field(default=None, description="Dedup key for TimeTac")
    asana_gid: str | None = None

    @model_validator(mode="after")
    def _validate_date_range(self) -> "Absence":
        if self.end_date < self.start_date:
            raise ValueError("Enddatum muss nach oder gleich Startdatum sein")
        return self

    @property
    def type_label(self) -> str:
        return self.type.label

    @property
    def duration_days(self) -> int:
        """Number of calendar days covered, both boundaries included."""
        return (self.end_date - self.start_date).days + 1

    def includes_date(self, day: date) -> bool:
        return self.start_date <= day <= self.end_date

    def overlaps(self, start: date, end: date) -> bool:
        return self.start_date <= end and self.end_date >= start

    def with_notes(self, notes: str | None) -> "Absence":
        return self._copy_with(notes=notes)

    def with_date_range(self, start_date: date, end_date: date) -> "Absence":
        return self._copy_with(start_date=start_date, end_date=end_date)

    def with_type(self, absence_type: AbsenceType) -> "Absence":
        return self._copy_with(type=absence_type)
