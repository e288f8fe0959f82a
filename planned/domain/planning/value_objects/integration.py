"""Value objects describing integration configuration."""

from datetime import date
from uuid import UUID

from pydantic import model_validator

from ...shared.base import ValueObject
from .enums import AbsenceType


class AsanaFieldConfig(ValueObject):
    """Asana custom-field ids configured by a tenant for field extraction."""

    project_number_field_id: str | None = None
    soll_produktion_field_id: str | None = None
    soll_montage_field_id: str | None = None
    phase_bereich_field_id: str | None = None
    phase_budget_hours_field_id: str | None = None


class TimeTacUserLink(ValueObject):
    """A local user that carries a TimeTac user id."""

    user_id: UUID
    timetac_id: str


class DateRange(ValueObject):
    """Inclusive calendar date range."""

    start: date
    end: date

    @model_validator(mode="after")
    def _end_not_before_start(self) -> "DateRange":
        if self.end < self.start:
            raise ValueError("Enddatum muss nach oder gleich Startdatum sein")
        return self

    def contains(self, day: date) -> bool:
        return self.start <= day <= self.end


DEFAULT_ABSENCE_TYPE_MAPPING: dict[int, AbsenceType] = {
    1: AbsenceType.VACATION,
    2: AbsenceType.SICK,
    3: AbsenceType.HOLIDAY,
    4: AbsenceType.TRAINING,
}
