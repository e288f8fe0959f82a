"""TimeTac Data Transfer Objects."""

from datetime import date

from pydantic import BaseModel, ConfigDict


class TimeTacModel(BaseModel):
    model_config = ConfigDict(extra="ignore")


class TimeTacAccount(TimeTacModel):
    id: int
    name: str


class TimeTacUser(TimeTacModel):
    id: int
    firstname: str | None = None
    lastname: str | None = None
    email: str | None = None
    active: bool = True


class TimeTacAbsenceType(TimeTacModel):
    id: int
    name: str


class TimeTacAbsence(TimeTacModel):
    id: int
    user_id: int
    absence_type_id: int
    date_from: date
    date_to: date
    hours: float | None = None
    approved: bool = True


class TimeTacTimeEntry(TimeTacModel):
    id: int
    user_id: int
    date: date
    duration_hours: float
    task_id: int | None = None
    project_id: int | None = None
    note: str | None = None


class TimeTacProject(TimeTacModel):
    id: int
    name: str
