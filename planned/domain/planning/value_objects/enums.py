"""Enumerations for the planning domain."""

from enum import Enum


class AbsenceType(str, Enum):
    """Kind of absence; TimeTac absence type ids are mapped onto these."""

    VACATION = "vacation"
    SICK = "sick"
    HOLIDAY = "holiday"
    TRAINING = "training"
    OTHER = "other"

    @property
    def label(self) -> str:
        return ABSENCE_TYPE_LABELS[self]


ABSENCE_TYPE_LABELS = {
    AbsenceType.VACATION: "Urlaub",
    AbsenceType.SICK: "Krank",
    AbsenceType.HOLIDAY: "Feiertag",
    AbsenceType.TRAINING: "Schulung",
    AbsenceType.OTHER: "Sonstiges",
}


class ProjectStatus(str, Enum):
    PLANNING = "planning"
    ACTIVE = "active"
    PAUSED = "paused"
    COMPLETED = "completed"


class PhaseBereich(str, Enum):
    """Work area of a phase."""

    PRODUKTION = "produktion"
    MONTAGE = "montage"
    EXTERN = "extern"


class PhaseStatus(str, Enum):
    ACTIVE = "active"
    DELETED = "deleted"


class IntegrationService(str, Enum):
    ASANA = "asana"
    TIMETAC = "timetac"


class SyncStatus(str, Enum):
    RUNNING = "running"
    SUCCESS = "success"
    FAILED = "failed"


class SyncOperation(str, Enum):
    SYNC_PROJECTS = "sync_projects"
    SYNC_ABSENCES = "sync_absences"
    SYNC_TIME_ENTRIES = "sync_time_entries"


class MappingType(str, Enum):
    PROJECT = "project"
    PHASE = "phase"
    USER = "user"
    ABSENCE_TYPE = "absence_type"


class ConflictResolution(str, Enum):
    MOVED = "moved"
    DELETED = "deleted"
    IGNORED = "ignored"
