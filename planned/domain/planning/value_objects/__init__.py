"""Value objects for the planning domain."""

from .enums import (
    AbsenceType,
    ConflictResolution,
    IntegrationService,
    MappingType,
    PhaseBereich,
    PhaseStatus,
    ProjectStatus,
    SyncOperation,
    SyncStatus,
)
from .integration import (
    DEFAULT_ABSENCE_TYPE_MAPPING,
    AsanaFieldConfig,
    DateRange,
    TimeTacUserLink,
)

__all__ = [
    "AbsenceType",
    "AsanaFieldConfig",
    "ConflictResolution",
    "DEFAULT_ABSENCE_TYPE_MAPPING",
    "DateRange",
    "IntegrationService",
    "MappingType",
    "PhaseBereich",
    "PhaseStatus",
    "ProjectStatus",
    "SyncOperation",
    "SyncStatus",
    "TimeTacUserLink",
]
