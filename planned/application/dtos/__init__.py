"""
Data Transfer Objects for the application layer.

Remote payload views (Asana, TimeTac) and the result objects of the sync use
cases.
"""

from .asana_dtos import (
    AsanaCustomField,
    AsanaProject,
    AsanaSection,
    AsanaTokenResponse,
    AsanaWorkspace,
    MappedPhase,
    MappedProject,
)
from .sync_dtos import (
    ConnectTimeTacResult,
    SyncAbsencesResult,
    SyncProjectsResult,
    SyncTimeEntriesResult,
    UpdateAsanaPhaseRequest,
    UpdateAsanaPhaseResult,
)
from .timetac_dtos import (
    TimeTacAbsence,
    TimeTacAbsenceType,
    TimeTacAccount,
    TimeTacProject,
    TimeTacTimeEntry,
    TimeTacUser,
)

__all__ = [
    # Asana
    "AsanaCustomField",
    "AsanaProject",
    "AsanaSection",
    "AsanaTokenResponse",
    "AsanaWorkspace",
    "MappedPhase",
    "MappedProject",
    # TimeTac
    "TimeTacAbsence",
    "TimeTacAbsenceType",
    "TimeTacAccount",
    "TimeTacProject",
    "TimeTacTimeEntry",
    "TimeTacUser",
    # Sync
    "ConnectTimeTacResult",
    "SyncAbsencesResult",
    "SyncProjectsResult",
    "SyncTimeEntriesResult",
    "UpdateAsanaPhaseRequest",
    "UpdateAsanaPhaseResult",
]
