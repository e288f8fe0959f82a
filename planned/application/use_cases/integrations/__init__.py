"""Integration use cases (Asana, TimeTac)."""

from .base import BaseSyncUseCase, SyncPreconditionError
from .connect_timetac import ConnectTimeTacUseCase
from .sync_asana_projects import SyncAsanaProjectsUseCase
from .sync_timetac_absences import SyncTimeTacAbsencesUseCase
from .sync_timetac_time_entries import SyncTimeTacTimeEntriesUseCase
from .unlink_project import UnlinkProjectUseCase
from .update_asana_phase import UpdateAsanaPhaseUseCase

__all__ = [
    "BaseSyncUseCase",
    "ConnectTimeTacUseCase",
    "SyncAsanaProjectsUseCase",
    "SyncPreconditionError",
    "SyncTimeTacAbsencesUseCase",
    "SyncTimeTacTimeEntriesUseCase",
    "UnlinkProjectUseCase",
    "UpdateAsanaPhaseUseCase",
]
