"""
Repository interfaces for the planning domain.

These abstract interfaces define the contracts for data persistence
without coupling the domain layer to specific database implementations.
"""

from .absence_conflict_repository import AbsenceConflictRepository
from .absence_repository import AbsenceRepository, AllocationRepository
from .credentials_repository import IntegrationCredentialsRepository
from .integration_mapping_repository import IntegrationMappingRepository
from .project_repository import ProjectPhaseRepository, ProjectRepository
from .sync_log_repository import SyncLogRepository
from .time_entry_repository import TimeEntryRepository
from .user_repository import UserRepository

__all__ = [
    "AbsenceConflictRepository",
    "AbsenceRepository",
    "AllocationRepository",
    "IntegrationCredentialsRepository",
    "IntegrationMappingRepository",
    "ProjectPhaseRepository",
    "ProjectRepository",
    "SyncLogRepository",
    "TimeEntryRepository",
    "UserRepository",
]
