"""SQLModel-backed implementations of the planning repository ports."""

from .absence_conflict_repository import SQLAbsenceConflictRepository
from .absence_repository import SQLAbsenceRepository, SQLAllocationRepository
from .credentials_repository import SQLIntegrationCredentialsRepository
from .integration_mapping_repository import SQLIntegrationMappingRepository
from .project_repository import SQLProjectPhaseRepository, SQLProjectRepository
from .sync_log_repository import SQLSyncLogRepository
from .time_entry_repository import SQLTimeEntryRepository
from .user_repository import SQLUserRepository

__all__ = [
    "SQLAbsenceConflictRepository",
    "SQLAbsenceRepository",
    "SQLAllocationRepository",
    "SQLIntegrationCredentialsRepository",
    "SQLIntegrationMappingRepository",
    "SQLProjectPhaseRepository",
    "SQLProjectRepository",
    "SQLSyncLogRepository",
    "SQLTimeEntryRepository",
    "SQLUserRepository",
]
