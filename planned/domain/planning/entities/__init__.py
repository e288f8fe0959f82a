"""Planning domain entities."""

from .absence import Absence
from .absence_conflict import AbsenceConflict
from .allocation import Allocation
from .integration_credentials import IntegrationCredentials
from .integration_mapping import IntegrationMapping
from .project import Project
from .project_phase import ProjectPhase
from .sync_log import SyncLog
from .time_entry import TimeEntry

__all__ = [
    "Absence",
    "AbsenceConflict",
    "Allocation",
    "IntegrationCredentials",
    "IntegrationMapping",
    "Project",
    "ProjectPhase",
    "SyncLog",
    "TimeEntry",
]
