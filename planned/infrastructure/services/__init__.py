"""Adapters implementing the external service ports."""

from .asana_service import AsanaService
from .encryption_service import FernetEncryptionService
from .timetac_service import TimeTacService

__all__ = ["AsanaService", "FernetEncryptionService", "TimeTacService"]
