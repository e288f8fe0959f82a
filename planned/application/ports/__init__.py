"""Ports to external services consumed by the application layer."""

from .asana_service import IAsanaService
from .encryption_service import IEncryptionService
from .timetac_service import ITimeTacService

__all__ = ["IAsanaService", "IEncryptionService", "ITimeTacService"]
