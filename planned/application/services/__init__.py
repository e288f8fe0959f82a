"""
Application services.

Services shared by several use cases: absence conflict bookkeeping and the
Asana token lifecycle.
"""

from .absence_conflict_service import AbsenceConflictService
from .asana_token_service import AsanaTokenService, AsanaTokenUnavailableError

__all__ = ["AbsenceConflictService", "AsanaTokenService", "AsanaTokenUnavailableError"]
