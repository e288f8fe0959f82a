"""Sync log repository interface."""

from abc import ABC, abstractmethod
from datetime import datetime
from uuid import UUID

from ..entities.sync_log import SyncLog
from ..value_objects.enums import IntegrationService


class SyncLogRepository(ABC):
    """Abstract repository interface for SyncLog entries."""

    @abstractmethod
    async def create(self, log: SyncLog) -> SyncLog:
        """
        Insert a new sync log entry.

        Args:
            log: Entry in ``running`` state

        Returns:
            The stored entry

        Raises:
            RepositoryError: If database operation fails
        """
        pass

    @abstractmethod
    async def update(self, log: SyncLog) -> SyncLog:
        """Persist the terminal state of an entry."""
        pass

    @abstractmethod
    async def find_by_id(self, log_id: UUID) -> SyncLog | None:
        pass

    @abstractmethod
    async def find_by_tenant(
        self,
        tenant_id: UUID,
        limit: int = 20,
        service: IntegrationService | None = None,
    ) -> list[SyncLog]:
        """Most recent entries of a tenant, newest first."""
        pass

    @abstractmethod
    async def find_last_successful(
        self, tenant_id: UUID, service: IntegrationService, operation: str
    ) -> SyncLog | None:
        pass

    @abstractmethod
    async def delete_older_than(self, cutoff: datetime) -> int:
        """
        Delete entries started before ``cutoff``.

        Returns:
            Number of deleted entries
        """
        pass
