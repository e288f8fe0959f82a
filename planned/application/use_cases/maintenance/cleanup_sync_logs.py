"""Retention cleanup for sync logs."""

from datetime import timedelta

from ....core.config import settings
from ....core.observability import get_logger
from ....domain.planning.repositories.sync_log_repository import SyncLogRepository
from ....domain.shared.base import utcnow

logger = get_logger(__name__)


class CleanupSyncLogsUseCase:
    """Deletes sync logs whose run started before the retention window."""

    def __init__(
        self, sync_log_repository: SyncLogRepository, retention_days: int | None = None
    ) -> None:
        self._sync_logs = sync_log_repository
        self._retention_days = (
            retention_days if retention_days is not None else settings.SYNC_LOG_RETENTION_DAYS
        )

    async def execute(self) -> int:
        """
        Remove expired sync logs.

        Returns:
            Number of deleted logs
        """
        cutoff = utcnow() - timedelta(days=self._retention_days)
        deleted = await self._sync_logs.delete_older_than(cutoff)
        logger.info(
            "Old sync logs deleted",
            deleted=deleted,
            retention_days=self._retention_days,
            cutoff=cutoff.isoformat(),
        )
        return deleted
