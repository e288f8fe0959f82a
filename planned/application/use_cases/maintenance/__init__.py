"""Maintenance use cases."""

from .cleanup_sync_logs import CleanupSyncLogsUseCase

__all__ = ["CleanupSyncLogsUseCase"]
