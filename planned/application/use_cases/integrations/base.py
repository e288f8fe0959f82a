"""
Shared skeleton of the background sync use cases.

Every run opens exactly one SyncLog and closes it exactly once, either as
``success`` with a result summary or as ``failed`` with the top-level error.
No exception escapes ``execute``: setup failures become ``success=False``
results, per-item failures are accumulated in ``errors``.
"""

import time
from abc import ABC
from collections.abc import Awaitable, Callable
from typing import Any, TypeVar
from uuid import UUID

import structlog

from ....core.observability import get_logger, record_item_error, record_sync_run
from ....domain.planning.entities.sync_log import SyncLog
from ....domain.planning.repositories.sync_log_repository import SyncLogRepository
from ....domain.planning.value_objects.enums import (
    IntegrationService,
    SyncOperation,
    SyncStatus,
)
from ....domain.shared.exceptions import BusinessRuleError, DomainError
from ...dtos.sync_dtos import SyncResultBase

logger = get_logger(__name__)

ResultT = TypeVar("ResultT", bound=SyncResultBase)

UNKNOWN_ERROR_MESSAGE = "Unbekannter Fehler"
MAX_LOGGED_ERRORS = 50


class SyncPreconditionError(BusinessRuleError):
    """A sync run cannot start (not connected, no workspace, ...)."""


def error_message(error: BaseException) -> str:
    """Human readable message of an error, never empty."""
    if isinstance(error, DomainError):
        return error.message or UNKNOWN_ERROR_MESSAGE
    return str(error) or UNKNOWN_ERROR_MESSAGE


class BaseSyncUseCase(ABC):
    """Base class wiring SyncLog bookkeeping, logging and metrics around a run."""

    service: IntegrationService
    operation: SyncOperation

    def __init__(self, sync_log_repository: SyncLogRepository) -> None:
        self._sync_logs = sync_log_repository

    def _record_item_error(self, result: SyncResultBase, message: str) -> None:
        result.errors.append(message)
        record_item_error(self.service.value, self.operation.value)
        logger.warning(
            "Sync item failed",
            service=self.service.value,
            operation=self.operation.value,
            error=message,
        )

    def _summarize(self, result: SyncResultBase) -> dict[str, Any]:
        summary = result.model_dump(exclude={"success", "errors"})
        summary["error_count"] = len(result.errors)
        if result.errors:
            summary["errors"] = result.errors[:MAX_LOGGED_ERRORS]
        return summary

    async def _close_log(self, log: SyncLog) -> None:
        try:
            await self._sync_logs.update(log)
        except Exception as e:
            logger.error(
                "Failed to close sync log",
                sync_log_id=str(log.id),
                status=log.status.value,
                error=str(e),
            )

    async def _execute_logged(
        self,
        tenant_id: UUID,
        result: ResultT,
        run: Callable[[], Awaitable[dict[str, Any] | None]],
    ) -> ResultT:
        """
        Run ``run`` inside SyncLog bookkeeping.

        Args:
            tenant_id: Tenant being synchronized
            result: Result object the run fills in
            run: Coroutine factory performing the sync; may return a summary
                that replaces the default SyncLog result

        Returns:
            ``result`` with ``success`` set
        """
        started = time.perf_counter()
        log: SyncLog | None = None

        with structlog.contextvars.bound_contextvars(
            tenant_id=str(tenant_id),
            service=self.service.value,
            operation=self.operation.value,
        ):
            try:
                log = await self._sync_logs.create(
                    SyncLog(
                        tenant_id=tenant_id,
                        service=self.service,
                        operation=self.operation.value,
                    )
                )
                logger.info("Sync started", sync_log_id=str(log.id))

                summary = await run()
                result.success = True
            except Exception as e:
                message = error_message(e)
                result.success = False
                result.errors.append(message)
                logger.error("Sync failed", error=message, error_type=type(e).__name__)
                if log is not None:
                    await self._close_log(log.fail(message))
                record_sync_run(
                    self.service.value,
                    self.operation.value,
                    SyncStatus.FAILED.value,
                    time.perf_counter() - started,
                )
                return result

            await self._close_log(log.complete(summary or self._summarize(result)))
            record_sync_run(
                self.service.value,
                self.operation.value,
                SyncStatus.SUCCESS.value,
                time.perf_counter() - started,
            )
            logger.info("Sync completed", error_count=len(result.errors))
            return result
