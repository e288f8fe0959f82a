"""SyncLog entity: one row per sync invocation."""

from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import Field

from ...shared.base import Entity, utcnow
from ..value_objects.enums import IntegrationService, SyncStatus


class SyncLog(Entity):
    tenant_id: UUID
    service: IntegrationService
    operation: str
    status: SyncStatus = SyncStatus.RUNNING
    result: dict[str, Any] | None = None
    error_message: str | None = None
    started_at: datetime = Field(default_factory=utcnow)
    completed_at: datetime | None = None

    @property
    def is_terminal(self) -> bool:
        return self.status != SyncStatus.RUNNING

    def complete(self, result: dict[str, Any]) -> "SyncLog":
        return self._copy_with(
            status=SyncStatus.SUCCESS, result=result, completed_at=utcnow()
        )

    def fail(self, error_message: str) -> "SyncLog":
        return self._copy_with(
            status=SyncStatus.FAILED, error_message=error_message, completed_at=utcnow()
        )
