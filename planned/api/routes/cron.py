"""
Cron endpoints for the scheduled integration syncs.

Every endpoint requires ``Authorization: Bearer <CRON_SECRET>``. Tenants are
processed one after another; a failure of one tenant is reported in its entry
and never stops the loop.
"""

from typing import Annotated, Any
from uuid import UUID

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from ...application.use_cases.integrations.sync_asana_projects import SyncAsanaProjectsUseCase
from ...application.use_cases.integrations.sync_timetac_absences import (
    SyncTimeTacAbsencesUseCase,
)
from ...application.use_cases.integrations.sync_timetac_time_entries import (
    SyncTimeTacTimeEntriesUseCase,
)
from ...application.use_cases.integrations.base import error_message
from ...application.use_cases.maintenance.cleanup_sync_logs import CleanupSyncLogsUseCase
from ...core.config import settings
from ...core.observability import get_logger
from ..deps import (
    CredentialsRepositoryDep,
    get_cleanup_sync_logs_use_case,
    get_sync_asana_projects_use_case,
    get_sync_timetac_absences_use_case,
    get_sync_timetac_time_entries_use_case,
    verify_cron_secret,
)

logger = get_logger(__name__)

router = APIRouter(prefix="/cron", dependencies=[Depends(verify_cron_secret)])


class TenantSyncResult(BaseModel):
    tenant_id: UUID
    success: bool = True
    syncs: dict[str, dict[str, Any]] = Field(default_factory=dict)
    errors: list[str] = Field(default_factory=list)


class CronSyncResponse(BaseModel):
    message: str
    synced: int = 0
    successful: int = 0
    failed: int = 0
    results: list[TenantSyncResult] = Field(default_factory=list)


class CleanupResponse(BaseModel):
    message: str
    deleted: int
    retention_days: int


def _summary(results: list[TenantSyncResult]) -> CronSyncResponse:
    successful = sum(1 for result in results if result.success)
    return CronSyncResponse(
        message=f"Sync completed for {successful}/{len(results)} tenants",
        synced=len(results),
        successful=successful,
        failed=len(results) - successful,
        results=results,
    )


async def _run_step(
    tenant_result: TenantSyncResult, name: str, use_case: Any
) -> None:
    try:
        result = await use_case.execute(tenant_result.tenant_id)
    except Exception as e:
        logger.error(
            "Tenant sync raised",
            tenant_id=str(tenant_result.tenant_id),
            step=name,
            error=str(e),
            exc_info=True,
        )
        tenant_result.success = False
        tenant_result.errors.append(f"[{name}] {error_message(e)}")
        return

    tenant_result.syncs[name] = result.model_dump(exclude={"errors"})
    tenant_result.errors.extend(f"[{name}] {message}" for message in result.errors)
    if not result.success:
        tenant_result.success = False


@router.get("/sync-asana", response_model=CronSyncResponse)
async def sync_asana(
    credentials: CredentialsRepositoryDep,
    use_case: Annotated[SyncAsanaProjectsUseCase, Depends(get_sync_asana_projects_use_case)],
) -> CronSyncResponse:
    """Run the Asana project sync for every tenant with an Asana connection."""
    tenant_ids = await credentials.find_tenant_ids_with_asana()
    if not tenant_ids:
        return CronSyncResponse(message="No tenants with Asana connection found")

    results = []
    for tenant_id in tenant_ids:
        tenant_result = TenantSyncResult(tenant_id=tenant_id)
        await _run_step(tenant_result, "projects", use_case)
        results.append(tenant_result)

    response = _summary(results)
    logger.info("Asana cron finished", synced=response.synced, failed=response.failed)
    return response


@router.get("/sync-timetac", response_model=CronSyncResponse)
async def sync_timetac(
    credentials: CredentialsRepositoryDep,
    absences: Annotated[
        SyncTimeTacAbsencesUseCase, Depends(get_sync_timetac_absences_use_case)
    ],
    time_entries: Annotated[
        SyncTimeTacTimeEntriesUseCase, Depends(get_sync_timetac_time_entries_use_case)
    ],
) -> CronSyncResponse:
    """Run absence and then time entry sync for every tenant with a TimeTac key."""
    tenant_ids = await credentials.find_tenant_ids_with_timetac()
    if not tenant_ids:
        return CronSyncResponse(message="No tenants with TimeTac connection found")

    results = []
    for tenant_id in tenant_ids:
        tenant_result = TenantSyncResult(tenant_id=tenant_id)
        await _run_step(tenant_result, "absences", absences)
        await _run_step(tenant_result, "time_entries", time_entries)
        results.append(tenant_result)

    response = _summary(results)
    logger.info("TimeTac cron finished", synced=response.synced, failed=response.failed)
    return response


@router.get("/cleanup-sync-logs", response_model=CleanupResponse)
async def cleanup_sync_logs(
    use_case: Annotated[CleanupSyncLogsUseCase, Depends(get_cleanup_sync_logs_use_case)],
) -> CleanupResponse:
    """Delete sync logs older than the retention period."""
    deleted = await use_case.execute()
    return CleanupResponse(
        message=f"Deleted {deleted} sync logs",
        deleted=deleted,
        retention_days=settings.SYNC_LOG_RETENTION_DAYS,
    )
