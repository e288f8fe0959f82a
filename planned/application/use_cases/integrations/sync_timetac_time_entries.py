"""TimeTac time entry synchronization (IST hours)."""

from datetime import timedelta
from uuid import UUID

from ....core.config import settings
from ....core.observability import get_logger
from ....domain.planning.entities.time_entry import TimeEntry
from ....domain.planning.repositories.credentials_repository import (
    IntegrationCredentialsRepository,
)
from ....domain.planning.repositories.integration_mapping_repository import (
    IntegrationMappingRepository,
)
from ....domain.planning.repositories.sync_log_repository import SyncLogRepository
from ....domain.planning.repositories.time_entry_repository import TimeEntryRepository
from ....domain.planning.repositories.user_repository import UserRepository
from ....domain.planning.value_objects.enums import (
    IntegrationService,
    MappingType,
    SyncOperation,
)
from ....domain.planning.value_objects.integration import DateRange
from ....domain.shared.base import utcnow
from ...dtos.sync_dtos import SyncTimeEntriesResult
from ...ports.encryption_service import IEncryptionService
from ...ports.timetac_service import ITimeTacService
from .base import BaseSyncUseCase, SyncPreconditionError, error_message
from .sync_timetac_absences import (
    LOG_NO_USERS_MAPPED,
    MSG_NO_USERS_MAPPED,
    MSG_TIMETAC_NOT_CONNECTED,
)

logger = get_logger(__name__)


class SyncTimeTacTimeEntriesUseCase(BaseSyncUseCase):
    """
    Imports TimeTac time entries of mapped users.

    Entries are upserted by (timetac_id, tenant_id). The TimeTac project of an
    entry is resolved to a ProjectPhase through the integration mapping table
    when a mapping repository is supplied.
    """

    service = IntegrationService.TIMETAC
    operation = SyncOperation.SYNC_TIME_ENTRIES

    def __init__(
        self,
        timetac_service: ITimeTacService,
        time_entry_repository: TimeEntryRepository,
        user_repository: UserRepository,
        credentials_repository: IntegrationCredentialsRepository,
        sync_log_repository: SyncLogRepository,
        encryption_service: IEncryptionService,
        mapping_repository: IntegrationMappingRepository | None = None,
    ) -> None:
        super().__init__(sync_log_repository)
        self._timetac = timetac_service
        self._time_entries = time_entry_repository
        self._users = user_repository
        self._credentials = credentials_repository
        self._encryption = encryption_service
        self._mappings = mapping_repository

    async def execute(
        self, tenant_id: UUID, date_range: DateRange | None = None
    ) -> SyncTimeEntriesResult:
        """
        Run one time entry sync for a tenant.

        Args:
            tenant_id: Tenant to synchronize
            date_range: Window to import, defaults to the last 7 days
        """
        result = SyncTimeEntriesResult()
        return await self._execute_logged(
            tenant_id, result, lambda: self._sync(tenant_id, date_range, result)
        )

    async def _project_phase_map(self, tenant_id: UUID) -> dict[str, UUID]:
        if self._mappings is None:
            return {}
        return await self._mappings.get_as_map(
            tenant_id, IntegrationService.TIMETAC, MappingType.PROJECT
        )

    async def _sync(
        self,
        tenant_id: UUID,
        date_range: DateRange | None,
        result: SyncTimeEntriesResult,
    ) -> dict | None:
        credentials = await self._credentials.find_by_tenant_id(tenant_id)
        if credentials is None or not credentials.timetac_api_token:
            raise SyncPreconditionError(MSG_TIMETAC_NOT_CONNECTED)

        api_key = self._encryption.decrypt(credentials.timetac_api_token)

        links = await self._users.find_by_tenant_with_timetac_id(tenant_id)
        user_map = {link.timetac_id: link.user_id for link in links}
        if not user_map:
            result.errors.append(MSG_NO_USERS_MAPPED)
            return {"message": LOG_NO_USERS_MAPPED}

        phase_map = await self._project_phase_map(tenant_id)

        if date_range is None:
            today = utcnow().date()
            date_range = DateRange(
                start=today - timedelta(days=settings.TIME_ENTRY_SYNC_DAYS_BACK), end=today
            )

        remote_entries = await self._timetac.get_time_entries(
            api_key, date_range.start, date_range.end
        )
        logger.info("Fetched TimeTac time entries", count=len(remote_entries))

        for remote in remote_entries:
            user_id = user_map.get(str(remote.user_id))
            if user_id is None:
                result.skipped += 1
                continue
            try:
                phase_id = (
                    phase_map.get(str(remote.project_id))
                    if remote.project_id is not None
                    else None
                )
                _, created = await self._time_entries.upsert_by_timetac_id(
                    TimeEntry(
                        tenant_id=tenant_id,
                        user_id=user_id,
                        date=remote.date,
                        hours=remote.duration_hours,
                        timetac_id=str(remote.id),
                        project_phase_id=phase_id,
                        description=remote.note,
                    )
                )
                if created:
                    result.created += 1
                else:
                    result.updated += 1
            except Exception as e:
                self._record_item_error(result, f"TimeEntry {remote.id}: {error_message(e)}")
        return None
