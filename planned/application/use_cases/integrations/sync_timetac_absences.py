"""TimeTac absence synchronization with conflict detection."""

from datetime import timedelta
from uuid import UUID

from ....core.config import settings
from ....core.observability import get_logger
from ....domain.planning.entities.absence import Absence
from ....domain.planning.repositories.absence_repository import AbsenceRepository
from ....domain.planning.repositories.credentials_repository import (
    IntegrationCredentialsRepository,
)
from ....domain.planning.repositories.sync_log_repository import SyncLogRepository
from ....domain.planning.repositories.user_repository import UserRepository
from ....domain.planning.value_objects.enums import (
    AbsenceType,
    IntegrationService,
    SyncOperation,
)
from ....domain.planning.value_objects.integration import DateRange
from ....domain.shared.base import utcnow
from ...dtos.sync_dtos import SyncAbsencesResult
from ...dtos.timetac_dtos import TimeTacAbsence
from ...ports.encryption_service import IEncryptionService
from ...ports.timetac_service import ITimeTacService
from ...services.absence_conflict_service import AbsenceConflictService
from .base import BaseSyncUseCase, SyncPreconditionError, error_message

logger = get_logger(__name__)

MSG_TIMETAC_NOT_CONNECTED = "TimeTac ist nicht verbunden"
MSG_NO_USERS_MAPPED = "Keine User mit TimeTac-Zuordnung gefunden"
LOG_NO_USERS_MAPPED = "Keine User zugeordnet"


class SyncTimeTacAbsencesUseCase(BaseSyncUseCase):
    """
    Imports TimeTac absences of mapped users and records allocation conflicts.

    Absences are matched by TimeTac id, so re-running is safe. Every absence
    created or updated in a run is re-checked for conflicts.
    """

    service = IntegrationService.TIMETAC
    operation = SyncOperation.SYNC_ABSENCES

    def __init__(
        self,
        timetac_service: ITimeTacService,
        absence_repository: AbsenceRepository,
        user_repository: UserRepository,
        credentials_repository: IntegrationCredentialsRepository,
        sync_log_repository: SyncLogRepository,
        encryption_service: IEncryptionService,
        conflict_service: AbsenceConflictService | None = None,
        absence_type_mapping: dict[int, AbsenceType] | None = None,
    ) -> None:
        super().__init__(sync_log_repository)
        self._timetac = timetac_service
        self._absences = absence_repository
        self._users = user_repository
        self._credentials = credentials_repository
        self._encryption = encryption_service
        self._conflicts = conflict_service
        self._absence_type_mapping = absence_type_mapping

    async def execute(
        self, tenant_id: UUID, date_range: DateRange | None = None
    ) -> SyncAbsencesResult:
        """
        Run one absence sync for a tenant.

        Args:
            tenant_id: Tenant to synchronize
            date_range: Window to import, defaults to today plus 90 days
        """
        result = SyncAbsencesResult()
        return await self._execute_logged(
            tenant_id, result, lambda: self._sync(tenant_id, date_range, result)
        )

    async def _sync(
        self, tenant_id: UUID, date_range: DateRange | None, result: SyncAbsencesResult
    ) -> dict | None:
        credentials = await self._credentials.find_by_tenant_id(tenant_id)
        if credentials is None or not credentials.timetac_api_token:
            raise SyncPreconditionError(MSG_TIMETAC_NOT_CONNECTED)

        api_key = self._encryption.decrypt(credentials.timetac_api_token)

        links = await self._users.find_by_tenant_with_timetac_id(tenant_id)
        user_map = {link.timetac_id: link.user_id for link in links}
        if not user_map:
            result.errors.append(MSG_NO_USERS_MAPPED)
            logger.info("No users with TimeTac mapping, nothing to import")
            return {"message": LOG_NO_USERS_MAPPED}

        if date_range is None:
            today = utcnow().date()
            date_range = DateRange(
                start=today, end=today + timedelta(days=settings.ABSENCE_SYNC_DAYS_AHEAD)
            )

        remote_absences = await self._timetac.get_absences(
            api_key, date_range.start, date_range.end
        )
        logger.info("Fetched TimeTac absences", count=len(remote_absences))

        synced: list[Absence] = []
        for remote in remote_absences:
            user_id = user_map.get(str(remote.user_id))
            if user_id is None:
                result.skipped += 1
                continue
            try:
                synced.append(await self._upsert_absence(tenant_id, user_id, remote, result))
            except Exception as e:
                self._record_item_error(result, f"Abwesenheit {remote.id}: {error_message(e)}")

        if self._conflicts is not None:
            for absence in synced:
                try:
                    conflicts = await self._conflicts.detect_and_record_conflicts(absence)
                    result.conflicts_detected += len(conflicts)
                except Exception as e:
                    self._record_item_error(
                        result,
                        f"Konflikt-Erkennung für Abwesenheit {absence.id}: {error_message(e)}",
                    )
        return None

    async def _upsert_absence(
        self,
        tenant_id: UUID,
        user_id: UUID,
        remote: TimeTacAbsence,
        result: SyncAbsencesResult,
    ) -> Absence:
        absence_type = self._timetac.map_absence_type(
            remote.absence_type_id, self._absence_type_mapping
        )
        existing = await self._absences.find_by_timetac_id(str(remote.id), tenant_id)

        if existing is None:
            saved = await self._absences.save(
                Absence(
                    tenant_id=tenant_id,
                    user_id=user_id,
                    type=absence_type,
                    start_date=remote.date_from,
                    end_date=remote.date_to,
                    timetac_id=str(remote.id),
                )
            )
            result.created += 1
            return saved

        updated = await self._absences.update(
            existing.with_type(absence_type).with_date_range(remote.date_from, remote.date_to)
        )
        result.updated += 1
        return updated
