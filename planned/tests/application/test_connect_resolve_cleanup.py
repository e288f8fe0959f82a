"""Tests for TimeTac connect, conflict resolution and sync log cleanup."""

from datetime import date, datetime, timedelta, timezone
from uuid import uuid4

import pytest
from freezegun import freeze_time

from planned.application.common import ErrorCodes
from planned.application.use_cases.conflicts import (
    ResolveConflictRequest,
    ResolveConflictUseCase,
)
from planned.application.use_cases.integrations import ConnectTimeTacUseCase
from planned.application.use_cases.maintenance import CleanupSyncLogsUseCase
from planned.domain.planning.entities import AbsenceConflict, SyncLog
from planned.domain.planning.value_objects import (
    AbsenceType,
    ConflictResolution,
    IntegrationService,
)
from planned.domain.shared.exceptions import RepositoryError, ValidationError
from planned.tests.utils.fakes import InMemoryCredentialsRepository


class TestConnectTimeTac:
    """Test storing a validated TimeTac API key."""

    @pytest.mark.asyncio
    async def test_valid_key_is_stored_encrypted(self, timetac, encryption, tenant_id):
        repository = InMemoryCredentialsRepository()
        use_case = ConnectTimeTacUseCase(timetac, repository, encryption)

        result = await use_case.execute(tenant_id, "valid-key")

        assert result.account_id == "4711"
        assert result.account_name == "Holzbau Muster GmbH"
        stored = repository.items[tenant_id]
        assert stored.timetac_api_token == "enc:valid-key"
        assert stored.timetac_account_id == "4711"

    @pytest.mark.asyncio
    async def test_reconnect_keeps_asana_fields(
        self, timetac, encryption, asana_credentials, tenant_id
    ):
        repository = InMemoryCredentialsRepository(asana_credentials)
        use_case = ConnectTimeTacUseCase(timetac, repository, encryption)

        await use_case.execute(tenant_id, "valid-key")

        stored = repository.items[tenant_id]
        assert stored.asana_access_token == asana_credentials.asana_access_token
        assert stored.has_timetac_connection

    @pytest.mark.asyncio
    async def test_invalid_key_raises_and_stores_nothing(self, timetac, encryption, tenant_id):
        repository = InMemoryCredentialsRepository()
        use_case = ConnectTimeTacUseCase(timetac, repository, encryption)

        with pytest.raises(ValidationError) as exc_info:
            await use_case.execute(tenant_id, "wrong")

        assert exc_info.value.message == "Ungültiger API-Key"
        assert exc_info.value.code == ErrorCodes.TIMETAC_INVALID_API_KEY
        assert repository.calls_to("upsert") == []
        assert timetac.calls_to("get_account") == []


@pytest.fixture
async def open_conflict(conflicts, allocations, make_allocation, tenant_id, user_id):
    allocation = await allocations.save(make_allocation(date(2024, 3, 5)))
    conflict = AbsenceConflict(
        tenant_id=tenant_id,
        allocation_id=allocation.id,
        absence_id=uuid4(),
        user_id=user_id,
        date=allocation.date,
        absence_type=AbsenceType.VACATION,
    )
    await conflicts.save_many([conflict])
    return conflict


class TestResolveConflict:
    """Test the three ways of resolving an absence conflict."""

    @pytest.mark.asyncio
    async def test_delete_removes_allocation(self, conflicts, allocations, open_conflict, user_id):
        use_case = ResolveConflictUseCase(conflicts, allocations)

        result = await use_case.execute(
            ResolveConflictRequest(open_conflict.id, ConflictResolution.DELETED, user_id)
        )

        assert result.success
        assert result.data.resolution == ConflictResolution.DELETED
        assert result.data.resolved_by == user_id
        assert open_conflict.allocation_id not in allocations.items

    @pytest.mark.asyncio
    async def test_move_requires_new_date(self, conflicts, allocations, open_conflict, user_id):
        use_case = ResolveConflictUseCase(conflicts, allocations)

        result = await use_case.execute(
            ResolveConflictRequest(open_conflict.id, ConflictResolution.MOVED, user_id)
        )

        assert result.code == ErrorCodes.NEW_DATE_REQUIRED
        assert not conflicts.items[open_conflict.id].is_resolved

    @pytest.mark.asyncio
    async def test_move_changes_allocation_date(
        self, conflicts, allocations, open_conflict, user_id
    ):
        use_case = ResolveConflictUseCase(conflicts, allocations)

        result = await use_case.execute(
            ResolveConflictRequest(
                open_conflict.id, ConflictResolution.MOVED, user_id, new_date=date(2024, 3, 12)
            )
        )

        assert result.success
        assert allocations.items[open_conflict.allocation_id].date == date(2024, 3, 12)

    @pytest.mark.asyncio
    async def test_ignore_keeps_allocation(self, conflicts, allocations, open_conflict, user_id):
        use_case = ResolveConflictUseCase(conflicts, allocations)

        result = await use_case.execute(
            ResolveConflictRequest(open_conflict.id, ConflictResolution.IGNORED, user_id)
        )

        assert result.success
        assert allocations.items[open_conflict.allocation_id].date == date(2024, 3, 5)
        assert allocations.calls_to("delete") == []

    @pytest.mark.asyncio
    async def test_already_resolved(self, conflicts, allocations, open_conflict, user_id):
        use_case = ResolveConflictUseCase(conflicts, allocations)
        request = ResolveConflictRequest(open_conflict.id, ConflictResolution.IGNORED, user_id)
        await use_case.execute(request)

        result = await use_case.execute(request)

        assert result.code == ErrorCodes.CONFLICT_ALREADY_RESOLVED

    @pytest.mark.asyncio
    async def test_unknown_conflict(self, conflicts, allocations, user_id):
        result = await ResolveConflictUseCase(conflicts, allocations).execute(
            ResolveConflictRequest(uuid4(), ConflictResolution.IGNORED, user_id)
        )

        assert result.code == ErrorCodes.CONFLICT_NOT_FOUND

    @pytest.mark.asyncio
    async def test_repository_failure(self, conflicts, allocations, open_conflict, user_id):
        allocations.failures["delete"] = RepositoryError("db down", "delete")

        result = await ResolveConflictUseCase(conflicts, allocations).execute(
            ResolveConflictRequest(open_conflict.id, ConflictResolution.DELETED, user_id)
        )

        assert result.code == ErrorCodes.RESOLVE_CONFLICT_FAILED
        assert not conflicts.items[open_conflict.id].is_resolved


class TestCleanupSyncLogs:
    @pytest.mark.asyncio
    @freeze_time("2024-06-30 12:00:00")
    async def test_deletes_logs_older_than_retention(self, sync_logs, tenant_id):
        now = datetime(2024, 6, 30, 12, tzinfo=timezone.utc)
        for age in (1, 29, 31, 90):
            await sync_logs.create(
                SyncLog(
                    tenant_id=tenant_id,
                    service=IntegrationService.TIMETAC,
                    operation="sync_absences",
                    started_at=now - timedelta(days=age),
                )
            )

        deleted = await CleanupSyncLogsUseCase(sync_logs, retention_days=30).execute()

        assert deleted == 2
        assert len(sync_logs.items) == 2
        assert sync_logs.calls_to("delete_older_than")[-1] == (now - timedelta(days=30),)
