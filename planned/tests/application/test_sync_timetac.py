"""Tests for the TimeTac absence and time entry syncs."""

from datetime import date, timedelta
from uuid import uuid4

import pytest
from freezegun import freeze_time

from planned.application.dtos import TimeTacAbsence, TimeTacTimeEntry
from planned.application.services import AbsenceConflictService
from planned.application.use_cases.integrations import (
    SyncTimeTacAbsencesUseCase,
    SyncTimeTacTimeEntriesUseCase,
)
from planned.application.use_cases.integrations.sync_timetac_absences import (
    LOG_NO_USERS_MAPPED,
    MSG_NO_USERS_MAPPED,
    MSG_TIMETAC_NOT_CONNECTED,
)
from planned.domain.planning.entities import Absence, IntegrationMapping, TimeEntry
from planned.domain.planning.value_objects import (
    AbsenceType,
    DateRange,
    IntegrationService,
    MappingType,
    SyncStatus,
)
from planned.domain.shared.exceptions import InvalidApiKeyError, RepositoryError
from planned.tests.utils.fakes import InMemoryCredentialsRepository, InMemoryUserRepository

WINDOW = DateRange(start=date(2024, 3, 1), end=date(2024, 3, 31))


@pytest.fixture
def credentials_repo(timetac_credentials) -> InMemoryCredentialsRepository:
    return InMemoryCredentialsRepository(timetac_credentials)


@pytest.fixture
def conflict_service(allocations, conflicts) -> AbsenceConflictService:
    return AbsenceConflictService(allocations, conflicts)


@pytest.fixture
def absence_sync(
    timetac, absences, users, credentials_repo, sync_logs, encryption, conflict_service
) -> SyncTimeTacAbsencesUseCase:
    return SyncTimeTacAbsencesUseCase(
        timetac_service=timetac,
        absence_repository=absences,
        user_repository=users,
        credentials_repository=credentials_repo,
        sync_log_repository=sync_logs,
        encryption_service=encryption,
        conflict_service=conflict_service,
    )


@pytest.fixture
def entry_sync(
    timetac, time_entries, users, credentials_repo, sync_logs, encryption, mappings
) -> SyncTimeTacTimeEntriesUseCase:
    return SyncTimeTacTimeEntriesUseCase(
        timetac_service=timetac,
        time_entry_repository=time_entries,
        user_repository=users,
        credentials_repository=credentials_repo,
        sync_log_repository=sync_logs,
        encryption_service=encryption,
        mapping_repository=mappings,
    )


def _remote_absence(absence_id=1, user_id=42, type_id=1, start=date(2024, 3, 4), end=None):
    return TimeTacAbsence(
        id=absence_id,
        user_id=user_id,
        absence_type_id=type_id,
        date_from=start,
        date_to=end or start,
    )


def _remote_entry(entry_id=1, user_id=42, hours=7.5, project_id=None):
    return TimeTacTimeEntry(
        id=entry_id,
        user_id=user_id,
        date=date(2024, 3, 4),
        duration_hours=hours,
        project_id=project_id,
    )


class TestSyncTimeTacAbsences:
    """Test absence import and conflict detection."""

    @pytest.mark.asyncio
    async def test_creates_absences_of_mapped_users(
        self, absence_sync, timetac, absences, sync_logs, tenant_id, user_id
    ):
        timetac.absences = [
            _remote_absence(1, type_id=2, start=date(2024, 3, 4), end=date(2024, 3, 6)),
            _remote_absence(2, user_id=99),
        ]

        result = await absence_sync.execute(tenant_id, WINDOW)

        assert result.success
        assert (result.created, result.updated, result.skipped) == (1, 0, 1)
        [absence] = absences.items.values()
        assert absence.user_id == user_id
        assert absence.type == AbsenceType.SICK
        assert absence.timetac_id == "1"
        assert absence.end_date == date(2024, 3, 6)
        assert timetac.calls_to("get_absences") == [("timetac-key", WINDOW.start, WINDOW.end)]
        assert sync_logs.only.status == SyncStatus.SUCCESS
        assert sync_logs.only.operation == "sync_absences"

    @pytest.mark.asyncio
    async def test_unknown_absence_type_becomes_other(
        self, absence_sync, timetac, absences, tenant_id
    ):
        timetac.absences = [_remote_absence(type_id=77)]

        await absence_sync.execute(tenant_id, WINDOW)

        [absence] = absences.items.values()
        assert absence.type == AbsenceType.OTHER

    @pytest.mark.asyncio
    async def test_rerun_updates_instead_of_duplicating(
        self, absence_sync, timetac, absences, tenant_id
    ):
        timetac.absences = [_remote_absence(start=date(2024, 3, 4))]
        await absence_sync.execute(tenant_id, WINDOW)

        timetac.absences = [
            _remote_absence(type_id=4, start=date(2024, 3, 5), end=date(2024, 3, 7))
        ]
        result = await absence_sync.execute(tenant_id, WINDOW)

        assert (result.created, result.updated) == (0, 1)
        [absence] = absences.items.values()
        assert absence.type == AbsenceType.TRAINING
        assert (absence.start_date, absence.end_date) == (date(2024, 3, 5), date(2024, 3, 7))

    @pytest.mark.asyncio
    async def test_detects_conflicts_with_allocations(
        self, absence_sync, timetac, allocations, conflicts, tenant_id, make_allocation
    ):
        allocation = await allocations.save(make_allocation(date(2024, 3, 5)))
        timetac.absences = [_remote_absence(start=date(2024, 3, 4), end=date(2024, 3, 8))]

        first = await absence_sync.execute(tenant_id, WINDOW)
        second = await absence_sync.execute(tenant_id, WINDOW)

        assert first.conflicts_detected == 1
        assert second.conflicts_detected == 0
        [conflict] = conflicts.items.values()
        assert conflict.allocation_id == allocation.id

    @pytest.mark.asyncio
    async def test_only_overlapping_absence_produces_a_conflict(
        self, absence_sync, timetac, allocations, absences, conflicts, tenant_id, make_allocation
    ):
        allocation = await allocations.save(make_allocation(date(2024, 3, 5)))
        timetac.absences = [
            _remote_absence(1, start=date(2024, 3, 4), end=date(2024, 3, 6)),
            _remote_absence(2, start=date(2024, 3, 18), end=date(2024, 3, 20)),
        ]

        result = await absence_sync.execute(tenant_id, WINDOW)

        assert result.created == 2
        assert result.conflicts_detected == 1
        [conflict] = conflicts.items.values()
        assert conflict.allocation_id == allocation.id
        overlapping = next(a for a in absences.items.values() if a.timetac_id == "1")
        assert conflict.absence_id == overlapping.id

    @pytest.mark.asyncio
    async def test_conflict_failure_is_an_item_error(
        self, absence_sync, timetac, allocations, absences, tenant_id
    ):
        allocations.failures["find_by_user_and_date_range"] = RepositoryError("timeout", "find")
        timetac.absences = [_remote_absence()]

        result = await absence_sync.execute(tenant_id, WINDOW)

        assert result.success
        assert result.created == 1
        [absence] = absences.items.values()
        assert result.errors == [f"Konflikt-Erkennung für Abwesenheit {absence.id}: timeout"]

    @pytest.mark.asyncio
    async def test_item_failure_keeps_run_successful(
        self, absence_sync, timetac, absences, sync_logs, tenant_id
    ):
        absences.failures["save"] = RepositoryError("constraint violated", "save")
        timetac.absences = [_remote_absence(7)]

        result = await absence_sync.execute(tenant_id, WINDOW)

        assert result.success
        assert result.errors == ["Abwesenheit 7: constraint violated"]
        assert sync_logs.only.status == SyncStatus.SUCCESS
        assert sync_logs.only.result["error_count"] == 1

    @pytest.mark.asyncio
    async def test_no_mapped_users_is_a_soft_success(
        self, timetac, absences, credentials_repo, sync_logs, encryption, tenant_id
    ):
        use_case = SyncTimeTacAbsencesUseCase(
            timetac, absences, InMemoryUserRepository(), credentials_repo, sync_logs, encryption
        )

        result = await use_case.execute(tenant_id, WINDOW)

        assert result.success
        assert result.errors == [MSG_NO_USERS_MAPPED]
        assert sync_logs.only.status == SyncStatus.SUCCESS
        assert sync_logs.only.result == {"message": LOG_NO_USERS_MAPPED}
        assert timetac.calls_to("get_absences") == []

    @pytest.mark.asyncio
    async def test_not_connected(
        self, timetac, absences, users, sync_logs, encryption, tenant_id
    ):
        use_case = SyncTimeTacAbsencesUseCase(
            timetac, absences, users, InMemoryCredentialsRepository(), sync_logs, encryption
        )

        result = await use_case.execute(tenant_id)

        assert not result.success
        assert result.errors == [MSG_TIMETAC_NOT_CONNECTED]
        assert sync_logs.only.status == SyncStatus.FAILED

    @pytest.mark.asyncio
    async def test_rejected_key_fails_the_run(self, absence_sync, timetac, sync_logs, tenant_id):
        timetac.failures["get_absences"] = InvalidApiKeyError()

        result = await absence_sync.execute(tenant_id, WINDOW)

        assert not result.success
        assert result.errors == ["Ungültiger TimeTac API-Key"]
        assert sync_logs.only.error_message == "Ungültiger TimeTac API-Key"

    @pytest.mark.asyncio
    @freeze_time("2024-03-01")
    async def test_default_window_looks_90_days_ahead(self, absence_sync, timetac, tenant_id):
        await absence_sync.execute(tenant_id)

        [(_, start, end)] = timetac.calls_to("get_absences")
        assert start == date(2024, 3, 1)
        assert end == date(2024, 3, 1) + timedelta(days=90)

    @pytest.mark.asyncio
    async def test_custom_absence_type_mapping(
        self, timetac, absences, users, credentials_repo, sync_logs, encryption, tenant_id
    ):
        use_case = SyncTimeTacAbsencesUseCase(
            timetac,
            absences,
            users,
            credentials_repo,
            sync_logs,
            encryption,
            absence_type_mapping={1: AbsenceType.HOLIDAY},
        )
        timetac.absences = [_remote_absence(type_id=1)]

        await use_case.execute(tenant_id, WINDOW)

        [absence] = absences.items.values()
        assert absence.type == AbsenceType.HOLIDAY


class TestSyncTimeTacTimeEntries:
    """Test IST hour import."""

    @pytest.mark.asyncio
    async def test_creates_and_updates_entries(
        self, entry_sync, timetac, time_entries, sync_logs, tenant_id, user_id
    ):
        timetac.time_entries = [_remote_entry(1, hours=7.5), _remote_entry(2, user_id=99)]
        first = await entry_sync.execute(tenant_id, WINDOW)

        timetac.time_entries = [_remote_entry(1, hours=8.0)]
        second = await entry_sync.execute(tenant_id, WINDOW)

        assert (first.created, first.updated, first.skipped) == (1, 0, 1)
        assert (second.created, second.updated) == (0, 1)
        [entry] = time_entries.items.values()
        assert entry.user_id == user_id
        assert entry.hours == 8.0
        assert entry.timetac_id == "1"
        assert all(log.operation == "sync_time_entries" for log in sync_logs.items.values())

    @pytest.mark.asyncio
    async def test_resolves_phase_through_project_mapping(
        self, entry_sync, timetac, time_entries, mappings, tenant_id
    ):
        phase_id = uuid4()
        await mappings.upsert(
            IntegrationMapping(
                tenant_id=tenant_id,
                service=IntegrationService.TIMETAC,
                mapping_type=MappingType.PROJECT,
                external_id="500",
                internal_id=phase_id,
            )
        )
        timetac.time_entries = [
            _remote_entry(1, project_id=500),
            _remote_entry(2, project_id=501),
            _remote_entry(3),
        ]

        await entry_sync.execute(tenant_id, WINDOW)

        by_id = {entry.timetac_id: entry for entry in time_entries.items.values()}
        assert by_id["1"].project_phase_id == phase_id
        assert by_id["2"].project_phase_id is None
        assert by_id["3"].project_phase_id is None

    @pytest.mark.asyncio
    async def test_invalid_entry_is_an_item_error(
        self, entry_sync, timetac, time_entries, tenant_id
    ):
        timetac.time_entries = [_remote_entry(1, hours=30), _remote_entry(2)]

        result = await entry_sync.execute(tenant_id, WINDOW)

        assert result.success
        assert result.created == 1
        [error] = result.errors
        assert error.startswith("TimeEntry 1: ")

    @pytest.mark.asyncio
    async def test_no_mapped_users_is_a_soft_success(
        self, timetac, time_entries, credentials_repo, sync_logs, encryption, tenant_id
    ):
        use_case = SyncTimeTacTimeEntriesUseCase(
            timetac,
            time_entries,
            InMemoryUserRepository(),
            credentials_repo,
            sync_logs,
            encryption,
        )

        result = await use_case.execute(tenant_id)

        assert result.success
        assert result.errors == [MSG_NO_USERS_MAPPED]
        assert timetac.calls_to("get_time_entries") == []

    @pytest.mark.asyncio
    @freeze_time("2024-03-10")
    async def test_default_window_looks_7_days_back(self, entry_sync, timetac, tenant_id):
        await entry_sync.execute(tenant_id)

        [(_, start, end)] = timetac.calls_to("get_time_entries")
        assert (start, end) == (date(2024, 3, 3), date(2024, 3, 10))

    @pytest.mark.asyncio
    async def test_works_without_mapping_repository(
        self, timetac, time_entries, users, credentials_repo, sync_logs, encryption, tenant_id
    ):
        use_case = SyncTimeTacTimeEntriesUseCase(
            timetac, time_entries, users, credentials_repo, sync_logs, encryption
        )
        timetac.time_entries = [_remote_entry(1, project_id=500)]

        result = await use_case.execute(tenant_id, WINDOW)

        assert result.created == 1
        [entry] = time_entries.items.values()
        assert isinstance(entry, TimeEntry)
        assert entry.project_phase_id is None


class TestAbsenceTenantScoping:
    @pytest.mark.asyncio
    async def test_same_timetac_id_in_other_tenant_is_a_new_absence(
        self, absence_sync, timetac, absences, tenant_id, user_id
    ):
        await absences.save(
            Absence(
                tenant_id=uuid4(),
                user_id=user_id,
                type=AbsenceType.VACATION,
                start_date=date(2024, 3, 4),
                end_date=date(2024, 3, 4),
                timetac_id="1",
            )
        )
        timetac.absences = [_remote_absence(1)]

        result = await absence_sync.execute(tenant_id, WINDOW)

        assert result.created == 1
        assert len(absences.items) == 2
