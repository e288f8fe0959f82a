from datetime import date, timedelta
from uuid import UUID, uuid4

import pytest

from planned.domain.planning.entities import (
    Allocation,
    IntegrationCredentials,
    Project,
    ProjectPhase,
)
from planned.domain.planning.value_objects import ProjectStatus, TimeTacUserLink
from planned.domain.shared.base import utcnow
from planned.tests.utils.fakes import (
    FakeAsanaService,
    FakeEncryptionService,
    FakeTimeTacService,
    InMemoryAbsenceRepository,
    InMemoryAllocationRepository,
    InMemoryConflictRepository,
    InMemoryCredentialsRepository,
    InMemoryMappingRepository,
    InMemoryProjectPhaseRepository,
    InMemoryProjectRepository,
    InMemorySyncLogRepository,
    InMemoryTimeEntryRepository,
    InMemoryUserRepository,
)


@pytest.fixture
def tenant_id() -> UUID:
    return uuid4()


@pytest.fixture
def user_id() -> UUID:
    return uuid4()


@pytest.fixture
def encryption() -> FakeEncryptionService:
    return FakeEncryptionService()


@pytest.fixture
def asana() -> FakeAsanaService:
    return FakeAsanaService()


@pytest.fixture
def timetac() -> FakeTimeTacService:
    return FakeTimeTacService()


@pytest.fixture
def sync_logs() -> InMemorySyncLogRepository:
    return InMemorySyncLogRepository()


@pytest.fixture
def projects() -> InMemoryProjectRepository:
    return InMemoryProjectRepository()


@pytest.fixture
def phases(projects: InMemoryProjectRepository) -> InMemoryProjectPhaseRepository:
    return InMemoryProjectPhaseRepository(projects=projects)


@pytest.fixture
def absences() -> InMemoryAbsenceRepository:
    return InMemoryAbsenceRepository()


@pytest.fixture
def allocations() -> InMemoryAllocationRepository:
    return InMemoryAllocationRepository()


@pytest.fixture
def conflicts() -> InMemoryConflictRepository:
    return InMemoryConflictRepository()


@pytest.fixture
def time_entries() -> InMemoryTimeEntryRepository:
    return InMemoryTimeEntryRepository()


@pytest.fixture
def mappings() -> InMemoryMappingRepository:
    return InMemoryMappingRepository()


@pytest.fixture
def asana_credentials(tenant_id: UUID) -> IntegrationCredentials:
    """Connected Asana tenant with a token valid for another hour."""
    return IntegrationCredentials(
        tenant_id=tenant_id,
        asana_access_token="enc:access-token",
        asana_refresh_token="enc:refresh-token",
        asana_token_expires_at=utcnow() + timedelta(hours=1),
        asana_workspace_id="ws-1",
        asana_soll_produktion_field_id="cf-prod",
        asana_soll_montage_field_id="cf-mont",
        asana_project_number_field_id="cf-number",
        asana_phase_budget_hours_field_id="cf-budget",
    )


@pytest.fixture
def timetac_credentials(tenant_id: UUID) -> IntegrationCredentials:
    return IntegrationCredentials(
        tenant_id=tenant_id,
        timetac_account_id="4711",
        timetac_api_token="enc:timetac-key",
    )


@pytest.fixture
def users(tenant_id: UUID, user_id: UUID) -> InMemoryUserRepository:
    """One local user mapped to TimeTac user 42."""
    return InMemoryUserRepository(
        {tenant_id: [TimeTacUserLink(user_id=user_id, timetac_id="42")]}
    )


@pytest.fixture
def linked_project(tenant_id: UUID) -> Project:
    return Project(
        tenant_id=tenant_id,
        name="Neubau Halle 3",
        status=ProjectStatus.ACTIVE,
        asana_gid="p-1",
        synced_at=utcnow(),
    )


@pytest.fixture
def linked_phase(tenant_id: UUID, linked_project: Project) -> ProjectPhase:
    return ProjectPhase(
        tenant_id=tenant_id,
        project_id=linked_project.id,
        name="Produktion Wände",
        budget_hours=80,
        asana_gid="s-1",
    )


@pytest.fixture
def make_allocation(tenant_id: UUID, user_id: UUID):
    """Factory for user allocations on a given day."""

    def _make(day: date, user: UUID | None = None) -> Allocation:
        return Allocation(
            tenant_id=tenant_id,
            project_phase_id=uuid4(),
            date=day,
            user_id=user or user_id,
            planned_hours=8,
        )

    return _make
