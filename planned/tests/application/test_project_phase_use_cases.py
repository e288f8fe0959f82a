"""Tests for unlinking projects and pushing phase edits to Asana."""

from datetime import date, timedelta
from uuid import uuid4

import pytest

from planned.application.common import ErrorCodes
from planned.application.dtos import UpdateAsanaPhaseRequest
from planned.application.use_cases.integrations import (
    UnlinkProjectUseCase,
    UpdateAsanaPhaseUseCase,
)
from planned.domain.planning.entities import Project, ProjectPhase
from planned.domain.planning.value_objects import ProjectStatus
from planned.domain.shared.base import utcnow
from planned.domain.shared.exceptions import AsanaApiError, RepositoryError
from planned.tests.utils.fakes import InMemoryCredentialsRepository


class TestUnlinkProject:
    """Test detaching a project from Asana."""

    @pytest.mark.asyncio
    async def test_unlinks_linked_project(self, projects, linked_project, tenant_id):
        await projects.save(linked_project)

        result = await UnlinkProjectUseCase(projects).execute(linked_project.id, tenant_id)

        assert result.success
        assert result.data.asana_gid is None
        assert result.data.synced_at is None
        assert result.data.status == ProjectStatus.ACTIVE
        assert projects.items[linked_project.id].asana_gid is None

    @pytest.mark.asyncio
    async def test_unknown_project(self, projects, tenant_id):
        result = await UnlinkProjectUseCase(projects).execute(uuid4(), tenant_id)

        assert not result.success
        assert result.code == ErrorCodes.NOT_FOUND
        assert result.error.message == "Projekt nicht gefunden"

    @pytest.mark.asyncio
    async def test_foreign_tenant(self, projects, linked_project):
        await projects.save(linked_project)

        result = await UnlinkProjectUseCase(projects).execute(linked_project.id, uuid4())

        assert result.code == ErrorCodes.FORBIDDEN
        assert projects.calls_to("update") == []

    @pytest.mark.asyncio
    async def test_not_linked_project_is_not_written(self, projects, tenant_id):
        project = await projects.save(Project(tenant_id=tenant_id, name="Lokal"))

        result = await UnlinkProjectUseCase(projects).execute(project.id, tenant_id)

        assert result.code == ErrorCodes.NOT_LINKED
        assert result.error.message == "Projekt ist nicht mit Asana verknüpft"
        assert projects.calls_to("update") == []

    @pytest.mark.asyncio
    async def test_repository_failure(self, projects, linked_project, tenant_id):
        await projects.save(linked_project)
        projects.failures["update"] = RepositoryError("db down", "update")

        result = await UnlinkProjectUseCase(projects).execute(linked_project.id, tenant_id)

        assert result.code == ErrorCodes.UNLINK_PROJECT_FAILED
        assert result.error.message == "db down"


@pytest.fixture
async def linked(projects, phases, linked_project, linked_phase):
    await projects.save(linked_project)
    await phases.save(linked_phase)
    return linked_project, linked_phase


def _update_use_case(phases, asana, encryption, *credentials):
    repository = InMemoryCredentialsRepository(*credentials)
    return UpdateAsanaPhaseUseCase(phases, repository, asana, encryption), repository


class TestUpdateAsanaPhase:
    """Test local phase edits with best-effort Asana push."""

    @pytest.mark.asyncio
    async def test_pushes_name_and_budget(
        self, linked, phases, asana, encryption, asana_credentials, tenant_id
    ):
        project, phase = linked
        use_case, _ = _update_use_case(phases, asana, encryption, asana_credentials)

        result = await use_case.execute(
            UpdateAsanaPhaseRequest(
                phase_id=phase.id, tenant_id=tenant_id, name="Montage Dach", budget_hours=95
            )
        )

        assert result.success
        assert result.data.synced
        assert result.data.asana_gid == "s-1"
        assert result.data.phase.name == "Montage Dach"
        assert phases.items[phase.id].budget_hours == 95
        assert asana.calls_to("update_section") == [("s-1", "Montage Dach", "access-token")]
        assert asana.calls_to("update_project_custom_field") == [
            ("p-1", "cf-budget", 95, "access-token")
        ]

    @pytest.mark.asyncio
    async def test_dates_stay_local(
        self, linked, phases, asana, encryption, asana_credentials, tenant_id
    ):
        _, phase = linked
        use_case, _ = _update_use_case(phases, asana, encryption, asana_credentials)

        result = await use_case.execute(
            UpdateAsanaPhaseRequest(
                phase_id=phase.id,
                tenant_id=tenant_id,
                start_date=date(2024, 5, 6),
                end_date=date(2024, 5, 17),
            )
        )

        assert result.data.synced
        assert phases.items[phase.id].start_date == date(2024, 5, 6)
        assert asana.calls_to("update_section") == []
        assert asana.calls_to("update_project_custom_field") == []

    @pytest.mark.asyncio
    async def test_unknown_phase(self, phases, asana, encryption, tenant_id):
        use_case, _ = _update_use_case(phases, asana, encryption)

        result = await use_case.execute(
            UpdateAsanaPhaseRequest(phase_id=uuid4(), tenant_id=tenant_id, name="X")
        )

        assert result.code == ErrorCodes.PHASE_NOT_FOUND
        assert result.error.message == "Phase nicht gefunden"

    @pytest.mark.asyncio
    async def test_foreign_tenant(self, linked, phases, asana, encryption):
        _, phase = linked
        use_case, _ = _update_use_case(phases, asana, encryption)

        result = await use_case.execute(
            UpdateAsanaPhaseRequest(phase_id=phase.id, tenant_id=uuid4(), name="X")
        )

        assert result.code == ErrorCodes.UNAUTHORIZED
        assert phases.calls_to("update") == []

    @pytest.mark.asyncio
    async def test_invalid_dates_are_a_validation_error(
        self, linked, phases, asana, encryption, tenant_id
    ):
        _, phase = linked
        use_case, _ = _update_use_case(phases, asana, encryption)

        result = await use_case.execute(
            UpdateAsanaPhaseRequest(
                phase_id=phase.id,
                tenant_id=tenant_id,
                start_date=date(2024, 5, 17),
                end_date=date(2024, 5, 6),
            )
        )

        assert result.code == ErrorCodes.VALIDATION_ERROR
        assert result.error.message == "Enddatum muss nach oder gleich Startdatum sein"
        assert phases.calls_to("update") == []

    @pytest.mark.asyncio
    async def test_unlinked_phase_is_updated_locally_only(
        self, projects, phases, asana, encryption, asana_credentials, tenant_id
    ):
        project = await projects.save(Project(tenant_id=tenant_id, name="Lokal"))
        phase = await phases.save(
            ProjectPhase(tenant_id=tenant_id, project_id=project.id, name="Produktion")
        )
        use_case, _ = _update_use_case(phases, asana, encryption, asana_credentials)

        result = await use_case.execute(
            UpdateAsanaPhaseRequest(phase_id=phase.id, tenant_id=tenant_id, name="Neu")
        )

        assert result.success
        assert not result.data.synced
        assert result.data.asana_gid is None
        assert phases.items[phase.id].name == "Neu"
        assert asana.calls == []

    @pytest.mark.asyncio
    async def test_missing_credentials_degrade_to_not_synced(
        self, linked, phases, asana, encryption, tenant_id
    ):
        _, phase = linked
        use_case, _ = _update_use_case(phases, asana, encryption)

        result = await use_case.execute(
            UpdateAsanaPhaseRequest(phase_id=phase.id, tenant_id=tenant_id, name="Neu")
        )

        assert result.success
        assert not result.data.synced
        assert result.data.asana_gid == "s-1"
        assert phases.items[phase.id].name == "Neu"

    @pytest.mark.asyncio
    async def test_refresh_failure_skips_push(
        self, linked, phases, asana, encryption, asana_credentials, tenant_id
    ):
        _, phase = linked
        expired = asana_credentials.model_copy(
            update={"asana_token_expires_at": utcnow() - timedelta(minutes=1)}
        )
        asana.failures["refresh_access_token"] = AsanaApiError("invalid_grant", 400)
        use_case, _ = _update_use_case(phases, asana, encryption, expired)

        result = await use_case.execute(
            UpdateAsanaPhaseRequest(phase_id=phase.id, tenant_id=tenant_id, name="Neu")
        )

        assert result.success
        assert not result.data.synced
        assert phases.items[phase.id].name == "Neu"
        assert asana.calls_to("update_section") == []

    @pytest.mark.asyncio
    async def test_asana_rejecting_the_push_is_a_sync_error(
        self, linked, phases, asana, encryption, asana_credentials, tenant_id
    ):
        _, phase = linked
        asana.failures["update_section"] = AsanaApiError("Asana API Fehler: 404", 404)
        use_case, _ = _update_use_case(phases, asana, encryption, asana_credentials)

        result = await use_case.execute(
            UpdateAsanaPhaseRequest(phase_id=phase.id, tenant_id=tenant_id, name="Neu")
        )

        assert result.code == ErrorCodes.SYNC_ERROR
        assert result.error.message == "Asana API Fehler: 404"
        assert phases.items[phase.id].name == "Neu"

    @pytest.mark.asyncio
    async def test_budget_not_pushed_without_field_id(
        self, linked, phases, asana, encryption, asana_credentials, tenant_id
    ):
        _, phase = linked
        credentials = asana_credentials.model_copy(
            update={"asana_phase_budget_hours_field_id": None}
        )
        use_case, _ = _update_use_case(phases, asana, encryption, credentials)

        result = await use_case.execute(
            UpdateAsanaPhaseRequest(phase_id=phase.id, tenant_id=tenant_id, budget_hours=10)
        )

        assert result.data.synced
        assert phases.items[phase.id].budget_hours == 10
        assert asana.calls_to("update_project_custom_field") == []

    @pytest.mark.asyncio
    async def test_repository_failure_propagates(
        self, linked, phases, asana, encryption, tenant_id
    ):
        _, phase = linked
        phases.failures["update"] = RepositoryError("db down", "update")
        use_case, _ = _update_use_case(phases, asana, encryption)

        with pytest.raises(RepositoryError):
            await use_case.execute(
                UpdateAsanaPhaseRequest(phase_id=phase.id, tenant_id=tenant_id, name="Neu")
            )
