"""Tests for the cron and health endpoints."""

from uuid import uuid4

import pytest
from fastapi.testclient import TestClient

from planned.api import deps
from planned.application.dtos import (
    SyncAbsencesResult,
    SyncProjectsResult,
    SyncTimeEntriesResult,
)
from planned.domain.planning.entities import IntegrationCredentials
from planned.domain.shared.exceptions import RepositoryError
from planned.main import app
from planned.tests.utils.fakes import InMemoryCredentialsRepository

SECRET = "cron-secret"
AUTH = {"Authorization": f"Bearer {SECRET}"}


class StubUseCase:
    """Returns a queued result per call or raises a queued exception."""

    def __init__(self, *outcomes) -> None:
        self.outcomes = list(outcomes)
        self.tenants = []

    async def execute(self, tenant_id=None):
        self.tenants.append(tenant_id)
        outcome = self.outcomes.pop(0)
        if isinstance(outcome, Exception):
            raise outcome
        return outcome


@pytest.fixture
def client(monkeypatch):
    monkeypatch.setattr(deps.settings, "CRON_SECRET", SECRET)
    yield TestClient(app)
    app.dependency_overrides.clear()


def _override(dependency, value) -> None:
    app.dependency_overrides[dependency] = lambda: value


def _credentials(*tenants, asana=False, timetac=False) -> InMemoryCredentialsRepository:
    return InMemoryCredentialsRepository(
        *(
            IntegrationCredentials(
                tenant_id=tenant,
                asana_access_token="enc:a" if asana else None,
                timetac_api_token="enc:t" if timetac else None,
            )
            for tenant in tenants
        )
    )


class TestCronAuthorization:
    def test_missing_secret_configuration(self, client, monkeypatch):
        monkeypatch.setattr(deps.settings, "CRON_SECRET", None)

        response = client.get("/api/cron/sync-asana", headers=AUTH)

        assert response.status_code == 500
        assert response.json()["detail"] == "Cron not configured"

    def test_wrong_secret(self, client):
        response = client.get(
            "/api/cron/sync-asana", headers={"Authorization": "Bearer nope"}
        )

        assert response.status_code == 401

    def test_missing_header(self, client):
        assert client.get("/api/cron/cleanup-sync-logs").status_code == 401


class TestCronSyncAsana:
    """Test the per-tenant Asana project sync loop."""

    def test_no_connected_tenants(self, client):
        _override(deps.get_credentials_repository, _credentials(uuid4(), timetac=True))
        _override(deps.get_sync_asana_projects_use_case, StubUseCase())

        response = client.get("/api/cron/sync-asana", headers=AUTH)

        assert response.status_code == 200
        assert response.json()["message"] == "No tenants with Asana connection found"
        assert response.json()["synced"] == 0

    def test_one_failing_tenant_does_not_stop_the_loop(self, client):
        first, second = uuid4(), uuid4()
        use_case = StubUseCase(
            RepositoryError("db down", "find_by_tenant_id"),
            SyncProjectsResult(success=True, projects_created=2),
        )
        _override(deps.get_credentials_repository, _credentials(first, second, asana=True))
        _override(deps.get_sync_asana_projects_use_case, use_case)

        body = client.get("/api/cron/sync-asana", headers=AUTH).json()

        assert use_case.tenants == [first, second]
        assert body["message"] == "Sync completed for 1/2 tenants"
        assert (body["synced"], body["successful"], body["failed"]) == (2, 1, 1)
        failed, ok = body["results"]
        assert failed["success"] is False
        assert failed["errors"] == ["[projects] db down"]
        assert ok["syncs"]["projects"]["projects_created"] == 2
        assert "errors" not in ok["syncs"]["projects"]

    def test_unsuccessful_result_marks_tenant_failed(self, client):
        tenant = uuid4()
        _override(deps.get_credentials_repository, _credentials(tenant, asana=True))
        _override(
            deps.get_sync_asana_projects_use_case,
            StubUseCase(SyncProjectsResult(success=False, errors=["Asana ist nicht verbunden"])),
        )

        body = client.get("/api/cron/sync-asana", headers=AUTH).json()

        assert body["failed"] == 1
        assert body["results"][0]["errors"] == ["[projects] Asana ist nicht verbunden"]


class TestCronSyncTimeTac:
    def test_runs_absences_then_time_entries(self, client):
        tenant = uuid4()
        absences = StubUseCase(SyncAbsencesResult(success=True, created=3))
        time_entries = StubUseCase(
            SyncTimeEntriesResult(success=True, updated=1, errors=["Eintrag 9: ungültig"])
        )
        _override(deps.get_credentials_repository, _credentials(tenant, timetac=True))
        _override(deps.get_sync_timetac_absences_use_case, absences)
        _override(deps.get_sync_timetac_time_entries_use_case, time_entries)

        body = client.get("/api/cron/sync-timetac", headers=AUTH).json()

        result = body["results"][0]
        assert result["success"] is True
        assert result["syncs"]["absences"]["created"] == 3
        assert result["syncs"]["time_entries"]["updated"] == 1
        assert result["errors"] == ["[time_entries] Eintrag 9: ungültig"]
        assert absences.tenants == time_entries.tenants == [tenant]

    def test_failed_absence_sync_still_runs_time_entries(self, client):
        tenant = uuid4()
        time_entries = StubUseCase(SyncTimeEntriesResult(success=True))
        _override(deps.get_credentials_repository, _credentials(tenant, timetac=True))
        _override(deps.get_sync_timetac_absences_use_case, StubUseCase(RuntimeError()))
        _override(deps.get_sync_timetac_time_entries_use_case, time_entries)

        body = client.get("/api/cron/sync-timetac", headers=AUTH).json()

        assert body["results"][0]["errors"] == ["[absences] Unbekannter Fehler"]
        assert body["failed"] == 1
        assert time_entries.tenants == [tenant]

    def test_no_connected_tenants(self, client):
        _override(deps.get_credentials_repository, _credentials())
        _override(deps.get_sync_timetac_absences_use_case, StubUseCase())
        _override(deps.get_sync_timetac_time_entries_use_case, StubUseCase())

        body = client.get("/api/cron/sync-timetac", headers=AUTH).json()

        assert body["message"] == "No tenants with TimeTac connection found"


class TestCronCleanup:
    def test_reports_deleted_count(self, client):
        _override(deps.get_cleanup_sync_logs_use_case, StubUseCase(4))

        response = client.get("/api/cron/cleanup-sync-logs", headers=AUTH)

        assert response.status_code == 200
        body = response.json()
        assert body["deleted"] == 4
        assert body["message"] == "Deleted 4 sync logs"
        assert body["retention_days"] == deps.settings.SYNC_LOG_RETENTION_DAYS


class TestHealth:
    def test_liveness(self, client):
        response = client.get("/api/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"
        assert "X-Correlation-ID" in response.headers

    def test_metrics(self, client):
        response = client.get("/api/metrics")

        assert response.status_code == 200
        assert "text/plain" in response.headers["content-type"]
