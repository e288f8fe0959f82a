"""
API Dependencies

Wires database sessions, repositories, external service adapters and use
cases for FastAPI routes, plus the cron secret check.
"""

import secrets
from collections.abc import AsyncGenerator
from functools import lru_cache
from typing import Annotated

from fastapi import Depends, Header, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from ..application.services.absence_conflict_service import AbsenceConflictService
from ..application.use_cases.integrations.sync_asana_projects import SyncAsanaProjectsUseCase
from ..application.use_cases.integrations.sync_timetac_absences import (
    SyncTimeTacAbsencesUseCase,
)
from ..application.use_cases.integrations.sync_timetac_time_entries import (
    SyncTimeTacTimeEntriesUseCase,
)
from ..application.use_cases.maintenance.cleanup_sync_logs import CleanupSyncLogsUseCase
from ..core.config import settings
from ..core.observability import get_logger
from ..infrastructure.database.database import AsyncSessionLocal
from ..infrastructure.database.repositories import (
    SQLAbsenceConflictRepository,
    SQLAbsenceRepository,
    SQLAllocationRepository,
    SQLIntegrationCredentialsRepository,
    SQLIntegrationMappingRepository,
    SQLProjectPhaseRepository,
    SQLProjectRepository,
    SQLSyncLogRepository,
    SQLTimeEntryRepository,
    SQLUserRepository,
)
from ..infrastructure.services.asana_service import AsanaService
from ..infrastructure.services.encryption_service import FernetEncryptionService
from ..infrastructure.services.timetac_service import TimeTacService

logger = get_logger(__name__)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    async with AsyncSessionLocal() as session:
        yield session


SessionDep = Annotated[AsyncSession, Depends(get_db)]


def verify_cron_secret(authorization: Annotated[str | None, Header()] = None) -> None:
    """
    Require ``Authorization: Bearer <CRON_SECRET>``.

    Raises:
        HTTPException: 500 if no cron secret is configured, 401 on mismatch
    """
    if not settings.CRON_SECRET:
        logger.error("CRON_SECRET not configured")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Cron not configured",
        )

    expected = f"Bearer {settings.CRON_SECRET}"
    if authorization is None or not secrets.compare_digest(authorization, expected):
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Unauthorized")


@lru_cache
def get_encryption_service() -> FernetEncryptionService:
    return FernetEncryptionService()


def get_asana_service() -> AsanaService:
    return AsanaService()


def get_timetac_service() -> TimeTacService:
    return TimeTacService()


EncryptionDep = Annotated[FernetEncryptionService, Depends(get_encryption_service)]
AsanaDep = Annotated[AsanaService, Depends(get_asana_service)]
TimeTacDep = Annotated[TimeTacService, Depends(get_timetac_service)]


def get_credentials_repository(session: SessionDep) -> SQLIntegrationCredentialsRepository:
    return SQLIntegrationCredentialsRepository(session)


CredentialsRepositoryDep = Annotated[
    SQLIntegrationCredentialsRepository, Depends(get_credentials_repository)
]


def get_sync_asana_projects_use_case(
    session: SessionDep,
    credentials: CredentialsRepositoryDep,
    asana: AsanaDep,
    encryption: EncryptionDep,
) -> SyncAsanaProjectsUseCase:
    return SyncAsanaProjectsUseCase(
        asana_service=asana,
        project_repository=SQLProjectRepository(session),
        phase_repository=SQLProjectPhaseRepository(session),
        credentials_repository=credentials,
        sync_log_repository=SQLSyncLogRepository(session),
        encryption_service=encryption,
    )


def get_sync_timetac_absences_use_case(
    session: SessionDep,
    credentials: CredentialsRepositoryDep,
    timetac: TimeTacDep,
    encryption: EncryptionDep,
) -> SyncTimeTacAbsencesUseCase:
    return SyncTimeTacAbsencesUseCase(
        timetac_service=timetac,
        absence_repository=SQLAbsenceRepository(session),
        user_repository=SQLUserRepository(session),
        credentials_repository=credentials,
        sync_log_repository=SQLSyncLogRepository(session),
        encryption_service=encryption,
        conflict_service=AbsenceConflictService(
            SQLAllocationRepository(session), SQLAbsenceConflictRepository(session)
        ),
    )


def get_sync_timetac_time_entries_use_case(
    session: SessionDep,
    credentials: CredentialsRepositoryDep,
    timetac: TimeTacDep,
    encryption: EncryptionDep,
) -> SyncTimeTacTimeEntriesUseCase:
    return SyncTimeTacTimeEntriesUseCase(
        timetac_service=timetac,
        time_entry_repository=SQLTimeEntryRepository(session),
        user_repository=SQLUserRepository(session),
        credentials_repository=credentials,
        sync_log_repository=SQLSyncLogRepository(session),
        encryption_service=encryption,
        mapping_repository=SQLIntegrationMappingRepository(session),
    )


def get_cleanup_sync_logs_use_case(session: SessionDep) -> CleanupSyncLogsUseCase:
    return CleanupSyncLogsUseCase(SQLSyncLogRepository(session))
