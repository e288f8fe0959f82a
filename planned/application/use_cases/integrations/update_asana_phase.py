"""
Local phase edit with last-write-wins push to Asana.

The local update is always written first. The Asana push is best effort:
a missing link, missing credentials or an unusable token degrade to
``synced=False``; only a failing Asana call during the push itself is
reported as ``SYNC_ERROR``.
"""

from pydantic import ValidationError as PydanticValidationError

from ....core.observability import get_logger
from ....domain.planning.entities.project import Project
from ....domain.planning.entities.project_phase import ProjectPhase
from ....domain.planning.repositories.credentials_repository import (
    IntegrationCredentialsRepository,
)
from ....domain.planning.repositories.project_repository import ProjectPhaseRepository
from ....domain.shared.exceptions import EncryptionError
from ...common.error_codes import ErrorCodes
from ...common.result import Result
from ...dtos.sync_dtos import UpdateAsanaPhaseRequest, UpdateAsanaPhaseResult
from ...ports.asana_service import IAsanaService
from ...ports.encryption_service import IEncryptionService
from ...services.asana_token_service import AsanaTokenService, AsanaTokenUnavailableError
from .base import error_message

logger = get_logger(__name__)


class UpdateAsanaPhaseUseCase:
    """Updates a phase locally and mirrors name and budget to Asana."""

    def __init__(
        self,
        phase_repository: ProjectPhaseRepository,
        credentials_repository: IntegrationCredentialsRepository,
        asana_service: IAsanaService,
        encryption_service: IEncryptionService,
    ) -> None:
        self._phases = phase_repository
        self._credentials = credentials_repository
        self._asana = asana_service
        self._tokens = AsanaTokenService(
            asana_service, credentials_repository, encryption_service
        )

    async def execute(self, request: UpdateAsanaPhaseRequest) -> Result[UpdateAsanaPhaseResult]:
        """
        Apply a phase edit and push it to Asana when linked.

        Args:
            request: Phase id, tenant and the fields to change

        Returns:
            ``Result.ok`` with the updated phase and whether Asana was updated,
            ``Result.fail`` for unknown or foreign phases, invalid input and
            failed Asana calls

        Raises:
            RepositoryError: If the local update cannot be persisted
        """
        found = await self._phases.find_by_id_with_project(request.phase_id)
        if found is None:
            return Result.fail(ErrorCodes.PHASE_NOT_FOUND, "Phase nicht gefunden")

        phase, project = found
        if phase.tenant_id != request.tenant_id:
            return Result.fail(ErrorCodes.UNAUTHORIZED, "Keine Berechtigung für diese Phase")

        try:
            edited = self._apply(phase, request)
        except (PydanticValidationError, ValueError) as e:
            return Result.fail(ErrorCodes.VALIDATION_ERROR, _validation_message(e))

        updated = await self._phases.update(edited)

        if not updated.asana_gid:
            return Result.ok(UpdateAsanaPhaseResult(phase=updated, synced=False))

        degraded = Result.ok(
            UpdateAsanaPhaseResult(phase=updated, synced=False, asana_gid=updated.asana_gid)
        )

        credentials = await self._credentials.find_by_tenant_id(request.tenant_id)
        if credentials is None or not credentials.asana_access_token:
            return degraded

        try:
            token = await self._tokens.get_access_token(credentials)
        except (AsanaTokenUnavailableError, EncryptionError) as e:
            logger.warning(
                "Asana push skipped, no usable token",
                phase_id=str(updated.id),
                error=error_message(e),
            )
            return degraded

        try:
            await self._push(
                updated,
                project,
                request,
                token,
                credentials.asana_phase_budget_hours_field_id,
            )
        except Exception as e:
            logger.error(
                "Asana push failed",
                phase_id=str(updated.id),
                asana_gid=updated.asana_gid,
                error=error_message(e),
            )
            return Result.fail(ErrorCodes.SYNC_ERROR, error_message(e))

        return Result.ok(
            UpdateAsanaPhaseResult(phase=updated, synced=True, asana_gid=updated.asana_gid)
        )

    @staticmethod
    def _apply(phase: ProjectPhase, request: UpdateAsanaPhaseRequest) -> ProjectPhase:
        edited = phase
        if request.name is not None:
            edited = edited.with_name(request.name)
        if request.budget_hours is not None:
            edited = edited.with_budget_hours(request.budget_hours)
        if request.start_date is not None or request.end_date is not None:
            edited = edited.with_dates(
                request.start_date if request.start_date is not None else edited.start_date,
                request.end_date if request.end_date is not None else edited.end_date,
            )
        return edited

    async def _push(
        self,
        phase: ProjectPhase,
        project: Project,
        request: UpdateAsanaPhaseRequest,
        token: str,
        budget_field_id: str | None,
    ) -> None:
        # Sections have no dates in Asana; start/end stay local
        if request.name is not None:
            await self._asana.update_section(phase.asana_gid, request.name, token)

        if request.budget_hours is not None and budget_field_id and project.asana_gid:
            await self._asana.update_project_custom_field(
                project.asana_gid, budget_field_id, request.budget_hours, token
            )


def _validation_message(error: Exception) -> str:
    if isinstance(error, PydanticValidationError):
        errors = error.errors()
        if errors:
            return str(errors[0]["msg"]).removeprefix("Value error, ")
    return str(error)
