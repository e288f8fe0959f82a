"""Resolve an absence conflict by moving, deleting or ignoring the allocation."""

import datetime
from dataclasses import dataclass
from uuid import UUID

from ....core.observability import get_logger
from ....domain.planning.entities.absence_conflict import AbsenceConflict
from ....domain.planning.repositories.absence_conflict_repository import (
    AbsenceConflictRepository,
)
from ....domain.planning.repositories.absence_repository import AllocationRepository
from ....domain.planning.value_objects.enums import ConflictResolution
from ...common.error_codes import ErrorCodes
from ...common.result import Result
from ..integrations.base import error_message

logger = get_logger(__name__)


@dataclass(frozen=True)
class ResolveConflictRequest:
    conflict_id: UUID
    resolution: ConflictResolution
    resolved_by: UUID
    # Only used for ConflictResolution.MOVED
    new_date: datetime.date | None = None


class ResolveConflictUseCase:
    """
    Applies the user's decision for a conflict and marks it resolved.

    * ``deleted`` removes the allocation
    * ``moved`` moves the allocation to ``new_date``
    * ``ignored`` keeps the allocation as it is
    """

    def __init__(
        self,
        conflict_repository: AbsenceConflictRepository,
        allocation_repository: AllocationRepository,
    ) -> None:
        self._conflicts = conflict_repository
        self._allocations = allocation_repository

    async def execute(self, request: ResolveConflictRequest) -> Result[AbsenceConflict]:
        try:
            conflict = await self._conflicts.find_by_id(request.conflict_id)
            if conflict is None:
                return Result.fail(ErrorCodes.CONFLICT_NOT_FOUND, "Konflikt nicht gefunden")

            if conflict.is_resolved:
                return Result.fail(
                    ErrorCodes.CONFLICT_ALREADY_RESOLVED, "Konflikt wurde bereits gelöst"
                )

            if request.resolution == ConflictResolution.DELETED:
                await self._allocations.delete(conflict.allocation_id)
            elif request.resolution == ConflictResolution.MOVED:
                if request.new_date is None:
                    return Result.fail(
                        ErrorCodes.NEW_DATE_REQUIRED,
                        "Neues Datum erforderlich für Verschieben",
                    )
                await self._allocations.move_to_date(conflict.allocation_id, request.new_date)
            elif request.resolution != ConflictResolution.IGNORED:
                return Result.fail(ErrorCodes.INVALID_RESOLUTION, "Ungültige Auflösungsart")

            resolved = await self._conflicts.resolve(
                request.conflict_id, request.resolution, request.resolved_by
            )
            logger.info(
                "Absence conflict resolved",
                conflict_id=str(request.conflict_id),
                resolution=request.resolution.value,
            )
            return Result.ok(resolved)
        except Exception as e:
            logger.error(
                "Resolving absence conflict failed",
                conflict_id=str(request.conflict_id),
                error=str(e),
            )
            return Result.fail(ErrorCodes.RESOLVE_CONFLICT_FAILED, error_message(e))
