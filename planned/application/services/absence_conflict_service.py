"""
Absence conflict application service.

Records an AbsenceConflict for every allocation of a user that falls on a day
the user is absent. Conflicts are warnings only: allocations are never moved
or deleted here.
"""

from uuid import UUID

from ...core.observability import get_logger
from ...domain.planning.entities.absence import Absence
from ...domain.planning.entities.absence_conflict import AbsenceConflict
from ...domain.planning.repositories.absence_conflict_repository import (
    AbsenceConflictRepository,
)
from ...domain.planning.repositories.absence_repository import AllocationRepository
from ...domain.planning.value_objects.enums import ConflictResolution

logger = get_logger(__name__)


class AbsenceConflictService:
    """
    Application service for absence/allocation conflict bookkeeping.

    Detection is idempotent per (absence_id, allocation_id): re-running it for
    an unchanged absence records nothing new, and conflicts whose allocation
    left the absence range are dropped unless already resolved.
    """

    def __init__(
        self,
        allocation_repository: AllocationRepository,
        conflict_repository: AbsenceConflictRepository,
    ) -> None:
        """
        Initialize the conflict service.

        Args:
            allocation_repository: Allocation data access interface
            conflict_repository: AbsenceConflict data access interface
        """
        self._allocations = allocation_repository
        self._conflicts = conflict_repository

    async def detect_and_record_conflicts(self, absence: Absence) -> list[AbsenceConflict]:
        """
        Detect allocations overlapping an absence and record new conflicts.

        Args:
            absence: Absence to check

        Returns:
            Conflicts created by this call (already known pairs are excluded)

        Raises:
            RepositoryError: If database operation fails
        """
        allocations = await self._allocations.find_by_user_and_date_range(
            absence.user_id, absence.start_date, absence.end_date
        )
        overlapping = [
            allocation
            for allocation in allocations
            if allocation.user_id == absence.user_id and absence.includes_date(allocation.date)
        ]
        overlapping_ids = {allocation.id for allocation in overlapping}

        existing = await self._conflicts.find_by_absence_id(absence.id)
        known_allocation_ids = {conflict.allocation_id for conflict in existing}

        # Drop open conflicts whose allocation no longer overlaps
        stale_ids = [
            conflict.id
            for conflict in existing
            if not conflict.is_resolved and conflict.allocation_id not in overlapping_ids
        ]
        if stale_ids:
            await self._conflicts.delete_by_ids(stale_ids)
            logger.info(
                "Removed stale absence conflicts",
                absence_id=str(absence.id),
                count=len(stale_ids),
            )

        new_conflicts = [
            AbsenceConflict(
                tenant_id=absence.tenant_id,
                allocation_id=allocation.id,
                absence_id=absence.id,
                user_id=absence.user_id,
                date=allocation.date,
                absence_type=absence.type,
            )
            for allocation in overlapping
            if allocation.id not in known_allocation_ids
        ]
        if not new_conflicts:
            return []

        saved = await self._conflicts.save_many(new_conflicts)
        logger.info(
            "Absence conflicts recorded",
            absence_id=str(absence.id),
            user_id=str(absence.user_id),
            count=len(saved),
        )
        return saved

    async def update_conflicts_for_absence(
        self, old_absence: Absence, new_absence: Absence
    ) -> list[AbsenceConflict]:
        """
        Re-evaluate conflicts after an absence was edited.

        Only a change of user or date range invalidates existing conflicts.

        Returns:
            Conflicts created for the new state, [] if nothing relevant changed
        """
        if (
            old_absence.user_id == new_absence.user_id
            and old_absence.start_date == new_absence.start_date
            and old_absence.end_date == new_absence.end_date
        ):
            return []

        await self._conflicts.delete_by_absence_id(new_absence.id)
        return await self.detect_and_record_conflicts(new_absence)

    async def remove_conflicts_for_absence(self, absence_id: UUID) -> int:
        return await self._conflicts.delete_by_absence_id(absence_id)

    async def remove_conflicts_for_allocation(self, allocation_id: UUID) -> int:
        return await self._conflicts.delete_by_allocation_id(allocation_id)

    async def resolve_conflict(
        self, conflict_id: UUID, resolution: ConflictResolution, resolved_by: UUID
    ) -> AbsenceConflict:
        return await self._conflicts.resolve(conflict_id, resolution, resolved_by)

    async def count_unresolved(self, tenant_id: UUID) -> int:
        return await self._conflicts.count_unresolved_by_tenant(tenant_id)
