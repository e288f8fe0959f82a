"""
Absence Conflict Checker

Pure, repository-free checks used by the planning grid and by the conflict
service: does an allocation fall on a day its user is absent?
"""

from collections import defaultdict
from uuid import UUID

from ...shared.base import DomainService
from ..entities.absence import Absence
from ..entities.allocation import Allocation


class AbsenceConflictChecker(DomainService):
    """Matches user allocations against absences in memory."""

    def has_conflict(self, allocation: Allocation, absences: list[Absence]) -> bool:
        return self.get_conflicting_absence(allocation, absences) is not None

    def get_conflicting_absence(
        self, allocation: Allocation, absences: list[Absence]
    ) -> Absence | None:
        """
        Return the first absence of the allocated user covering the allocation date.

        Resource allocations never conflict.
        """
        if allocation.user_id is None:
            return None
        for absence in absences:
            if absence.user_id == allocation.user_id and absence.includes_date(
                allocation.date
            ):
                return absence
        return None

    def get_conflicts_for_allocations(
        self, allocations: list[Allocation], absences: list[Absence]
    ) -> list[tuple[Allocation, Absence]]:
        """
        Pair every conflicting user allocation with the absence it collides with.

        Args:
            allocations: Allocations to check, any assignee
            absences: Candidate absences of any user

        Returns:
            (allocation, absence) pairs in allocation order
        """
        by_user: dict[UUID, list[Absence]] = defaultdict(list)
        for absence in absences:
            by_user[absence.user_id].append(absence)

        conflicts: list[tuple[Allocation, Absence]] = []
        for allocation in allocations:
            if allocation.user_id is None:
                continue
            absence = self.get_conflicting_absence(
                allocation, by_user.get(allocation.user_id, [])
            )
            if absence is not None:
                conflicts.append((allocation, absence))
        return conflicts
