"""Tests for the in-memory absence conflict checker."""

from datetime import date
from uuid import uuid4

from planned.domain.planning.entities import Absence, Allocation
from planned.domain.planning.services import AbsenceConflictChecker
from planned.domain.planning.value_objects import AbsenceType


def _absence(user_id, start, end, absence_type=AbsenceType.VACATION) -> Absence:
    return Absence(
        tenant_id=uuid4(), user_id=user_id, type=absence_type, start_date=start, end_date=end
    )


def _allocation(day, user_id=None, resource_id=None) -> Allocation:
    return Allocation(
        tenant_id=uuid4(),
        project_phase_id=uuid4(),
        date=day,
        user_id=user_id,
        resource_id=resource_id,
    )


class TestAbsenceConflictChecker:
    """Test matching allocations against absences."""

    def setup_method(self):
        self.checker = AbsenceConflictChecker()
        self.user = uuid4()
        self.vacation = _absence(self.user, date(2024, 3, 4), date(2024, 3, 8))

    def test_allocation_inside_absence_conflicts(self):
        allocation = _allocation(date(2024, 3, 6), user_id=self.user)

        assert self.checker.has_conflict(allocation, [self.vacation])
        assert self.checker.get_conflicting_absence(allocation, [self.vacation]) is self.vacation

    def test_boundaries_are_inclusive(self):
        first = _allocation(date(2024, 3, 4), user_id=self.user)
        last = _allocation(date(2024, 3, 8), user_id=self.user)
        after = _allocation(date(2024, 3, 9), user_id=self.user)

        assert self.checker.has_conflict(first, [self.vacation])
        assert self.checker.has_conflict(last, [self.vacation])
        assert not self.checker.has_conflict(after, [self.vacation])

    def test_other_users_absence_is_ignored(self):
        allocation = _allocation(date(2024, 3, 6), user_id=uuid4())
        assert not self.checker.has_conflict(allocation, [self.vacation])

    def test_resource_allocations_never_conflict(self):
        allocation = _allocation(date(2024, 3, 6), resource_id=uuid4())
        assert not self.checker.has_conflict(allocation, [self.vacation])

    def test_first_matching_absence_wins(self):
        sick = _absence(self.user, date(2024, 3, 6), date(2024, 3, 6), AbsenceType.SICK)
        allocation = _allocation(date(2024, 3, 6), user_id=self.user)

        assert self.checker.get_conflicting_absence(allocation, [sick, self.vacation]) is sick

    def test_get_conflicts_for_allocations(self):
        other_user = uuid4()
        other_absence = _absence(other_user, date(2024, 3, 1), date(2024, 3, 1))
        allocations = [
            _allocation(date(2024, 3, 1), user_id=other_user),
            _allocation(date(2024, 3, 1), user_id=self.user),
            _allocation(date(2024, 3, 5), user_id=self.user),
            _allocation(date(2024, 3, 5), resource_id=uuid4()),
        ]

        pairs = self.checker.get_conflicts_for_allocations(
            allocations, [self.vacation, other_absence]
        )

        assert [(a.id, b.id) for a, b in pairs] == [
            (allocations[0].id, other_absence.id),
            (allocations[2].id, self.vacation.id),
        ]

    def test_no_absences_no_conflicts(self):
        allocations = [_allocation(date(2024, 3, 5), user_id=self.user)]
        assert self.checker.get_conflicts_for_allocations(allocations, []) == []
