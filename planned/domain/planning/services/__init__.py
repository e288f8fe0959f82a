"""Domain services for the planning domain."""

from .absence_conflict_checker import AbsenceConflictChecker

__all__ = ["AbsenceConflictChecker"]
