"""Absence conflict use cases."""

from .resolve_conflict import ResolveConflictRequest, ResolveConflictUseCase

__all__ = ["ResolveConflictRequest", "ResolveConflictUseCase"]
