"""AbsenceConflict entity: an allocation planned on a day its user is absent."""

import datetime
from uuid import UUID

from ...shared.base import Entity, utcnow
from ..value_objects.enums import AbsenceType, ConflictResolution


class AbsenceConflict(Entity):
    tenant_id: UUID
    allocation_id: UUID
    absence_id: UUID
    user_id: UUID
    date: datetime.date
    absence_type: AbsenceType
    resolved_at: datetime.datetime | None = None
    resolved_by: UUID | None = None
    resolution: ConflictResolution | None = None

    @property
    def is_resolved(self) -> bool:
        return self.resolved_at is not None

    def resolve(self, resolution: ConflictResolution, resolved_by: UUID) -> "AbsenceConflict":
        if self.is_resolved:
            raise ValueError("Konflikt wurde bereits gelöst")
        return self._copy_with(
            resolution=resolution, resolved_by=resolved_by, resolved_at=utcnow()
        )
