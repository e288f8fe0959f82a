"""Base classes for domain entities and value objects."""

from abc import ABC
from datetime import datetime, timezone
from typing import Any, TypeVar
from uuid import UUID, uuid4

from pydantic import BaseModel, ConfigDict, Field


def utcnow() -> datetime:
    """Timezone-aware current UTC time used for all domain timestamps."""
    return datetime.now(timezone.utc)


class ValueObject(BaseModel):
    """Base class for value objects (immutable, defined by their values)."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    def __eq__(self, other: Any) -> bool:
        """Value objects are equal if all their attributes are equal."""
        if not isinstance(other, self.__class__):
            return False
        return self.model_dump() == other.model_dump()

    def __hash__(self) -> int:
        return hash(tuple(sorted((k, repr(v)) for k, v in self.model_dump().items())))


EntityT = TypeVar("EntityT", bound="Entity")


class Entity(BaseModel, ABC):
    """
    Base class for entities.

    Entities carry identity but are immutable: every change goes through a
    ``with_*`` method that returns a re-validated copy.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    id: UUID = Field(default_factory=uuid4)
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)

    def __eq__(self, other: Any) -> bool:
        """Entities are equal if they have the same ID and type."""
        if not isinstance(other, self.__class__):
            return False
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)

    def _copy_with(self: EntityT, **changes: Any) -> EntityT:
        """Return a validated copy with ``changes`` applied and ``updated_at`` bumped."""
        data = self.model_dump()
        data.update(changes)
        data["updated_at"] = utcnow()
        return self.__class__.model_validate(data)


class DomainService(ABC):
    """Base class for domain services (business logic that doesn't belong to a single entity)."""

    pass
