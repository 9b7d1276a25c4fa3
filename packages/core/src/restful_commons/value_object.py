"""Immutable base for the pagination, sort and filter values."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class ValueObject(BaseModel):
    """Frozen model compared and hashed by its field values.

    Assigning to a field raises ``pydantic.ValidationError``; derive a new
    value through the owning class instead.
    """

    model_config = ConfigDict(frozen=True)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, self.__class__):
            return False
        return self.model_dump() == other.model_dump()

    def __hash__(self) -> int:
        return hash(tuple(sorted(self.model_dump().items())))
