"""IResourceQueryAdapter — protocol for backend-specific list queries."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, TypeVar, runtime_checkable

if TYPE_CHECKING:
    from .query import ResourceQuery

T_co = TypeVar("T_co", covariant=True)


@runtime_checkable
class IResourceQueryAdapter(Protocol[T_co]):
    """Run a parsed :class:`ResourceQuery` against a data store.

    Implementations translate filter and sort criteria into their own query
    language (SQL ``WHERE``/``ORDER BY``, Mongo filter documents, ...).
    """

    def fetch(self, query: ResourceQuery) -> list[T_co]:
        """Return the filtered, sorted page of items."""
        ...

    def count(self, query: ResourceQuery) -> int:
        """Return the number of items matching the filters, ignoring paging."""
        ...
