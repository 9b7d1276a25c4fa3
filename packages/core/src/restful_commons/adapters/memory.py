"""
In-memory query adapter.

Applies a :class:`~restful_commons.query.ResourceQuery` to a plain Python
sequence: filter, sort, then slice the requested page. Useful for tests,
fixtures and small static resources.

Raw filter values are strings; each one is coerced to the type of the field
it is compared with before the operator runs.
"""

from __future__ import annotations

import datetime
import logging
import re
from typing import TYPE_CHECKING, Any, Generic, TypeVar

from ..exceptions import MalformedSortError
from ..filtering import FilterOperator

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence

    from ..filtering import FilterCriterion
    from ..query import ResourceQuery
    from ..sort import SortCriterion

logger = logging.getLogger("restful_commons.adapters.memory")

T = TypeVar("T")

_MISSING = object()


def resolve_property(obj: Any, path: str) -> Any:
    """
    Resolve a dot-separated property path on *obj*.

    Each segment is looked up as a dict key or an attribute. A missing
    segment resolves to ``None``.
    """
    for part in path.split("."):
        if obj is None:
            return None
        obj = obj.get(part) if isinstance(obj, dict) else getattr(obj, part, None)
    return obj


def coerce_value(raw: str, sample: Any) -> Any:
    """
    Convert the raw filter value *raw* to the type of *sample*.

    Returns ``_MISSING`` when *raw* cannot represent a value of that type.
    """
    try:
        if sample is None or isinstance(sample, str):
            return raw
        if isinstance(sample, bool):
            lowered = raw.lower()
            if lowered not in ("true", "false"):
                return _MISSING
            return lowered == "true"
        if isinstance(sample, int):
            return int(raw)
        if isinstance(sample, float):
            return float(raw)
        if isinstance(sample, datetime.datetime):
            return datetime.datetime.fromisoformat(raw)
        if isinstance(sample, datetime.date):
            return datetime.date.fromisoformat(raw)
    except ValueError:
        return _MISSING
    return raw


def _sql_pattern_to_regex(pattern: str) -> str:
    """Convert a SQL LIKE pattern (``%``, ``_``) to a Python regex."""
    return "".join(
        ".*" if ch == "%" else "." if ch == "_" else re.escape(ch) for ch in pattern
    )


def _ordered(compare: Callable[[Any, Any], bool]) -> Callable[[Any, list[Any]], bool]:
    def evaluate(field_value: Any, values: list[Any]) -> bool:
        if field_value is None:
            return False
        try:
            return bool(compare(field_value, values[0]))
        except TypeError:
            return False

    return evaluate


def _like(field_value: Any, values: list[Any]) -> bool:
    if field_value is None:
        return False
    regex = _sql_pattern_to_regex(str(values[0]))
    return re.fullmatch(regex, str(field_value), re.DOTALL) is not None


_PREDICATES: dict[FilterOperator, Callable[[Any, list[Any]], bool]] = {
    FilterOperator.EQUALS: lambda field_value, values: bool(field_value == values[0]),
    FilterOperator.NOT_EQUALS: lambda field_value, values: bool(
        field_value != values[0]
    ),
    FilterOperator.GREATER_THAN: _ordered(lambda a, b: a > b),
    FilterOperator.GREATER_OR_EQUAL: _ordered(lambda a, b: a >= b),
    FilterOperator.LESS_THAN: _ordered(lambda a, b: a < b),
    FilterOperator.LESS_OR_EQUAL: _ordered(lambda a, b: a <= b),
    FilterOperator.LIKE: _like,
    FilterOperator.IN: lambda field_value, values: field_value in values,
}


def matches(item: Any, criterion: FilterCriterion) -> bool:
    """Evaluate one criterion against *item*."""
    field_value = resolve_property(item, criterion.property)
    if criterion.operator is FilterOperator.LIKE:
        values: list[Any] = list(criterion.values)
    elif field_value is None:
        # Only "null" compares equal to a missing value.
        values = [None if v == "null" else v for v in criterion.values]
    else:
        values = [coerce_value(v, field_value) for v in criterion.values]
        values = [v for v in values if v is not _MISSING]
        if not values:
            return criterion.operator is FilterOperator.NOT_EQUALS
    return _PREDICATES[criterion.operator](field_value, values)


class InMemoryQueryAdapter(Generic[T]):
    """Query adapter over an in-memory sequence of dicts or objects."""

    def __init__(self, items: Sequence[T]) -> None:
        self._items = items

    def fetch(self, query: ResourceQuery) -> list[T]:
        selected = self._sort(self._filter(query), query.sorts)
        page_range = query.page_range
        if not page_range.has_window:
            return selected
        start = page_range.start
        return selected[start : start + page_range.size]

    def count(self, query: ResourceQuery) -> int:
        return len(self._filter(query))

    def _filter(self, query: ResourceQuery) -> list[T]:
        selected = [
            item
            for item in self._items
            if all(matches(item, criterion) for criterion in query.filters)
        ]
        logger.debug(
            "Filtered %d of %d items with %d criteria",
            len(selected),
            len(self._items),
            len(query.filters),
        )
        return selected

    @staticmethod
    def _sort(items: list[T], sorts: list[SortCriterion]) -> list[T]:
        """
        Raises:
            MalformedSortError: If a sort property holds values that cannot
                be ordered against each other.
        """
        # Stable sorts applied from the least to the most significant key.
        for criterion in reversed(sorts):
            try:
                items = sorted(
                    items,
                    key=lambda item, prop=criterion.property: _sort_key(
                        resolve_property(item, prop)
                    ),
                    reverse=criterion.descending,
                )
            except TypeError as exc:
                raise MalformedSortError(
                    f"Cannot sort by {criterion.property!r}: its values are "
                    "not comparable",
                    raw=criterion.property,
                ) from exc
        return items


def _sort_key(value: Any) -> tuple[bool, Any]:
    return (value is not None, value if value is not None else 0)
