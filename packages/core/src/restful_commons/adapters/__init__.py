"""Reference implementations of the query port."""

from __future__ import annotations

from .memory import InMemoryQueryAdapter, coerce_value, matches, resolve_property

__all__ = [
    "InMemoryQueryAdapter",
    "coerce_value",
    "matches",
    "resolve_property",
]
