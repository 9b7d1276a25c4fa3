"""SortParser — ``sort`` query parameter -> ordered SortCriterion list."""

from __future__ import annotations

import logging
import re
from enum import Enum
from typing import TYPE_CHECKING

from .exceptions import MalformedSortError
from .value_object import ValueObject

if TYPE_CHECKING:
    from collections.abc import Iterable

logger = logging.getLogger("restful_commons.sort")

SORT_PATTERN = re.compile(
    r"[a-z0-9_]+(?::(?:asc|desc))?(?:,[a-z0-9_]+(?::(?:asc|desc))?)*",
    re.IGNORECASE | re.ASCII,
)
_WHITESPACE = re.compile(r"\s+")


class SortDirection(str, Enum):
    """Supported sort directions."""

    ASC = "asc"
    DESC = "desc"


class SortCriterion(ValueObject):
    """A single ordering key: ``name`` ascending, ``age`` descending, ..."""

    property: str
    direction: SortDirection = SortDirection.ASC

    @property
    def descending(self) -> bool:
        return self.direction is SortDirection.DESC

    def to_query_param(self) -> str:
        return f"{self.property}:{self.direction.value}"


class SortParser:
    """Parse ``property[:asc|:desc]`` comma-separated lists, e.g. ``name,age:desc``."""

    def parse(self, raw: str | None) -> list[SortCriterion]:
        """
        Return the criteria in the order given; the first is the primary key.

        Whitespace anywhere in *raw* is ignored. A single malformed token
        rejects the whole string.

        Raises:
            MalformedSortError: If *raw* is blank or does not match the grammar.
        """
        if raw is None or not raw.strip():
            raise MalformedSortError(f"Bad format of the sorts string {raw!r}", raw=raw)
        clean = _WHITESPACE.sub("", raw)
        if not SORT_PATTERN.fullmatch(clean):
            raise MalformedSortError(f"Bad format of the sorts string {raw!r}", raw=raw)

        criteria = []
        for token in clean.split(","):
            prop, _, direction = token.partition(":")
            criteria.append(
                SortCriterion(
                    property=prop,
                    direction=SortDirection(direction.lower() or SortDirection.ASC),
                )
            )
        logger.debug("Parsed sort %r into %d criteria", raw, len(criteria))
        return criteria

    @staticmethod
    def format(criteria: Iterable[SortCriterion]) -> str:
        """Inverse of :meth:`parse`; directions are always written out."""
        return ",".join(c.to_query_param() for c in criteria)
