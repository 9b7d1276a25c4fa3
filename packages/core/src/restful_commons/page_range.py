"""
PageRange — pagination state carried by HTTP range headers.

A ``PageRange`` is the canonical form of the three headers used to page
through a list resource:

- ``Range: items=0-9`` (request, asks for a window)
- ``Content-Range: items 0-9/100`` (response, serves a window of a total)
- ``Accept-Ranges: items`` (response, declares the resource is pageable)

Pages are zero-based. ``-1`` marks a page, size or total that is unknown.
"""

from __future__ import annotations

import logging
import re

from pydantic import model_validator

from .exceptions import InvalidPaginationError, MalformedHeaderError, UnknownBoundError
from .links import LinkHeader, LinkHeaders
from .value_object import ValueObject

logger = logging.getLogger("restful_commons.headers")

UNKNOWN = -1

RANGE_HEADER_NAME = "Range"
CONTENT_RANGE_HEADER_NAME = "Content-Range"
ACCEPT_RANGES_HEADER_NAME = "Accept-Ranges"
LINK_HEADER_NAME = "Link"

RANGE_HEADER_PATTERN = re.compile(
    r"(?:Range: )?(?P<name>[A-Za-z]+)=(?P<start>[0-9]+)-(?P<end>[0-9]+)"
)
CONTENT_RANGE_HEADER_PATTERN = re.compile(
    r"(?:Content-Range: )?(?P<name>[A-Za-z]+) "
    r"(?:\*|(?P<start>[0-9]+)-(?P<end>[0-9]+))/(?P<total>[0-9]+)"
)
ACCEPT_RANGES_HEADER_PATTERN = re.compile(r"(?:Accept-Ranges: )?(?P<name>[A-Za-z]+)")


def _match_header(
    pattern: re.Pattern[str], header: str | None, example: str
) -> re.Match[str]:
    if header is None or header == "":
        raise MalformedHeaderError("Header cannot be null or empty", raw=header)
    match = pattern.fullmatch(header)
    if match is None:
        raise MalformedHeaderError(
            f"Header {header!r} is not in the correct format. "
            f"The format must be like {example!r}",
            raw=header,
        )
    return match


def _window(match: re.Match[str], header: str) -> tuple[int, int]:
    """Return ``(page, size)`` for the ``start``/``end`` groups of *match*."""
    start = int(match.group("start"))
    end = int(match.group("end"))
    if end <= start:
        raise MalformedHeaderError(
            f"Header {header!r} is not in the correct format. "
            "The end must be greater than the start",
            raw=header,
        )
    size = end - start + 1
    return start // size, size


class PageRange(ValueObject):
    """
    Immutable pagination value: element name, page, size and total.

    Attributes:
        element_name: Pluralised resource name used in headers (``"items"``).
        page: Zero-based page index, or ``-1`` if unknown.
        size: Elements per page, or ``-1`` if unknown.
        total: Total elements across all pages, or ``-1`` if unknown.
    """

    element_name: str
    page: int = UNKNOWN
    size: int = UNKNOWN
    total: int = UNKNOWN

    @model_validator(mode="after")
    def _check_bounds(self) -> PageRange:
        if self.page < 0 and self.page != UNKNOWN:
            raise InvalidPaginationError(
                f"Page must be greater than or equal to 0, or -1 for unknown. "
                f"Got {self.page}",
                raw=self.page,
            )
        if self.size == 0 or self.size < UNKNOWN:
            raise InvalidPaginationError(
                f"Size must be greater than 0, or -1 for unknown. Got {self.size}",
                raw=self.size,
            )
        if self.total < UNKNOWN:
            raise InvalidPaginationError(
                f"Total must be greater than or equal to 0, or -1 for unknown. "
                f"Got {self.total}",
                raw=self.total,
            )
        return self

    @classmethod
    def of(
        cls, element_name: str, page: int, size: int, total: int = UNKNOWN
    ) -> PageRange:
        """Positional constructor."""
        return cls(element_name=element_name, page=page, size=size, total=total)

    # -- parsing -------------------------------------------------------------

    @classmethod
    def parse_range_header(cls, header: str | None) -> PageRange:
        """
        Parse a ``Range`` header (``Range: items=0-9`` or ``items=0-9``).

        The total is unknown on a request, so it is set to ``-1``.

        Raises:
            MalformedHeaderError: If the header is empty, does not match the
                grammar, or its end is not greater than its start.
        """
        match = _match_header(RANGE_HEADER_PATTERN, header, "Range: elements=0-9")
        page, size = _window(match, match.string)
        result = cls(element_name=match.group("name"), page=page, size=size)
        logger.debug("Parsed Range header %r: page=%d size=%d", header, page, size)
        return result

    @classmethod
    def parse_content_range_header(cls, header: str | None) -> PageRange:
        """
        Parse ``Content-Range: items 0-9/100`` (prefix optional).

        The unsatisfied form ``items */0`` carries only a total; page and size
        are unknown.
        """
        match = _match_header(
            CONTENT_RANGE_HEADER_PATTERN, header, "Content-Range: elements 0-9/100"
        )
        total = int(match.group("total"))
        if match.group("start") is None:
            return cls(element_name=match.group("name"), total=total)
        page, size = _window(match, match.string)
        logger.debug(
            "Parsed Content-Range header %r: page=%d size=%d total=%d",
            header,
            page,
            size,
            total,
        )
        return cls(element_name=match.group("name"), page=page, size=size, total=total)

    @classmethod
    def parse_accept_ranges_header(cls, header: str | None) -> PageRange:
        """Parse ``Accept-Ranges: items``; page, size and total are all unknown."""
        match = _match_header(
            ACCEPT_RANGES_HEADER_PATTERN, header, "Accept-Ranges: elements"
        )
        return cls(element_name=match.group("name"))

    # -- derived values ------------------------------------------------------

    @property
    def has_window(self) -> bool:
        """True when both page and size are known."""
        return self.page != UNKNOWN and self.size != UNKNOWN

    @property
    def has_total(self) -> bool:
        return self.total != UNKNOWN

    @property
    def is_satisfiable(self) -> bool:
        """False when a known total leaves no element on this page."""
        self._require_window("satisfiability")
        return not self.has_total or self.start < self.total

    @property
    def start(self) -> int:
        """Index of the first element on this page."""
        self._require_window("start")
        return self.page * self.size

    @property
    def end(self) -> int:
        """Index of the last element on this page, capped by the total if known."""
        self._require_window("end")
        end = (self.page + 1) * self.size - 1
        if self.has_total:
            return min(end, self.total - 1)
        return end

    def _require_window(self, operation: str) -> None:
        if not self.has_window:
            raise UnknownBoundError(
                f"Cannot compute {operation} of {self.element_name!r}: "
                f"page={self.page} size={self.size}",
                raw=self.model_dump(),
            )

    def _require_total(self, operation: str) -> None:
        if not self.has_total:
            raise UnknownBoundError(
                f"Cannot compute {operation} of {self.element_name!r}: total is unknown",
                raw=self.model_dump(),
            )

    # -- formatting ----------------------------------------------------------

    def _require_satisfiable(self) -> None:
        if not self.is_satisfiable:
            raise InvalidPaginationError(
                f"Page {self.page} of {self.element_name!r} starts at "
                f"{self.start}, beyond the {self.total} available elements",
                raw=self.model_dump(),
            )

    def to_range(self) -> str:
        """
        Bare ``start-end`` range, as used in Link headers.

        Raises:
            InvalidPaginationError: If the page starts at or past the total.
        """
        self._require_satisfiable()
        return f"{self.start}-{self.end}"

    def to_range_header(self, include_name: bool = True) -> str:
        value = f"{self.element_name}={self.to_range()}"
        if include_name:
            return f"{RANGE_HEADER_NAME}: {value}"
        return value

    def to_content_range_header(self, include_name: bool = True) -> str:
        """
        Format ``Content-Range``; an unknown total is written as ``-1``.

        An empty collection has no range to serve and is written ``items */0``.
        """
        if self.total == 0:
            value = f"{self.element_name} */0"
        else:
            value = f"{self.element_name} {self.to_range()}/{self.total}"
        if include_name:
            return f"{CONTENT_RANGE_HEADER_NAME}: {value}"
        return value

    def to_accept_ranges_header(self, include_name: bool = True) -> str:
        if include_name:
            return f"{ACCEPT_RANGES_HEADER_NAME}: {self.element_name}"
        return self.element_name

    def to_link_headers(self, base_uri: str) -> LinkHeaders:
        """
        Build ``first``, ``previous``, ``next`` and ``last`` navigation links.

        An empty collection has no page to link to and yields no links.

        Raises:
            UnknownBoundError: If the total is unknown (no last page).
            InvalidPaginationError: If this page starts past the total.
        """
        self._require_total("links")
        if self.total == 0:
            return LinkHeaders(())
        self._require_satisfiable()
        return LinkHeaders(
            (
                LinkHeader(base_uri, "first", self.first_page().to_range()),
                LinkHeader(base_uri, "previous", self.previous_page().to_range()),
                LinkHeader(base_uri, "next", self.next_page().to_range()),
                LinkHeader(base_uri, "last", self.last_page().to_range()),
            )
        )

    # -- updates & navigation ------------------------------------------------

    def with_page(self, page: int) -> PageRange:
        return self.of(self.element_name, page, self.size, self.total)

    def with_total(self, total: int) -> PageRange:
        return self.of(self.element_name, self.page, self.size, total)

    def first_page(self) -> PageRange:
        if self.size == UNKNOWN:
            self._require_window("first page")
        return self.with_page(0)

    def previous_page(self) -> PageRange:
        """Return the previous page, or ``self`` when already on page 0."""
        self._require_window("previous page")
        if self.page == 0:
            return self
        return self.with_page(self.page - 1)

    def next_page(self) -> PageRange:
        """
        Return the next page, or ``self`` when already on the last page.

        With an unknown total there is no upper bound and the page advances.
        """
        self._require_window("next page")
        if self.has_total and self.page >= self._last_page_index():
            return self
        return self.with_page(self.page + 1)

    def last_page(self) -> PageRange:
        """
        Return the last page.

        Raises:
            UnknownBoundError: If the size or the total is unknown.
        """
        if self.size == UNKNOWN:
            self._require_window("last page")
        self._require_total("last page")
        return self.with_page(self._last_page_index())

    def _last_page_index(self) -> int:
        # An empty collection still has page 0.
        return max(0, (self.total - 1) // self.size)
