"""ResourceQueryParser — raw list request -> (PageRange, sorts, filters)."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import NamedTuple

from .exceptions import InvalidPaginationError, MalformedHeaderError
from .filtering import FilterCriterion, FilterParser
from .page_range import PageRange
from .sort import SortCriterion, SortParser

logger = logging.getLogger("restful_commons.query")

DEFAULT_PAGE_SIZE = 10


@dataclass(frozen=True)
class ResourceListRequest:
    """
    Everything needed to list one API resource.

    Attributes:
        resource_name: Name of the resource, e.g. ``countries``.
        base_uri: Base URI used in navigation links, e.g. ``/api/v1/countries``.
        range_header: Value of the ``Range`` header, e.g. ``countries=0-19``.
        sort_param: The ``sort`` query parameter, e.g. ``code:asc``.
        filter_param: The ``filter`` query parameter, e.g. ``code eq 4``.
    """

    resource_name: str
    base_uri: str
    range_header: str | None = None
    sort_param: str | None = None
    filter_param: str | None = None


class ResourceQuery(NamedTuple):
    """Parsed pagination, ordering and filtering handed to a query adapter."""

    page_range: PageRange
    sorts: list[SortCriterion]
    filters: list[FilterCriterion]


class ResourceQueryParser:
    """Parse the raw header and query-string parts of a :class:`ResourceListRequest`."""

    def __init__(
        self,
        *,
        default_page_size: int = DEFAULT_PAGE_SIZE,
        sort_parser: SortParser | None = None,
        filter_parser: FilterParser | None = None,
        strict_element_name: bool = False,
    ) -> None:
        """
        Initialize ResourceQueryParser.

        Args:
            default_page_size: Page size used when no ``Range`` header is sent.
            sort_parser: Parser for the ``sort`` parameter.
            filter_parser: Parser for the ``filter`` parameter.
            strict_element_name: Reject a ``Range`` header whose element name
                is not the resource name.
        """
        if default_page_size < 1:
            raise InvalidPaginationError(
                f"Default page size must be greater than 0. Got {default_page_size}",
                raw=default_page_size,
            )
        self._default_page_size = default_page_size
        self._sort_parser = sort_parser or SortParser()
        self._filter_parser = filter_parser or FilterParser()
        self._strict_element_name = strict_element_name

    def parse(self, request: ResourceListRequest) -> ResourceQuery:
        """Return the query triple; absent optional parts fall back to defaults."""
        page_range = self.parse_range(request)
        sorts = (
            self._sort_parser.parse(request.sort_param)
            if _present(request.sort_param)
            else []
        )
        filters = (
            self._filter_parser.parse(request.filter_param)
            if _present(request.filter_param)
            else []
        )
        logger.debug(
            "Parsed %s request: page=%d size=%d sorts=%d filters=%d",
            request.resource_name,
            page_range.page,
            page_range.size,
            len(sorts),
            len(filters),
        )
        return ResourceQuery(page_range, sorts, filters)

    def parse_range(self, request: ResourceListRequest) -> PageRange:
        if not _present(request.range_header):
            return PageRange.of(request.resource_name, 0, self._default_page_size)
        page_range = PageRange.parse_range_header(request.range_header)
        if (
            self._strict_element_name
            and page_range.element_name != request.resource_name
        ):
            raise MalformedHeaderError(
                f"Range header {request.range_header!r} does not target "
                f"{request.resource_name!r}",
                raw=request.range_header,
            )
        return page_range


def _present(value: str | None) -> bool:
    return value is not None and bool(value.strip())
