"""ResourceService — run a list request and build its pagination headers."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Generic, TypeVar

from .page_range import (
    ACCEPT_RANGES_HEADER_NAME,
    CONTENT_RANGE_HEADER_NAME,
    LINK_HEADER_NAME,
)
from .query import ResourceQueryParser

if TYPE_CHECKING:
    from .page_range import PageRange
    from .ports import IResourceQueryAdapter
    from .query import ResourceListRequest

logger = logging.getLogger("restful_commons.service")

T = TypeVar("T")


def build_response_headers(page_range: PageRange, base_uri: str) -> dict[str, str]:
    """
    Return the ``Content-Range``, ``Accept-Ranges`` and ``Link`` header values.

    An empty collection is served as ``items */0`` with no ``Link`` header.

    Raises:
        UnknownBoundError: If *page_range* has no known total.
        InvalidPaginationError: If *page_range* starts past its total.
    """
    links = page_range.to_link_headers(base_uri)
    headers = {
        CONTENT_RANGE_HEADER_NAME: page_range.to_content_range_header(
            include_name=False
        ),
        ACCEPT_RANGES_HEADER_NAME: page_range.to_accept_ranges_header(
            include_name=False
        ),
    }
    if links:
        headers[LINK_HEADER_NAME] = str(links)
    return headers


@dataclass(frozen=True)
class ResourcePage(Generic[T]):
    """One served page: items, its range (with total) and response headers."""

    items: list[T]
    page_range: PageRange
    headers: dict[str, str] = field(default_factory=dict)


class ResourceService(Generic[T]):
    """List resources through an :class:`IResourceQueryAdapter`."""

    def __init__(
        self,
        adapter: IResourceQueryAdapter[T],
        parser: ResourceQueryParser | None = None,
    ) -> None:
        self._adapter = adapter
        self._parser = parser or ResourceQueryParser()

    def list_resources(self, request: ResourceListRequest) -> ResourcePage[T]:
        query = self._parser.parse(request)
        total = self._adapter.count(query)
        page_range = query.page_range.with_total(total)
        # A page past the end is rejected before anything is fetched.
        headers = build_response_headers(page_range, request.base_uri)
        items = self._adapter.fetch(query)
        logger.debug(
            "Listed %d of %d %s", len(items), total, request.resource_name
        )
        return ResourcePage(
            items=items,
            page_range=page_range,
            headers=headers,
        )
