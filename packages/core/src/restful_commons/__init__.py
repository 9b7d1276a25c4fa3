"""restful-commons — HTTP range pagination, sort and filter query parsing.

Framework independent. The only runtime dependency is pydantic, used for
the immutable value objects.
"""

from __future__ import annotations

from .adapters import InMemoryQueryAdapter, resolve_property
from .exceptions import (
    InvalidPaginationError,
    MalformedFilterError,
    MalformedHeaderError,
    MalformedSortError,
    RequestValidationError,
    RestfulCommonsError,
    UnknownBoundError,
)
from .filtering import FilterCriterion, FilterOperator, FilterParser
from .links import LinkHeader, LinkHeaders
from .page_range import (
    ACCEPT_RANGES_HEADER_NAME,
    CONTENT_RANGE_HEADER_NAME,
    LINK_HEADER_NAME,
    RANGE_HEADER_NAME,
    UNKNOWN,
    PageRange,
)
from .ports import IResourceQueryAdapter
from .query import ResourceListRequest, ResourceQuery, ResourceQueryParser
from .service import ResourcePage, ResourceService, build_response_headers
from .sort import SortCriterion, SortDirection, SortParser

__all__ = [
    "ACCEPT_RANGES_HEADER_NAME",
    "CONTENT_RANGE_HEADER_NAME",
    "FilterCriterion",
    "FilterOperator",
    "FilterParser",
    "IResourceQueryAdapter",
    "InMemoryQueryAdapter",
    "InvalidPaginationError",
    "LINK_HEADER_NAME",
    "LinkHeader",
    "LinkHeaders",
    "MalformedFilterError",
    "MalformedHeaderError",
    "MalformedSortError",
    "PageRange",
    "RANGE_HEADER_NAME",
    "RequestValidationError",
    "ResourceListRequest",
    "ResourcePage",
    "ResourceQuery",
    "ResourceQueryParser",
    "ResourceService",
    "RestfulCommonsError",
    "SortCriterion",
    "SortDirection",
    "SortParser",
    "UNKNOWN",
    "UnknownBoundError",
    "build_response_headers",
    "resolve_property",
]
