"""Validation errors raised by the header, sort and filter codecs.

All errors are deterministic input failures scoped to a single request.
None of them subclasses ``ValueError`` so they pass through pydantic
validators untouched.
"""

from __future__ import annotations

from typing import Any


class RestfulCommonsError(Exception):
    """Root exception for the restful-commons toolkit."""


class RequestValidationError(RestfulCommonsError):
    """Raised when a piece of request text or a value object is invalid.

    Carries structured errors: ``{field: [messages]}`` and the offending
    raw input, if any.
    """

    field: str = "__root__"

    def __init__(self, message: str, raw: object = None) -> None:
        self.message = message
        self.raw = raw
        self.errors: dict[str, list[str]] = {self.field: [message]}
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": self.__class__.__name__,
            "message": self.message,
            "raw": self.raw,
            "errors": self.errors,
        }


class InvalidPaginationError(RequestValidationError):
    """Raised when a page range violates its page/size/total invariants."""

    field = "pagination"


class MalformedHeaderError(RequestValidationError):
    """Raised when a Range, Content-Range or Accept-Ranges header is invalid."""

    field = "header"


class MalformedSortError(RequestValidationError):
    """Raised when a sort query parameter does not match the sort grammar."""

    field = "sort"


class MalformedFilterError(RequestValidationError):
    """Raised when a filter query parameter does not match the filter grammar.

    ``segment`` holds the comma-separated clause that failed, when the
    failure is local to one clause.
    """

    field = "filter"

    def __init__(
        self, message: str, raw: object = None, segment: str | None = None
    ) -> None:
        self.segment = segment
        super().__init__(message, raw)

    def to_dict(self) -> dict[str, Any]:
        data = super().to_dict()
        data["segment"] = self.segment
        return data


class UnknownBoundError(RequestValidationError):
    """Raised when an operation needs a page, size or total that is unknown (-1)."""

    field = "pagination"
