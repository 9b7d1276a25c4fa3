"""Tests for PageRange: validation, header codecs and navigation."""

from __future__ import annotations

import pytest
from pydantic import ValidationError as PydanticValidationError

from restful_commons.exceptions import (
    InvalidPaginationError,
    MalformedHeaderError,
    UnknownBoundError,
)
from restful_commons.page_range import PageRange

# --- Construction ---


def test_valid_construction() -> None:
    p = PageRange.of("items", 2, 10, 25)
    assert p == PageRange(element_name="items", page=2, size=10, total=25)
    assert p.start == 20
    assert p.end == 24


@pytest.mark.parametrize(
    ("page", "size", "total"),
    [
        (-2, 10, 100),
        (0, 0, 100),
        (0, -2, 100),
        (0, 10, -2),
    ],
)
def test_invalid_construction(page: int, size: int, total: int) -> None:
    with pytest.raises(InvalidPaginationError):
        PageRange.of("items", page, size, total)


def test_unknown_sentinels_are_valid() -> None:
    p = PageRange.of("items", -1, -1, -1)
    assert not p.has_window
    assert not p.has_total


def test_page_range_is_immutable() -> None:
    p = PageRange.of("items", 0, 10, 100)
    with pytest.raises(PydanticValidationError):
        p.page = 3  # type: ignore[misc]


def test_with_total_validates() -> None:
    p = PageRange.of("items", 0, 10)
    assert p.with_total(100).total == 100
    assert p.total == -1
    with pytest.raises(InvalidPaginationError):
        p.with_total(-5)


def test_value_equality_and_hash() -> None:
    a = PageRange.of("items", 1, 10, 100)
    b = PageRange.of("items", 1, 10, 100)
    assert a == b
    assert len({a, b}) == 1
    assert a != PageRange.of("users", 1, 10, 100)


def test_end_without_total() -> None:
    assert PageRange.of("items", 2, 10).end == 29


# --- Range header ---


def test_parse_range_header() -> None:
    p = PageRange.parse_range_header("items=0-9")
    assert p.element_name == "items"
    assert p.page == 0
    assert p.size == 10
    assert p.total == -1


def test_parse_range_header_prefix_is_optional() -> None:
    assert PageRange.parse_range_header(
        "Range: items=0-9"
    ) == PageRange.parse_range_header("items=0-9")


def test_parse_range_header_page_from_start() -> None:
    p = PageRange.parse_range_header("Range: users=20-29")
    assert p.element_name == "users"
    assert p.page == 2
    assert p.size == 10


@pytest.mark.parametrize(
    "header",
    [
        None,
        "",
        "items=9-0",
        "items=5-5",
        "items 0-9",
        "items=0-",
        "items=-1-9",
        "it3ms=0-9",
        "Range:items=0-9",
        "Content-Range: items=0-9",
        "items=0-9 ",
    ],
)
def test_parse_range_header_rejects(header: str | None) -> None:
    with pytest.raises(MalformedHeaderError) as exc_info:
        PageRange.parse_range_header(header)
    assert exc_info.value.raw == header


def test_range_header_inverse() -> None:
    parsed = PageRange.parse_range_header("items=0-9")
    with_total = parsed.with_total(100)
    assert with_total.to_range_header(include_name=False) == "items=0-9"
    assert with_total.to_range_header() == "Range: items=0-9"


def test_range_header_formatting_needs_window() -> None:
    with pytest.raises(UnknownBoundError):
        PageRange.parse_accept_ranges_header("items").to_range_header()


# --- Content-Range header ---


def test_parse_content_range_header() -> None:
    p = PageRange.parse_content_range_header("Content-Range: items 10-19/100")
    assert p == PageRange.of("items", 1, 10, 100)


def test_parse_content_range_header_without_prefix() -> None:
    assert PageRange.parse_content_range_header("items 0-9/100") == PageRange.of(
        "items", 0, 10, 100
    )


@pytest.mark.parametrize(
    "header",
    [
        None,
        "",
        "items 9-0/100",
        "items 5-5/100",
        "items 0-9",
        "items 0-9/-1",
        "items */-1",
        "items *-9/100",
        "items=0-9/100",
        "Content-Range: items 0-9/abc",
    ],
)
def test_parse_content_range_header_rejects(header: str | None) -> None:
    with pytest.raises(MalformedHeaderError):
        PageRange.parse_content_range_header(header)


@pytest.mark.parametrize(
    "page_range",
    [
        PageRange.of("items", 0, 10, 100),
        PageRange.of("items", 3, 10, 100),
        PageRange.of("users", 9, 10, 100),
        PageRange.of("rows", 1, 25, 60),
    ],
)
def test_content_range_round_trip(page_range: PageRange) -> None:
    header = page_range.to_content_range_header()
    assert PageRange.parse_content_range_header(header) == page_range
    bare = page_range.to_content_range_header(include_name=False)
    assert PageRange.parse_content_range_header(bare) == page_range


def test_content_range_round_trip_on_partial_last_page() -> None:
    # The header carries no page size: a short last page reparses with the
    # size of its own window, and a one-element window is not a valid range.
    partial = PageRange.of("items", 2, 10, 25).to_content_range_header()
    assert PageRange.parse_content_range_header(partial) == PageRange.of(
        "items", 4, 5, 25
    )

    single = PageRange.of("items", 2, 10, 21).to_content_range_header()
    assert single == "Content-Range: items 20-20/21"
    with pytest.raises(MalformedHeaderError):
        PageRange.parse_content_range_header(single)


def test_content_range_caps_end_at_total() -> None:
    p = PageRange.of("items", 2, 10, 25)
    assert p.to_content_range_header() == "Content-Range: items 20-24/25"


def test_content_range_of_empty_collection() -> None:
    p = PageRange.of("items", 0, 10, 0)
    assert p.to_content_range_header() == "Content-Range: items */0"
    assert PageRange.parse_content_range_header("items */0") == PageRange(
        element_name="items", total=0
    )


def test_range_past_total_is_unsatisfiable() -> None:
    p = PageRange.of("items", 10, 10, 25)
    assert not p.is_satisfiable
    with pytest.raises(InvalidPaginationError):
        p.to_content_range_header()
    with pytest.raises(InvalidPaginationError):
        p.to_link_headers("/items")


def test_content_range_writes_unknown_total() -> None:
    p = PageRange.of("items", 0, 10)
    assert p.to_content_range_header(include_name=False) == "items 0-9/-1"


def test_content_range_idempotence() -> None:
    header = "Content-Range: items 40-59/200"
    once = PageRange.parse_content_range_header(header)
    twice = PageRange.parse_content_range_header(once.to_content_range_header())
    assert once == twice
    assert once.to_content_range_header() == header


# --- Accept-Ranges header ---


@pytest.mark.parametrize("header", ["Accept-Ranges: items", "items"])
def test_parse_accept_ranges_header(header: str) -> None:
    p = PageRange.parse_accept_ranges_header(header)
    assert p == PageRange(element_name="items", page=-1, size=-1, total=-1)


@pytest.mark.parametrize("header", [None, "", "items1", "Accept-Ranges:items", "a b"])
def test_parse_accept_ranges_header_rejects(header: str | None) -> None:
    with pytest.raises(MalformedHeaderError):
        PageRange.parse_accept_ranges_header(header)


def test_to_accept_ranges_header() -> None:
    p = PageRange.of("items", 0, 10, 100)
    assert p.to_accept_ranges_header() == "Accept-Ranges: items"
    assert p.to_accept_ranges_header(include_name=False) == "items"
    assert PageRange.parse_accept_ranges_header(p.to_accept_ranges_header()) == (
        PageRange(element_name="items")
    )


# --- Navigation ---


def test_first_page() -> None:
    assert PageRange.of("items", 2, 10, 25).first_page() == PageRange.of(
        "items", 0, 10, 25
    )


def test_previous_page_saturates_at_zero() -> None:
    p = PageRange.of("items", 0, 10, 25)
    assert p.previous_page() is p


def test_previous_page() -> None:
    assert PageRange.of("items", 2, 10, 25).previous_page().page == 1


def test_next_page_saturates_at_last_page() -> None:
    p = PageRange.of("items", 2, 10, 25)
    assert p.next_page() is p


def test_next_page() -> None:
    p = PageRange.of("items", 0, 10, 25)
    nxt = p.next_page()
    assert nxt.page == 1
    assert p.page == 0


def test_next_page_with_unknown_total_advances() -> None:
    assert PageRange.parse_range_header("items=0-9").next_page().page == 1


@pytest.mark.parametrize(
    ("total", "last"),
    [(25, 2), (30, 2), (31, 3), (1, 0), (0, 0)],
)
def test_last_page(total: int, last: int) -> None:
    assert PageRange.of("items", 0, 10, total).last_page().page == last


def test_last_page_with_unknown_total_raises() -> None:
    with pytest.raises(UnknownBoundError):
        PageRange.parse_range_header("items=0-9").last_page()


@pytest.mark.parametrize(
    "move",
    ["first_page", "previous_page", "next_page", "last_page"],
)
def test_navigation_without_window_raises(move: str) -> None:
    p = PageRange.parse_accept_ranges_header("items")
    with pytest.raises(UnknownBoundError):
        getattr(p, move)()


# --- Link headers ---


def test_to_link_headers() -> None:
    links = PageRange.of("items", 1, 10, 25).to_link_headers("/api/items")
    assert [link.rel for link in links] == ["first", "previous", "next", "last"]
    assert links.as_dict() == {
        "first": "0-9",
        "previous": "0-9",
        "next": "20-24",
        "last": "20-24",
    }
    assert str(links) == (
        '</api/items>; rel="first"; range="0-9", '
        '</api/items>; rel="previous"; range="0-9", '
        '</api/items>; rel="next"; range="20-24", '
        '</api/items>; rel="last"; range="20-24"'
    )


def test_link_headers_on_first_and_last_page() -> None:
    first = PageRange.of("items", 0, 10, 25).to_link_headers("/items")
    assert first.as_dict()["previous"] == "0-9"
    last = PageRange.of("items", 2, 10, 25).to_link_headers("/items")
    assert last.as_dict()["next"] == "20-24"
    link = last.get("next")
    assert link is not None
    assert link.uri == "/items"
    assert last.get("self") is None


def test_link_headers_need_total() -> None:
    with pytest.raises(UnknownBoundError):
        PageRange.parse_range_header("items=0-9").to_link_headers("/items")


def test_link_headers_of_empty_collection() -> None:
    links = PageRange.of("items", 0, 10, 0).to_link_headers("/items")
    assert len(links) == 0
    assert str(links) == ""
