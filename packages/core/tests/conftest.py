"""Shared fixtures for restful-commons tests."""

from __future__ import annotations

import datetime
from dataclasses import dataclass
from typing import Any

import pytest


@dataclass
class Address:
    city: str
    zip_code: str


@dataclass
class Person:
    name: str
    age: int
    active: bool
    joined: datetime.date
    address: Address | None = None


@pytest.fixture
def people() -> list[dict[str, Any]]:
    """Five people as plain dicts, with a nested address."""
    return [
        {
            "name": "John",
            "age": 25,
            "active": True,
            "score": 7.5,
            "address": {"city": "Paris"},
        },
        {
            "name": "Jane",
            "age": 31,
            "active": False,
            "score": 9.0,
            "address": {"city": "Lyon"},
        },
        {
            "name": "Bob",
            "age": 25,
            "active": True,
            "score": 6.0,
            "address": {"city": "Lyon"},
        },
        {
            "name": "Alice",
            "age": 42,
            "active": True,
            "score": 8.25,
            "address": {"city": "Nice"},
        },
        {"name": "Eve", "age": 19, "active": False, "score": None, "address": None},
    ]


@pytest.fixture
def person_objects() -> list[Person]:
    return [
        Person("John", 25, True, datetime.date(2020, 1, 15), Address("Paris", "75001")),
        Person("Jane", 31, False, datetime.date(2021, 6, 1), Address("Lyon", "69001")),
        Person("Bob", 25, True, datetime.date(2019, 3, 9)),
    ]


@pytest.fixture
def numbered_items() -> list[dict[str, int]]:
    """25 items with ids 0..24."""
    return [{"id": i} for i in range(25)]
