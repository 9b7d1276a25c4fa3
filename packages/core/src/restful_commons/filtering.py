"""FilterParser — ``filter`` query parameter -> FilterCriterion list."""

from __future__ import annotations

import logging
from enum import Enum
from typing import TYPE_CHECKING

from pydantic import field_validator

from .exceptions import MalformedFilterError
from .value_object import ValueObject

if TYPE_CHECKING:
    from collections.abc import Iterable

logger = logging.getLogger("restful_commons.filter")

DEFAULT_VALUE_SEPARATOR = "|"


class FilterOperator(str, Enum):
    """Supported filter operators, valued by their query-string mnemonic."""

    EQUALS = "eq"
    NOT_EQUALS = "ne"
    GREATER_THAN = "gt"
    GREATER_OR_EQUAL = "gte"
    LESS_THAN = "lt"
    LESS_OR_EQUAL = "lte"
    LIKE = "like"
    IN = "in"

    @property
    def is_multi_value(self) -> bool:
        """True for operators that consume the whole value list."""
        return self in _MULTI_VALUE_OPERATORS


_MULTI_VALUE_OPERATORS = frozenset({FilterOperator.IN})
_OPERATORS_BY_MNEMONIC: dict[str, FilterOperator] = {op.value: op for op in FilterOperator}


class FilterCriterion(ValueObject):
    """
    One predicate over a resource collection.

    Attributes:
        property: Property name, or a dot-separated path (``address.city``).
        operator: Comparison to apply.
        values: Non-empty list of raw values. Single-value operators only
            use the first one.
    """

    property: str
    operator: FilterOperator
    values: tuple[str, ...]

    @field_validator("values")
    @classmethod
    def _check_values(cls, values: tuple[str, ...]) -> tuple[str, ...]:
        if not values:
            raise MalformedFilterError("A filter needs at least one value", raw=values)
        return values

    @property
    def value(self) -> str:
        return self.values[0]

    @property
    def path(self) -> tuple[str, ...]:
        """Property path segments: ``"address.city"`` -> ``("address", "city")``."""
        return tuple(self.property.split("."))

    def to_query_param(self, value_separator: str = DEFAULT_VALUE_SEPARATOR) -> str:
        if self.operator.is_multi_value:
            value = value_separator.join(self.values)
        else:
            value = self.value
        return f"{self.property} {self.operator.value} {value}"


class FilterParser:
    """
    Parse ``property operator value`` clauses separated by commas.

    Example: ``"age gte 25,name eq John,status in active|pending"``.
    Clauses are implicitly AND-combined by consumers.
    """

    def __init__(self, value_separator: str = DEFAULT_VALUE_SEPARATOR) -> None:
        """
        Initialize FilterParser.

        Args:
            value_separator: Splits the value of multi-value operators
                (``in``) into a list. Must not be a comma or a space.
        """
        if not value_separator or value_separator in (",", " "):
            raise ValueError(f"Invalid value separator: {value_separator!r}")
        self._value_separator = value_separator

    def parse(self, raw: str | None) -> list[FilterCriterion]:
        """
        Return one criterion per comma-separated clause, in input order.

        Raises:
            MalformedFilterError: If *raw* is blank, a clause is blank or does
                not hold exactly three non-blank space-separated tokens, or an
                operator is unknown.
        """
        if raw is None or not raw.strip():
            raise MalformedFilterError("Filter string cannot be null or blank.", raw=raw)
        criteria = [self._parse_clause(raw, clause) for clause in raw.split(",")]
        logger.debug("Parsed filter %r into %d criteria", raw, len(criteria))
        return criteria

    def format(self, criteria: Iterable[FilterCriterion]) -> str:
        """Inverse of :meth:`parse`."""
        return ",".join(c.to_query_param(self._value_separator) for c in criteria)

    def _parse_clause(self, raw: str, clause: str) -> FilterCriterion:
        if not clause.strip():
            raise MalformedFilterError(
                f"Filter part cannot be null or blank in {raw!r}",
                raw=raw,
                segment=clause,
            )
        tokens = clause.split(" ")
        if len(tokens) != 3:
            raise MalformedFilterError(
                f"Invalid filter format for: {clause!r}. "
                "Expected format is property operator value",
                raw=raw,
                segment=clause,
            )
        prop, mnemonic, value = tokens
        if not prop.strip() or not mnemonic.strip() or not value.strip():
            raise MalformedFilterError(
                "Property, operator, and value cannot be blank in filter: "
                f"{clause!r}",
                raw=raw,
                segment=clause,
            )
        operator = _OPERATORS_BY_MNEMONIC.get(mnemonic)
        if operator is None:
            raise MalformedFilterError(
                f"Unknown operator: {mnemonic!r}. Valid operators: "
                f"{', '.join(_OPERATORS_BY_MNEMONIC)}",
                raw=raw,
                segment=clause,
            )
        values = self._split_values(raw, clause, operator, value)
        return FilterCriterion(property=prop, operator=operator, values=values)

    def _split_values(
        self, raw: str, clause: str, operator: FilterOperator, value: str
    ) -> tuple[str, ...]:
        if not operator.is_multi_value:
            return (value,)
        values = tuple(value.split(self._value_separator))
        if any(not v.strip() for v in values):
            raise MalformedFilterError(
                f"Blank item in value list {value!r} of filter {clause!r}",
                raw=raw,
                segment=clause,
            )
        return values
