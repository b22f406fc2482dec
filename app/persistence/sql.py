"""Partial-update SQL construction and shared placeholder numbering.

Column names that end up in generated SQL come either from a static
translation table or from the caller's keys. Callers must restrict keys to an
allow-list of updatable fields before building a fragment.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from enum import StrEnum
from typing import Any

from app.core.errors import BadRequestError


class ParamStyle(StrEnum):
    """Placeholder syntax; names follow DBAPI/SQLAlchemy paramstyles."""

    NUMERIC_DOLLAR = "numeric_dollar"  # $1, $2 (asyncpg, node-postgres)
    NAMED = "named"  # :p1, :p2 (SQLAlchemy text())


def param_name(index: int) -> str:
    return f"p{index}"


def placeholder(index: int, style: ParamStyle = ParamStyle.NUMERIC_DOLLAR) -> str:
    """Render the placeholder for 1-based parameter `index`."""
    if index < 1:
        raise ValueError(f"Placeholder index must be >= 1, got {index}")
    if style == ParamStyle.NAMED:
        return f":{param_name(index)}"
    return f"${index}"


class PlaceholderCounter:
    """Hands out contiguous placeholder numbers and collects their values."""

    def __init__(self, style: ParamStyle = ParamStyle.NUMERIC_DOLLAR, start: int = 1):
        if start < 1:
            raise ValueError(f"Placeholder numbering must start at >= 1, got {start}")
        self.style = style
        self.start = start
        self.values: list[Any] = []

    @property
    def next_index(self) -> int:
        return self.start + len(self.values)

    def add(self, value: Any) -> str:
        """Register `value` and return the placeholder bound to it."""
        marker = placeholder(self.next_index, self.style)
        self.values.append(value)
        return marker


@dataclass(frozen=True)
class _Parameterized:
    values: tuple[Any, ...]
    start: int

    @property
    def next_index(self) -> int:
        """First placeholder number not used by this fragment."""
        return self.start + len(self.values)

    @property
    def params(self) -> dict[str, Any]:
        """Values keyed by `p<n>`, for drivers that take named binds."""
        return {param_name(i): v for i, v in enumerate(self.values, start=self.start)}


@dataclass(frozen=True)
class PartialUpdate(_Parameterized):
    """`SET` clause body plus the values aligned with its placeholders."""

    set_cols: str


def resolve_column(name: str, js_to_sql: Mapping[str, str] | None = None) -> str:
    """Translate a logical field name to its column name.

    Lookup is exact and case-sensitive; names absent from the table are
    returned unchanged.
    """
    if js_to_sql and name in js_to_sql:
        return js_to_sql[name]
    return name


def build_partial_update(
    data_to_update: Mapping[str, Any],
    js_to_sql: Mapping[str, str] | None = None,
    *,
    style: ParamStyle = ParamStyle.NUMERIC_DOLLAR,
    start: int = 1,
) -> PartialUpdate:
    """Build the `SET` clause for updating only the supplied fields.

    {"firstName": "Aliya", "age": 32} with {"firstName": "first_name"} gives
    set_cols '"first_name"=$1, "age"=$2' and values ("Aliya", 32).

    Raises:
        BadRequestError: If `data_to_update` is empty.
    """
    if not data_to_update:
        raise BadRequestError("No data")

    counter = PlaceholderCounter(style=style, start=start)
    cols = [
        f'"{resolve_column(key, js_to_sql)}"={counter.add(value)}'
        for key, value in data_to_update.items()
    ]
    return PartialUpdate(values=tuple(counter.values), start=start, set_cols=", ".join(cols))
