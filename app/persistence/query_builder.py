"""Helpers for building safe, reusable SQL filter fragments."""

from __future__ import annotations

import math
from collections.abc import Mapping
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from numbers import Real
from typing import Any

from app.core.errors import BadRequestError
from app.persistence.sql import ParamStyle, PlaceholderCounter, _Parameterized

# Upper bound of the jobs.salary INTEGER column.
MAX_SALARY = 2**31 - 1

_CRITERIA_KEYS = {
    "title": "title",
    "minSalary": "min_salary",
    "min_salary": "min_salary",
    "hasEquity": "has_equity",
    "has_equity": "has_equity",
}


@dataclass(frozen=True)
class JobFilter:
    """Optional criteria for narrowing a job listing."""

    title: str | None = None
    min_salary: Any = None
    has_equity: bool | None = None

    @classmethod
    def from_mapping(cls, criteria: Mapping[str, Any]) -> JobFilter:
        """Accept camelCase (query string) or snake_case keys; others are ignored."""
        return cls(
            **{
                _CRITERIA_KEYS[key]: value
                for key, value in criteria.items()
                if key in _CRITERIA_KEYS
            }
        )


@dataclass(frozen=True)
class WhereFragment(_Parameterized):
    """`AND`-joined predicates (empty when unfiltered) and their values."""

    where: str

    def as_where_clause(self) -> str:
        """Return ` WHERE ...` ready to append to a SELECT, or ''."""
        return f" WHERE {self.where}" if self.where else ""


class WhereBuilder:
    """Collects predicates while numbering placeholders contiguously."""

    def __init__(self, style: ParamStyle = ParamStyle.NUMERIC_DOLLAR, start: int = 1):
        self._counter = PlaceholderCounter(style=style, start=start)
        self._conditions: list[str] = []

    def add(self, template: str, value: Any) -> WhereBuilder:
        """Add a predicate; `{}` in `template` is replaced by the placeholder."""
        self._conditions.append(template.format(self._counter.add(value)))
        return self

    def add_literal(self, condition: str) -> WhereBuilder:
        """Add a predicate with no parameters (application-owned SQL only)."""
        self._conditions.append(condition)
        return self

    def build(self) -> WhereFragment:
        return WhereFragment(
            values=tuple(self._counter.values),
            start=self._counter.start,
            where=" AND ".join(self._conditions),
        )


def escape_like(value: str) -> str:
    """Escape LIKE wildcards so `value` matches literally (escape char is a backslash)."""
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def validate_min_salary(value: Any) -> int:
    """Check `value` is a finite non-negative number and return it as an int bound.

    Salaries are whole numbers, so a fractional bound is rounded up:
    `salary >= 75000.5` selects the same rows as `salary >= 75001`.
    """
    number: Any = value
    if isinstance(value, str):
        try:
            number = Decimal(value.strip())
        except InvalidOperation:
            number = None
    if isinstance(number, bool) or not isinstance(number, Real | Decimal):
        raise BadRequestError(
            "minSalary must be a number", details={"minSalary": repr(value)}
        )
    if isinstance(number, Decimal):
        finite = number.is_finite()
    else:
        finite = math.isfinite(number)
    if not finite or number < 0:
        raise BadRequestError(
            "minSalary must be a finite, non-negative number",
            details={"minSalary": repr(value)},
        )
    if number > MAX_SALARY:
        raise BadRequestError(
            f"minSalary must not exceed {MAX_SALARY}", details={"minSalary": repr(value)}
        )
    return math.ceil(number)


def build_job_filter(
    criteria: JobFilter | Mapping[str, Any] | None = None,
    *,
    style: ParamStyle = ParamStyle.NUMERIC_DOLLAR,
) -> WhereFragment:
    """Build the WHERE predicates for a job listing.

    Clause order is fixed (title, minimum salary, equity) so placeholder
    numbers follow it: with both title and min_salary supplied, title is $1
    and min_salary is $2. The equity test compares against a literal zero and
    consumes no placeholder.

    - An empty or missing title adds no constraint; `%`, `_` and `\\` in
      the title match literally.
    - Unknown mapping keys are ignored.
    - A min_salary of 0 is a real bound.
    - has_equity=False adds no constraint.

    Raises:
        BadRequestError: If min_salary is not a finite number in
            [0, MAX_SALARY], or has_equity is not a boolean.
    """
    if criteria is None:
        criteria = JobFilter()
    elif not isinstance(criteria, JobFilter):
        criteria = JobFilter.from_mapping(criteria)

    builder = WhereBuilder(style=style)

    if criteria.title:
        builder.add("title ILIKE {} ESCAPE '\\'", f"%{escape_like(criteria.title)}%")

    if criteria.min_salary is not None:
        builder.add("salary >= {}", validate_min_salary(criteria.min_salary))

    if criteria.has_equity is not None and not isinstance(criteria.has_equity, bool):
        raise BadRequestError(
            "hasEquity must be a boolean", details={"hasEquity": repr(criteria.has_equity)}
        )
    if criteria.has_equity:
        builder.add_literal("equity > 0")

    return builder.build()
