"""Row mapping shared by repositories."""

from datetime import date, datetime
from typing import Any


def row_to_dict(row: Any) -> dict[str, Any]:
    """Convert a SQLAlchemy row to a dict keyed by the selected column labels.

    Timestamps are rendered as ISO-8601 strings. NUMERIC values stay
    `Decimal` so equity keeps its exact precision.
    """
    result = {}
    for k, v in dict(row._mapping).items():
        if isinstance(v, datetime | date):
            result[k] = v.isoformat()
        else:
            result[k] = v
    return result
