"""Job repository - CRUD for job postings."""

import time
from collections.abc import Mapping
from typing import Any

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.metrics import jobly_db_query_failures_total, jobly_db_query_latency_seconds
from app.persistence.base import row_to_dict
from app.persistence.query_builder import JobFilter, build_job_filter
from app.persistence.sql import ParamStyle, build_partial_update, param_name, placeholder

JOB_COLUMNS = 'id, title, salary, equity, company_handle AS "companyHandle"'

# Logical (API) field name -> column name
JOB_JS_TO_SQL = {"companyHandle": "company_handle"}


class JobRepository:
    """CRUD operations for jobs."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def _execute(self, query_name: str, statement: Any, params: Mapping[str, Any]):
        started = time.perf_counter()
        try:
            result = await self.session.execute(statement, dict(params))
        except Exception:
            jobly_db_query_failures_total.labels(query_name=query_name).inc()
            raise
        jobly_db_query_latency_seconds.labels(query_name=query_name).observe(
            time.perf_counter() - started
        )
        return result

    async def create(self, record: Mapping[str, Any]) -> dict[str, Any]:
        """Insert a job and return it with its new id."""
        query = text(f"""
            INSERT INTO jobs (title, salary, equity, company_handle)
            VALUES (:title, :salary, :equity, :company_handle)
            RETURNING {JOB_COLUMNS}
        """)
        result = await self._execute(
            "job_create",
            query,
            {
                "title": record["title"],
                "salary": record.get("salary"),
                "equity": record.get("equity"),
                "company_handle": record["companyHandle"],
            },
        )
        return row_to_dict(result.fetchone())

    async def find_all(
        self, criteria: JobFilter | Mapping[str, Any] | None = None
    ) -> list[dict[str, Any]]:
        """List jobs matching optional criteria, ordered by title."""
        fragment = build_job_filter(criteria, style=ParamStyle.NAMED)
        query = text(f"""
            SELECT {JOB_COLUMNS}
            FROM jobs{fragment.as_where_clause()}
            ORDER BY title, id
        """)
        result = await self._execute("job_find_all", query, fragment.params)
        return [row_to_dict(row) for row in result.fetchall()]

    async def get(self, job_id: int) -> dict[str, Any] | None:
        """Get job by ID."""
        query = text(f"""
            SELECT {JOB_COLUMNS}
            FROM jobs
            WHERE id = :id
        """)
        result = await self._execute("job_get", query, {"id": job_id})
        row = result.fetchone()
        if row is None:
            return None
        return row_to_dict(row)

    async def update(self, job_id: int, data: Mapping[str, Any]) -> dict[str, Any] | None:
        """Update only the supplied fields; returns None when no row matches.

        Raises:
            BadRequestError: If `data` is empty (raised before any query runs).
        """
        update = build_partial_update(data, JOB_JS_TO_SQL, style=ParamStyle.NAMED)
        id_index = update.next_index
        query = text(f"""
            UPDATE jobs
            SET {update.set_cols}
            WHERE id = {placeholder(id_index, ParamStyle.NAMED)}
            RETURNING {JOB_COLUMNS}
        """)
        params = {**update.params, param_name(id_index): job_id}
        result = await self._execute("job_update", query, params)
        row = result.fetchone()
        if row is None:
            return None
        return row_to_dict(row)

    async def remove(self, job_id: int) -> int | None:
        """Delete a job; returns its id, or None when no row matches."""
        query = text("""
            DELETE FROM jobs
            WHERE id = :id
            RETURNING id
        """)
        result = await self._execute("job_remove", query, {"id": job_id})
        row = result.fetchone()
        if row is None:
            return None
        return row_to_dict(row)["id"]
