"""Job service - resource access for job postings."""

from collections.abc import Mapping
from typing import Any

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.errors import BadRequestError, NotFoundError
from app.core.metrics import jobly_job_filter_criteria_total, jobly_job_operations_total
from app.persistence.job_repository import JobRepository
from app.persistence.query_builder import JobFilter

logger = structlog.get_logger(__name__)

UPDATABLE_FIELDS = frozenset({"title", "salary", "equity"})
NON_NULLABLE_FIELDS = frozenset({"title"})


class JobService:
    """Create, list, fetch, update and remove job postings."""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.job_repo = JobRepository(session)

    async def create(self, record: Mapping[str, Any]) -> dict[str, Any]:
        """Create a job from {title, salary, equity, companyHandle}.

        Returns:
            The stored job including its generated id.
        """
        job = await self.job_repo.create(record)
        jobly_job_operations_total.labels(operation="create", outcome="success").inc()
        logger.info("Job created", job_id=job["id"], company_handle=job["companyHandle"])
        return job

    async def find_all(
        self, criteria: JobFilter | Mapping[str, Any] | None = None
    ) -> list[dict[str, Any]]:
        """List jobs, optionally filtered by title, minSalary and hasEquity.

        Raises:
            BadRequestError: If a filter value is invalid
        """
        try:
            if isinstance(criteria, Mapping):
                criteria = JobFilter.from_mapping(criteria)
            jobs = await self.job_repo.find_all(criteria)
        except BadRequestError:
            jobly_job_operations_total.labels(operation="find_all", outcome="bad_request").inc()
            raise
        if criteria is not None:
            self._record_criteria(criteria)
        jobly_job_operations_total.labels(operation="find_all", outcome="success").inc()
        return jobs

    async def get(self, job_id: int) -> dict[str, Any]:
        """Get a job by id.

        Raises:
            NotFoundError: If no job has this id
        """
        job = await self.job_repo.get(job_id)
        if job is None:
            jobly_job_operations_total.labels(operation="get", outcome="not_found").inc()
            raise NotFoundError(f"No job: {job_id}")
        jobly_job_operations_total.labels(operation="get", outcome="success").inc()
        return job

    async def update(self, job_id: int, changes: Mapping[str, Any]) -> dict[str, Any]:
        """Apply a partial update to a job.

        Only title, salary and equity can change.

        Raises:
            BadRequestError: If no data is supplied or a field is not updatable
            NotFoundError: If no job has this id
        """
        disallowed = sorted(set(changes) - UPDATABLE_FIELDS)
        if disallowed:
            jobly_job_operations_total.labels(operation="update", outcome="bad_request").inc()
            raise BadRequestError(
                "Fields cannot be updated", details={"fields": disallowed}
            )
        nulled = sorted(
            key for key in NON_NULLABLE_FIELDS if key in changes and changes[key] is None
        )
        if nulled:
            jobly_job_operations_total.labels(operation="update", outcome="bad_request").inc()
            raise BadRequestError("Fields cannot be null", details={"fields": nulled})

        try:
            job = await self.job_repo.update(job_id, changes)
        except BadRequestError:
            jobly_job_operations_total.labels(operation="update", outcome="bad_request").inc()
            raise

        if job is None:
            jobly_job_operations_total.labels(operation="update", outcome="not_found").inc()
            raise NotFoundError(f"No job: {job_id}")

        jobly_job_operations_total.labels(operation="update", outcome="success").inc()
        logger.info("Job updated", job_id=job_id, fields=sorted(changes))
        return job

    async def remove(self, job_id: int) -> int:
        """Delete a job and return its id.

        Raises:
            NotFoundError: If no job has this id
        """
        deleted = await self.job_repo.remove(job_id)
        if deleted is None:
            jobly_job_operations_total.labels(operation="remove", outcome="not_found").inc()
            raise NotFoundError(f"No job: {job_id}")
        jobly_job_operations_total.labels(operation="remove", outcome="success").inc()
        logger.info("Job removed", job_id=job_id)
        return deleted

    @staticmethod
    def _record_criteria(criteria: JobFilter) -> None:
        if criteria.title:
            jobly_job_filter_criteria_total.labels(criterion="title").inc()
        if criteria.min_salary is not None:
            jobly_job_filter_criteria_total.labels(criterion="min_salary").inc()
        if criteria.has_equity:
            jobly_job_filter_criteria_total.labels(criterion="has_equity").inc()
