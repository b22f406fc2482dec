"""Job routes."""

from fastapi import APIRouter, Query

from app.core.dependencies import JobServiceDep, RequireAdmin
from app.persistence.query_builder import JobFilter
from app.schemas.v1.jobs import (
    JobCreate,
    JobDeletedResponse,
    JobListResponse,
    JobResponse,
    JobUpdate,
)

router = APIRouter(prefix="/jobs", tags=["jobs"])


@router.post("", response_model=JobResponse, status_code=201)
async def create_job(request: JobCreate, user: RequireAdmin, service: JobServiceDep):
    """Create a job. Admin only."""
    job = await service.create(request.model_dump(by_alias=True))
    return {"job": job}


@router.get("", response_model=JobListResponse)
async def list_jobs(
    service: JobServiceDep,
    title: str | None = Query(None),
    min_salary: str | None = Query(None, alias="minSalary"),
    has_equity: bool | None = Query(None, alias="hasEquity"),
):
    """List jobs, optionally filtered by title, minSalary and hasEquity."""
    criteria = JobFilter(title=title, min_salary=min_salary, has_equity=has_equity)
    jobs = await service.find_all(criteria)
    return {"jobs": jobs}


@router.get("/{job_id}", response_model=JobResponse)
async def get_job(job_id: int, service: JobServiceDep):
    """Get a job by id."""
    job = await service.get(job_id)
    return {"job": job}


@router.patch("/{job_id}", response_model=JobResponse)
async def update_job(job_id: int, request: JobUpdate, user: RequireAdmin, service: JobServiceDep):
    """Update title, salary and/or equity of a job. Admin only."""
    job = await service.update(job_id, request.model_dump(by_alias=True, exclude_unset=True))
    return {"job": job}


@router.delete("/{job_id}", response_model=JobDeletedResponse)
async def delete_job(job_id: int, user: RequireAdmin, service: JobServiceDep):
    """Delete a job. Admin only."""
    deleted = await service.remove(job_id)
    return {"deleted": deleted}
