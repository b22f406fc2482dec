"""Dependency injection type aliases."""

from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.auth import AuthenticatedUser, CurrentUser, RequireAdmin
from app.core.database import get_session
from app.services.job_service import JobService


def get_job_service(session: AsyncSession = Depends(get_session)) -> JobService:
    return JobService(session)


JobServiceDep = Annotated[JobService, Depends(get_job_service)]

__all__ = [
    "AuthenticatedUser",
    "CurrentUser",
    "JobServiceDep",
    "get_job_service",
    "RequireAdmin",
]
