"""Jobly API error hierarchy."""

from typing import Any


class JoblyError(Exception):
    """Base exception for Jobly API errors."""

    code = "JOBLY_INTERNAL_ERROR"
    status_code = 500

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
    ):
        self.message = message
        self.details = details
        super().__init__(message)


class BadRequestError(JoblyError):
    """Caller supplied missing or invalid data."""

    code = "JOBLY_BAD_REQUEST"
    status_code = 400


class UnauthorizedError(JoblyError):
    """Missing credentials or credentials without the required role."""

    code = "JOBLY_UNAUTHORIZED"
    status_code = 401


class NotFoundError(JoblyError):
    """Resource not found."""

    code = "JOBLY_NOT_FOUND"
    status_code = 404


ERROR_STATUS_MAP: dict[type[JoblyError], int] = {
    BadRequestError: 400,
    UnauthorizedError: 401,
    NotFoundError: 404,
}


def get_status_code(error: JoblyError) -> int:
    """Get HTTP status code for error."""
    return ERROR_STATUS_MAP.get(type(error), 500)
