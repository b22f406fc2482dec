"""Job schemas."""

from decimal import Decimal
from typing import Annotated, Any

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, Strict
from pydantic.alias_generators import to_camel


def _reject_bool(v: Any) -> Any:
    if isinstance(v, bool):
        raise ValueError("must be a number, not a boolean")
    return v


Title = Annotated[str, Field(min_length=1)]
Salary = Annotated[int, Strict(), Field(ge=0)]
Equity = Annotated[Decimal, BeforeValidator(_reject_bool), Field(ge=0, le=1)]
CompanyHandle = Annotated[str, Field(min_length=1, max_length=25)]


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class JobCreate(_CamelModel):
    model_config = ConfigDict(extra="forbid")

    title: Title
    salary: Salary | None = None
    equity: Equity | None = None
    company_handle: CompanyHandle


class JobUpdate(_CamelModel):
    """Fields an admin may change; `id` and `companyHandle` are fixed."""

    model_config = ConfigDict(extra="forbid")

    title: Title | None = None
    salary: Salary | None = None
    equity: Equity | None = None


class Job(_CamelModel):
    id: int
    title: str
    salary: int | None = None
    equity: Decimal | None = None
    company_handle: str


class JobResponse(BaseModel):
    job: Job


class JobListResponse(BaseModel):
    jobs: list[Job]


class JobDeletedResponse(BaseModel):
    deleted: int
