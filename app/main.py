"""Jobly API service.

REST API for job postings backed by hand-written, parameterized SQL.
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.api.routes.health import router as health_router
from app.api.routes.jobs import router as jobs_router
from app.api.routes.monitoring import router as monitoring_router
from app.core.config import AppEnvironment, get_settings
from app.core.database import reset_engine
from app.core.errors import JoblyError, get_status_code
from app.core.logging import setup_logging
from app.core.tracing import REQUEST_ID_HEADER, clear_request_context, set_request_id

logger = structlog.get_logger(__name__)


def _request_log_context(request: Request) -> dict[str, str]:
    return {
        "path": request.url.path,
        "method": request.method,
        "query": request.url.query,
        "client_host": request.client.host if request.client else "",
    }


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    """Application lifespan context manager."""
    settings = get_settings()
    setup_logging()

    logger.info(
        "Starting Jobly API",
        app=settings.app.name,
        env=settings.app.env.value,
        version=settings.app.version,
    )
    app.state.settings = settings

    yield

    await reset_engine()
    logger.info("Jobly API stopped")


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    settings = get_settings()

    app = FastAPI(
        title="Jobly API",
        description="Job postings CRUD with filtered listings and partial updates.",
        version=settings.app.version,
        lifespan=lifespan,
        docs_url="/docs" if settings.app.env != AppEnvironment.PROD else None,
        redoc_url="/redoc" if settings.app.env != AppEnvironment.PROD else None,
        openapi_url="/openapi.json" if settings.app.env != AppEnvironment.PROD else None,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.security.cors_allowed_origins,
        allow_credentials=settings.security.cors_allow_credentials,
        allow_methods=settings.security.cors_allow_methods,
        allow_headers=settings.security.cors_allow_headers,
    )

    app.include_router(health_router)
    app.include_router(monitoring_router)
    app.include_router(jobs_router)

    @app.middleware("http")
    async def request_id_middleware(request: Request, call_next):
        """Echo X-Request-ID (or generate one) and bind it to the log context."""
        request_id = set_request_id(request.headers.get(REQUEST_ID_HEADER))
        request.state.request_id = request_id
        try:
            response = await call_next(request)
        finally:
            clear_request_context()
        response.headers[REQUEST_ID_HEADER] = request_id
        return response

    @app.exception_handler(JoblyError)
    async def domain_error_handler(request: Request, exc: JoblyError) -> JSONResponse:
        """Handle domain-specific errors."""
        status_code = get_status_code(exc)
        logger.warning(
            "Domain exception",
            **_request_log_context(request),
            status_code=status_code,
            error=exc.message,
            error_details=exc.details or {},
        )
        return JSONResponse(
            status_code=status_code,
            content={
                "detail": exc.message,
                **({"errors": exc.details} if exc.details else {}),
            },
        )

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        """Report request validation failures as 400 Bad Request."""
        errors = jsonable_encoder(exc.errors(), exclude={"input", "ctx"})
        logger.info("Request validation failed", **_request_log_context(request), errors=errors)
        return JSONResponse(
            status_code=400,
            content={"detail": "Invalid request", "errors": errors},
        )

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        """Handle unexpected exceptions."""
        logger.exception(
            "Unhandled exception",
            **_request_log_context(request),
            error=str(exc),
        )
        return JSONResponse(
            status_code=500,
            content={"detail": "Internal server error"},
        )

    return app


def run() -> None:
    """Run the application using uvicorn."""
    import uvicorn

    settings = get_settings()

    uvicorn.run(
        "app.main:create_app",
        factory=True,
        host=settings.server.host,
        port=settings.server.port,
        reload=settings.app.env == AppEnvironment.LOCAL,
        workers=1 if settings.app.env == AppEnvironment.LOCAL else settings.server.workers,
        log_level=settings.app.log_level.lower(),
    )


if __name__ == "__main__":
    run()
