"""Logging configuration using structlog."""

import logging
import sys
from typing import Any

import structlog

from app.core.config import get_settings


def _service_fields(service: str, env: str):
    def processor(_logger: Any, _method: str, event_dict: dict[str, Any]) -> dict[str, Any]:
        event_dict.setdefault("service", service)
        event_dict.setdefault("env", env)
        return event_dict

    return processor


def setup_logging() -> None:
    """Configure structlog for the application.

    Request-scoped fields (request_id, path, method) are merged from
    contextvars bound by the request middleware in `app.main`.
    """
    settings = get_settings()
    level = getattr(logging, settings.app.log_level.value)
    json_output = settings.observability.log_record_format == "json"

    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=level)

    renderer = (
        structlog.processors.JSONRenderer() if json_output else structlog.dev.ConsoleRenderer()
    )
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            _service_fields(settings.observability.service_name, settings.app.env.value),
            structlog.processors.add_log_level,
            structlog.processors.StackInfoRenderer(),
            structlog.dev.set_exc_info,
            structlog.processors.TimeStamper(fmt="iso"),
            *([structlog.processors.format_exc_info] if json_output else []),
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )
