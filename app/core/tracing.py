"""Request-scoped context for request ID propagation.

The request ID is bound into structlog's contextvars so every log line
emitted while handling a request carries it.
"""

import uuid

import structlog

REQUEST_ID_HEADER = "X-Request-ID"


def set_request_id(value: str | None) -> str:
    """Store the request ID (generating one if missing) and bind it for logging."""
    request_id = value or str(uuid.uuid4())
    structlog.contextvars.bind_contextvars(request_id=request_id)
    return request_id


def clear_request_context() -> None:
    """Clear request-scoped context after request completion."""
    structlog.contextvars.clear_contextvars()
