"""
Logging Middleware

Request/response logging with structured logging and request correlation.
"""

from __future__ import annotations

import time
import uuid
from collections.abc import Callable

import structlog
from fastapi import Request, Response

logger = structlog.get_logger()

REQUEST_ID_HEADER = "X-Request-ID"


async def logging_middleware(request: Request, call_next: Callable) -> Response:
    """
    Add structured logging and request tracing.

    Reuses the caller's ``X-Request-ID`` when present, otherwise generates one,
    and logs request/response details under it.
    """
    request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())

    # Setup structured logging context
    structlog.contextvars.clear_contextvars()
    structlog.contextvars.bind_contextvars(
        request_id=request_id,
        method=request.method,
        path=request.url.path,
        client_host=request.client.host if request.client else None,
    )

    start_time = time.time()

    try:
        response = await call_next(request)

        duration = time.time() - start_time

        logger.info(
            "Request completed",
            status_code=response.status_code,
            duration=duration,
        )

        response.headers["X-Trace-ID"] = request_id
        response.headers[REQUEST_ID_HEADER] = request_id

        return response

    except Exception as exc:
        duration = time.time() - start_time

        logger.error(
            "Request failed",
            error=str(exc),
            error_type=type(exc).__name__,
            duration=duration,
            exc_info=True,
        )
        raise
