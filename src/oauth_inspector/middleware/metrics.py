"""
Metrics Middleware

Prometheus metrics collection for inbound requests.
"""

from __future__ import annotations

import time
from collections.abc import Callable

from fastapi import Request, Response
from starlette.routing import Match

from oauth_inspector.monitoring.metrics import (
    ACTIVE_REQUESTS,
    REQUEST_COUNT,
    REQUEST_DURATION,
)

UNMATCHED_PATH = "unmatched"


def route_template(request: Request) -> str:
    """
    Path label for a request: the matched route template.

    Requests that match no route share a single label, so arbitrary paths
    cannot grow the label set.
    """
    route = request.scope.get("route")
    if route is not None:
        return route.path

    for route in request.app.routes:
        match, _ = route.matches(request.scope)
        if match == Match.FULL:
            return route.path
    return UNMATCHED_PATH


async def metrics_middleware(request: Request, call_next: Callable) -> Response:
    """
    Collect Prometheus metrics for requests.

    Tracks request counts, durations, and active requests.
    """
    ACTIVE_REQUESTS.inc()
    start_time = time.time()
    status_code = 500

    try:
        response = await call_next(request)
        status_code = response.status_code
        return response

    finally:
        path = route_template(request)
        REQUEST_COUNT.labels(
            method=request.method,
            path=path,
            status_code=status_code,
        ).inc()

        REQUEST_DURATION.labels(method=request.method, path=path).observe(
            time.time() - start_time
        )

        ACTIVE_REQUESTS.dec()
