"""
Health Check Endpoints

Lightweight liveness endpoint for load balancers and uptime checks.
"""

from __future__ import annotations

import platform
import time

from fastapi import APIRouter

from oauth_inspector.models.health import HealthResponse

router = APIRouter(prefix="/api")

# Process start reference for uptime reporting
_STARTED_AT = time.monotonic()


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Liveness check",
    description="Report process uptime, wall clock and runtime version. No dependencies are probed.",
)
async def health_check() -> HealthResponse:
    """
    Basic health check.

    Returns:
        Health status with uptime, timestamp and runtime version
    """
    return HealthResponse(
        status="ok",
        uptime=time.monotonic() - _STARTED_AT,
        timestamp=int(time.time() * 1000),
        node=f"python-{platform.python_version()}",
    )
