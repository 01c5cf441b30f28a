"""
Health Check Models

Pydantic models for the health endpoint.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """Health check response model."""

    status: str = Field(..., description="Always 'ok' while the process serves requests")
    uptime: float = Field(..., description="Process uptime in seconds")
    timestamp: int = Field(..., description="Current time in epoch milliseconds")
    node: str = Field(..., description="Runtime version string")
