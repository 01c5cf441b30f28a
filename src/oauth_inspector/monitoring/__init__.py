"""
Inspector Monitoring

Prometheus metrics for inbound requests and outbound OAuth provider calls.
"""

from __future__ import annotations

from .metrics import (
    ACTIVE_REQUESTS,
    PROVIDER_REQUEST_DURATION,
    PROVIDER_REQUESTS,
    REQUEST_COUNT,
    REQUEST_DURATION,
    record_provider_call,
)

__all__ = [
    "ACTIVE_REQUESTS",
    "PROVIDER_REQUESTS",
    "PROVIDER_REQUEST_DURATION",
    "REQUEST_COUNT",
    "REQUEST_DURATION",
    "record_provider_call",
]
