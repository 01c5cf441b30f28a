"""
Prometheus Metrics Collection

Metrics for the inspector:
- HTTP request/response metrics
- Outbound OAuth provider calls by provider, operation and outcome
"""

from __future__ import annotations

from typing import Any

from prometheus_client import REGISTRY, CollectorRegistry, Counter, Gauge, Histogram

_metrics_cache: dict[str, Any] = {}


def _lookup_registered(name: str, registry: CollectorRegistry) -> Any:
    """Find an already registered collector by metric name."""
    for collector, names in registry._collector_to_names.items():
        if name in names or any(n.startswith(f"{name}_") for n in names):
            return collector
    return None


def _get_or_create(metric_type: type, name: str, documentation: str, **kwargs: Any) -> Any:
    """Get existing metric or create new one, handling duplicate registration."""
    if name in _metrics_cache:
        return _metrics_cache[name]

    try:
        metric = metric_type(name, documentation, registry=REGISTRY, **kwargs)
    except ValueError:
        # Metric already registered (module re-import), reuse it
        metric = _lookup_registered(name, REGISTRY)
        if metric is None:
            raise

    _metrics_cache[name] = metric
    return metric


# HTTP Request Metrics
REQUEST_COUNT = _get_or_create(
    Counter,
    "inspector_http_requests_total",
    "Total number of HTTP requests",
    labelnames=["method", "path", "status_code"],
)

REQUEST_DURATION = _get_or_create(
    Histogram,
    "inspector_http_request_duration_seconds",
    "HTTP request duration in seconds",
    labelnames=["method", "path"],
    buckets=(0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0),
)

ACTIVE_REQUESTS = _get_or_create(
    Gauge,
    "inspector_http_requests_active",
    "Number of active HTTP requests",
)

# OAuth provider calls
PROVIDER_REQUESTS = _get_or_create(
    Counter,
    "inspector_provider_requests_total",
    "Outbound OAuth provider requests",
    labelnames=["provider", "operation", "outcome"],
)

PROVIDER_REQUEST_DURATION = _get_or_create(
    Histogram,
    "inspector_provider_request_duration_seconds",
    "Outbound OAuth provider request duration in seconds",
    labelnames=["provider", "operation"],
    buckets=(0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0),
)


def record_provider_call(provider: str, operation: str, outcome: str, duration: float) -> None:
    """
    Record one outbound provider call.

    Args:
        provider: Provider identifier
        operation: exchange, refresh, revoke or explore
        outcome: success, provider_error or failure
        duration: Call duration in seconds
    """
    PROVIDER_REQUESTS.labels(provider=provider, operation=operation, outcome=outcome).inc()
    PROVIDER_REQUEST_DURATION.labels(provider=provider, operation=operation).observe(duration)
