"""Prometheus metrics instrumentation."""

from __future__ import annotations

from fastapi import Response
from prometheus_client import (
    CONTENT_TYPE_LATEST,
    CollectorRegistry,
    Counter,
    Histogram,
    generate_latest,
)

REGISTRY = CollectorRegistry()

SEARCH_COUNT = Counter(
    "agentic_search_requests_total",
    "Total search calls",
    labelnames=("mode", "status"),
    registry=REGISTRY,
)

SEARCH_LATENCY = Histogram(
    "agentic_search_latency_seconds",
    "Latency of search calls",
    labelnames=("mode",),
    registry=REGISTRY,
)

BACKEND_FAILURES = Counter(
    "agentic_search_backend_failures_total",
    "Failed backend branches",
    labelnames=("origin",),
    registry=REGISTRY,
)

HITS_RETURNED = Histogram(
    "agentic_search_hits_returned",
    "Number of hits returned per search call",
    labelnames=("mode",),
    buckets=(0, 1, 2, 5, 10, 20, 50, 100),
    registry=REGISTRY,
)


def metrics_response() -> Response:
    """Return Prometheus metrics as an HTTP response."""
    payload = generate_latest(REGISTRY)
    return Response(content=payload, media_type=CONTENT_TYPE_LATEST)


__all__ = [
    "REGISTRY",
    "SEARCH_COUNT",
    "SEARCH_LATENCY",
    "BACKEND_FAILURES",
    "HITS_RETURNED",
    "metrics_response",
]
