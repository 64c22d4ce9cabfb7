"""Prometheus instrumentation for the signing routes.

Labels stay minimal: route plus a collapsed result.
"""
from __future__ import annotations

from prometheus_client import (
    CollectorRegistry,
    Counter,
    Histogram,
    generate_latest,
    CONTENT_TYPE_LATEST,
)

# Registry must be created before metric objects reference it.
REGISTRY = CollectorRegistry()

SIGN_COUNTER = Counter(
    "cg_plugin_host_sign_requests_total",
    "Sign requests handled by the HTTP route.",
    ["result"],
    registry=REGISTRY,
)
VERIFY_COUNTER = Counter(
    "cg_plugin_host_verify_requests_total",
    "Verify requests handled by the HTTP route.",
    ["result"],
    registry=REGISTRY,
)
LAT_HIST = Histogram(
    "cg_plugin_host_latency_ms",
    "Route latency including the signing primitive (ms).",
    ["route"],
    buckets=(0.5, 1, 2, 5, 10, 25, 50, 100, 250, 500),
    registry=REGISTRY,
)


def observe_sign(*, ok: bool, latency_ms: float):
    SIGN_COUNTER.labels(result="ok" if ok else "error").inc()
    LAT_HIST.labels(route="/api/sign").observe(latency_ms)


def observe_verify(*, valid: bool, latency_ms: float):
    VERIFY_COUNTER.labels(result="valid" if valid else "invalid").inc()
    LAT_HIST.labels(route="/api/verify").observe(latency_ms)


def prometheus_latest() -> tuple[bytes, str]:
    return generate_latest(REGISTRY), CONTENT_TYPE_LATEST
