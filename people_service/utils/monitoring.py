"""Prometheus metrics for HTTP requests and document store calls."""

from __future__ import annotations

from prometheus_client import Counter, Histogram

http_requests_total = Counter(
    "people_http_requests_total",
    "Total HTTP requests",
    ["method", "path", "status"],
)

http_request_latency_seconds = Histogram(
    "people_http_request_latency_seconds",
    "HTTP request latency",
    ["method", "path"],
)

store_operations_total = Counter(
    "people_store_operations_total",
    "Document store operations by outcome",
    ["operation", "outcome"],
)


def observe_request(method: str, path: str, status: int, duration_seconds: float) -> None:
    http_requests_total.labels(method=method, path=path, status=str(status)).inc()
    http_request_latency_seconds.labels(method=method, path=path).observe(duration_seconds)


def observe_store_operation(operation: str, succeeded: bool) -> None:
    store_operations_total.labels(operation=operation, outcome="ok" if succeeded else "error").inc()
