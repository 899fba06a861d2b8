"""Prometheus metrics for Engagespot API calls."""

from __future__ import annotations

from typing import Final

from prometheus_client import Counter, Histogram

OUTCOME_SUCCESS: Final = "success"
OUTCOME_APPLICATION_ERROR: Final = "application_error"
OUTCOME_TRANSPORT_ERROR: Final = "transport_error"

ENGAGESPOT_REQUESTS_TOTAL: Final = Counter(
    "engagespot_requests_total",
    "Total number of requests issued to the Engagespot API.",
    labelnames=("operation", "outcome"),
)

ENGAGESPOT_REQUEST_LATENCY_SECONDS: Final = Histogram(
    "engagespot_request_latency_seconds",
    "Time taken for the Engagespot API to answer a request.",
    labelnames=("operation",),
    buckets=(0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1, 2, 5, 10),
)
