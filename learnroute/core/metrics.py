"""Prometheus metric inventory.

Every metric the service exports is declared here; the modules that own
the behavior import and update them.  Counters never reset within a
process, so tests assert on deltas.
"""

from __future__ import annotations

from prometheus_client import Counter, Gauge, Histogram

# ---------------------------------------------------------------------------
# HTTP metrics (populated by MetricsMiddleware)
# ---------------------------------------------------------------------------

REQUEST_COUNT = Counter(
    "http_requests_total",
    "Total HTTP requests by method, endpoint, and status code",
    ["method", "endpoint", "status_code"],
)

REQUEST_DURATION = Histogram(
    "http_request_duration_seconds",
    "HTTP request duration in seconds",
    ["method", "endpoint"],
    buckets=[0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0],
)

ACTIVE_REQUESTS = Gauge(
    "http_active_requests",
    "Number of HTTP requests currently being processed",
)

# ---------------------------------------------------------------------------
# Roadmap progress
# ---------------------------------------------------------------------------

STEP_TOGGLES = Counter(
    "roadmap_step_toggles_total",
    "Step completion toggles by requested value",
    ["completed"],  # "true" | "false"
)

ROADMAP_COMPLETIONS = Counter(
    "roadmap_completions_total",
    "Roadmap completion transitions by trigger",
    ["trigger"],  # "steps" (all steps checked) | "explicit" (complete action)
)

POINTS_AWARDED = Counter(
    "points_awarded_total",
    "Points credited to users by explicit roadmap completion",
)

# ---------------------------------------------------------------------------
# Cache
# ---------------------------------------------------------------------------

CACHE_OPERATIONS = Counter(
    "cache_operations_total",
    "Cache get operations by result",
    ["operation"],  # "hit" | "miss"
)
