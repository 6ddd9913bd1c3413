"""Application metrics using the Prometheus client library.

All metrics are defined here so there is a single inventory of what the
service measures.  Other modules import a metric and increment/observe it
at the point of action.  Prometheus scrapes them from GET /metrics.
"""

from __future__ import annotations

from prometheus_client import Counter, Gauge, Histogram

# ---------------------------------------------------------------------------
# HTTP metrics (populated by the MetricsMiddleware)
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
# Domain metrics
# ---------------------------------------------------------------------------

SUBMISSION_SCORES = Histogram(
    "assignment_submission_score",
    "Percentage score of graded assignment submissions",
    buckets=[0, 10, 20, 30, 40, 50, 60, 70, 80, 90, 100],
)

PROGRESS_UPDATES = Counter(
    "video_progress_updates_total",
    "Video progress upserts by outcome",
    ["result"],  # "created" or "updated"
)

ORDER_COLLISIONS = Counter(
    "order_collisions_total",
    "Appends that lost an order race and retried with a fresh count",
    ["kind"],  # "section" or "video"
)
