"""Prometheus metrics for the Jobly API."""

from prometheus_client import Counter, Histogram

# ---------------------------------------------------------------------------
# Job resource operations
# ---------------------------------------------------------------------------

jobly_job_operations_total = Counter(
    "jobly_job_operations_total",
    "Total job resource operations",
    ["operation", "outcome"],  # outcome: success | not_found | bad_request
)

jobly_job_filter_criteria_total = Counter(
    "jobly_job_filter_criteria_total",
    "Job listing filter criteria applied",
    ["criterion"],  # title | min_salary | has_equity
)

# ---------------------------------------------------------------------------
# Database
# ---------------------------------------------------------------------------

jobly_db_query_latency_seconds = Histogram(
    "jobly_db_query_latency_seconds",
    "Database query latency in seconds",
    ["query_name"],
    buckets=[0.001, 0.005, 0.01, 0.05, 0.1, 0.25, 0.5, 1.0, 2.0],
)

jobly_db_query_failures_total = Counter(
    "jobly_db_query_failures_total",
    "Total database query failures",
    ["query_name"],
)
