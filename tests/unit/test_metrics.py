"""Unit tests for metrics module."""

from app.core import metrics


def test_metrics_are_defined():
    assert hasattr(metrics, "jobly_job_operations_total")
    assert hasattr(metrics, "jobly_job_filter_criteria_total")
    assert hasattr(metrics, "jobly_db_query_latency_seconds")
    assert hasattr(metrics, "jobly_db_query_failures_total")


def test_job_operation_counter_increments():
    counter = metrics.jobly_job_operations_total.labels(operation="get", outcome="not_found")
    before = counter._value.get()

    counter.inc()

    assert counter._value.get() == before + 1
