"""Smoke tests for service-level endpoints."""

import uuid
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from fastapi.testclient import TestClient


@pytest.fixture
def app():
    from app.main import create_app

    return create_app()


@pytest.fixture
def client(app):
    """raise_server_exceptions=False so 500s come back as responses."""
    return TestClient(app, raise_server_exceptions=False)


def test_health_endpoint(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"


def test_live_endpoint(client):
    response = client.get("/health/live")
    assert response.status_code == 200
    assert response.json()["status"] == "alive"


def test_ready_endpoint_degraded_when_database_unreachable(client):
    with patch("app.api.routes.health.get_engine", side_effect=RuntimeError("no db")):
        response = client.get("/health/ready")

    assert response.status_code == 200
    assert response.json() == {"status": "degraded", "database": False}


def test_ready_endpoint_ready_when_database_answers(client):
    conn = AsyncMock()
    engine = MagicMock()
    engine.connect.return_value.__aenter__.return_value = conn

    with patch("app.api.routes.health.get_engine", return_value=engine):
        response = client.get("/health/ready")

    assert response.json() == {"status": "ready", "database": True}
    conn.execute.assert_awaited_once()


def test_metrics_endpoint(client):
    response = client.get("/metrics", headers={"X-Metrics-Token": "test-metrics-token"})
    assert response.status_code == 200
    assert "jobly_db_query_latency_seconds" in response.text


def test_metrics_endpoint_rejects_missing_token(client):
    response = client.get("/metrics")
    assert response.status_code == 403


def test_request_id_header_round_trip(client):
    response = client.get("/health", headers={"X-Request-ID": "smoke-request-id-123"})
    assert response.headers.get("X-Request-ID") == "smoke-request-id-123"


def test_request_id_header_generated(client):
    response = client.get("/health")
    uuid.UUID(response.headers["X-Request-ID"])
