"""Root conftest for tests."""

import os
from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock

import pytest

if os.getenv("APP_ENV", "").strip().lower() == "prod":
    raise RuntimeError("Refusing to run tests with APP_ENV=prod")

os.environ["APP_ENV"] = "test"
os.environ["SECURITY_SECRET_KEY"] = "test-secret-key"
os.environ["OTEL_LOG_RECORD_FORMAT"] = "console"
os.environ.setdefault("METRICS_TOKEN", "test-metrics-token")


def pytest_collection_modifyitems(items: list[pytest.Item]) -> None:
    """Auto-apply markers based on test directory structure."""
    dir_marker_map = {
        "unit": pytest.mark.unit,
        "smoke": pytest.mark.smoke,
        "integration": pytest.mark.integration,
    }
    for item in items:
        test_path = str(item.fspath)
        for dir_name, marker in dir_marker_map.items():
            if f"/{dir_name}/" in test_path or f"\\{dir_name}\\" in test_path:
                item.add_marker(marker)
                break


@pytest.fixture
def make_row():
    """Build a mock row compatible with row_to_dict().

    row_to_dict() calls dict(row._mapping), so `_mapping` is a real dict.
    """

    def _make(**kwargs) -> MagicMock:
        row = MagicMock()
        row._mapping = kwargs
        return row

    return _make


@pytest.fixture
def job_row(make_row):
    """Build a job row as selected by JobRepository."""

    def _make(**overrides) -> MagicMock:
        values = {
            "id": 1,
            "title": "manager",
            "salary": 90000,
            "equity": Decimal("0.01"),
            "companyHandle": "c1",
        }
        values.update(overrides)
        return make_row(**values)

    return _make


@pytest.fixture
def make_session():
    """Build an AsyncMock session whose execute() returns the given rows."""

    def _make(fetchone_row=None, fetchall_rows=None) -> AsyncMock:
        mock_result = MagicMock()
        mock_result.fetchone.return_value = fetchone_row
        mock_result.fetchall.return_value = fetchall_rows or []

        session = AsyncMock()
        session.execute = AsyncMock(return_value=mock_result)
        session.commit = AsyncMock()
        session.rollback = AsyncMock()
        return session

    return _make
