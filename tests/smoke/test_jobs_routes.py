"""Route tests for /jobs with the job repository mocked out."""

from decimal import Decimal
from unittest.mock import AsyncMock

import pytest
from fastapi.testclient import TestClient

from app.core.auth import create_token
from app.core.errors import BadRequestError
from app.persistence.query_builder import JobFilter

WORKER = {
    "id": 1,
    "title": "worker",
    "salary": 50000,
    "equity": Decimal("0"),
    "companyHandle": "c1",
}
MANAGER = {
    "id": 2,
    "title": "manager",
    "salary": 90000,
    "equity": Decimal("0.01"),
    "companyHandle": "c1",
}


@pytest.fixture
def job_repo():
    return AsyncMock()


@pytest.fixture
def client(job_repo):
    from app.core.dependencies import get_job_service
    from app.main import create_app
    from app.services.job_service import JobService

    app = create_app()

    def override_job_service():
        service = JobService(AsyncMock())
        service.job_repo = job_repo
        return service

    app.dependency_overrides[get_job_service] = override_job_service
    return TestClient(app, raise_server_exceptions=False)


@pytest.fixture
def admin_headers():
    return {"Authorization": f"Bearer {create_token('a1', is_admin=True)}"}


@pytest.fixture
def user_headers():
    return {"Authorization": f"Bearer {create_token('u1')}"}


# --- POST /jobs ---


def test_create_job_as_admin(client, job_repo, admin_headers):
    job_repo.create.return_value = {
        "id": 3,
        "title": "Nice One",
        "salary": 100000,
        "equity": None,
        "companyHandle": "c2",
    }

    response = client.post(
        "/jobs",
        json={"title": "Nice One", "salary": 100000, "companyHandle": "c2"},
        headers=admin_headers,
    )

    assert response.status_code == 201
    assert response.json() == {
        "job": {
            "id": 3,
            "title": "Nice One",
            "salary": 100000,
            "equity": None,
            "companyHandle": "c2",
        }
    }
    (record,) = job_repo.create.call_args.args
    assert record["companyHandle"] == "c2"


def test_create_job_missing_data_is_bad_request(client, job_repo, admin_headers):
    response = client.post("/jobs", json={"title": "this should not work"}, headers=admin_headers)

    assert response.status_code == 400
    job_repo.create.assert_not_called()


def test_create_job_boolean_equity_is_bad_request(client, admin_headers):
    response = client.post(
        "/jobs",
        json={"title": "Nice One", "companyHandle": "c2", "equity": False},
        headers=admin_headers,
    )

    assert response.status_code == 400


def test_create_job_non_admin_is_unauthorized(client, user_headers):
    response = client.post(
        "/jobs", json={"title": "Nice One", "companyHandle": "c2"}, headers=user_headers
    )

    assert response.status_code == 401


def test_create_job_anonymous_is_unauthorized(client):
    response = client.post("/jobs", json={"title": "Nice One", "companyHandle": "c2"})

    assert response.status_code == 401


# --- GET /jobs ---


def test_list_jobs_anonymous(client, job_repo):
    job_repo.find_all.return_value = [MANAGER, WORKER]

    response = client.get("/jobs")

    assert response.status_code == 200
    body = response.json()
    assert [j["title"] for j in body["jobs"]] == ["manager", "worker"]
    assert body["jobs"][0]["equity"] == "0.01"
    assert body["jobs"][1]["equity"] == "0"


def test_list_jobs_passes_query_filters(client, job_repo):
    job_repo.find_all.return_value = [MANAGER]

    response = client.get(
        "/jobs", params={"title": "manage", "minSalary": "75000", "hasEquity": "true"}
    )

    assert response.status_code == 200
    (criteria,) = job_repo.find_all.call_args.args
    assert criteria == JobFilter(title="manage", min_salary="75000", has_equity=True)


def test_list_jobs_invalid_min_salary_is_bad_request(client, job_repo):
    job_repo.find_all.side_effect = BadRequestError("minSalary must be a number")

    response = client.get("/jobs", params={"minSalary": "lots"})

    assert response.status_code == 400
    assert response.json()["detail"] == "minSalary must be a number"


def test_list_jobs_database_failure_is_server_error(client, job_repo):
    job_repo.find_all.side_effect = RuntimeError('relation "jobs" does not exist')

    response = client.get("/jobs")

    assert response.status_code == 500
    assert response.json() == {"detail": "Internal server error"}


# --- GET /jobs/{id} ---


def test_get_job(client, job_repo):
    job_repo.get.return_value = WORKER

    response = client.get("/jobs/1")

    assert response.status_code == 200
    assert response.json()["job"]["companyHandle"] == "c1"


def test_get_job_not_found(client, job_repo):
    job_repo.get.return_value = None

    response = client.get("/jobs/0")

    assert response.status_code == 404


# --- PATCH /jobs/{id} ---


def test_update_job_as_admin(client, job_repo, admin_headers):
    job_repo.update.return_value = {**WORKER, "title": "skilled worker"}

    response = client.patch("/jobs/1", json={"title": "skilled worker"}, headers=admin_headers)

    assert response.status_code == 200
    assert response.json()["job"]["title"] == "skilled worker"
    job_repo.update.assert_awaited_once_with(1, {"title": "skilled worker"})


def test_update_job_non_admin_is_unauthorized(client, user_headers):
    response = client.patch("/jobs/1", json={"title": "skilled worker"}, headers=user_headers)

    assert response.status_code == 401


def test_update_job_anonymous_is_unauthorized(client):
    response = client.patch("/jobs/1", json={"title": "skilled worker"})

    assert response.status_code == 401


def test_update_job_not_found(client, job_repo, admin_headers):
    job_repo.update.return_value = None

    response = client.patch("/jobs/0", json={"title": "skilled worker"}, headers=admin_headers)

    assert response.status_code == 404


def test_update_job_id_change_is_bad_request(client, job_repo, admin_headers):
    response = client.patch("/jobs/1", json={"id": 77777}, headers=admin_headers)

    assert response.status_code == 400
    job_repo.update.assert_not_called()


def test_update_job_invalid_equity_is_bad_request(client, admin_headers):
    response = client.patch("/jobs/1", json={"equity": False}, headers=admin_headers)

    assert response.status_code == 400


def test_update_job_empty_body_is_bad_request(client, job_repo, admin_headers):
    job_repo.update.side_effect = BadRequestError("No data")

    response = client.patch("/jobs/1", json={}, headers=admin_headers)

    assert response.status_code == 400
    assert response.json()["detail"] == "No data"


# --- DELETE /jobs/{id} ---


def test_delete_job_as_admin(client, job_repo, admin_headers):
    job_repo.remove.return_value = 1

    response = client.delete("/jobs/1", headers=admin_headers)

    assert response.status_code == 200
    assert response.json() == {"deleted": 1}


def test_delete_job_non_admin_is_unauthorized(client, user_headers):
    response = client.delete("/jobs/1", headers=user_headers)

    assert response.status_code == 401


def test_delete_job_anonymous_is_unauthorized(client):
    response = client.delete("/jobs/1")

    assert response.status_code == 401


def test_delete_job_not_found(client, job_repo, admin_headers):
    job_repo.remove.return_value = None

    response = client.delete("/jobs/0", headers=admin_headers)

    assert response.status_code == 404
