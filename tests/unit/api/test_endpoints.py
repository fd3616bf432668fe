"""HTTP-level tests for /api/visits and /api/contact with in-memory fakes."""

from __future__ import annotations

from datetime import datetime

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.exc import OperationalError

from app.adapters.persistence.database import get_session
from app.config import settings
from app.domain.value_objects.limits import ADDRESS_MAX_LENGTH, USER_AGENT_MAX_LENGTH
from app.infrastructure.api.dependencies import get_contact_repo, get_visit_repo
from app.main import app
from tests.fakes import BrokenVisitRepo, FakeContactRepo, FakeVisitRepo

CORS_EXPECTED = {
    "access-control-allow-origin": "*",
    "access-control-allow-methods": "GET, POST, OPTIONS",
    "access-control-allow-headers": "Content-Type",
}


@pytest.fixture
def visit_repo():
    return FakeVisitRepo()


@pytest.fixture
def contact_repo():
    return FakeContactRepo()


@pytest.fixture
def client(visit_repo, contact_repo):
    app.dependency_overrides[get_visit_repo] = lambda: visit_repo
    app.dependency_overrides[get_contact_repo] = lambda: contact_repo
    yield TestClient(app)
    app.dependency_overrides.clear()


def _assert_cors(response):
    for header, value in CORS_EXPECTED.items():
        assert response.headers.get(header) == value


def _parse_iso(value: str) -> datetime:
    return datetime.fromisoformat(value.replace("Z", "+00:00"))


# ─── /api/visits ─────────────────────────────────────────────────────


def test_first_visit(client):
    response = client.get("/api/visits")
    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "success"
    assert body["visitCount"] == 1
    assert body["message"] == "Welcome! You are the first visitor!"
    assert _parse_iso(body["timestamp"]).tzinfo is not None
    _assert_cors(response)


def test_get_and_post_both_increment(client):
    assert client.get("/api/visits").json()["visitCount"] == 1
    body = client.post("/api/visits").json()
    assert body["visitCount"] == 2
    assert body["message"] == "Thank you for visiting! You are visitor #2"


def test_forwarded_address_is_recorded(client, visit_repo):
    client.get("/api/visits", headers={"X-Forwarded-For": "203.0.113.5, 10.0.0.1"})
    record = visit_repo.records[settings.visit_record_id]
    assert record.last_visitor_ip == "203.0.113.5"


def test_real_ip_header_fallback(client, visit_repo):
    client.get("/api/visits", headers={"X-Real-IP": "198.51.100.7"})
    assert visit_repo.records[settings.visit_record_id].last_visitor_ip == "198.51.100.7"


def test_oversized_forwarded_for_still_counts(client, visit_repo):
    response = client.get("/api/visits", headers={"X-Forwarded-For": "9" * 150})
    assert response.status_code == 200
    record = visit_repo.records[settings.visit_record_id]
    assert record.last_visitor_ip == "9" * ADDRESS_MAX_LENGTH


def test_visits_wrong_method(client):
    response = client.delete("/api/visits")
    assert response.status_code == 405
    assert response.json()["status"] == "error"
    _assert_cors(response)


def test_visits_storage_failure_is_generic(client):
    app.dependency_overrides[get_visit_repo] = lambda: BrokenVisitRepo()
    response = client.get("/api/visits")
    assert response.status_code == 500
    assert response.json() == {"status": "error", "message": "Unable to track visit count"}
    _assert_cors(response)


def test_visits_failure_detail_in_debug(client, monkeypatch):
    monkeypatch.setattr(settings, "debug", True)
    app.dependency_overrides[get_visit_repo] = lambda: BrokenVisitRepo()
    body = client.get("/api/visits").json()
    assert body["status"] == "error"
    assert "error" in body


# ─── Preflight ───────────────────────────────────────────────────────


@pytest.mark.parametrize("path", ["/api/visits", "/api/contact"])
def test_options_preflight(client, path):
    response = client.options(path)
    assert response.status_code == 200
    assert response.content == b""
    _assert_cors(response)


# ─── /api/contact ────────────────────────────────────────────────────


def test_contact_success(client, contact_repo, valid_contact_payload):
    response = client.post("/api/contact", json=valid_contact_payload)
    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "success"
    assert body["message"] == "Thank you for your message! I'll get back to you soon."
    assert body["messageId"]
    _parse_iso(body["timestamp"])
    assert body["messageId"] in contact_repo.messages
    _assert_cors(response)


def test_contact_records_requester_metadata(client, contact_repo, valid_contact_payload):
    response = client.post(
        "/api/contact",
        json=valid_contact_payload,
        headers={"User-Agent": "Mozilla/5.0 test", "X-Forwarded-For": "192.0.2.1"},
    )
    stored = contact_repo.messages[response.json()["messageId"]]
    assert stored.user_agent == "Mozilla/5.0 test"
    assert stored.ip_address == "192.0.2.1"
    assert stored.status.value == "new"


def test_oversized_headers_are_stored_clipped(client, contact_repo, valid_contact_payload):
    response = client.post(
        "/api/contact",
        json=valid_contact_payload,
        headers={"User-Agent": "u" * 600, "X-Forwarded-For": "f" * 150},
    )
    assert response.status_code == 200
    stored = contact_repo.messages[response.json()["messageId"]]
    assert len(stored.user_agent) == USER_AGENT_MAX_LENGTH
    assert len(stored.ip_address) == ADDRESS_MAX_LENGTH


@pytest.mark.parametrize("field", ["name", "email", "message"])
def test_contact_empty_required_field(client, valid_contact_payload, field):
    response = client.post("/api/contact", json={**valid_contact_payload, field: ""})
    assert response.status_code == 400
    body = response.json()
    assert body["status"] == "error"
    assert field in body["message"]
    _assert_cors(response)


def test_contact_invalid_email(client, valid_contact_payload):
    response = client.post(
        "/api/contact", json={**valid_contact_payload, "email": "not-an-email"}
    )
    assert response.status_code == 400
    assert "email" in response.json()["message"]


def test_contact_invalid_json(client):
    response = client.post(
        "/api/contact",
        content=b"{not json",
        headers={"Content-Type": "application/json"},
    )
    assert response.status_code == 400
    assert response.json()["message"] == "Invalid JSON in request body"


def test_contact_empty_body_reports_missing_fields(client):
    response = client.post("/api/contact")
    assert response.status_code == 400
    assert "Missing required fields" in response.json()["message"]


def test_contact_wrong_method(client):
    response = client.get("/api/contact")
    assert response.status_code == 405
    assert response.json() == {"status": "error", "message": "Method not allowed. Use POST."}
    _assert_cors(response)


def test_identical_submissions_get_distinct_ids(client, contact_repo, valid_contact_payload):
    first = client.post("/api/contact", json=valid_contact_payload).json()["messageId"]
    second = client.post("/api/contact", json=valid_contact_payload).json()["messageId"]
    assert first != second
    assert len(contact_repo.messages) == 2


def test_contact_storage_failure_is_generic(client, valid_contact_payload):
    app.dependency_overrides[get_contact_repo] = lambda: FakeContactRepo(broken=True)
    response = client.post("/api/contact", json=valid_contact_payload)
    assert response.status_code == 500
    body = response.json()
    assert body["status"] == "error"
    assert "error" not in body


# ─── Misc ────────────────────────────────────────────────────────────


def test_unknown_route_uses_error_shape(client):
    response = client.get("/api/nope")
    assert response.status_code == 404
    assert response.json()["status"] == "error"
    _assert_cors(response)


class _FakeResult:
    def scalar(self):
        return 1


class _HealthySession:
    async def execute(self, statement):
        return _FakeResult()


class _FailingSession:
    async def execute(self, statement):
        raise OperationalError("SELECT 1", {}, Exception("connection refused"))


def test_health_ok(client):
    async def _session():
        yield _HealthySession()

    app.dependency_overrides[get_session] = _session
    body = client.get("/api/health").json()
    assert body["status"] == "ok"
    assert body["database"] == "connected"


def test_health_degraded_when_database_down(client):
    async def _session():
        yield _FailingSession()

    app.dependency_overrides[get_session] = _session
    response = client.get("/api/health")
    assert response.status_code == 200
    assert response.json()["status"] == "degraded"
