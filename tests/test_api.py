"""
Tests for the FastAPI application (`api/main.py`, `api/routers/enquiries.py`).

Exercises the HTTP surface end to end with fake provider clients.
"""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from api import __version__
from api.main import create_app
from conftest import FakeCrmClient
from services.rate_limiter import RateLimiter
from services.runtime import RelayClients


@pytest.fixture
def api_client(config, clients) -> TestClient:
    return TestClient(create_app(config=config, clients=clients))


def _assert_cors(response) -> None:
    assert response.headers["access-control-allow-origin"] == "*"
    assert response.headers["access-control-allow-credentials"] == "true"
    assert response.headers["access-control-allow-methods"] == "GET,OPTIONS,PATCH,DELETE,POST,PUT"
    assert "X-CSRF-Token" in response.headers["access-control-allow-headers"]


def test_health(api_client) -> None:
    response = api_client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "OK", "message": "Server is running", "version": __version__}
    _assert_cors(response)


@pytest.mark.parametrize("path", ["/api/contact", "/api/crm"])
def test_preflight(api_client, path) -> None:
    response = api_client.options(path)

    assert response.status_code == 200
    assert response.content == b""
    _assert_cors(response)


@pytest.mark.parametrize("path", ["/api/contact", "/api/crm"])
def test_get_is_not_allowed(api_client, path) -> None:
    response = api_client.get(path)

    assert response.status_code == 405
    assert response.json() == {"error": "Method not allowed"}
    _assert_cors(response)


def test_contact_success(api_client, email_client, valid_payload) -> None:
    response = api_client.post("/api/contact", json=valid_payload)

    assert response.status_code == 200
    assert response.json() == {"success": True, "message": "Enquiry submitted successfully"}
    assert len(email_client.sent) == 2
    assert "Utilities Comparison" in email_client.sent[0]["subject"]
    _assert_cors(response)


def test_contact_honeypot(api_client, email_client, valid_payload) -> None:
    valid_payload["companyWebsite"] = "http://spam.example"
    response = api_client.post("/api/contact", json=valid_payload)

    assert response.status_code == 200
    assert response.json()["success"] is True
    assert email_client.calls == 0


def test_contact_missing_fields(api_client, valid_payload) -> None:
    valid_payload.pop("phone")
    response = api_client.post("/api/contact", json=valid_payload)

    assert response.status_code == 400
    assert response.json() == {"error": "All fields are required"}


def test_invalid_json_is_400(api_client) -> None:
    response = api_client.post(
        "/api/contact",
        content=b"{not json",
        headers={"Content-Type": "application/json"},
    )
    assert response.status_code == 400


def test_rate_limit_by_forwarded_address(api_client, valid_payload) -> None:
    headers = {"X-Forwarded-For": "203.0.113.50, 10.0.0.1"}
    for _ in range(5):
        assert api_client.post("/api/contact", json=valid_payload, headers=headers).status_code == 200

    limited = api_client.post("/api/contact", json={}, headers=headers)
    assert limited.status_code == 429
    assert limited.json() == {"error": "Too many requests. Please try again later."}

    other = api_client.post("/api/contact", json=valid_payload, headers={"X-Forwarded-For": "203.0.113.51"})
    assert other.status_code == 200


def test_rate_limit_falls_back_to_peer_address(api_client, valid_payload) -> None:
    for _ in range(5):
        api_client.post("/api/contact", json=valid_payload)
    assert api_client.post("/api/contact", json=valid_payload).status_code == 429


def test_crm_relay(api_client, crm_client, valid_payload) -> None:
    response = api_client.post("/api/crm", json=valid_payload)

    assert response.status_code == 201
    assert response.json() == {"id": "enq-1", "ok": True}
    assert crm_client.payloads == [valid_payload]


def test_crm_no_content_status(config, valid_payload) -> None:
    clients = RelayClients(rate_limiter=RateLimiter(), crm=FakeCrmClient(status_code=204, body=None))
    response = TestClient(create_app(config=config, clients=clients)).post("/api/crm", json=valid_payload)

    assert response.status_code == 204
    assert response.content == b""


def test_crm_upstream_error(config, valid_payload) -> None:
    clients = RelayClients(
        rate_limiter=RateLimiter(),
        crm=FakeCrmClient(status_code=400, body={"error": "Invalid phone number"}),
    )
    response = TestClient(create_app(config=config, clients=clients)).post("/api/crm", json=valid_payload)

    assert response.status_code == 400
    assert response.json() == {"error": "Invalid phone number"}


def test_crm_forwards_json_array_unchanged(api_client, crm_client) -> None:
    response = api_client.post("/api/crm", json=[{"name": "Jane"}])

    assert response.status_code == 201
    assert crm_client.payloads == [[{"name": "Jane"}]]
