"""Tests for requester metadata extraction."""

from starlette.requests import Request

from app.domain.value_objects.limits import ADDRESS_MAX_LENGTH, USER_AGENT_MAX_LENGTH
from app.infrastructure.api.request_context import client_address, user_agent


def _request(headers: dict[str, str] | None = None, client=("10.1.1.1", 5000)) -> Request:
    scope = {
        "type": "http",
        "method": "GET",
        "path": "/api/visits",
        "headers": [
            (k.lower().encode(), v.encode()) for k, v in (headers or {}).items()
        ],
        "client": client,
    }
    return Request(scope)


def test_forwarded_for_first_hop_wins():
    req = _request({"X-Forwarded-For": " 203.0.113.9 , 10.0.0.1", "X-Real-IP": "1.1.1.1"})
    assert client_address(req) == "203.0.113.9"


def test_real_ip_used_without_forwarded_for():
    assert client_address(_request({"X-Real-IP": "198.51.100.2"})) == "198.51.100.2"


def test_socket_peer_fallback():
    assert client_address(_request()) == "10.1.1.1"


def test_unknown_without_any_source():
    assert client_address(_request(client=None)) == "unknown"


def test_user_agent_default():
    assert user_agent(_request()) == "unknown"
    assert user_agent(_request({"User-Agent": "curl/8"})) == "curl/8"


def test_oversized_forwarded_for_is_clipped_to_column_width():
    req = _request({"X-Forwarded-For": "a" * 150 + ", 10.0.0.1"})
    assert client_address(req) == "a" * ADDRESS_MAX_LENGTH


def test_oversized_user_agent_is_clipped_to_column_width():
    req = _request({"User-Agent": "b" * 600})
    assert user_agent(req) == "b" * USER_AGENT_MAX_LENGTH
