"""Best-effort requester metadata pulled from proxy headers.

Values are client-controlled, so they are cut to the stored column widths.
"""

from __future__ import annotations

from fastapi import Request

from app.domain.value_objects.limits import ADDRESS_MAX_LENGTH, USER_AGENT_MAX_LENGTH

UNKNOWN = "unknown"


def client_address(request: Request) -> str:
    """First X-Forwarded-For hop, then X-Real-IP, then the socket peer."""
    return _resolve_address(request)[:ADDRESS_MAX_LENGTH]


def _resolve_address(request: Request) -> str:
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        first = forwarded.split(",")[0].strip()
        if first:
            return first

    real_ip = request.headers.get("x-real-ip", "").strip()
    if real_ip:
        return real_ip

    if request.client and request.client.host:
        return request.client.host
    return UNKNOWN


def user_agent(request: Request) -> str:
    return (request.headers.get("user-agent") or UNKNOWN)[:USER_AGENT_MAX_LENGTH]
