"""Shared response shapes and CORS headers for the public endpoints."""

from __future__ import annotations

from fastapi.responses import JSONResponse

from app.config import settings

CORS_HEADERS: dict[str, str] = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, POST, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type",
}


def error_body(message: str, exc: BaseException | None = None) -> dict:
    """``{status: "error", message}``; internal detail only in debug mode."""
    body: dict = {"status": "error", "message": message}
    if settings.debug and exc is not None:
        cause = exc.__cause__ or exc
        body["error"] = str(cause)
    return body


def error_response(
    status_code: int, message: str, exc: BaseException | None = None
) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=error_body(message, exc),
        headers=CORS_HEADERS,
    )
