"""Contact form endpoint."""

from __future__ import annotations

import json
import logging

from fastapi import APIRouter, Depends, Request, Response

from app.application.use_cases.submit_contact import SubmitContactUseCase
from app.domain.errors import (
    InvalidInput,
    MethodNotAllowed,
    StorageConflict,
    StorageUnavailable,
)
from app.domain.value_objects.timestamps import to_iso
from app.infrastructure.api.dependencies import get_submit_contact_uc
from app.infrastructure.api.request_context import client_address, user_agent
from app.infrastructure.api.responses import error_response

logger = logging.getLogger(__name__)

router = APIRouter(tags=["contact"])

SUCCESS_MESSAGE = "Thank you for your message! I'll get back to you soon."
FAILURE_MESSAGE = "Unable to process your message at this time. Please try again later."


async def _read_json(request: Request):
    raw = await request.body()
    if not raw.strip():
        return {}
    try:
        return json.loads(raw)
    except ValueError as e:
        raise InvalidInput("body", "Invalid JSON in request body") from e


@router.post("/contact")
async def submit_contact(
    request: Request,
    use_case: SubmitContactUseCase = Depends(get_submit_contact_uc),
):
    """Validate and store a contact form submission."""
    payload = await _read_json(request)

    try:
        saved = await use_case.execute(
            payload,
            ip_address=client_address(request),
            user_agent=user_agent(request),
        )
    except (StorageUnavailable, StorageConflict) as e:
        logger.error("Error processing contact form: %s", e)
        return error_response(500, FAILURE_MESSAGE, e)

    return {
        "status": "success",
        "message": SUCCESS_MESSAGE,
        "messageId": saved.id,
        "timestamp": to_iso(saved.timestamp),
    }


@router.options("/contact")
async def contact_preflight():
    return Response(status_code=200)


@router.api_route(
    "/contact", methods=["GET", "PUT", "PATCH", "DELETE"], include_in_schema=False
)
async def contact_method_not_allowed():
    raise MethodNotAllowed("Method not allowed. Use POST.")
