"""Visitor counter endpoint."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Request, Response

from app.application.use_cases.increment_visits import IncrementVisitCountUseCase
from app.domain.errors import MethodNotAllowed, StorageConflict, StorageUnavailable
from app.domain.value_objects.timestamps import to_iso
from app.infrastructure.api.dependencies import get_increment_visits_uc
from app.infrastructure.api.request_context import client_address
from app.infrastructure.api.responses import error_response

logger = logging.getLogger(__name__)

router = APIRouter(tags=["visits"])


@router.api_route("/visits", methods=["GET", "POST"])
async def increment_visits(
    request: Request,
    use_case: IncrementVisitCountUseCase = Depends(get_increment_visits_uc),
):
    """Count this page load and return the new total."""
    try:
        record = await use_case.execute(client_address(request))
    except (StorageUnavailable, StorageConflict) as e:
        logger.error("Error updating visit count: %s", e)
        return error_response(500, "Unable to track visit count", e)

    return {
        "status": "success",
        "visitCount": record.visit_count,
        "message": record.greeting(),
        "timestamp": to_iso(record.last_visit),
    }


@router.options("/visits")
async def visits_preflight():
    return Response(status_code=200)


@router.api_route("/visits", methods=["PUT", "PATCH", "DELETE"], include_in_schema=False)
async def visits_method_not_allowed():
    raise MethodNotAllowed("Method not allowed. Use GET or POST.")
