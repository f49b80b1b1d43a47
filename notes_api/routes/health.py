"""
Notes API: Health Check Route
==============================

What:  Liveness endpoint for container probes and monitoring.
How:   Reports version, uptime and the size of the in-memory store. There
       are no external dependencies to probe, so the service is healthy
       whenever it can answer.
"""

import logging
import time

from fastapi import APIRouter, Depends, Request

from notes_api import __version__
from notes_api.dependencies import get_note_service
from notes_api.schemas.note import HealthResponse
from notes_api.services.note_service import NoteService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
)
async def health_check(
    request: Request,
    service: NoteService = Depends(get_note_service),
) -> HealthResponse:
    """Uptime counts from the owning app's startup (`app.state.started_at`)."""
    return HealthResponse(
        status="healthy",
        version=__version__,
        notes=len(service.store),
        uptime_seconds=round(time.time() - request.app.state.started_at, 2),
    )
