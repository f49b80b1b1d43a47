"""
Notes API: Notes Route Handlers
================================

What:  HTTP surface of the five note operations under /notes.
How:   Each handler extracts path/query/body values, delegates to
       NoteService, and sets the success status code and headers.
       Errors raised by the service are mapped to 400/404 by the global
       handlers in main.py.

Path parameters use Starlette's `int` convertor ("/{note_id:int}"), so a
non-integer segment such as /notes/abc does not match any route and gets
the router's plain 404.

The collection routes answer on both /notes and /notes/, so clients using
either form get a direct response rather than a redirect.
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Response

from notes_api.dependencies import get_note_service
from notes_api.schemas.note import (
    ErrorResponse,
    MessageResponse,
    NoteCreate,
    NoteResponse,
    NoteUpdate,
    ValidationErrorResponse,
)
from notes_api.services.note_service import NoteService

logger = logging.getLogger(__name__)

# ── Router Configuration ──────────────────────────────────────────────────
router = APIRouter(prefix="/notes", tags=["Notes"])


@router.post(
    "",
    status_code=201,
    response_model=NoteResponse,
    responses={
        201: {"description": "Note created", "model": NoteResponse},
        400: {"description": "Invalid title or body", "model": ValidationErrorResponse},
    },
    summary="Create a note",
)
@router.post("/", status_code=201, response_model=NoteResponse, include_in_schema=False)
async def create_note(
    payload: NoteCreate,
    response: Response,
    service: NoteService = Depends(get_note_service),
) -> NoteResponse:
    """
    Create a note and return it with its assigned id and creation time.

    The Location header points at the new resource.
    """
    note = service.create_note(payload)
    response.headers["Location"] = f"{router.prefix}/{note.id}"
    return note


@router.get(
    "",
    response_model=List[NoteResponse],
    summary="List notes, newest first",
    description=(
        "Returns every note ordered by creation time, most recent first. "
        "With `q`, only notes whose title or content contains the keyword "
        "(case-insensitive) are returned."
    ),
)
@router.get("/", response_model=List[NoteResponse], include_in_schema=False)
async def list_notes(
    response: Response,
    q: Optional[str] = Query(
        default=None,
        description="Keyword to search for in title and content",
    ),
    service: NoteService = Depends(get_note_service),
) -> List[NoteResponse]:
    notes = service.list_notes(q)
    response.headers["X-Total-Count"] = str(len(notes))
    return notes


@router.get(
    "/{note_id:int}",
    response_model=NoteResponse,
    responses={
        404: {"description": "Note not found", "model": ErrorResponse},
    },
    summary="Get a single note by ID",
)
async def get_note(
    note_id: int,
    service: NoteService = Depends(get_note_service),
) -> NoteResponse:
    return service.get_note(note_id)


@router.put(
    "/{note_id:int}",
    response_model=NoteResponse,
    responses={
        400: {"description": "Invalid title or body", "model": ValidationErrorResponse},
        404: {"description": "Note not found", "model": ErrorResponse},
    },
    summary="Replace a note's title and content",
)
async def update_note(
    note_id: int,
    payload: NoteUpdate,
    service: NoteService = Depends(get_note_service),
) -> NoteResponse:
    """
    Overwrite title and content. `id` and `createdAt` never change.

    Validation runs before the lookup: an invalid body sent to a missing id
    yields 400, not 404.
    """
    return service.update_note(note_id, payload)


@router.delete(
    "/{note_id:int}",
    response_model=MessageResponse,
    responses={
        404: {"description": "Note not found", "model": ErrorResponse},
    },
    summary="Delete a note",
)
async def delete_note(
    note_id: int,
    service: NoteService = Depends(get_note_service),
) -> MessageResponse:
    return service.delete_note(note_id)
