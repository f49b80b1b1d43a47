"""
Notes API: FastAPI Dependencies
================================

What:  Hands route handlers the NoteService owned by the running app.
How:   `create_app()` stores the service on `app.state`; this dependency
       reads it back from the request. Tests can swap it with
       `app.dependency_overrides[get_note_service]`.
"""

from fastapi import Request

from notes_api.services.note_service import NoteService


def get_note_service(request: Request) -> NoteService:
    return request.app.state.note_service
