"""
Notes API: Note Service (Business Logic)
=========================================

What:  The five note operations: create, list, get, update, delete.
How:   Each operation runs the same pipeline:
           validate input → apply to the store → build the response model
       Failures are raised as NotesAPIError subclasses and turned into HTTP
       responses by the global handlers in main.py.
Who:   Called by the route handlers in routes/notes.py, which receive the
       service through the `get_note_service` dependency.

Ordering rules:
    - update validates before looking the note up, so a request that is
      both invalid and aimed at a missing id gets a ValidationError
    - list orders by created_at descending; Python's sort is stable, so
      notes with equal timestamps keep their insertion order
"""

import logging
from typing import List, Optional

from notes_api.exceptions import NotFoundError, ValidationError
from notes_api.models.note import Note
from notes_api.schemas.note import MessageResponse, NoteCreate, NoteResponse, NoteUpdate
from notes_api.store import NoteStore
from notes_api.validators import normalize_content, normalize_title, validate_note_input

logger = logging.getLogger(__name__)


class NoteService:
    """
    Business logic layer for note operations.

    The service holds no state of its own beyond the store it was given, so
    one instance per app is enough.
    """

    def __init__(self, store: NoteStore):
        self.store = store

    def create_note(self, payload: NoteCreate) -> NoteResponse:
        """
        Validate and store a new note.

        Raises:
            ValidationError: title missing, blank or too long
        """
        self._validate(payload.title, payload.content)

        note = self.store.add(
            title=normalize_title(payload.title),
            content=normalize_content(payload.content),
        )
        logger.info("Note %d created", note.id)
        return self._to_response(note)

    def list_notes(self, q: Optional[str] = None) -> List[NoteResponse]:
        """
        All notes, newest first, optionally filtered by keyword.

        A keyword that is None or blank disables filtering. Otherwise only
        notes whose title or content contains the trimmed keyword
        (case-insensitive) are returned.
        """
        notes = self.store.all()

        keyword = q.strip() if q else ""
        if keyword:
            notes = [note for note in notes if note.matches(keyword)]

        notes.sort(key=lambda note: note.created_at, reverse=True)
        return [self._to_response(note) for note in notes]

    def get_note(self, note_id: int) -> NoteResponse:
        note = self.store.get(note_id)
        if note is None:
            logger.debug("Note %d not found", note_id)
            raise NotFoundError(resource="note", resource_id=note_id)
        return self._to_response(note)

    def update_note(self, note_id: int, payload: NoteUpdate) -> NoteResponse:
        """
        Overwrite title and content of an existing note.

        `id` and `created_at` are preserved.

        Raises:
            ValidationError: invalid payload (checked first)
            NotFoundError: no note with that id
        """
        self._validate(payload.title, payload.content)

        note = self.store.replace(
            note_id,
            title=normalize_title(payload.title),
            content=normalize_content(payload.content),
        )
        if note is None:
            logger.debug("Note %d not found for update", note_id)
            raise NotFoundError(resource="note", resource_id=note_id)

        logger.info("Note %d updated", note_id)
        return self._to_response(note)

    def delete_note(self, note_id: int) -> MessageResponse:
        if not self.store.remove(note_id):
            logger.debug("Note %d not found for delete", note_id)
            raise NotFoundError(resource="note", resource_id=note_id)

        logger.info("Note %d deleted", note_id)
        return MessageResponse(message="Note deleted successfully.")

    # ── Helpers ───────────────────────────────────────────────────────────

    @staticmethod
    def _validate(title: Optional[str], content: Optional[str]) -> None:
        errors = validate_note_input(title, content)
        if errors:
            raise ValidationError(errors=errors)

    @staticmethod
    def _to_response(note: Note) -> NoteResponse:
        return NoteResponse.model_validate(note)
