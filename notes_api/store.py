"""
Notes API: In-Memory Note Store
================================

What:  The single shared collection of notes for one running app instance.
How:   A dict keyed by integer id (insertion ordered) plus an id counter,
       both guarded by one `threading.Lock`. Every read and write takes the
       lock, so concurrent create/update/delete/list calls never lose updates
       or iterate a dict that is being mutated.
Who:   Owned by the app built in `create_app()`; wrapped by `NoteService`.
When:  Lives for the lifetime of the process. Nothing is persisted.

Identifier assignment:
    The next id is taken from the counter and the record is inserted inside
    the same critical section. Ids start at 1 and are never handed out twice,
    even after the note that held them is deleted.
"""

import itertools
import logging
import threading
from dataclasses import replace
from datetime import datetime, timezone
from typing import Callable, Dict, List, Optional

from notes_api.models.note import Note

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


class NoteStore:
    """
    Thread-safe in-memory note collection.

    Args:
        clock: Callable returning the creation timestamp for new notes.
               Defaults to `utc_now`; tests pass a deterministic clock.
    """

    def __init__(self, clock: Clock = utc_now):
        self._clock = clock
        self._lock = threading.Lock()
        self._notes: Dict[int, Note] = {}
        self._ids = itertools.count(1)

    def add(self, title: str, content: Optional[str]) -> Note:
        """Assign the next id and creation time, insert, and return the record."""
        with self._lock:
            note = Note(
                id=next(self._ids),
                title=title,
                content=content,
                created_at=self._clock(),
            )
            self._notes[note.id] = note
        logger.debug("Stored note %d", note.id)
        return note

    def get(self, note_id: int) -> Optional[Note]:
        with self._lock:
            return self._notes.get(note_id)

    def all(self) -> List[Note]:
        """Snapshot of every stored note, in insertion order."""
        with self._lock:
            return list(self._notes.values())

    def replace(self, note_id: int, title: str, content: Optional[str]) -> Optional[Note]:
        """
        Overwrite title and content of an existing note.

        Lookup and replacement happen under the lock as one step. `id` and
        `created_at` are carried over from the stored record.

        Returns:
            The updated record, or None if no note has that id.
        """
        with self._lock:
            current = self._notes.get(note_id)
            if current is None:
                return None
            updated = replace(current, title=title, content=content)
            self._notes[note_id] = updated
            return updated

    def remove(self, note_id: int) -> bool:
        """Delete a note. Returns False if no note has that id."""
        with self._lock:
            return self._notes.pop(note_id, None) is not None

    def __len__(self) -> int:
        with self._lock:
            return len(self._notes)
