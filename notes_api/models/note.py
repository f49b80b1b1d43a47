"""
Notes API: Note Record
=======================

What:  The stored representation of a note, as held by `NoteStore`.
How:   A frozen dataclass. The store never mutates a record in place; an
       update swaps in a new record built with `dataclasses.replace`, so a
       record handed out to a caller is a stable snapshot.

Field rules:
    - id: assigned by the store, never reused within a process lifetime
    - title: already trimmed, 1-100 characters
    - content: None when the client sent nothing, "" or only whitespace
    - created_at: aware UTC datetime, set once at creation
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class Note:
    """A single note held in memory."""

    id: int
    title: str
    content: Optional[str]
    created_at: datetime

    def matches(self, keyword: str) -> bool:
        """
        Case-insensitive substring match against title and content.

        `keyword` is expected to be trimmed and non-empty already.
        """
        needle = keyword.casefold()
        if needle in self.title.casefold():
            return True
        return self.content is not None and needle in self.content.casefold()
