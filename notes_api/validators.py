"""
Notes API: Note Input Validation
=================================

What:  Field rules for create/update payloads, plus the normalization applied
       to a payload once it has passed.
How:   `validate_note_input` runs every rule and collects failures into a
       field → messages mapping. An empty mapping means the input is valid.
Who:   Called by NoteService before anything reaches the store.

Rules:
    title    required; after trimming, 1 to TITLE_MAX_LENGTH characters
    content  optional; no length limit; blank input is stored as None
"""

from collections import defaultdict
from typing import Dict, List, Optional

TITLE_MAX_LENGTH = 100

TITLE_REQUIRED_MESSAGE = "The Title field is required."
TITLE_TOO_LONG_MESSAGE = (
    f"The field Title must be a string with a maximum length of {TITLE_MAX_LENGTH}."
)


def validate_note_input(title: Optional[str], content: Optional[str]) -> Dict[str, List[str]]:
    """
    Check a candidate title/content pair.

    Returns:
        Mapping of field name to error messages. Empty when valid.
    """
    errors: Dict[str, List[str]] = defaultdict(list)

    trimmed = title.strip() if title is not None else ""
    if not trimmed:
        errors["title"].append(TITLE_REQUIRED_MESSAGE)
    if len(trimmed) > TITLE_MAX_LENGTH:
        errors["title"].append(TITLE_TOO_LONG_MESSAGE)

    return dict(errors)


def normalize_title(title: str) -> str:
    return title.strip()


def normalize_content(content: Optional[str]) -> Optional[str]:
    """Blank or whitespace-only content becomes None; anything else is kept verbatim."""
    if content is None or not content.strip():
        return None
    return content
