"""
Notes API: Pydantic Request/Response Schemas
=============================================

What:  Pydantic models defining the HTTP contract of the notes service.
How:   FastAPI parses request bodies into these models, serializes responses
       from them, and generates the OpenAPI documentation from them.

Design Decision:
    Schemas are separate from the stored `Note` dataclass so the wire format
    (camelCase `createdAt`) can differ from the Python attribute names, and so
    request bodies can stay permissive: `title` is optional here and the
    required/length rules are enforced by `validate_note_input`, which
    reports them as 400 field errors.
"""

from datetime import datetime
from typing import Dict, List, Optional

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel


# ══════════════════════════════════════════════════════════════════════════
# Request Models
# ══════════════════════════════════════════════════════════════════════════


class NoteCreate(BaseModel):
    """Body of POST /notes."""
    title: Optional[str] = Field(
        default=None,
        description="Note title, 1-100 characters after trimming (required)",
        examples=["Buy milk"],
    )
    content: Optional[str] = Field(
        default=None,
        description="Optional body text; blank content is stored as null",
        examples=["Two litres, semi-skimmed"],
    )


class NoteUpdate(NoteCreate):
    """Body of PUT /notes/{id}. Same fields and rules as creation."""


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class NoteResponse(BaseModel):
    """
    What:  Full representation of a stored note.
    Who:   Returned by create, get, update, and (as array items) list.

    Serialized with camelCase keys:
        {"id": 1, "title": "Buy milk", "content": null,
         "createdAt": "2026-10-18T09:30:00Z"}
    """
    id: int = Field(description="Store-assigned identifier")
    title: str = Field(description="Trimmed note title")
    content: Optional[str] = Field(default=None, description="Note body, or null")
    created_at: datetime = Field(description="When the note was created (UTC ISO 8601)")

    model_config = {
        "from_attributes": True,
        "alias_generator": to_camel,
        "populate_by_name": True,
    }


class MessageResponse(BaseModel):
    """Plain confirmation body, e.g. after a delete."""
    message: str = Field(description="Human-readable confirmation")


# ══════════════════════════════════════════════════════════════════════════
# Error Response Models
# ══════════════════════════════════════════════════════════════════════════


class ErrorResponse(BaseModel):
    """
    What:  Error body for 404, 429 and 500 responses.

    Fields:
        error: Machine-readable error code (e.g. "not_found")
        message: Human-readable description
        request_id: Correlation ID for tracing this error in server logs
    """
    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class ValidationErrorResponse(ErrorResponse):
    """
    What:  Error body for 400 responses.

    Example:
        {
            "error": "validation_error",
            "message": "One or more validation errors occurred.",
            "errors": {"title": ["The Title field is required."]},
            "request_id": "1f0c9a2b"
        }
    """
    errors: Dict[str, List[str]] = Field(description="Field name → error messages")


class HealthResponse(BaseModel):
    """Returned by GET /health for monitoring and container probes."""
    status: str = Field(description="Overall service status")
    version: str = Field(description="Application version")
    notes: int = Field(description="Number of notes currently stored")
    uptime_seconds: float = Field(description="Seconds since service started")
