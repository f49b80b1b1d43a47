"""
Notes API: Custom Exception Hierarchy
======================================

What:  Application-specific exceptions for the two failure kinds of the
       notes service.
How:   Each exception carries a message and an optional context dict.
       Global exception handlers (registered in main.py) catch these and
       return structured JSON error responses with the matching status code.
Who:   Raised by the service layer; caught by the global handlers.

Exception Hierarchy:
    NotesAPIError (base)
    ├── ValidationError   → 400 Bad Request (field → messages mapping)
    └── NotFoundError     → 404 Not Found
"""

from typing import Any, Dict, List, Mapping, Optional


class NotesAPIError(Exception):
    """
    Base exception for all Notes API application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged but NOT returned to client)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(NotesAPIError):
    """
    Raised when a create/update payload fails validation.

    What:    Carries every failed rule, grouped by field name.
    HTTP:    400 Bad Request

    Example response:
        {
            "error": "validation_error",
            "message": "One or more validation errors occurred.",
            "errors": {"title": ["The Title field is required."]}
        }
    """

    def __init__(
        self,
        errors: Mapping[str, List[str]],
        message: str = "One or more validation errors occurred.",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.errors: Dict[str, List[str]] = {
            field: list(messages) for field, messages in errors.items()
        }
        ctx = context or {}
        ctx["fields"] = sorted(self.errors)
        super().__init__(message=message, context=ctx)


class NotFoundError(NotesAPIError):
    """
    Raised when an operation references an identifier that is not stored.

    When:    GET/PUT/DELETE /notes/{id} for an id that was never created
             or has been deleted.
    HTTP:    404 Not Found

    The store returns None for missing records; the service converts that
    into this exception so routes stay free of status-code logic.
    """

    def __init__(
        self,
        resource: str = "note",
        resource_id: Optional[Any] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"{resource.capitalize()} not found."
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id is not None:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)
        self.resource = resource
        self.resource_id = resource_id
