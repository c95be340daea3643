"""
QuickNotes Backend — Custom Exception Hierarchy
=================================================

What:  Defines application-specific exceptions for different error scenarios.
How:   Each exception class carries a message and optional context dict.
       Global exception handlers (registered in main.py) catch these and
       return plain-text error responses with the matching HTTP status code.
Who:   Raised by services and the storage gateway; caught by global handlers.

Exception Hierarchy:
    QuickNotesError (base)
    ├── NotFoundError        → 404 Not Found (empty body)
    ├── DatabaseError        → 500 Internal Server Error
    ├── SerializationError   → 400 Bad Request (stored row cannot be encoded as a Note)
    └── StorageInitError     → startup aborts, never reaches a client
"""

from typing import Any, Dict, Optional


class QuickNotesError(Exception):
    """
    Base exception for all QuickNotes application errors.

    Attributes:
        message:  Error description returned as the plain-text response body
        context:  Additional debug info (logged, not returned to client)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class NotFoundError(QuickNotesError):
    """
    Raised when a lookup by id matches zero rows.

    When:    GET /note/{id} for an unknown id; PATCH/DELETE for an unknown id
             when strict_missing_ids is enabled.
    HTTP:    404 Not Found, no body.
    """

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"The requested {resource} was not found"
        if resource_id:
            message = f"{resource} with ID '{resource_id}' was not found"
        ctx = dict(context or {})
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)


class DatabaseError(QuickNotesError):
    """
    Raised when a database statement fails at request time.

    What:    An INSERT, SELECT, UPDATE or DELETE raised inside the driver.
    HTTP:    500 Internal Server Error, body = the underlying error text.
    """

    def __init__(
        self,
        message: str = "A database error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class SerializationError(QuickNotesError):
    """
    Raised when a stored row cannot be encoded as a Note
    (e.g. a NULL title or content written outside this service).

    HTTP:    400 Bad Request (kept for compatibility with existing clients).
    """

    def __init__(
        self,
        message: str = "Response could not be serialized",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class StorageInitError(QuickNotesError):
    """
    Raised when the storage gateway cannot open the database or create the
    `notes` table.

    When:    During application startup (lifespan), before any request is served.
    Effect:  Startup fails and uvicorn exits; distinct from DatabaseError so
             operators can tell "never started" apart from "degraded".
    """

    def __init__(
        self,
        message: str = "Storage initialization failed",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
