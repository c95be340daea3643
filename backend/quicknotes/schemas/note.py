"""
QuickNotes Backend — Pydantic Request/Response Schemas
=======================================================

What:  Pydantic models defining the API contract.
How:   FastAPI uses these models to validate request bodies, serialize
       responses, and generate OpenAPI documentation.

Note JSON shape:
    {"id": 1, "title": "Test", "content": "Body",
     "created_at": "2026-10-18T12:00:00.123456Z"}
"""

from datetime import datetime, timezone

from pydantic import BaseModel, Field, field_validator


# ══════════════════════════════════════════════════════════════════════════
# Request Models
# ══════════════════════════════════════════════════════════════════════════


class NotePayload(BaseModel):
    """
    Body of POST /note and PATCH /note/{id}.

    Both fields are required and overwrite the stored values as a whole.
    Any other keys (e.g. a client-supplied id or created_at) are ignored.
    """
    title: str = Field(description="Note title (free-form text)")
    content: str = Field(description="Note body (free-form text)")


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class NoteResponse(BaseModel):
    """Full representation of a stored note."""
    id: int = Field(description="Server-assigned note identifier")
    title: str = Field(description="Note title")
    content: str = Field(description="Note body")
    created_at: datetime = Field(description="Creation time (UTC, RFC 3339)")

    model_config = {"from_attributes": True}

    @field_validator("created_at")
    @classmethod
    def ensure_utc(cls, v: datetime) -> datetime:
        """SQLite hands back naive datetimes; they were stored as UTC."""
        if v.tzinfo is None:
            return v.replace(tzinfo=timezone.utc)
        return v.astimezone(timezone.utc)
