"""
QuickNotes Backend — Notes Route Handlers
===========================================

What:  The five note endpoints.
How:   Decode path/body, delegate to NoteService, choose the status code.
       Errors raised by the service are turned into responses by the global
       exception handlers registered in main.py.

Route Table:
    POST   /note        → 201 + Note JSON
    GET    /note/{id}   → 200 + Note JSON | 404 (also for ids that are not
                          integers or lie outside SQLite's 64-bit range)
    GET    /notes       → 200 + [Note JSON, ...]
    PATCH  /note/{id}   → 200, empty body
    DELETE /note/{id}   → 200, empty body
"""

import logging
import re
from typing import List, Optional

from fastapi import APIRouter, Depends, Request, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from quicknotes.config import Settings
from quicknotes.database import get_db_session
from quicknotes.exceptions import NotFoundError
from quicknotes.schemas.note import NotePayload, NoteResponse
from quicknotes.services.note_service import note_service

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Notes"])

_ERROR_RESPONSES = {
    400: {
        "description": "Malformed request body or unencodable stored note",
        "content": {"text/plain": {}},
    },
    500: {"description": "Database error", "content": {"text/plain": {}}},
}


def get_settings(request: Request) -> Settings:
    """Settings of the application serving this request."""
    return request.app.state.settings


def _empty_ok() -> Response:
    return Response(status_code=status.HTTP_200_OK, media_type="application/json")


_INT_ID = re.compile(r"[+-]?[0-9]+")
_MIN_ID, _MAX_ID = -(2**63), 2**63 - 1


def parse_note_id(raw: str) -> Optional[int]:
    """
    Integer value of a path id, or None when no row can carry it.

    Ids are bound as SQLite INTEGERs, so text and values outside the signed
    64-bit range cannot match a stored note.
    """
    if not _INT_ID.fullmatch(raw):
        return None
    value = int(raw)
    if not _MIN_ID <= value <= _MAX_ID:
        return None
    return value


@router.post(
    "/note",
    status_code=status.HTTP_201_CREATED,
    response_model=NoteResponse,
    responses=_ERROR_RESPONSES,
    summary="Create a note",
)
async def create_note(
    payload: NotePayload,
    db: AsyncSession = Depends(get_db_session),
) -> NoteResponse:
    """Store a new note; id and created_at are assigned by the server."""
    return await note_service.create_note(db, payload)


@router.get(
    "/note/{note_id}",
    response_model=NoteResponse,
    responses={404: {"description": "Note not found"}, **_ERROR_RESPONSES},
    summary="Get a note by id",
)
async def get_note(
    note_id: str,
    db: AsyncSession = Depends(get_db_session),
) -> NoteResponse:
    parsed = parse_note_id(note_id)
    if parsed is None:
        raise NotFoundError(resource="note", resource_id=note_id)
    return await note_service.get_note(db, parsed)


@router.get(
    "/notes",
    response_model=List[NoteResponse],
    responses={500: _ERROR_RESPONSES[500]},
    summary="List all notes",
)
async def list_notes(
    db: AsyncSession = Depends(get_db_session),
) -> List[NoteResponse]:
    """Every stored note ordered by id. An empty store returns []."""
    return await note_service.list_notes(db)


@router.patch(
    "/note/{note_id}",
    responses={404: {"description": "Note not found (strict mode only)"}, **_ERROR_RESPONSES},
    summary="Overwrite a note's title and content",
)
async def update_note(
    note_id: str,
    payload: NotePayload,
    db: AsyncSession = Depends(get_db_session),
    app_settings: Settings = Depends(get_settings),
) -> Response:
    """
    Replace title and content of a note. created_at is never changed.

    Unknown ids answer 200 unless strict_missing_ids is enabled.
    """
    parsed = parse_note_id(note_id)
    affected = 0 if parsed is None else await note_service.update_note(db, parsed, payload)
    if affected == 0 and app_settings.strict_missing_ids:
        raise NotFoundError(resource="note", resource_id=note_id)
    return _empty_ok()


@router.delete(
    "/note/{note_id}",
    responses={404: {"description": "Note not found (strict mode only)"}, **_ERROR_RESPONSES},
    summary="Delete a note",
)
async def delete_note(
    note_id: str,
    db: AsyncSession = Depends(get_db_session),
    app_settings: Settings = Depends(get_settings),
) -> Response:
    """Unknown ids answer 200 unless strict_missing_ids is enabled."""
    parsed = parse_note_id(note_id)
    affected = 0 if parsed is None else await note_service.delete_note(db, parsed)
    if affected == 0 and app_settings.strict_missing_ids:
        raise NotFoundError(resource="note", resource_id=note_id)
    return _empty_ok()
