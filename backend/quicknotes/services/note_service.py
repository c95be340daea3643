"""
QuickNotes Backend — Note Service (Note Resource Operations)
=============================================================

What:  The five note operations: create, get-one, get-all, update, delete.
How:   Each method issues exactly one SQL statement on the session it is
       given and commits writes immediately. No transactions span calls.
Who:   Called by the route handlers in quicknotes.routes.notes.

Error Handling Strategy:
    - A lookup that matches no row raises NotFoundError (→ 404)
    - Any SQLAlchemyError is logged and re-raised as DatabaseError carrying
      the driver's error text (→ 500)
    - A stored row that does not fit NoteResponse (e.g. a NULL title)
      raises SerializationError (→ 400)
    - update/delete never raise for a missing id; they return the affected
      row count and the route decides whether zero means 404
"""

import logging
from datetime import datetime, timezone
from typing import List

from pydantic import ValidationError
from sqlalchemy import delete, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from quicknotes.exceptions import DatabaseError, NotFoundError, SerializationError
from quicknotes.models.note import Note
from quicknotes.schemas.note import NotePayload, NoteResponse

logger = logging.getLogger(__name__)


def _to_response(note: Note) -> NoteResponse:
    try:
        return NoteResponse.model_validate(note)
    except ValidationError as e:
        logger.error("Error encoding note %s: %s", note.id, e)
        raise SerializationError(message=str(e), context={"note_id": note.id}) from e


class NoteService:
    """
    Stateless note operations.

    The session is passed in on every call, so one instance serves every
    application and every concurrent request.
    """

    async def create_note(self, db: AsyncSession, payload: NotePayload) -> NoteResponse:
        """
        Insert a new note and return it with its assigned id and timestamp.

        Statement:
            INSERT INTO notes (title, content, created_at) VALUES (?, ?, ?)

        Raises:
            DatabaseError: the INSERT failed
        """
        note = Note(
            title=payload.title,
            content=payload.content,
            created_at=datetime.now(timezone.utc),
        )
        try:
            db.add(note)
            await db.flush()  # Emits the INSERT; storage assigns note.id
            await db.commit()
        except SQLAlchemyError as e:
            logger.error("Error inserting a new note: %s", e)
            raise DatabaseError(message=str(e), context={"operation": "create"}) from e

        logger.info("Note %s created", note.id)
        return _to_response(note)

    async def get_note(self, db: AsyncSession, note_id: int) -> NoteResponse:
        """
        Retrieve a single note by id.

        Statement:
            SELECT id, title, content, created_at FROM notes WHERE id = ?

        Raises:
            NotFoundError: no note has this id
            DatabaseError: the SELECT failed
        """
        try:
            result = await db.execute(select(Note).where(Note.id == note_id))
            note = result.scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.error("Error retrieving note %s: %s", note_id, e)
            raise DatabaseError(
                message=str(e),
                context={"operation": "get", "note_id": note_id},
            ) from e

        if note is None:
            raise NotFoundError(resource="note", resource_id=str(note_id))

        return _to_response(note)

    async def list_notes(self, db: AsyncSession) -> List[NoteResponse]:
        """
        Return every stored note, oldest id first.

        Statement:
            SELECT id, title, content, created_at FROM notes ORDER BY id

        An empty store yields an empty list.

        Raises:
            DatabaseError: the SELECT failed
        """
        try:
            result = await db.execute(select(Note).order_by(Note.id))
            notes = list(result.scalars().all())
        except SQLAlchemyError as e:
            logger.error("Error listing notes: %s", e)
            raise DatabaseError(message=str(e), context={"operation": "list"}) from e

        return [_to_response(note) for note in notes]

    async def update_note(
        self,
        db: AsyncSession,
        note_id: int,
        payload: NotePayload,
    ) -> int:
        """
        Overwrite title and content of a note; created_at is left untouched.

        Statement:
            UPDATE notes SET title = ?, content = ? WHERE id = ?

        Returns:
            Number of rows affected (0 when no note has this id)

        Raises:
            DatabaseError: the UPDATE failed
        """
        stmt = (
            update(Note)
            .where(Note.id == note_id)
            .values(title=payload.title, content=payload.content)
        )
        try:
            result = await db.execute(stmt)
            await db.commit()
        except SQLAlchemyError as e:
            logger.error("Error updating note %s: %s", note_id, e)
            raise DatabaseError(
                message=str(e),
                context={"operation": "update", "note_id": note_id},
            ) from e

        logger.info("Note %s updated (%s row(s))", note_id, result.rowcount)
        return result.rowcount

    async def delete_note(self, db: AsyncSession, note_id: int) -> int:
        """
        Remove a note.

        Statement:
            DELETE FROM notes WHERE id = ?

        Returns:
            Number of rows affected (0 when no note has this id)

        Raises:
            DatabaseError: the DELETE failed
        """
        try:
            result = await db.execute(delete(Note).where(Note.id == note_id))
            await db.commit()
        except SQLAlchemyError as e:
            logger.error("Error deleting note %s: %s", note_id, e)
            raise DatabaseError(
                message=str(e),
                context={"operation": "delete", "note_id": note_id},
            ) from e

        logger.info("Note %s deleted (%s row(s))", note_id, result.rowcount)
        return result.rowcount


# ── Singleton Instance ────────────────────────────────────────────────────
note_service = NoteService()
