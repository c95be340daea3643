"""
QuickNotes Backend — Note SQLAlchemy Model
============================================

What:  ORM model representing the `notes` table.
Who:   Used by NoteService for CRUD statements and by StorageGateway for
       table creation.

Table Design:
    - INTEGER PRIMARY KEY AUTOINCREMENT: ids are never reused, even after
      the highest row is deleted
    - title / content: TEXT without length limits
    - created_at: written once at insert time (UTC), never updated
"""

from datetime import datetime, timezone

from sqlalchemy import DateTime, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column

from quicknotes.database import Base


class Note(Base):
    """
    A single note.

    Lifecycle:
        1. Created by POST /note (id and created_at assigned server-side)
        2. title/content overwritten by PATCH /note/{id}
        3. Removed by DELETE /note/{id}
    """

    __tablename__ = "notes"

    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
    )

    title: Mapped[str] = mapped_column(Text, nullable=True)

    content: Mapped[str] = mapped_column(Text, nullable=True)

    # SQLite keeps no zone information; values are always written in UTC
    created_at: Mapped[datetime] = mapped_column(
        DateTime,
        nullable=True,
        default=lambda: datetime.now(timezone.utc),
    )

    # Emits the AUTOINCREMENT keyword on SQLite
    __table_args__ = {"sqlite_autoincrement": True}

    def __repr__(self) -> str:
        return f"<Note(id={self.id}, title='{self.title}', created_at='{self.created_at}')>"
