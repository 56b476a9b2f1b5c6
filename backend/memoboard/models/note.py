"""
Memoboard Backend: Note Model
===============================

What:  Declarative mapping of the `notes` table.
Why:   Single source of truth for the schema; services build their Core
       statements from `Note.__table__`.
Who:   Used by NoteService for statements and by Datastore.create_schema().

Table Design:
    - Integer autoincrement primary key (ids appear in browser URLs)
    - title:   required, trimmed by the service before insert/update
    - content: optional, stored as '' when absent
    - created_at / updated_at: UTC, set by the application on every write,
      with CURRENT_TIMESTAMP server defaults for rows inserted by other tools

    Index on created_at: the list endpoint orders by it (newest first).
"""

from datetime import datetime, timezone

from sqlalchemy import DateTime, Index, Integer, Text, text
from sqlalchemy.orm import Mapped, mapped_column

from memoboard.database import Base


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Note(Base):
    """
    A free-text note.

    Lifecycle:
        1. Created via POST /notes (both timestamps set)
        2. Updated in place via PUT /notes/{id} (updated_at refreshed)
        3. Removed via DELETE /notes/{id}
    """

    __tablename__ = "notes"

    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
    )

    title: Mapped[str] = mapped_column(
        Text,
        nullable=False,
    )

    content: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        default="",
        server_default=text("''"),
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        server_default=text("CURRENT_TIMESTAMP"),
    )

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        server_default=text("CURRENT_TIMESTAMP"),
    )

    __table_args__ = (
        Index("idx_notes_created_at", created_at.desc()),
    )

    def __repr__(self) -> str:
        return f"<Note(id={self.id}, title='{self.title}')>"
