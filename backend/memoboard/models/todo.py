"""
Memoboard Backend: Todo Model
===============================

What:  Declarative mapping of the `todos` table.

`completed` is an integer flag rather than a BOOLEAN so that every backend
(SQLite included) stores exactly 0 or 1; the CHECK constraint rejects any
other value even for rows written outside the application.
"""

from datetime import datetime

from sqlalchemy import CheckConstraint, DateTime, Index, Integer, Text, text
from sqlalchemy.orm import Mapped, mapped_column

from memoboard.database import Base
from memoboard.models.note import utcnow


class Todo(Base):
    """A single task with a pending/completed flag."""

    __tablename__ = "todos"

    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
    )

    task: Mapped[str] = mapped_column(
        Text,
        nullable=False,
    )

    completed: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=0,
        server_default=text("0"),
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

    # List order is "pending first, newest first"; the composite index serves it
    __table_args__ = (
        CheckConstraint("completed IN (0, 1)", name="ck_todos_completed_flag"),
        Index("idx_todos_completed_created_at", "completed", created_at.desc()),
    )

    def __repr__(self) -> str:
        return f"<Todo(id={self.id}, completed={self.completed})>"
