"""
Memoboard Backend: Note Request/Response Schemas
==================================================

What:  Pydantic models defining the Note API contract.
Why:   Request bodies are parsed and type-checked before reaching the service,
       responses are serialized consistently, and OpenAPI docs come for free.

Design Decision:
    Text fields are declared Optional on the way in. Trimming and the
    "required / cannot be empty" rules live in NoteService, so a blank title
    gets the same 400 envelope message whether it is missing, null or "   ".
    Update bodies are read with `model_dump(exclude_unset=True)`: only keys the
    client actually sent take part in the UPDATE.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class NoteResponse(BaseModel):
    """Full representation of a note row."""
    id: int = Field(description="Auto-assigned note identifier")
    title: str = Field(description="Note title (never blank)")
    content: str = Field(description="Note body, '' when empty")
    created_at: datetime = Field(description="When the note was created (UTC)")
    updated_at: datetime = Field(description="Last successful write (UTC)")

    model_config = {"from_attributes": True}


class NoteCreate(BaseModel):
    """Body of POST /notes."""
    title: Optional[str] = Field(default=None, description="Required, trimmed")
    content: Optional[str] = Field(default="", description="Optional, trimmed, defaults to ''")


class NoteUpdate(BaseModel):
    """Body of PUT /notes/{id}; every field optional, at least one required."""
    title: Optional[str] = Field(default=None, description="New title (cannot be blank)")
    content: Optional[str] = Field(default=None, description="New content ('' allowed)")
