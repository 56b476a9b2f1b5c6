"""
Memoboard Backend: Todo Request/Response Schemas
==================================================

`completed` comes in as a boolean (JSON true/false, or 0/1 which Pydantic
coerces) and goes out as the stored 0/1 integer flag.
"""

from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, Field


class TodoResponse(BaseModel):
    """Full representation of a todo row."""
    id: int = Field(description="Auto-assigned todo identifier")
    task: str = Field(description="Task text (never blank)")
    completed: Literal[0, 1] = Field(description="0 = pending, 1 = completed")
    created_at: datetime = Field(description="When the todo was created (UTC)")
    updated_at: datetime = Field(description="Last successful write (UTC)")

    model_config = {"from_attributes": True}


class TodoCreate(BaseModel):
    """Body of POST /todos."""
    task: Optional[str] = Field(default=None, description="Required, trimmed")


class TodoUpdate(BaseModel):
    """Body of PUT /todos/{id}; task and completed change independently."""
    task: Optional[str] = Field(default=None, description="New task text (cannot be blank)")
    completed: Optional[bool] = Field(default=None, description="Mark completed / reopen")
