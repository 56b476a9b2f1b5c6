# Importing the models registers their tables on Base.metadata
from memoboard.models.note import Note
from memoboard.models.todo import Todo

__all__ = ["Note", "Todo"]
