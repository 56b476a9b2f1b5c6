"""Input validation helpers shared by the note and todo services."""

import re
from typing import Optional

from memoboard.exceptions import InvalidIdentifierError, ValidationError

_LEADING_INTEGER = re.compile(r"\s*([+-]?\d+)")

# Ids are stored in a signed 64-bit INTEGER column
MAX_ID = 2**63 - 1


def leading_integer(raw: Optional[str]) -> Optional[int]:
    """
    Read the base-10 integer at the start of `raw`, or None if there is none.

    Surrounding whitespace and trailing characters are ignored, so "12",
    " 12 ", "+12", "12abc" and "12.5" all read as 12; "abc", "" and ".5" do not.
    """
    match = _LEADING_INTEGER.match(raw or "")
    return int(match.group(1)) if match else None


def parse_identifier(raw: str, resource: str) -> int:
    """Parse a path id; raises InvalidIdentifierError when no integer leads it."""
    value = leading_integer(raw)
    if value is None:
        raise InvalidIdentifierError(resource=resource, raw_id=raw)
    return value


def storable_id(value: int) -> bool:
    """True when `value` fits the id column; larger ids cannot match a row."""
    return -MAX_ID - 1 <= value <= MAX_ID


def require_text(value: Optional[str], message: str, field: str) -> str:
    """Trim a required text field; blank or missing raises ValidationError."""
    trimmed = value.strip() if isinstance(value, str) else ""
    if not trimmed:
        raise ValidationError(message=message, field=field)
    return trimmed


def optional_text(value: Optional[str]) -> str:
    """Trim an optional text field, mapping None to ''."""
    return value.strip() if isinstance(value, str) else ""
