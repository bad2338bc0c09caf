"""Validation of opaque record identifiers received from clients."""
from typing import Any, Optional

from app.core.exceptions import InvalidArgumentException

# Upper bound of the INTEGER primary key columns
MAX_ID = 2**31 - 1


def parse_id(value: Any, field: str) -> int:
    """Return ``value`` as a positive integer id.

    Accepts ints and strings of ASCII digits (path and query parameters
    arrive as strings). Anything else, including ids beyond the column
    range, raises InvalidArgumentException.
    """
    if isinstance(value, bool):
        raise InvalidArgumentException(f"Invalid {field}")
    if isinstance(value, int):
        parsed = value
    elif isinstance(value, str) and value.strip().isascii() and value.strip().isdigit():
        parsed = int(value.strip())
    else:
        raise InvalidArgumentException(f"Invalid {field}")
    if parsed <= 0 or parsed > MAX_ID:
        raise InvalidArgumentException(f"Invalid {field}")
    return parsed


def parse_optional_id(value: Any, field: str) -> Optional[int]:
    """Like parse_id, but None and empty strings mean "not given"."""
    if value is None or (isinstance(value, str) and not value.strip()):
        return None
    return parse_id(value, field)
