"""Helper utility functions."""

import math
from datetime import datetime
from typing import Any, Dict, Optional, Union

# Largest integer BSON can encode
MAX_INT64 = 2**63 - 1


def parse_date(value: Optional[str]) -> Optional[datetime]:
    """Parse an ISO-8601 date or date-time into a naive local datetime.

    Returns None when the value cannot be parsed.
    """
    if not isinstance(value, str):
        return None
    try:
        parsed = datetime.fromisoformat(value.strip())
    except ValueError:
        return None
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone().replace(tzinfo=None)
    return parsed


def format_date(value: datetime) -> str:
    """Render a date as D/M/YYYY without zero padding."""
    return f"{value.day}/{value.month}/{value.year}"


def parse_duration(value: Any) -> Optional[Union[int, float]]:
    """Coerce a duration in minutes to a number, or None if it is not numeric."""
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str) and value.strip():
        try:
            number = float(value.strip())
        except ValueError:
            return None
    else:
        return None
    
    if not math.isfinite(number):
        return None
    if number.is_integer():
        return int(number)
    return number


def serialize_document(document: Dict[str, Any]) -> Dict[str, Any]:
    """Serialize a MongoDB document for JSON output."""
    if "_id" in document:
        document["_id"] = str(document["_id"])
    return document


def parse_limit(value: Optional[str]) -> Optional[int]:
    """Parse a result cap; blank means no cap.

    Raises ValueError for anything that is not an integer in [0, MAX_INT64].
    """
    if value is None or not value.strip():
        return None
    limit = int(value.strip())
    if not 0 <= limit <= MAX_INT64:
        raise ValueError(f"limit must be between 0 and {MAX_INT64}")
    return limit
