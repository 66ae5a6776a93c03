"""
Timestamp helpers for Graylog records.

Graylog timestamps travel as RFC3339 strings. Records handed to callers use
the millisecond pattern ``2006-01-02T15:04:05.000Z`` and leave a timestamp
out entirely when it is unset or the zero instant.
"""

from datetime import datetime, timezone
from typing import Any, Dict, Iterable, Optional, Union

TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M:%S"


def parse_timestamp(value: Union[str, datetime, None]) -> Optional[datetime]:
    """
    Parse an RFC3339 timestamp into an aware UTC datetime.

    Returns None for empty values and for the zero instant (year 1), which
    is how unset timestamps are serialized by the API.

    Raises:
        ValueError: If ``value`` is not an RFC3339 timestamp.
    """
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        dt = value
    elif isinstance(value, str):
        dt = datetime.fromisoformat(value.replace("Z", "+00:00"))
    else:
        raise ValueError(f"Invalid timestamp: {value!r}")

    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    try:
        dt = dt.astimezone(timezone.utc)
    except OverflowError:
        # Offsets around the zero instant fall outside datetime's range
        return None

    if dt.year <= 1:
        return None
    return dt


def format_timestamp(value: Union[str, datetime, None]) -> Optional[str]:
    """Format a timestamp as ``YYYY-MM-DDTHH:MM:SS.mmmZ``, or None if unset."""
    dt = parse_timestamp(value)
    if dt is None:
        return None
    millis = dt.microsecond // 1000
    return f"{dt.strftime(TIMESTAMP_FORMAT)}.{millis:03d}Z"


def normalize_timestamps(
    record: Dict[str, Any], fields: Iterable[str]
) -> Dict[str, Any]:
    """
    Return a copy of ``record`` with the given timestamp fields normalized.

    Unset or zero timestamps are removed from the copy.

    Raises:
        ValueError: Naming the first field that holds an unparseable value.
    """
    result = dict(record)
    for name in fields:
        if name not in result:
            continue
        try:
            formatted = format_timestamp(result[name])
        except ValueError as e:
            raise ValueError(f"{name}: {e}") from e
        if formatted is None:
            del result[name]
        else:
            result[name] = formatted
    return result
