"""Timestamp and duration parsing utilities."""

import re
from datetime import datetime
from typing import Any, Optional

from dateutil import parser as date_parser

REMOTE_TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"


def parse_timestamp(value: Any) -> Optional[datetime]:
    """Parse a timestamp as returned by the inventory service.

    Supports the forms the service uses:
    - Plain strings: "2024-01-15 10:30:00", "2024-01-15T10:30:00Z", etc.
    - Objects: {"datetime": "2024-01-15 10:30:00", "formatted": "Mon Jan 15 ..."}
    - None or "" for unset values

    Args:
        value: Timestamp value from a JSON response

    Returns:
        Datetime, or None if unset

    Raises:
        ValueError: If the timestamp cannot be parsed
    """
    if isinstance(value, dict):
        value = value.get("datetime") or value.get("date")
    if value is None:
        return None
    if isinstance(value, datetime):
        return value
    value = str(value).strip()
    if not value:
        return None

    try:
        return date_parser.parse(value)
    except (ValueError, OverflowError) as e:
        raise ValueError(f"Could not parse timestamp '{value}': {e}")


def format_timestamp(value: Optional[datetime]) -> Optional[str]:
    """Format a datetime the way the inventory service expects it."""
    if value is None:
        return None
    return value.strftime(REMOTE_TIMESTAMP_FORMAT)


def parse_months(value: Any) -> Optional[int]:
    """Parse a warranty duration in months.

    The service reports durations as text ("36 months") but accepts integers.

    Raises:
        ValueError: If the value contains no number
    """
    if value is None or value == "":
        return None
    if isinstance(value, bool):
        raise ValueError(f"Could not parse months '{value}'")
    if isinstance(value, int):
        return value
    match = re.match(r"\s*(\d+)", str(value))
    if match is None:
        raise ValueError(f"Could not parse months '{value}'")
    return int(match.group(1))
