"""
Utility functions for converting between provider and store date formats.
"""

from datetime import date, datetime, timezone
from typing import Any

SOURCE_DATE_FORMAT = "%d.%m.%Y"


def parse_source_date(value: Any) -> date | None:
    """
    Parse a provider date (``DD.MM.YYYY``) into a ``date``.

    ISO strings (``YYYY-MM-DD``) and ``date`` objects are accepted as well,
    anything else returns None.

    Examples:
        >>> parse_source_date("3.10.2025")
        datetime.date(2025, 10, 3)
        >>> parse_source_date("2025-10-03")
        datetime.date(2025, 10, 3)
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or not value.strip():
        return None

    text = value.strip()
    try:
        return datetime.strptime(text, SOURCE_DATE_FORMAT).date()
    except ValueError:
        pass
    try:
        return date.fromisoformat(text)
    except ValueError:
        return None


def format_source_date(value: date | None) -> str:
    """Format a stored date back into the provider's ``DD.MM.YYYY`` form."""
    if value is None:
        return ""
    return value.strftime(SOURCE_DATE_FORMAT)


def utcnow() -> datetime:
    """Current UTC time as a timezone-aware datetime (store timestamps)."""
    return datetime.now(timezone.utc)
