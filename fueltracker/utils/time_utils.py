"""
Time parsing and formatting utilities for Fuel Tracker.

Provides consistent date handling across routes, models and export:
- Multiple input formats (ISO, YYYY-MM-DD, Unix timestamp)
- UTC normalization so stored and submitted dates always compare cleanly
- Export date formats
"""

import logging
from datetime import datetime, timezone
from typing import Optional

from dateutil import parser as date_parser

logger = logging.getLogger(__name__)

EXPORT_DATE_FORMAT = "%Y-%m-%d"
EXPORT_DATETIME_FORMAT = "%Y-%m-%dT%H:%M:%S%z"


def utc_now() -> datetime:
    """Timezone-aware current time in UTC."""
    return datetime.now(timezone.utc)


def ensure_utc(dt: Optional[datetime]) -> Optional[datetime]:
    """
    Return dt as a timezone-aware UTC datetime.

    Naive datetimes (e.g. read back from SQLite) are assumed to be UTC.
    """
    if dt is None:
        return None
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def parse_datetime(value: str, default: Optional[datetime] = None) -> Optional[datetime]:
    """
    Read a submitted refuel date as a UTC datetime.

    Accepts anything dateutil understands ("2024-01-15", "2024-01-15T14:30:00Z",
    "Jan 15 2024") as well as whole-second unix timestamps. Offsets are
    converted to UTC and naive values are taken as UTC. Blank or unreadable
    input returns `default`.

    Example:
        >>> parse_datetime("2024-01-15")
        datetime.datetime(2024, 1, 15, 0, 0, tzinfo=datetime.timezone.utc)
    """
    if not isinstance(value, str) or not value.strip():
        return default

    text = value.strip()
    if text.isdigit():
        try:
            return datetime.fromtimestamp(int(text), tz=timezone.utc)
        except (ValueError, OSError, OverflowError):
            logger.debug(f"{text} is out of range as a timestamp, trying it as a date")

    try:
        return ensure_utc(date_parser.parse(text))
    except (ValueError, TypeError, OverflowError):
        logger.warning(f"Unreadable date: {text!r}")
        return default


def format_date(dt: datetime) -> str:
    """Format as YYYY-MM-DD (CSV export)."""
    return ensure_utc(dt).strftime(EXPORT_DATE_FORMAT)


def format_datetime_iso(dt: datetime) -> str:
    """
    Format as YYYY-MM-DDTHH:MM:SS+ZZZZ (JSON export).

    Example:
        >>> format_datetime_iso(datetime(2024, 1, 15, 14, 30, tzinfo=timezone.utc))
        '2024-01-15T14:30:00+0000'
    """
    return ensure_utc(dt).strftime(EXPORT_DATETIME_FORMAT)
