"""Utility modules for Fuel Tracker."""

from .time_utils import (
    ensure_utc,
    format_date,
    format_datetime_iso,
    parse_datetime,
    utc_now,
)

__all__ = [
    'ensure_utc',
    'format_date',
    'format_datetime_iso',
    'parse_datetime',
    'utc_now',
]
