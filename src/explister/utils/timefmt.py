"""
Timestamp parsing and human-readable relative times.

All timestamps handled by the lister are timezone-aware UTC datetimes.
Naive datetimes read from disk are assumed to be UTC.

Usage:
    >>> format_time(datetime.now(timezone.utc) - timedelta(minutes=3))
    '3 minutes ago'
"""

from datetime import datetime, timezone
from typing import List, Optional, Tuple

_MINUTE = 60
_HOUR = 60 * _MINUTE
_DAY = 24 * _HOUR
_WEEK = 7 * _DAY
_MONTH = 30 * _DAY
_YEAR = 12 * _MONTH
_LONG_TIME = 37 * _YEAR

# (upper bound in seconds, format, divisor). "{n}" is the rounded count,
# "{when}" is "ago" or "from now".
_MAGNITUDES: List[Tuple[float, str, int]] = [
    (1, "now", 1),
    (2, "1 second {when}", 1),
    (_MINUTE, "{n} seconds {when}", 1),
    (2 * _MINUTE, "1 minute {when}", 1),
    (_HOUR, "{n} minutes {when}", _MINUTE),
    (2 * _HOUR, "1 hour {when}", 1),
    (_DAY, "{n} hours {when}", _HOUR),
    (2 * _DAY, "1 day {when}", 1),
    (_WEEK, "{n} days {when}", _DAY),
    (2 * _WEEK, "1 week {when}", 1),
    (_MONTH, "{n} weeks {when}", _WEEK),
    (2 * _MONTH, "1 month {when}", 1),
    (_YEAR, "{n} months {when}", _MONTH),
    (18 * _MONTH, "1 year {when}", 1),
    (2 * _YEAR, "2 years {when}", 1),
    (_LONG_TIME, "{n} years {when}", _YEAR),
]


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def parse_timestamp(value: str) -> datetime:
    """
    Parse an ISO 8601 timestamp into an aware UTC datetime.

    Accepts a trailing 'Z' as written by most trackers.

    Raises:
        ValueError: If the string is not a valid timestamp.
    """
    if not isinstance(value, str):
        raise ValueError(f"Timestamp must be a string, got {type(value).__name__}")
    text = value.strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    dt = datetime.fromisoformat(text)
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def format_timestamp(dt: datetime) -> str:
    """ISO 8601 with a 'Z' suffix, microseconds kept when present."""
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc).isoformat().replace("+00:00", "Z")


def format_time(dt: datetime, now: Optional[datetime] = None) -> str:
    """
    Describe a timestamp relative to now, e.g. "10 seconds ago".

    Args:
        dt: Timestamp to describe.
        now: Reference time (default: current UTC time).
    """
    if now is None:
        now = utcnow()
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)

    delta = (now - dt).total_seconds()
    when = "ago"
    if delta < 0:
        delta = -delta
        when = "from now"

    for bound, template, divisor in _MAGNITUDES:
        if delta < bound:
            return template.format(n=int(delta // divisor), when=when)
    return "a long while " + when
