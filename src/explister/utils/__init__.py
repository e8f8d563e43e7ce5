"""
Utility modules for the experiment lister.

Provides:
- timefmt: Timestamp parsing/serialization and relative time formatting
"""

from explister.utils.timefmt import (
    format_time,
    format_timestamp,
    parse_timestamp,
    utcnow,
)

__all__ = [
    "format_time",
    "format_timestamp",
    "parse_timestamp",
    "utcnow",
]
