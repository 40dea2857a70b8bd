"""
Time-related utilities for the application.

Section timestamps are UTC, millisecond precision, with a ``Z`` suffix
(``2024-01-15T10:42:31.123Z``). The fixed width keeps lexicographic order
equal to chronological order.
"""

from datetime import datetime, timezone


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def to_iso(moment: datetime) -> str:
    """Serialize an aware datetime in the section timestamp format."""
    return moment.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def utc_now_iso() -> str:
    """Return current UTC time, e.g. ``2024-01-15T10:42:31.123Z``."""
    return to_iso(utc_now())
