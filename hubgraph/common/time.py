"""Common time utilities."""

from __future__ import annotations

import datetime as dt
import email.utils


def utcnow() -> dt.datetime:
    """Return an aware UTC timestamp."""
    return dt.datetime.now(dt.UTC)


def from_epoch(seconds: int) -> dt.datetime:
    """Convert epoch seconds into an aware UTC datetime."""
    return dt.datetime.fromtimestamp(seconds, dt.UTC)


def format_rfc1123z(value: dt.datetime) -> str:
    """Render ``value`` as RFC 1123 with a numeric zone offset.

    >>> format_rfc1123z(dt.datetime(2026, 10, 19, 10, 0, tzinfo=dt.UTC))
    'Mon, 19 Oct 2026 10:00:00 +0000'

    """
    if value.tzinfo is None:
        msg = "timestamp must be timezone-aware"
        raise ValueError(msg)
    return email.utils.format_datetime(value)


def parse_rfc1123z(text: str) -> dt.datetime:
    """Parse a timestamp produced by :func:`format_rfc1123z`."""
    parsed = email.utils.parsedate_to_datetime(text)
    if parsed.tzinfo is None:
        msg = f"timestamp missing zone offset: {text}"
        raise ValueError(msg)
    return parsed
