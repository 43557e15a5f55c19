"""Datetime helpers shared across the application."""

from __future__ import annotations

import math
from datetime import UTC, datetime, timedelta

__all__ = [
    "utc_now",
    "ensure_utc",
    "serialize_datetime",
    "parse_datetime",
    "parse_datetime_lenient",
    "days_between",
    "days_ago_label",
]

_ONE_DAY = timedelta(days=1)


def utc_now() -> datetime:
    """Return the current instant as a timezone-aware UTC datetime."""
    return datetime.now(tz=UTC)


def ensure_utc(value: datetime | None) -> datetime | None:
    """Return ``value`` in UTC, treating naive values as already UTC."""
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


def serialize_datetime(value: datetime | None) -> str | None:
    """Serialise ``value`` to an ISO 8601 UTC string with a ``Z`` suffix."""
    if value is None:
        return None
    normalized = ensure_utc(value)
    assert normalized is not None
    return normalized.isoformat().replace("+00:00", "Z")


def parse_datetime(value: str | None) -> datetime | None:
    """Parse an ISO 8601 string into an aware UTC ``datetime``.

    Raises ``ValueError`` when the string is not a valid timestamp.
    """
    if value is None:
        return None
    text = value.strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    return ensure_utc(datetime.fromisoformat(text))


def parse_datetime_lenient(value: object, *, default: datetime) -> datetime:
    """Parse ``value`` or fall back to ``default`` for anything unusable."""
    if isinstance(value, datetime):
        return ensure_utc(value) or default
    if not isinstance(value, str) or not value.strip():
        return default
    try:
        parsed = parse_datetime(value)
    except (ValueError, OverflowError):
        return default
    return parsed or default


def days_between(earlier: datetime, later: datetime) -> float:
    """Return the fractional number of days from ``earlier`` to ``later``."""
    start = ensure_utc(earlier)
    end = ensure_utc(later)
    assert start is not None and end is not None
    return (end - start) / _ONE_DAY


def days_ago_label(received_at: datetime, now: datetime) -> str:
    """Return whole days since ``received_at`` for display, or ``"Today"``."""
    days = math.floor(days_between(received_at, now))
    return "Today" if days == 0 else str(days)
