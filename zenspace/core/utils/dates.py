"""Timestamp parsing shared by entry validation and range queries."""

from __future__ import annotations

from datetime import date, datetime, time, timezone
from typing import Union

TimestampInput = Union[str, date, datetime]


def utcnow() -> datetime:
    """Naive UTC now, the representation every stored timestamp uses."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def to_naive_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


def is_date_only(value: TimestampInput) -> bool:
    if isinstance(value, datetime):
        return False
    if isinstance(value, date):
        return True
    try:
        date.fromisoformat(value.strip())
    except (AttributeError, ValueError):
        return False
    return True


def parse_timestamp(value: TimestampInput) -> datetime:
    """Parse an ISO 8601 date or date-time into a naive UTC datetime.

    Raises ValueError for anything that is not a real calendar date/time,
    including offsets that push the UTC value outside the datetime range.
    """
    if isinstance(value, datetime):
        return _checked_utc(value)
    if isinstance(value, date):
        return datetime.combine(value, time.min)
    if not isinstance(value, str):
        raise ValueError("Invalid date string")
    text = value.strip()
    if not text:
        raise ValueError("Invalid date string")
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        raise ValueError("Invalid date string") from None
    return _checked_utc(parsed)


def _checked_utc(value: datetime) -> datetime:
    try:
        return to_naive_utc(value)
    except (ValueError, OverflowError):
        raise ValueError("Invalid date string") from None


def end_of_day(value: datetime) -> datetime:
    return datetime.combine(value.date(), time.max)
