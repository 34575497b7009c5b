"""Layer 1: time-of-day arithmetic — 'HH:MM' ↔ minutes since midnight."""

from __future__ import annotations

import re

from session_slots.errors import InvalidTimeFormat

MINUTES_PER_DAY = 1440

_TIME_RE = re.compile(r"([0-9]{2}):([0-9]{2})")


def to_minutes(t: str) -> int:
    """Parse 'HH:MM' (24-hour) to minutes since local midnight.

    Raises InvalidTimeFormat for anything else. No implicit coercion:
    a malformed string never becomes 00:00.
    """
    if not isinstance(t, str):
        raise InvalidTimeFormat(t)
    match = _TIME_RE.fullmatch(t)
    if match is None:
        raise InvalidTimeFormat(t)

    hours, minutes = int(match.group(1)), int(match.group(2))
    if hours > 23 or minutes > 59:
        raise InvalidTimeFormat(t)
    return hours * 60 + minutes


def to_time_of_day(minutes: int) -> str:
    """Format a minute offset as 'HH:MM', wrapping modulo one day."""
    hours = (minutes // 60) % 24
    return f"{hours:02d}:{minutes % 60:02d}"


def normalized_close_offset(open_offset: int, close_offset: int) -> int:
    """Close offset for duration arithmetic.

    A close at or before the open crosses midnight: add one day.
    """
    if close_offset > open_offset:
        return close_offset
    return close_offset + MINUTES_PER_DAY


def window_offsets(open_time: str, close_time: str) -> tuple[int, int]:
    """Return normalized (open, close) offsets for a pair of 'HH:MM' strings.

    Identical open and close times are an empty window, not a 24-hour one.
    """
    open_offset = to_minutes(open_time)
    close_offset = to_minutes(close_time)
    if close_offset == open_offset:
        return open_offset, open_offset
    return open_offset, normalized_close_offset(open_offset, close_offset)
