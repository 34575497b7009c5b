"""Layer 4: date-range expansion — one facility summary per calendar day.

Overrides are looked up by exact ISO date key ('YYYY-MM-DD'), so the lookup
is stable across month and year boundaries.
"""

from __future__ import annotations

from datetime import date, timedelta
from typing import Iterable, Iterator, Mapping

from session_slots.facility import compute_day_schedule
from session_slots.logging import get_logger
from session_slots.types import (
    DayOverride,
    DaySchedule,
    FacilityDaySummary,
    FacilitySettings,
)

logger = get_logger(__name__)

# 6 weeks x 7 days, Sunday-first
_GRID_CELLS = 42


def iter_dates(start: date, end: date) -> Iterator[date]:
    """Yield every date in [start, end), ascending."""
    current = start
    while current < end:
        yield current
        current += timedelta(days=1)


def index_overrides(records: Iterable[DayOverride]) -> dict[str, DayOverride]:
    """Key override records by ISO date. A later record for a date wins."""
    by_date: dict[str, DayOverride] = {}
    for record in records:
        by_date[record.date_key] = record
    return by_date


def expand_schedules(
    start: date,
    end: date,
    settings: FacilitySettings,
    overrides_by_date: Mapping[str, DayOverride] | None = None,
) -> list[DaySchedule]:
    """Day schedules for [start, end), one per date, no gaps."""
    overrides_by_date = overrides_by_date or {}
    schedules = [
        compute_day_schedule(
            d,
            settings.window,
            settings.policy,
            settings.resources,
            overrides_by_date.get(d.isoformat()),
        )
        for d in iter_dates(start, end)
    ]
    logger.debug(
        "range_expanded",
        start=start.isoformat(),
        end=end.isoformat(),
        days=len(schedules),
        overrides=sum(1 for s in schedules if s.summary.has_override),
    )
    return schedules


def expand_range(
    start: date,
    end: date,
    settings: FacilitySettings,
    overrides_by_date: Mapping[str, DayOverride] | None = None,
) -> list[FacilityDaySummary]:
    """Facility summaries for every date in [start, end), ascending."""
    return [
        s.summary for s in expand_schedules(start, end, settings, overrides_by_date)
    ]


# ------------------------------------------------------------------
# Calendar navigation helpers used by the booking and admin views
# ------------------------------------------------------------------


def month_grid(year: int, month: int) -> list[date]:
    """The 42 dates of a Sunday-first month view.

    Leading cells come from the previous month, trailing cells from the next.
    """
    first = date(year, month, 1)
    # date.weekday(): Monday=0 .. Sunday=6
    lead = (first.weekday() + 1) % 7
    grid_start = first - timedelta(days=lead)
    return [grid_start + timedelta(days=i) for i in range(_GRID_CELLS)]


def inclusive_range(start: date, end: date) -> tuple[date, date]:
    """Half-open bounds for a picker range that includes its end date."""
    if end < start:
        raise ValueError(
            f"end {end.isoformat()} is before start {start.isoformat()}"
        )
    return start, end + timedelta(days=1)


def shift_range(
    start: date,
    end: date,
    direction: str,
    today: date,
) -> tuple[date, date]:
    """Move an inclusive [start, end] range one full length forward or back.

    Moving back never yields a range that ends before ``today``; it snaps
    to a same-length range starting today instead.
    """
    if direction not in ("prev", "next"):
        raise ValueError(f"direction must be 'prev' or 'next', got {direction!r}")

    length = (end - start).days + 1
    if direction == "next":
        return start + timedelta(days=length), end + timedelta(days=length)

    new_start = start - timedelta(days=length)
    new_end = end - timedelta(days=length)
    if new_end < today:
        new_start = today
        new_end = today + timedelta(days=length - 1)
    return new_start, new_end
