"""Client-side booking options: the time buttons shown for a selected date.

Composes a computed DaySchedule into distinct start times. A start offered
by several staggered tanks appears once, listing every tank that offers it.
"""

from __future__ import annotations

from session_slots.clock import MINUTES_PER_DAY, to_minutes
from session_slots.types import DaySchedule, DayStatus, TimeOption


def time_options(schedule: DaySchedule) -> list[TimeOption]:
    """Bookable start times for a day, ascending by start offset.

    Empty unless the day displays as Bookable with capacity left.
    """
    summary = schedule.summary
    if summary.status is not DayStatus.BOOKABLE or summary.available_slots <= 0:
        return []

    by_start: dict[int, tuple[int, list[int]]] = {}
    for slot in schedule.slots:
        end, tanks = by_start.setdefault(slot.session_start, (slot.session_end, []))
        tanks.append(slot.resource_index)

    return [
        TimeOption(start=start, end=end, resource_indices=tuple(sorted(tanks)))
        for start, (end, tanks) in sorted(by_start.items())
    ]


def find_option(options: list[TimeOption], start_time: str) -> TimeOption | None:
    """Option whose start matches 'HH:MM', or None.

    Raises InvalidTimeFormat if ``start_time`` is malformed.
    """
    wanted = to_minutes(start_time)
    for option in options:
        # Overnight starts carry offsets past 1440
        if option.start % MINUTES_PER_DAY == wanted:
            return option
    return None
