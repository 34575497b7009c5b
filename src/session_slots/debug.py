"""ASCII visualisation for development-time verification.

This module is dev-only and not imported by production code.
"""

from __future__ import annotations

from session_slots.clock import to_time_of_day
from session_slots.slots import latest_cleaning_end
from session_slots.types import DaySchedule, DayStatus, FacilityDaySummary


def show_day_schedule(schedule: DaySchedule, minutes_per_char: int = 30) -> str:
    """Print one row per tank showing sessions and cleaning across the day.

    Legend: '#' = session, '~' = cleaning, '.' = idle.
    The timeline starts on the hour at or before opening and ends on the
    hour at or after the later of target close and actual close.
    Returns the string and also prints to stdout.
    """
    summary = schedule.summary
    lines: list[str] = [
        f"{summary.date_key}  {summary.status.value}  "
        f"target {summary.effective_window.open_time}-"
        f"{summary.effective_window.close_time}  "
        f"actual close {summary.actual_close_time}"
    ]

    if summary.status is DayStatus.CLOSED or not schedule.slots:
        result = "\n".join(lines)
        print(result)
        return result

    window = summary.effective_window
    origin = (window.open_offset // 60) * 60
    last = max(window.close_offset, latest_cleaning_end(schedule.slots) or 0)
    horizon = -(-last // 60) * 60  # ceil to the hour
    width = (horizon - origin) // minutes_per_char

    # Hour labels every 3 hours
    header = [" "] * width
    for c in range(width):
        minute = origin + c * minutes_per_char
        if minute % 180 == 0 and c + 1 < width:
            label = to_time_of_day(minute)[:2]
            header[c], header[c + 1] = label[0], label[1]
    lines.append(f"{'':>8s}  {''.join(header)}")

    tanks = sorted({s.resource_index for s in schedule.slots})
    for tank in tanks:
        row = ["."] * width
        for slot in schedule.slots_for(tank):
            for c in range(width):
                minute = origin + c * minutes_per_char
                if slot.session_start <= minute < slot.session_end:
                    row[c] = "#"
                elif slot.session_end <= minute < slot.cleaning_end:
                    row[c] = "~"
        lines.append(f"{'tank ' + str(tank):>8s}  {''.join(row)}")

    lines.append("\nLegend: # = session, ~ = cleaning, . = idle")
    result = "\n".join(lines)
    print(result)
    return result


def show_range(summaries: list[FacilityDaySummary]) -> str:
    """Print a table of day summaries. Returns the string and also prints it."""
    headers = ["Date", "Status", "Hours", "Slots", "Booked", "Avail", "Closes"]
    rows = [
        [
            s.date_key,
            s.status.value,
            f"{s.effective_window.open_time}-{s.effective_window.close_time}",
            str(s.total_slots),
            str(s.total_booked),
            str(s.available_slots),
            s.actual_close_time,
        ]
        for s in summaries
    ]

    widths = [len(h) for h in headers]
    for row in rows:
        for i, cell in enumerate(row):
            widths[i] = max(widths[i], len(cell))

    fmt = "  ".join(f"{{:<{w}}}" for w in widths)
    lines = [fmt.format(*headers), "  ".join("-" * w for w in widths)]
    lines.extend(fmt.format(*row) for row in rows)

    result = "\n".join(lines)
    print(result)
    return result
