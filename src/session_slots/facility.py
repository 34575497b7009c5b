"""Layer 3: facility aggregator — per-tank slots composed into day capacity.

Reconciles the computed schedule with an optional stored DayOverride:

    no override        → capacity computed from defaults, nothing booked
    Closed override    → zero capacity, no slots
    any other override → stored sessions_to_sell / booked_sessions are
                         authoritative; slots follow the override's hours
"""

from __future__ import annotations

from datetime import date
from typing import Sequence

from session_slots.clock import to_time_of_day
from session_slots.logging import get_logger
from session_slots.slots import compute_window_slots, latest_cleaning_end
from session_slots.types import (
    DayOverride,
    DaySchedule,
    DayStatus,
    FacilityDaySummary,
    OperatingWindow,
    ResourceConfig,
    SessionPolicy,
    Slot,
)

logger = get_logger(__name__)


def slots_per_resource(counts: Sequence[int]) -> int:
    """Facility-wide per-tank capacity: the minimum across tanks.

    With staggered starts later tanks fit fewer sessions. The minimum is
    the count every tank can actually deliver.
    """
    return min(counts) if counts else 0


def derive_display_status(
    stored: DayStatus, total_slots: int, available_slots: int
) -> DayStatus:
    """A Bookable day with capacity but nothing left displays as Sold Out."""
    if stored is DayStatus.BOOKABLE and total_slots > 0 and available_slots == 0:
        return DayStatus.SOLD_OUT
    return stored


def effective_window(
    window: OperatingWindow, override: DayOverride | None
) -> OperatingWindow:
    """Override hours where present, default hours otherwise."""
    if override is None:
        return window
    return OperatingWindow(
        open_time=override.open_time or window.open_time,
        close_time=override.close_time or window.close_time,
    )


def compute_day_schedule(
    day: date,
    window: OperatingWindow,
    policy: SessionPolicy,
    resources: ResourceConfig,
    override: DayOverride | None = None,
) -> DaySchedule:
    """Compute the summary and slot list for one calendar date.

    Never raises for lack of capacity: a closed day, a window shorter than
    one cycle, or a fully booked day all come back as ordinary values.
    """
    stored_status = override.status if override is not None else DayStatus.BOOKABLE
    eff_window = effective_window(window, override)

    if stored_status is DayStatus.CLOSED:
        summary = FacilityDaySummary(
            date=day,
            status=DayStatus.CLOSED,
            stored_status=DayStatus.CLOSED,
            effective_window=eff_window,
            slots_per_resource=0,
            total_slots=0,
            total_booked=0,
            available_slots=0,
            actual_close_time=eff_window.close_time,
            cycle_minutes=policy.cycle_minutes,
            has_override=True,
        )
        logger.debug("day_closed", date=day.isoformat())
        return DaySchedule(summary=summary, slots=())

    per_resource = compute_window_slots(eff_window, policy, resources)
    per_tank = slots_per_resource([len(s) for s in per_resource])
    slots: tuple[Slot, ...] = tuple(s for rs in per_resource for s in rs)

    if override is not None:
        total_slots = override.sessions_to_sell
        total_booked = override.booked_sessions
        if total_booked > total_slots:
            logger.warning(
                "booked_exceeds_capacity",
                date=day.isoformat(),
                sessions_to_sell=total_slots,
                booked_sessions=total_booked,
            )
    else:
        total_slots = per_tank * resources.resource_count
        total_booked = 0

    available = max(0, total_slots - total_booked)

    last_end = latest_cleaning_end(slots)
    actual_close = (
        to_time_of_day(last_end) if last_end is not None else eff_window.close_time
    )

    summary = FacilityDaySummary(
        date=day,
        status=derive_display_status(stored_status, total_slots, available),
        stored_status=stored_status,
        effective_window=eff_window,
        slots_per_resource=per_tank,
        total_slots=total_slots,
        total_booked=total_booked,
        available_slots=available,
        actual_close_time=actual_close,
        cycle_minutes=policy.cycle_minutes,
        has_override=override is not None,
    )
    logger.debug(
        "day_computed",
        date=day.isoformat(),
        status=summary.status.value,
        total_slots=total_slots,
        available_slots=available,
        actual_close_time=actual_close,
    )
    return DaySchedule(summary=summary, slots=slots)


def compute_facility_summary(
    day: date,
    window: OperatingWindow,
    policy: SessionPolicy,
    resources: ResourceConfig,
    override: DayOverride | None = None,
) -> FacilityDaySummary:
    """Summary-only variant of compute_day_schedule."""
    return compute_day_schedule(day, window, policy, resources, override).summary
