"""Admin-side construction of DayOverride records.

The engine never persists anything. These helpers build the record an admin
action would save, recomputing capacity from the chosen hours so the stored
sessions_to_sell matches what the tanks can deliver.
"""

from __future__ import annotations

from datetime import date

from session_slots.errors import InvalidOverride
from session_slots.facility import slots_per_resource
from session_slots.logging import get_logger
from session_slots.slots import compute_window_slots
from session_slots.types import (
    DayOverride,
    DayStatus,
    FacilityDaySummary,
    OperatingWindow,
    ResourceConfig,
    SessionPolicy,
)

logger = get_logger(__name__)


def sessions_to_sell(
    window: OperatingWindow,
    policy: SessionPolicy,
    resources: ResourceConfig,
) -> int:
    """Facility capacity for a window: per-tank minimum x tank count."""
    counts = [len(s) for s in compute_window_slots(window, policy, resources)]
    return slots_per_resource(counts) * resources.resource_count


def build_day_update(
    day: date,
    status: DayStatus | str,
    window: OperatingWindow | None,
    policy: SessionPolicy,
    resources: ResourceConfig,
    booked_sessions: int = 0,
) -> DayOverride:
    """Build the override saved when an admin edits one day.

    Bookable days need hours that fit at least one full session + cleaning
    cycle on every tank; capacity is recomputed from those hours. Any other
    status stores zero sessions to sell.

    Raises InvalidOverride when a Bookable day cannot be saved.
    """
    status = DayStatus.parse(status)

    if status is DayStatus.BOOKABLE:
        if window is None:
            raise InvalidOverride(
                f"{day.isoformat()}: open and close times are required "
                f"for a Bookable day"
            )
        capacity = sessions_to_sell(window, policy, resources)
        if capacity <= 0:
            raise InvalidOverride(
                f"{day.isoformat()}: operating hours {window.open_time}-"
                f"{window.close_time} must allow at least one full session + "
                f"cleaning cycle ({policy.cycle_minutes} minutes) on every tank"
            )
    else:
        capacity = 0

    record = DayOverride(
        date=day,
        status=status,
        open_time=window.open_time if window is not None else None,
        close_time=window.close_time if window is not None else None,
        sessions_to_sell=capacity,
        booked_sessions=booked_sessions,
    )
    logger.info(
        "day_update_built",
        date=record.date_key,
        status=status.value,
        sessions_to_sell=capacity,
    )
    return record


def toggle_day_status(
    summary: FacilityDaySummary,
    policy: SessionPolicy,
    resources: ResourceConfig,
) -> DayOverride | None:
    """Flip a day between Closed and Bookable, keeping its hours.

    Sold Out days are left alone: returns None.
    """
    if summary.status is DayStatus.SOLD_OUT:
        return None

    if summary.status is DayStatus.CLOSED:
        new_status = DayStatus.BOOKABLE
        capacity = sessions_to_sell(summary.effective_window, policy, resources)
    else:
        new_status = DayStatus.CLOSED
        capacity = 0

    return DayOverride(
        date=summary.date,
        status=new_status,
        open_time=summary.effective_window.open_time,
        close_time=summary.effective_window.close_time,
        sessions_to_sell=capacity,
        booked_sessions=summary.total_booked,
    )


def to_payload(override: DayOverride) -> dict:
    """Wire payload for saving an override (camelCase, no booked count)."""
    payload: dict = {
        "date": override.date_key,
        "status": override.status.value,
        "sessionsToSell": override.sessions_to_sell,
    }
    if override.open_time is not None:
        payload["openTime"] = override.open_time
    if override.close_time is not None:
        payload["closeTime"] = override.close_time
    return payload
