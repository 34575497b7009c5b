"""Layer 2: per-resource slot calculator — integer minute arithmetic.

Given one tank's start offset, the day's target close offset and the session
policy, lays out back-to-back session + cleaning cycles. Pure: no I/O, no
shared state.
"""

from __future__ import annotations

from typing import Iterable

from session_slots.types import OperatingWindow, ResourceConfig, SessionPolicy, Slot


def count_resource_slots(
    resource_start: int,
    close_target: int,
    policy: SessionPolicy,
) -> int:
    """Number of whole sessions that fit: floor((close - start) / cycle), >= 0."""
    cycle = policy.cycle_minutes
    if cycle <= 0 or close_target <= resource_start:
        return 0
    return (close_target - resource_start) // cycle


def compute_resource_slots(
    resource_start: int,
    close_target: int,
    policy: SessionPolicy,
    resource_index: int = 0,
) -> list[Slot]:
    """Ordered slots for one resource.

    Slot i starts at resource_start + i * cycle. Consecutive slots are
    contiguous: slot[i + 1].session_start == slot[i].cleaning_end.
    Every whole cycle, cleaning included, ends by close_target.

    Returns an empty list (zero capacity, not an error) when the window is
    shorter than one cycle.
    """
    cycle = policy.cycle_minutes
    count = count_resource_slots(resource_start, close_target, policy)

    slots: list[Slot] = []
    for i in range(count):
        session_start = resource_start + i * cycle
        session_end = session_start + policy.session_duration_minutes
        slots.append(
            Slot(
                resource_index=resource_index,
                sequence_number=i + 1,
                session_start=session_start,
                session_end=session_end,
                cleaning_end=session_end + policy.cleaning_buffer_minutes,
            )
        )
    return slots


def resource_start_offsets(
    window: OperatingWindow, resources: ResourceConfig
) -> list[int]:
    """Start offset for every resource: open + index * stagger."""
    open_offset = window.open_offset
    return [
        resources.start_offset(open_offset, i)
        for i in range(resources.resource_count)
    ]


def compute_window_slots(
    window: OperatingWindow,
    policy: SessionPolicy,
    resources: ResourceConfig,
) -> list[list[Slot]]:
    """Per-resource slot lists for a whole window, indexed by resource."""
    close_target = window.close_offset
    return [
        compute_resource_slots(start, close_target, policy, resource_index=i)
        for i, start in enumerate(resource_start_offsets(window, resources))
    ]


def latest_cleaning_end(slots: Iterable[Slot]) -> int | None:
    """Latest cleaning_end across slots, or None when there are none."""
    ends = [s.cleaning_end for s in slots]
    return max(ends) if ends else None
