"""Shared value types for the slot engine. All immutable."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from enum import Enum

from session_slots.clock import (
    MINUTES_PER_DAY,
    to_minutes,
    to_time_of_day,
    window_offsets,
)
from session_slots.errors import InvalidPolicy, InvalidResourceConfig


class DayStatus(str, Enum):
    """Facility-wide status of one calendar day. Values are the wire strings."""

    BOOKABLE = "Bookable"
    CLOSED = "Closed"
    SOLD_OUT = "Sold Out"

    @classmethod
    def parse(cls, value: str | DayStatus) -> DayStatus:
        """Accept wire values, enum names and the 'SoldOut' spelling."""
        if isinstance(value, DayStatus):
            return value
        if not isinstance(value, str):
            raise ValueError(f"Invalid day status: {value!r}")
        key = value.replace(" ", "").replace("_", "").lower()
        for status in cls:
            if status.value.replace(" ", "").lower() == key:
                return status
        raise ValueError(
            f"Invalid day status: {value!r} "
            f"(expected one of {', '.join(s.value for s in cls)})"
        )


@dataclass(frozen=True)
class OperatingWindow:
    """Active interval for one calendar day, as 'HH:MM' strings.

    Raises InvalidTimeFormat on construction if either time is malformed.
    """

    open_time: str
    close_time: str

    def __post_init__(self) -> None:
        window_offsets(self.open_time, self.close_time)

    @property
    def open_offset(self) -> int:
        return window_offsets(self.open_time, self.close_time)[0]

    @property
    def close_offset(self) -> int:
        """Normalized close: past 1440 when the window crosses midnight."""
        return window_offsets(self.open_time, self.close_time)[1]

    @property
    def duration_minutes(self) -> int:
        return self.close_offset - self.open_offset

    @property
    def is_overnight(self) -> bool:
        return self.close_offset >= MINUTES_PER_DAY


@dataclass(frozen=True)
class SessionPolicy:
    """Session length plus the cleaning buffer that follows every session."""

    session_duration_minutes: int
    cleaning_buffer_minutes: int = 0

    def __post_init__(self) -> None:
        if self.session_duration_minutes <= 0:
            raise InvalidPolicy(
                f"session_duration_minutes must be > 0, "
                f"got {self.session_duration_minutes}"
            )
        if self.cleaning_buffer_minutes < 0:
            raise InvalidPolicy(
                f"cleaning_buffer_minutes must be >= 0, "
                f"got {self.cleaning_buffer_minutes}"
            )

    @property
    def cycle_minutes(self) -> int:
        """Fixed quantum between consecutive session starts on one resource."""
        return self.session_duration_minutes + self.cleaning_buffer_minutes


@dataclass(frozen=True)
class ResourceConfig:
    """Number of tanks and the per-tank offset added to the opening time."""

    resource_count: int = 1
    stagger_interval_minutes: int = 0

    def __post_init__(self) -> None:
        if self.resource_count < 1:
            raise InvalidResourceConfig(
                f"resource_count must be >= 1, got {self.resource_count}"
            )
        if self.stagger_interval_minutes < 0:
            raise InvalidResourceConfig(
                f"stagger_interval_minutes must be >= 0, "
                f"got {self.stagger_interval_minutes}"
            )

    def start_offset(self, open_offset: int, resource_index: int) -> int:
        """First session start for the resource at ``resource_index`` (0-based)."""
        return open_offset + resource_index * self.stagger_interval_minutes


@dataclass(frozen=True)
class Slot:
    """One bookable session on one resource, including its cleaning tail.

    Invariants:
        - session_end == session_start + session duration
        - cleaning_end == session_end + cleaning buffer
        - Offsets are minutes from the day's midnight; they exceed 1440
          on overnight days.
    """

    resource_index: int
    sequence_number: int
    session_start: int
    session_end: int
    cleaning_end: int

    @property
    def start_time(self) -> str:
        return to_time_of_day(self.session_start)

    @property
    def end_time(self) -> str:
        return to_time_of_day(self.session_end)

    @property
    def cleaning_end_time(self) -> str:
        return to_time_of_day(self.cleaning_end)


@dataclass(frozen=True)
class DayOverride:
    """Admin-set exception to the default policy for one date."""

    date: date
    status: DayStatus = DayStatus.BOOKABLE
    open_time: str | None = None
    close_time: str | None = None
    sessions_to_sell: int = 0
    booked_sessions: int = 0

    def __post_init__(self) -> None:
        # Accept wire strings for status; store the enum.
        object.__setattr__(self, "status", DayStatus.parse(self.status))
        for value in (self.open_time, self.close_time):
            if value is not None:
                to_minutes(value)
        if self.sessions_to_sell < 0:
            raise ValueError(
                f"sessions_to_sell must be >= 0, got {self.sessions_to_sell}"
            )
        if self.booked_sessions < 0:
            raise ValueError(
                f"booked_sessions must be >= 0, got {self.booked_sessions}"
            )

    @property
    def date_key(self) -> str:
        return self.date.isoformat()


@dataclass(frozen=True)
class FacilityDaySummary:
    """Facility-wide capacity for one calendar date.

    ``status`` is the display status (a full Bookable day shows as Sold Out);
    ``stored_status`` is what the override record says, or Bookable when
    there is none. ``actual_close_time`` is when the last tank finishes
    cleaning; it falls back to the target close on days with no slots.
    """

    date: date
    status: DayStatus
    stored_status: DayStatus
    effective_window: OperatingWindow
    slots_per_resource: int
    total_slots: int
    total_booked: int
    available_slots: int
    actual_close_time: str
    cycle_minutes: int
    has_override: bool = False

    @property
    def date_key(self) -> str:
        return self.date.isoformat()

    @property
    def is_bookable(self) -> bool:
        return self.status is DayStatus.BOOKABLE and self.available_slots > 0


@dataclass(frozen=True)
class DaySchedule:
    """A day summary together with the slots behind it."""

    summary: FacilityDaySummary
    slots: tuple[Slot, ...]

    def slots_for(self, resource_index: int) -> tuple[Slot, ...]:
        return tuple(s for s in self.slots if s.resource_index == resource_index)


@dataclass(frozen=True)
class FacilitySettings:
    """Default policy bundle. Resolved once per request, passed explicitly."""

    window: OperatingWindow
    policy: SessionPolicy
    resources: ResourceConfig
    default_float_price: int = 0
    sessions_per_day: int = 0


@dataclass(frozen=True)
class TimeOption:
    """A distinct session start offered to clients, with the tanks offering it."""

    start: int
    end: int
    resource_indices: tuple[int, ...]

    @property
    def start_time(self) -> str:
        return to_time_of_day(self.start)

    @property
    def end_time(self) -> str:
        return to_time_of_day(self.end)

    @property
    def capacity(self) -> int:
        return len(self.resource_indices)
