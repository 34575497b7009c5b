"""session-slots: session-slot scheduling engine for floating-therapy tanks."""

from session_slots.booking import find_option, time_options
from session_slots.calendar import expand_range, expand_schedules, index_overrides
from session_slots.clock import (
    MINUTES_PER_DAY,
    normalized_close_offset,
    to_minutes,
    to_time_of_day,
)
from session_slots.errors import (
    InvalidOverride,
    InvalidPolicy,
    InvalidResourceConfig,
    InvalidTimeFormat,
    SchedulingError,
)
from session_slots.facility import compute_day_schedule, compute_facility_summary
from session_slots.overrides import build_day_update, toggle_day_status
from session_slots.slots import compute_resource_slots
from session_slots.types import (
    DayOverride,
    DaySchedule,
    DayStatus,
    FacilityDaySummary,
    FacilitySettings,
    OperatingWindow,
    ResourceConfig,
    SessionPolicy,
    Slot,
    TimeOption,
)

__all__ = [
    "DayOverride",
    "DaySchedule",
    "DayStatus",
    "FacilityDaySummary",
    "FacilitySettings",
    "InvalidOverride",
    "InvalidPolicy",
    "InvalidResourceConfig",
    "InvalidTimeFormat",
    "MINUTES_PER_DAY",
    "OperatingWindow",
    "ResourceConfig",
    "SchedulingError",
    "SessionPolicy",
    "Slot",
    "TimeOption",
    "build_day_update",
    "compute_day_schedule",
    "compute_facility_summary",
    "compute_resource_slots",
    "expand_range",
    "expand_schedules",
    "find_option",
    "index_overrides",
    "normalized_close_offset",
    "time_options",
    "to_minutes",
    "to_time_of_day",
    "toggle_day_status",
]
