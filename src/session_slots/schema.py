"""Input validation for settings and day-override payloads.

Each validator returns a list of error messages (empty = valid) so that a
caller can report every problem in one pass.
"""

from __future__ import annotations

from datetime import date

from session_slots.clock import to_minutes
from session_slots.errors import InvalidTimeFormat
from session_slots.types import DayStatus

# settings key -> minimum allowed value
_SETTINGS_INT_MINIMUMS = {
    "sessionDuration": 1,
    "cleaningBuffer": 0,
    "numberOfTanks": 1,
    "tankStaggerInterval": 0,
    "defaultFloatPrice": 0,
    "sessionsPerDay": 0,
}
_SETTINGS_TIME_KEYS = ("openTime", "closeTime")


def _is_int(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _check_time(value: object, label: str) -> list[str]:
    try:
        to_minutes(value)  # type: ignore[arg-type]
    except InvalidTimeFormat:
        return [f"{label}: invalid time {value!r} (expected 'HH:MM')"]
    return []


def validate_settings(settings: dict) -> list[str]:
    """Validate a facility settings payload. Missing keys are not errors.

    Checks:
    - openTime / closeTime parse as 'HH:MM'
    - integer fields are integers within range
    """
    errors: list[str] = []
    if not isinstance(settings, dict):
        return [f"settings must be an object, got {type(settings).__name__}"]

    for key in _SETTINGS_TIME_KEYS:
        if key in settings:
            errors.extend(_check_time(settings[key], key))

    for key, minimum in _SETTINGS_INT_MINIMUMS.items():
        if key not in settings:
            continue
        value = settings[key]
        if not _is_int(value):
            errors.append(f"{key}: expected integer, got {value!r}")
        elif value < minimum:
            errors.append(f"{key}: must be >= {minimum}, got {value}")

    return errors


def validate_override(entry: dict, label: str = "override") -> list[str]:
    """Validate one day-override record.

    Checks:
    - date parses as an ISO date
    - status is a known day status
    - openTime / closeTime, when set, parse as 'HH:MM'
    - sessionsToSell (required) and bookedSessions (optional) are ints >= 0
    """
    if not isinstance(entry, dict):
        return [f"{label}: must be an object, got {type(entry).__name__}"]

    errors: list[str] = []

    raw_date = entry.get("date")
    try:
        date.fromisoformat(raw_date)  # type: ignore[arg-type]
    except (ValueError, TypeError):
        errors.append(f"{label}: invalid date {raw_date!r}")

    try:
        DayStatus.parse(entry.get("status"))  # type: ignore[arg-type]
    except ValueError as e:
        errors.append(f"{label}: {e}")

    for key in _SETTINGS_TIME_KEYS:
        # Empty strings fall back to the default hours
        if entry.get(key):
            errors.extend(_check_time(entry[key], f"{label}.{key}"))

    if "sessionsToSell" not in entry:
        errors.append(f"{label}: missing 'sessionsToSell'")
    elif not _is_int(entry["sessionsToSell"]) or entry["sessionsToSell"] < 0:
        errors.append(
            f"{label}: 'sessionsToSell' must be an integer >= 0, "
            f"got {entry['sessionsToSell']!r}"
        )

    booked = entry.get("bookedSessions")
    if booked is not None and (not _is_int(booked) or booked < 0):
        errors.append(
            f"{label}: 'bookedSessions' must be an integer >= 0, got {booked!r}"
        )

    return errors


def validate_overrides(entries: list[dict]) -> list[str]:
    """Validate a list of override records. Labels errors with the list index."""
    if not isinstance(entries, list):
        return [f"overrides must be a list, got {type(entries).__name__}"]

    errors: list[str] = []
    for i, entry in enumerate(entries):
        label = f"override {i}"
        if isinstance(entry, dict) and "date" in entry:
            label = f"override {i} ({entry['date']})"
        errors.extend(validate_override(entry, label))
    return errors
