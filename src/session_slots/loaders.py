"""Payload and fixture loading: API-shaped dicts → engine value types.

The settings API and the calendar API speak camelCase JSON:

    settings:  {"openTime": "09:00", "closeTime": "21:00",
                "sessionDuration": 60, "cleaningBuffer": 30,
                "numberOfTanks": 2, "tankStaggerInterval": 30, ...}
    overrides: {"success": true, "data": [
                   {"date": "2025-12-25", "status": "Closed",
                    "openTime": "09:00", "closeTime": "21:00",
                    "sessionsToSell": 0, "bookedSessions": 0}, ...]}

Raises ValueError (one line per problem) if validation fails.
"""

from __future__ import annotations

import json
from datetime import date
from pathlib import Path

from session_slots.calendar import index_overrides
from session_slots.config import SchedulerConfig, get_config
from session_slots.logging import get_logger
from session_slots.schema import validate_override, validate_overrides, validate_settings
from session_slots.types import (
    DayOverride,
    FacilitySettings,
    OperatingWindow,
    ResourceConfig,
    SessionPolicy,
)

logger = get_logger(__name__)

READY_TANK_STATUS = "Ready"


def _raise_if_errors(errors: list[str], source: str) -> None:
    if errors:
        raise ValueError(
            f"Validation errors in {source}:\n"
            + "\n".join(f"  - {e}" for e in errors)
        )


def settings_from_payload(
    payload: dict | None,
    defaults: SchedulerConfig | None = None,
) -> FacilitySettings:
    """Build FacilitySettings from a settings response.

    Keys missing from (or null in) the payload fall back to the configured
    defaults, so a partial response still yields a complete policy.
    """
    if payload is not None and not isinstance(payload, dict):
        _raise_if_errors(validate_settings(payload), "settings")

    defaults = defaults or get_config()
    merged = defaults.as_payload()
    if payload:
        merged.update({k: v for k, v in payload.items() if v is not None})

    _raise_if_errors(validate_settings(merged), "settings")

    return FacilitySettings(
        window=OperatingWindow(merged["openTime"], merged["closeTime"]),
        policy=SessionPolicy(merged["sessionDuration"], merged["cleaningBuffer"]),
        resources=ResourceConfig(
            merged["numberOfTanks"], merged["tankStaggerInterval"]
        ),
        default_float_price=merged["defaultFloatPrice"],
        sessions_per_day=merged["sessionsPerDay"],
    )


def override_from_payload(entry: dict) -> DayOverride:
    """Build a DayOverride from one calendar record."""
    _raise_if_errors(validate_override(entry), f"override {entry.get('date')!r}")
    return DayOverride(
        date=date.fromisoformat(entry["date"]),
        status=entry["status"],
        open_time=entry.get("openTime") or None,
        close_time=entry.get("closeTime") or None,
        sessions_to_sell=entry["sessionsToSell"],
        booked_sessions=entry.get("bookedSessions") or 0,
    )


def overrides_from_response(response: dict | list) -> list[DayOverride]:
    """Build overrides from a calendar response.

    Accepts a bare list of records or the ``{"success", "data"}`` envelope.
    An envelope with ``success: false`` carries no records.
    """
    if isinstance(response, dict):
        if not response.get("success", True):
            logger.warning(
                "override_response_unsuccessful",
                message=response.get("message"),
            )
            return []
        records = response.get("data") or []
    else:
        records = response

    _raise_if_errors(validate_overrides(records), "overrides")
    return [override_from_payload(entry) for entry in records]


def count_ready_tanks(tanks: list[dict]) -> int:
    """Number of tanks whose status is 'Ready' (Maintenance tanks don't count)."""
    return sum(1 for tank in tanks if tank.get("status") == READY_TANK_STATUS)


def load_settings_json(
    path: str | Path,
    defaults: SchedulerConfig | None = None,
) -> FacilitySettings:
    """Load FacilitySettings from a JSON file holding a settings payload."""
    path = Path(path)
    with open(path) as f:
        data = json.load(f)

    if isinstance(data, dict) and "settings" in data:
        data = data["settings"]

    try:
        settings = settings_from_payload(data, defaults)
    except ValueError as e:
        raise ValueError(f"{path.name}: {e}") from e

    logger.info("settings_loaded", path=str(path))
    return settings


def load_overrides_json(path: str | Path) -> dict[str, DayOverride]:
    """Load override records from a JSON file, keyed by ISO date."""
    path = Path(path)
    with open(path) as f:
        data = json.load(f)

    if isinstance(data, dict) and "overrides" in data:
        data = data["overrides"]

    try:
        records = overrides_from_response(data)
    except ValueError as e:
        raise ValueError(f"{path.name}: {e}") from e

    logger.info("overrides_loaded", path=str(path), count=len(records))
    return index_overrides(records)
