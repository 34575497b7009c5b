"""Shared test fixtures and data loading for session-slots.

All test data lives in data/fixtures/ as JSON files.  This module loads
that data and exposes helper functions + pytest fixtures for the tests.

Reference settings ("standard"): 09:00-21:00, 60-min sessions,
30-min cleaning, 1 tank. A 90-minute cycle, 8 sessions per day.
"""

from __future__ import annotations

import json
from datetime import date
from pathlib import Path

import pytest

# ---------------------------------------------------------------------------
# Paths
# ---------------------------------------------------------------------------
FIXTURES_DIR = Path(__file__).resolve().parent.parent / "data" / "fixtures"
SCENARIOS_DIR = FIXTURES_DIR / "scenarios"


# ---------------------------------------------------------------------------
# Data loaders
# ---------------------------------------------------------------------------
def _load_json(path: Path):
    with open(path) as f:
        return json.load(f)


_reference = _load_json(FIXTURES_DIR / "reference.json")

MINUTES_PER_DAY = _reference["minutes_per_day"]

# Time lookup:  TIMES["09:00"] → 540
TIMES: dict[str, int] = {t["label"]: t["minutes"] for t in _reference["times"]}

# Settings payloads by name, in the settings API's camelCase shape
SETTINGS_PAYLOADS: dict[str, dict] = _reference["settings"]


# ---------------------------------------------------------------------------
# Convenience helpers (importable by test modules)
# ---------------------------------------------------------------------------
def settings_payload(name: str = "standard") -> dict:
    """A fresh copy of a named settings payload."""
    return dict(SETTINGS_PAYLOADS[name])


def make_settings(name: str = "standard"):
    """Build FacilitySettings from a named payload in reference.json."""
    from session_slots.config import SchedulerConfig
    from session_slots.loaders import settings_from_payload

    return settings_from_payload(settings_payload(name), SchedulerConfig(_env_file=None))


def make_policy(duration: int = 60, buffer: int = 30):
    from session_slots.types import SessionPolicy

    return SessionPolicy(duration, buffer)


def make_resources(count: int = 1, stagger: int = 0):
    from session_slots.types import ResourceConfig

    return ResourceConfig(count, stagger)


def make_window(open_time: str = "09:00", close_time: str = "21:00"):
    from session_slots.types import OperatingWindow

    return OperatingWindow(open_time, close_time)


def make_override(day: str, spec: dict):
    """Build a DayOverride from a camelCase override spec and an ISO date."""
    from session_slots.types import DayOverride

    return DayOverride(
        date=date.fromisoformat(day),
        status=spec["status"],
        open_time=spec.get("openTime") or None,
        close_time=spec.get("closeTime") or None,
        sessions_to_sell=spec.get("sessionsToSell", 0),
        booked_sessions=spec.get("bookedSessions", 0),
    )


def overrides_path() -> Path:
    return FIXTURES_DIR / "overrides.json"


# ---------------------------------------------------------------------------
# Scenario loader
# ---------------------------------------------------------------------------
def load_scenarios(name: str):
    """Load a scenario file from data/fixtures/scenarios/{name}.json."""
    return _load_json(SCENARIOS_DIR / f"{name}.json")


# ---------------------------------------------------------------------------
# pytest fixtures
# ---------------------------------------------------------------------------
@pytest.fixture
def standard_settings():
    """Single tank, 09:00-21:00, 60 + 30 minute cycle."""
    return make_settings("standard")


@pytest.fixture
def staggered_settings():
    """Two tanks, second one starting 30 minutes later."""
    return make_settings("staggered")


@pytest.fixture
def overnight_settings():
    """Single tank, 22:00-02:00."""
    return make_settings("overnight")


@pytest.fixture
def standard_policy():
    return make_policy(60, 30)


@pytest.fixture(autouse=True)
def _isolated_config(monkeypatch):
    """Keep SESSION_SLOTS_* variables from the host out of every test."""
    import os

    from session_slots.config import reset_config

    for key in list(os.environ):
        if key.upper().startswith("SESSION_SLOTS_"):
            monkeypatch.delenv(key, raising=False)
    reset_config()
    yield
    reset_config()
