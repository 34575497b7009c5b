#!/usr/bin/env python
"""Visual verification report for session-slots.

Run:  python scripts/verify.py

Produces a formatted report showing:
  1. Reference settings (the payloads the tests build policies from)
  2. Layer 1: 'HH:MM' parsing  -- input/output table
  3. Layer 2: per-tank slot layout  -- input/output table with PASS/FAIL
  4. Layer 3: facility aggregation  -- input/output table + ASCII day views
  5. Calendar range with stored overrides
"""

from __future__ import annotations

import json
import sys
from datetime import date
from pathlib import Path

# ---------------------------------------------------------------------------
# Paths and data loading
# ---------------------------------------------------------------------------
ROOT = Path(__file__).resolve().parent.parent
FIXTURES = ROOT / "data" / "fixtures"
SCENARIOS = FIXTURES / "scenarios"

sys.path.insert(0, str(ROOT / "src"))

from session_slots.calendar import expand_range
from session_slots.clock import to_minutes, to_time_of_day
from session_slots.config import get_config
from session_slots.debug import show_day_schedule, show_range
from session_slots.errors import InvalidTimeFormat
from session_slots.facility import compute_day_schedule
from session_slots.loaders import load_overrides_json, settings_from_payload
from session_slots.logging import setup_logging
from session_slots.slots import compute_resource_slots
from session_slots.types import (
    DayOverride,
    OperatingWindow,
    ResourceConfig,
    SessionPolicy,
)


def _load(path: Path):
    with open(path) as f:
        return json.load(f)


_ref = _load(FIXTURES / "reference.json")
_config = get_config()

# ---------------------------------------------------------------------------
# Formatting helpers
# ---------------------------------------------------------------------------
WIDTH = 90


def banner(title: str):
    print()
    print("=" * WIDTH)
    print(f"  {title}")
    print("=" * WIDTH)


def heading(title: str):
    print()
    print(f"  {title}")
    print(f"  {'-' * (len(title) + 2)}")


def table(headers: list[str], rows: list[list[str]], indent: int = 4):
    """Print a formatted table with auto-sized columns."""
    col_widths = [len(h) for h in headers]
    for row in rows:
        for i, cell in enumerate(row):
            col_widths[i] = max(col_widths[i], len(cell))

    pad = " " * indent
    fmt = pad + "  ".join(f"{{:<{w}}}" for w in col_widths)
    sep = pad + "  ".join("-" * w for w in col_widths)

    print(fmt.format(*headers))
    print(sep)
    for row in rows:
        padded = row + [""] * (len(headers) - len(row))
        print(fmt.format(*padded))


def _status(ok: bool) -> str:
    return "PASS" if ok else "FAIL"


def _override(day: str, spec: dict | None) -> DayOverride | None:
    if not spec:
        return None
    return DayOverride(
        date=date.fromisoformat(day),
        status=spec["status"],
        open_time=spec.get("openTime") or None,
        close_time=spec.get("closeTime") or None,
        sessions_to_sell=spec.get("sessionsToSell", 0),
        booked_sessions=spec.get("bookedSessions", 0),
    )


# ---------------------------------------------------------------------------
# Section 1: Reference settings
# ---------------------------------------------------------------------------
def section_reference():
    banner("REFERENCE SETTINGS")
    print(f"\n    Minutes/day:    {_ref['minutes_per_day']}")

    rows = []
    for name, payload in _ref["settings"].items():
        settings = settings_from_payload(payload, _config)
        rows.append([
            name,
            f"{payload['openTime']}-{payload['closeTime']}",
            f"{payload['sessionDuration']}+{payload['cleaningBuffer']}",
            str(settings.policy.cycle_minutes),
            str(payload["numberOfTanks"]),
            str(payload["tankStaggerInterval"]),
            "yes" if settings.window.is_overnight else "no",
        ])
    print()
    table(["Name", "Hours", "Session+Clean", "Cycle", "Tanks", "Stagger", "Overnight"], rows)


# ---------------------------------------------------------------------------
# Section 2: Layer 1  -- 'HH:MM' parsing
# ---------------------------------------------------------------------------
def section_clock():
    banner("LAYER 1: TIME OF DAY")
    data = _load(SCENARIOS / "clock.json")

    heading("Function: to_minutes(t) -> int")
    rows = []
    for s in data["to_minutes"]:
        got = to_minutes(s["value"])
        rows.append([
            s["id"], s["value"], str(s["expected"]), str(got),
            to_time_of_day(got), _status(got == s["expected"]),
        ])
    table(["Case", "Input", "Expected", "Got", "Back", "Result"], rows)

    heading("Malformed input raises InvalidTimeFormat")
    rows = []
    for s in data["invalid_times"]:
        try:
            to_minutes(s["value"])
        except InvalidTimeFormat:
            outcome, ok = "raised", True
        else:
            outcome, ok = "accepted", False
        rows.append([s["id"], repr(s["value"]), outcome, _status(ok)])
    table(["Case", "Input", "Outcome", "Result"], rows)


# ---------------------------------------------------------------------------
# Section 3: Layer 2  -- per-tank slot layout
# ---------------------------------------------------------------------------
def section_resource_slots():
    banner("LAYER 2: PER-TANK SLOTS")
    heading("Function: compute_resource_slots(start, close, policy) -> list[Slot]")
    print("    Back-to-back session + cleaning cycles until the next cycle "
          "would end past close.\n")

    rows = []
    for s in _load(SCENARIOS / "resource_slots.json"):
        policy = SessionPolicy(s["duration"], s["buffer"])
        slots = compute_resource_slots(s["start"], s["close"], policy)
        ok = len(slots) == s["expected_count"]
        last = (
            f"{slots[-1].start_time}-{slots[-1].end_time}~{slots[-1].cleaning_end_time}"
            if slots else "-"
        )
        rows.append([
            s["id"],
            f"{to_time_of_day(s['start'])}-{to_time_of_day(s['close'])}",
            str(policy.cycle_minutes),
            str(s["expected_count"]),
            str(len(slots)),
            last,
            _status(ok),
        ])
    table(["Case", "Window", "Cycle", "Expected", "Got", "Last slot", "Result"], rows)


# ---------------------------------------------------------------------------
# Section 4: Layer 3  -- facility aggregation
# ---------------------------------------------------------------------------
def section_facility():
    banner("LAYER 3: FACILITY DAY SUMMARY")
    scenarios = _load(SCENARIOS / "facility.json")

    heading("Function: compute_day_schedule(day, window, policy, resources, override)")
    rows = []
    schedules = {}
    for s in scenarios:
        schedule = compute_day_schedule(
            date.fromisoformat(s["date"]),
            OperatingWindow(*s["window"]),
            SessionPolicy(s["duration"], s["buffer"]),
            ResourceConfig(s["tanks"], s["stagger"]),
            _override(s["date"], s.get("override")),
        )
        schedules[s["id"]] = schedule
        summary, expected = schedule.summary, s["expected"]
        ok = (
            summary.status.value == expected["status"]
            and summary.total_slots == expected["total_slots"]
            and summary.available_slots == expected["available_slots"]
            and summary.actual_close_time == expected["actual_close_time"]
        )
        rows.append([
            s["id"],
            summary.status.value,
            str(summary.slots_per_resource),
            str(summary.total_slots),
            str(summary.available_slots),
            summary.actual_close_time,
            _status(ok),
        ])
    table(["Case", "Status", "Per tank", "Total", "Avail", "Closes", "Result"], rows)

    for case_id in ("single_tank_defaults", "staggered_minimum", "three_tanks_stagger_45"):
        if case_id in schedules:
            heading(f"Day view: {case_id}")
            show_day_schedule(schedules[case_id])


# ---------------------------------------------------------------------------
# Section 5: Calendar range
# ---------------------------------------------------------------------------
def section_range():
    banner("CALENDAR RANGE WITH OVERRIDES")
    settings = settings_from_payload(_ref["settings"]["staggered"], _config)
    overrides = load_overrides_json(FIXTURES / "overrides.json")

    heading("expand_range(2025-12-22, 2026-01-03, staggered, overrides.json)")
    show_range(expand_range(date(2025, 12, 22), date(2026, 1, 3), settings, overrides))


# ---------------------------------------------------------------------------
# Main
# ---------------------------------------------------------------------------
def main():
    setup_logging(_config.log_json, _config.log_level)
    print("session-slots verification report")
    section_reference()
    section_clock()
    section_resource_slots()
    section_facility()
    section_range()
    print()


if __name__ == "__main__":
    main()
