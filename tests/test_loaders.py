"""Tests for payload and JSON fixture loading."""

from __future__ import annotations

import json
from datetime import date

import pytest
from structlog.testing import capture_logs

from conftest import overrides_path, settings_payload


class TestSettingsFromPayload:

    def test_full_payload(self):
        from session_slots.config import SchedulerConfig
        from session_slots.loaders import settings_from_payload

        settings = settings_from_payload(settings_payload("staggered"), SchedulerConfig(_env_file=None))
        assert settings.window.open_time == "09:00"
        assert settings.resources.resource_count == 2
        assert settings.resources.stagger_interval_minutes == 30
        assert settings.default_float_price == 7500

    def test_missing_and_null_keys_use_defaults(self):
        from session_slots.config import SchedulerConfig
        from session_slots.loaders import settings_from_payload

        defaults = SchedulerConfig(_env_file=None)
        settings = settings_from_payload(
            {"numberOfTanks": 2, "closeTime": None}, defaults
        )
        assert settings.resources.resource_count == 2
        assert settings.window.open_time == "10:00"
        assert settings.window.close_time == "21:00"
        assert settings.policy.cycle_minutes == 90

    def test_empty_payload_is_defaults(self):
        from session_slots.config import SchedulerConfig
        from session_slots.loaders import settings_from_payload

        defaults = SchedulerConfig(_env_file=None)
        assert settings_from_payload(None, defaults) == defaults.facility_settings()

    def test_uses_configured_defaults(self, monkeypatch):
        from session_slots.loaders import settings_from_payload

        monkeypatch.setenv("SESSION_SLOTS_CLEANING_BUFFER", "15")
        settings = settings_from_payload({})
        assert settings.policy.cleaning_buffer_minutes == 15

    def test_invalid_payload_lists_every_problem(self):
        from session_slots.config import SchedulerConfig
        from session_slots.loaders import settings_from_payload

        with pytest.raises(ValueError) as exc:
            settings_from_payload(
                {"sessionDuration": 0, "openTime": "nine"}, SchedulerConfig(_env_file=None)
            )
        message = str(exc.value)
        assert message.startswith("Validation errors in settings:")
        assert "sessionDuration" in message
        assert "openTime" in message


class TestOverrides:

    def test_override_from_payload(self):
        from session_slots.loaders import override_from_payload
        from session_slots.types import DayStatus

        record = override_from_payload({
            "date": "2026-01-01",
            "status": "Sold Out",
            "openTime": "",
            "closeTime": "",
            "sessionsToSell": 8,
        })
        assert record.date == date(2026, 1, 1)
        assert record.status is DayStatus.SOLD_OUT
        assert record.open_time is None
        assert record.booked_sessions == 0

    def test_override_from_payload_invalid(self):
        from session_slots.loaders import override_from_payload

        with pytest.raises(ValueError, match="sessionsToSell"):
            override_from_payload({"date": "2026-01-01", "status": "Closed"})

    def test_bare_list(self):
        from session_slots.loaders import overrides_from_response

        records = overrides_from_response(
            [{"date": "2025-12-25", "status": "Closed", "sessionsToSell": 0}]
        )
        assert [r.date_key for r in records] == ["2025-12-25"]

    def test_envelope(self):
        from session_slots.loaders import overrides_from_response

        with open(overrides_path()) as f:
            response = json.load(f)
        records = overrides_from_response(response)
        assert len(records) == 4
        assert records[2].booked_sessions == 10

    def test_unsuccessful_envelope_is_empty(self):
        from session_slots.loaders import overrides_from_response

        with capture_logs() as logs:
            records = overrides_from_response(
                {"success": False, "message": "upstream down", "data": None}
            )
        assert records == []
        assert logs[0]["event"] == "override_response_unsuccessful"
        assert logs[0]["log_level"] == "warning"

    def test_invalid_records_rejected(self):
        from session_slots.loaders import overrides_from_response

        with pytest.raises(ValueError, match="override 0"):
            overrides_from_response({"success": True, "data": [{"date": "soon"}]})


class TestReadyTanks:

    @pytest.mark.parametrize("tanks, expected", [
        ([], 0),
        ([{"name": "A", "status": "Ready"}], 1),
        ([{"name": "A", "status": "Ready"}, {"name": "B", "status": "Maintenance"},
          {"name": "C", "status": "Ready"}], 2),
        ([{"name": "A", "status": "ready"}, {"name": "B"}], 0),
    ])
    def test_count(self, tanks, expected):
        from session_slots.loaders import count_ready_tanks

        assert count_ready_tanks(tanks) == expected


class TestJsonFiles:

    def test_load_overrides_json(self):
        from session_slots.loaders import load_overrides_json
        from session_slots.types import DayStatus

        overrides = load_overrides_json(overrides_path())
        assert sorted(overrides) == [
            "2025-12-24", "2025-12-25", "2025-12-31", "2026-01-01",
        ]
        assert overrides["2025-12-25"].status is DayStatus.CLOSED

    def test_load_overrides_json_nested_key(self, tmp_path):
        from session_slots.loaders import load_overrides_json

        path = tmp_path / "days.json"
        path.write_text(json.dumps({"overrides": [
            {"date": "2025-12-25", "status": "Closed", "sessionsToSell": 0},
        ]}))
        assert list(load_overrides_json(path)) == ["2025-12-25"]

    def test_load_overrides_json_invalid_names_file(self, tmp_path):
        from session_slots.loaders import load_overrides_json

        path = tmp_path / "broken.json"
        path.write_text(json.dumps([{"date": "2025-12-25", "status": "Closed"}]))
        with pytest.raises(ValueError, match="broken.json"):
            load_overrides_json(path)

    @pytest.mark.parametrize("wrap", [True, False])
    def test_load_settings_json(self, tmp_path, wrap):
        from session_slots.config import SchedulerConfig
        from session_slots.loaders import load_settings_json

        payload = settings_payload("overnight")
        path = tmp_path / "settings.json"
        path.write_text(json.dumps({"settings": payload} if wrap else payload))

        settings = load_settings_json(path, SchedulerConfig(_env_file=None))
        assert settings.window.is_overnight is True
        assert settings.window.close_offset == 1560

    def test_load_settings_json_invalid(self, tmp_path):
        from session_slots.config import SchedulerConfig
        from session_slots.loaders import load_settings_json

        path = tmp_path / "settings.json"
        path.write_text(json.dumps({"numberOfTanks": 0}))
        with pytest.raises(ValueError, match="settings.json"):
            load_settings_json(path, SchedulerConfig(_env_file=None))


class TestNonObjectSettings:

    def test_payload_list_rejected(self):
        from session_slots.config import SchedulerConfig
        from session_slots.loaders import settings_from_payload

        with pytest.raises(ValueError, match="settings must be an object, got list"):
            settings_from_payload([settings_payload()], SchedulerConfig(_env_file=None))

    def test_json_file_holding_list(self, tmp_path):
        from session_slots.config import SchedulerConfig
        from session_slots.loaders import load_settings_json

        path = tmp_path / "settings.json"
        path.write_text(json.dumps([settings_payload()]))
        with pytest.raises(ValueError, match="settings.json: .*got list"):
            load_settings_json(path, SchedulerConfig(_env_file=None))
