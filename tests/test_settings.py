"""Tests for settings defaults, persistence and engine configuration."""

from __future__ import annotations

import json

import pytest

from breakbank import settings as settings_module
from breakbank.settings import Settings, load_settings, save_settings
from breakbank.timer.engine import TimerConfig


class TestSettingsDefaults:

    def test_timer_defaults(self):
        s = Settings()
        assert s.work_duration == 25 * 60
        assert s.short_break_duration == 5 * 60
        assert s.long_break_duration == 15 * 60
        assert s.rollover_duration == 60
        assert s.long_break_interval == 4

    def test_side_effect_defaults(self):
        s = Settings()
        assert s.sound_enabled is True
        assert s.sound_volume == 70
        assert s.notifications_enabled is True

    def test_timer_config(self):
        assert Settings().timer_config() == TimerConfig()

    def test_timer_config_validates(self):
        with pytest.raises(ValueError):
            Settings(work_duration=0).timer_config()


class TestSettingsPersistence:

    def test_round_trip(self):
        save_settings(Settings(work_duration=30 * 60, sound_volume=42, window_x=10))
        loaded = load_settings()
        assert loaded.work_duration == 30 * 60
        assert loaded.sound_volume == 42
        assert loaded.window_x == 10

    def test_missing_file_returns_defaults(self):
        assert load_settings() == Settings()

    def test_invalid_json_returns_defaults(self, caplog):
        settings_module.SETTINGS_PATH.write_text("NOT VALID JSON", encoding="utf-8")
        with caplog.at_level("WARNING", logger="breakbank.settings"):
            assert load_settings() == Settings()
        assert "using defaults" in caplog.text

    def test_non_object_json_returns_defaults(self):
        settings_module.SETTINGS_PATH.write_text("[1, 2]", encoding="utf-8")
        assert load_settings() == Settings()

    def test_extra_keys_ignored(self):
        data = {"rollover_duration": 90, "unknown_future_key": True}
        settings_module.SETTINGS_PATH.write_text(json.dumps(data), encoding="utf-8")
        s = load_settings()
        assert s.rollover_duration == 90
        assert not hasattr(s, "unknown_future_key")

    def test_float_duration_dropped(self, caplog):
        data = {"work_duration": 1500.0, "rollover_duration": 90}
        settings_module.SETTINGS_PATH.write_text(json.dumps(data), encoding="utf-8")
        with caplog.at_level("WARNING", logger="breakbank.settings"):
            s = load_settings()
        assert s.work_duration == Settings().work_duration
        assert s.rollover_duration == 90
        assert "work_duration" in caplog.text
        s.timer_config()

    def test_string_geometry_dropped(self):
        data = {"window_width": "wide", "window_height": 600, "window_x": None}
        settings_module.SETTINGS_PATH.write_text(json.dumps(data), encoding="utf-8")
        s = load_settings()
        assert s.window_width == 420
        assert s.window_height == 600
        assert s.window_x is None

    def test_bool_where_int_expected_dropped(self):
        data = {"sound_volume": True, "sound_enabled": 0}
        settings_module.SETTINGS_PATH.write_text(json.dumps(data), encoding="utf-8")
        assert load_settings() == Settings()

    def test_invalid_durations_return_defaults(self, caplog):
        data = {"work_duration": 0, "sound_volume": 10}
        settings_module.SETTINGS_PATH.write_text(json.dumps(data), encoding="utf-8")
        with caplog.at_level("WARNING", logger="breakbank.settings"):
            assert load_settings() == Settings()
        assert "Invalid timer settings" in caplog.text
