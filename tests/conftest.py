"""Shared pytest fixtures for BreakBank tests."""

import os
import sys

import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from PyQt6.QtWidgets import QApplication  # noqa: E402

from breakbank.timer.engine import TimerConfig, TimerEngine  # noqa: E402

from helpers import ManualScheduler  # noqa: E402


@pytest.fixture(scope="session")
def qapp():
    """A single QApplication instance shared across the entire test run."""
    app = QApplication.instance() or QApplication(sys.argv)
    yield app


@pytest.fixture(autouse=True)
def isolated_settings(tmp_path, monkeypatch):
    """Keep every test away from the real ~/.breakbank directory."""
    monkeypatch.setattr("breakbank.settings.APP_SUPPORT_DIR", tmp_path)
    monkeypatch.setattr("breakbank.settings.SETTINGS_PATH", tmp_path / "settings.json")
    yield


@pytest.fixture
def scheduler():
    return ManualScheduler()


@pytest.fixture
def engine(scheduler):
    """Fresh engine with default durations, driven by a manual scheduler."""
    return TimerEngine(TimerConfig(), scheduler)


@pytest.fixture
def short_engine(scheduler):
    """Engine with tiny durations so whole cycles fit in a few ticks."""
    config = TimerConfig(
        work_duration=5,
        short_break_duration=2,
        long_break_duration=4,
        rollover_duration=3,
        long_break_interval=2,
    )
    return TimerEngine(config, scheduler)
