"""Application settings with JSON persistence.

Settings are stored at:
    ~/.breakbank/settings.json

Timer durations are read once when the window is built; the engine's
configuration cannot change while it runs.

Usage::

    settings = load_settings()
    settings.sound_volume = 50
    save_settings(settings)
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, asdict, fields
from pathlib import Path

from .timer.engine import (
    DEFAULT_LONG_BREAK_SECONDS,
    DEFAULT_ROLLOVER_SECONDS,
    DEFAULT_SHORT_BREAK_SECONDS,
    DEFAULT_WORK_SECONDS,
    LONG_BREAK_INTERVAL,
    TimerConfig,
)

logger = logging.getLogger(__name__)

APP_SUPPORT_DIR = Path.home() / ".breakbank"
SETTINGS_PATH = APP_SUPPORT_DIR / "settings.json"


@dataclass
class Settings:
    """All user-configurable preferences."""

    # ── timer ─────────────────────────────────────────────────────────
    work_duration: int = DEFAULT_WORK_SECONDS           # seconds
    short_break_duration: int = DEFAULT_SHORT_BREAK_SECONDS
    long_break_duration: int = DEFAULT_LONG_BREAK_SECONDS
    rollover_duration: int = DEFAULT_ROLLOVER_SECONDS
    long_break_interval: int = LONG_BREAK_INTERVAL

    # ── audio ─────────────────────────────────────────────────────────
    sound_enabled: bool = True
    sound_volume: int = 70                 # 0-100

    # ── notifications ─────────────────────────────────────────────────
    notifications_enabled: bool = True

    # ── window ────────────────────────────────────────────────────────
    window_x: int | None = None
    window_y: int | None = None
    window_width: int = 420
    window_height: int = 520

    def timer_config(self) -> TimerConfig:
        """Engine configuration.  Raises ``ValueError`` on bad durations."""
        return TimerConfig(
            work_duration=self.work_duration,
            short_break_duration=self.short_break_duration,
            long_break_duration=self.long_break_duration,
            rollover_duration=self.rollover_duration,
            long_break_interval=self.long_break_interval,
        )


def _matches_field(value: object, default: object) -> bool:
    """Whether *value* has the type of a field whose default is *default*."""
    if isinstance(default, bool):
        return isinstance(value, bool)
    if isinstance(default, int) or default is None:
        # Optional fields (window position) hold an int or null
        if value is None:
            return default is None
        return isinstance(value, int) and not isinstance(value, bool)
    return isinstance(value, type(default))


def load_settings() -> Settings:
    """Load settings from disk, falling back to defaults."""
    if not SETTINGS_PATH.exists():
        return Settings()
    try:
        data = json.loads(SETTINGS_PATH.read_text(encoding="utf-8"))
    except (OSError, ValueError) as error:
        logger.warning("Could not read %s, using defaults: %s", SETTINGS_PATH, error)
        return Settings()
    if not isinstance(data, dict):
        logger.warning("Ignoring %s: expected a JSON object", SETTINGS_PATH)
        return Settings()

    # Only use keys that exist in the dataclass, with the field's type
    defaults = {f.name: f.default for f in fields(Settings)}
    filtered = {}
    for key, value in data.items():
        if key not in defaults:
            continue
        if not _matches_field(value, defaults[key]):
            logger.warning("Ignoring %s=%r in %s: wrong type", key, value, SETTINGS_PATH)
            continue
        filtered[key] = value

    settings = Settings(**filtered)
    try:
        settings.timer_config()
    except ValueError as error:
        logger.warning("Invalid timer settings in %s, using defaults: %s", SETTINGS_PATH, error)
        return Settings()
    return settings


def save_settings(settings: Settings) -> None:
    """Write settings to disk as JSON."""
    APP_SUPPORT_DIR.mkdir(parents=True, exist_ok=True)
    SETTINGS_PATH.write_text(
        json.dumps(asdict(settings), indent=2) + "\n",
        encoding="utf-8",
    )
