"""Timer package."""

from .engine import (
    TimerEngine,
    TimerConfig,
    TimerState,
    Phase,
    SessionKind,
    session_kind_for,
    DEFAULT_WORK_SECONDS,
    DEFAULT_SHORT_BREAK_SECONDS,
    DEFAULT_LONG_BREAK_SECONDS,
    DEFAULT_ROLLOVER_SECONDS,
    LONG_BREAK_INTERVAL,
    TICK_INTERVAL_MS,
)
from .events import PhaseTransition, TransitionDispatcher

__all__ = [
    "TimerEngine",
    "TimerConfig",
    "TimerState",
    "Phase",
    "SessionKind",
    "session_kind_for",
    "DEFAULT_WORK_SECONDS",
    "DEFAULT_SHORT_BREAK_SECONDS",
    "DEFAULT_LONG_BREAK_SECONDS",
    "DEFAULT_ROLLOVER_SECONDS",
    "LONG_BREAK_INTERVAL",
    "TICK_INTERVAL_MS",
    "PhaseTransition",
    "TransitionDispatcher",
]
