"""UI package."""

from .timer_widget import TimerWidget, format_clock
from .styles import build_stylesheet, phase_color

__all__ = [
    "TimerWidget",
    "format_clock",
    "build_stylesheet",
    "phase_color",
]
