"""System notifications shown through the tray icon.

A ``Notifier`` only shows messages once permission has been granted:
notifications must be enabled in settings, a tray icon must exist, and
the platform tray must support balloon messages.
"""

from __future__ import annotations

import logging
from typing import Callable, Protocol

from PyQt6.QtWidgets import QSystemTrayIcon

from .timer.engine import Phase
from .timer.events import PhaseTransition

logger = logging.getLogger(__name__)


class MessageTray(Protocol):
    def supportsMessages(self) -> bool: ...

    def showMessage(self, title: str, msg: str) -> None: ...


def _minutes(seconds: int) -> str:
    minutes = max(1, round(seconds / 60))
    return f"{minutes} minute" if minutes == 1 else f"{minutes} minutes"


def transition_message(transition: PhaseTransition) -> tuple[str, str] | None:
    """``(title, body)`` for a transition, or None when it is silent."""
    source, target = transition.source, transition.target
    current = transition.current

    if source == Phase.WORK and target == Phase.ROLLOVER:
        return (
            "Work session complete",
            f"You earned {_minutes(transition.earned_break)} of break "
            f"({_minutes(current.break_deficit)} banked). "
            "Take it now or keep going.",
        )
    if source == Phase.ROLLOVER and target == Phase.BREAK:
        return ("Break started", f"Enjoy {_minutes(current.remaining_seconds)} away.")
    if source == Phase.BREAK and target == Phase.IDLE:
        if transition.previous.remaining_seconds > 1:
            return None
        return ("Break over", "Ready for the next session?")
    if source == Phase.ROLLOVER and target == Phase.WORK:
        # Skip break is the user's own choice; only the run-out is announced
        if transition.previous.remaining_seconds > 1:
            return None
        return ("Back to work", "Your break stays in the bank.")
    return None


class Notifier:
    """Transition sink that shows tray notifications."""

    def __init__(
        self,
        tray: MessageTray | None,
        *,
        enabled: bool = True,
        tray_available: Callable[[], bool] = QSystemTrayIcon.isSystemTrayAvailable,
    ) -> None:
        self._tray = tray
        self._enabled = enabled
        self._tray_available = tray_available
        self._granted = False

    @property
    def enabled(self) -> bool:
        return self._enabled

    def set_enabled(self, enabled: bool) -> None:
        self._enabled = enabled
        if not enabled:
            self._granted = False

    def request_permission(self) -> bool:
        """Whether notifications can be shown.  Cached once granted."""
        if not self._enabled:
            return False
        if self._granted:
            return True
        if self._tray is None:
            return False
        if not self._tray_available():
            logger.info("System tray unavailable, notifications disabled")
            return False
        if not self._tray.supportsMessages():
            logger.info("System tray does not support messages")
            return False
        self._granted = True
        return True

    def notify(self, title: str, body: str) -> None:
        if not self.request_permission():
            return
        self._tray.showMessage(title, body)

    def on_transition(self, transition: PhaseTransition) -> None:
        message = transition_message(transition)
        if message is not None:
            self.notify(*message)

