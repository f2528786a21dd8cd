"""Tick sources for the timer engine.

The engine only needs ``schedule_repeating`` and ``cancel``; anything
that delivers callbacks serially (never two at once) will do.
``QtScheduler`` is the one the desktop app uses.
"""

from __future__ import annotations

import logging
from typing import Callable, Hashable, Protocol

from PyQt6.QtCore import QObject, QTimer

logger = logging.getLogger(__name__)


class Scheduler(Protocol):
    def schedule_repeating(
        self, interval_ms: int, callback: Callable[[], None]
    ) -> Hashable: ...

    def cancel(self, handle: Hashable) -> None: ...


class QtScheduler(QObject):
    """One ``QTimer`` per handle, firing on the owning thread's event loop."""

    def __init__(self, parent: QObject | None = None) -> None:
        super().__init__(parent)
        self._timers: dict[int, QTimer] = {}
        self._next_handle = 1

    @property
    def active_count(self) -> int:
        return len(self._timers)

    def schedule_repeating(
        self, interval_ms: int, callback: Callable[[], None]
    ) -> int:
        handle = self._next_handle
        self._next_handle += 1

        timer = QTimer(self)
        timer.setInterval(interval_ms)
        timer.timeout.connect(callback)
        timer.start()
        self._timers[handle] = timer
        logger.debug("Scheduled tick source %d every %dms", handle, interval_ms)
        return handle

    def cancel(self, handle: int) -> None:
        """Stop and discard *handle*.  Unknown handles are ignored."""
        timer = self._timers.pop(handle, None)
        if timer is None:
            return
        timer.stop()
        timer.timeout.disconnect()
        timer.deleteLater()
        logger.debug("Cancelled tick source %d", handle)

    def cancel_all(self) -> None:
        for handle in list(self._timers):
            self.cancel(handle)
