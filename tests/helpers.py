"""Shared test helpers for BreakBank."""

from __future__ import annotations

from typing import Callable


class ManualScheduler:
    """Deterministic scheduler: ticks only fire when the test says so."""

    def __init__(self) -> None:
        self.callbacks: dict[int, Callable[[], None]] = {}
        self.intervals: dict[int, int] = {}
        self.scheduled = 0
        self.cancelled: list[int] = []
        self._next_handle = 1

    def schedule_repeating(self, interval_ms: int, callback: Callable[[], None]) -> int:
        handle = self._next_handle
        self._next_handle += 1
        self.callbacks[handle] = callback
        self.intervals[handle] = interval_ms
        self.scheduled += 1
        return handle

    def cancel(self, handle: int) -> None:
        if self.callbacks.pop(handle, None) is not None:
            self.cancelled.append(handle)

    @property
    def active(self) -> int:
        return len(self.callbacks)

    def advance(self, ticks: int = 1) -> None:
        """Fire every live tick source *ticks* times, one tick at a time."""
        for _ in range(ticks):
            for callback in list(self.callbacks.values()):
                callback()


class StateRecorder:
    """Engine listener that keeps every snapshot it receives."""

    def __init__(self):
        self.items: list = []

    def __call__(self, item):
        self.items.append(item)

    def __len__(self):
        return len(self.items)

    def __getitem__(self, idx):
        return self.items[idx]

    @property
    def last(self):
        return self.items[-1] if self.items else None

    def clear(self):
        self.items.clear()


def finish_phase(engine, scheduler: ManualScheduler) -> None:
    """Tick until the current phase expires."""
    scheduler.advance(engine.remaining)
