"""Phase-transition events derived from engine snapshots.

Sinks such as the sound cue player and the notifier only care about
phase changes, not about every tick.  ``TransitionDispatcher`` sits
between the engine and those sinks and turns the snapshot stream into
``PhaseTransition`` events.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

from .engine import Phase, TimerState


@dataclass(frozen=True)
class PhaseTransition:
    previous: TimerState
    current: TimerState

    @property
    def source(self) -> Phase:
        return self.previous.phase

    @property
    def target(self) -> Phase:
        return self.current.phase

    @property
    def earned_break(self) -> int:
        """Seconds added to the break bank by this transition (0 if none)."""
        return max(0, self.current.break_deficit - self.previous.break_deficit)

    @property
    def is_work_completed(self) -> bool:
        return self.source == Phase.WORK and self.target == Phase.ROLLOVER


TransitionSink = Callable[[PhaseTransition], None]


class TransitionDispatcher:
    """Engine listener that forwards phase changes to its sinks.

    The first snapshot (delivered on subscribe) only primes the
    dispatcher.
    """

    def __init__(self, *sinks: TransitionSink) -> None:
        self._sinks: list[TransitionSink] = list(sinks)
        self._last: TimerState | None = None

    def add_sink(self, sink: TransitionSink) -> None:
        self._sinks.append(sink)

    def __call__(self, state: TimerState) -> None:
        previous = self._last
        self._last = state
        if previous is None or previous.phase == state.phase:
            return
        transition = PhaseTransition(previous=previous, current=state)
        for sink in list(self._sinks):
            sink(transition)
