"""Qt signal bridge so widgets can ``connect`` to the engine."""

from __future__ import annotations

from PyQt6.QtCore import QObject, pyqtSignal

from .engine import TimerEngine, TimerState
from .events import PhaseTransition, TransitionDispatcher


class EngineSignals(QObject):
    """Re-emits engine snapshots as pyqtSignals.

    Signals
    -------
    state_changed(state: TimerState)
        Every published snapshot (ticks included).
    phase_changed(transition: PhaseTransition)
        Only when the phase changes.
    """

    state_changed = pyqtSignal(object)
    phase_changed = pyqtSignal(object)

    def __init__(self, engine: TimerEngine, parent: QObject | None = None) -> None:
        super().__init__(parent)
        self._engine = engine
        self._dispatcher = TransitionDispatcher(self.phase_changed.emit)
        self._unsubscribe = engine.subscribe(self._on_state)

    def _on_state(self, state: TimerState) -> None:
        self._dispatcher(state)
        self.state_changed.emit(state)

    def disconnect_engine(self) -> None:
        self._unsubscribe()
