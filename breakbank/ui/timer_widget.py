"""Main timer display widget.

Layout (top → bottom):
    - Phase label
    - MM:SS clock
    - Bank / session counters
    - Main action row (Start | Pause | Resume, Stop, Reset)
    - Rollover row (break minutes, Take break, Skip break) — rollover only
"""

from __future__ import annotations

from PyQt6.QtCore import Qt
from PyQt6.QtWidgets import (
    QWidget, QVBoxLayout, QHBoxLayout,
    QLabel, QPushButton, QSpinBox, QFrame,
)

from ..timer.engine import Phase, TimerEngine, TimerState
from ..timer.signals import EngineSignals
from .styles import phase_color


PHASE_LABELS: dict[Phase, str] = {
    Phase.IDLE:     "READY",
    Phase.WORK:     "FOCUS TIME",
    Phase.ROLLOVER: "TAKE A BREAK?",
    Phase.BREAK:    "ON BREAK",
}


def format_clock(seconds: int) -> str:
    minutes, secs = divmod(max(0, seconds), 60)
    return f"{minutes:02d}:{secs:02d}"


class TimerWidget(QWidget):
    """Clock and controls, redrawn from every engine snapshot."""

    def __init__(
        self,
        engine: TimerEngine,
        signals: EngineSignals,
        parent: QWidget | None = None,
    ) -> None:
        super().__init__(parent)
        self._engine = engine
        self._build_ui()
        self._connect_signals(signals)
        self._render(engine.state)

    # ── build ─────────────────────────────────────────────────────────────

    def _build_ui(self) -> None:
        root = QVBoxLayout(self)
        root.setContentsMargins(0, 0, 0, 0)

        card = QFrame(self)
        card.setObjectName("card")
        root.addWidget(card)

        layout = QVBoxLayout(card)
        layout.setContentsMargins(32, 24, 32, 28)
        layout.setSpacing(8)
        layout.setAlignment(Qt.AlignmentFlag.AlignCenter)

        self._phase_label = QLabel(card)
        self._phase_label.setObjectName("phaseLabel")
        self._phase_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        layout.addWidget(self._phase_label)

        self._clock_label = QLabel(card)
        self._clock_label.setObjectName("clockLabel")
        self._clock_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        layout.addWidget(self._clock_label)

        self._stats_label = QLabel(card)
        self._stats_label.setObjectName("statLabel")
        self._stats_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        layout.addWidget(self._stats_label)

        layout.addSpacing(16)

        # ── main controls ────────────────────────────────────────────
        btn_row = QHBoxLayout()
        btn_row.setSpacing(12)
        btn_row.setAlignment(Qt.AlignmentFlag.AlignCenter)

        self._stop_btn = QPushButton("Stop", card)
        self._stop_btn.setObjectName("secondaryButton")

        self._primary_btn = QPushButton("Start", card)
        self._primary_btn.setObjectName("primaryButton")

        self._reset_btn = QPushButton("Reset", card)
        self._reset_btn.setObjectName("dangerButton")
        self._reset_btn.setToolTip("Clear the break bank and session count")

        btn_row.addWidget(self._stop_btn)
        btn_row.addWidget(self._primary_btn)
        btn_row.addWidget(self._reset_btn)
        layout.addLayout(btn_row)

        layout.addSpacing(12)

        # ── rollover controls ────────────────────────────────────────
        self._rollover_row = QWidget(card)
        rollover_layout = QHBoxLayout(self._rollover_row)
        rollover_layout.setContentsMargins(0, 0, 0, 0)
        rollover_layout.setSpacing(12)
        rollover_layout.setAlignment(Qt.AlignmentFlag.AlignCenter)

        self._break_minutes = QSpinBox(self._rollover_row)
        self._break_minutes.setSuffix(" min")
        self._break_minutes.setMinimum(0)

        self._take_break_btn = QPushButton("Take break", self._rollover_row)
        self._take_break_btn.setObjectName("primaryButton")

        self._skip_break_btn = QPushButton("Skip break", self._rollover_row)
        self._skip_break_btn.setObjectName("secondaryButton")

        rollover_layout.addWidget(self._break_minutes)
        rollover_layout.addWidget(self._take_break_btn)
        rollover_layout.addWidget(self._skip_break_btn)
        layout.addWidget(self._rollover_row)

    # ── signals ───────────────────────────────────────────────────────────

    def _connect_signals(self, signals: EngineSignals) -> None:
        self._primary_btn.clicked.connect(self._on_primary)
        self._stop_btn.clicked.connect(self._engine.stop)
        self._reset_btn.clicked.connect(self._engine.reset)
        self._take_break_btn.clicked.connect(self._on_take_break)
        self._skip_break_btn.clicked.connect(self._engine.skip_break)

        signals.state_changed.connect(self._render)
        signals.phase_changed.connect(self._on_phase_changed)

    # ── slots ─────────────────────────────────────────────────────────────

    def _on_primary(self) -> None:
        state = self._engine.state
        if state.phase == Phase.IDLE:
            self._engine.start()
        elif state.phase == Phase.WORK and state.is_paused:
            self._engine.resume()
        elif state.phase == Phase.WORK:
            self._engine.pause()

    def _on_take_break(self) -> None:
        deficit = self._engine.break_deficit
        requested = self._break_minutes.value() * 60
        # The spin box works in whole minutes; "all of it" keeps the seconds
        if requested >= deficit:
            self._engine.take_break()
        else:
            self._engine.take_break(requested)

    def _on_phase_changed(self, transition) -> None:
        if transition.target == Phase.ROLLOVER:
            deficit_minutes = -(-transition.current.break_deficit // 60)
            self._break_minutes.setMaximum(deficit_minutes)
            self._break_minutes.setValue(deficit_minutes)

    def _render(self, state: TimerState) -> None:
        label = "PAUSED" if state.is_paused else PHASE_LABELS[state.phase]
        color = phase_color(state.phase, state.is_paused)
        self._phase_label.setText(label)
        self._phase_label.setStyleSheet(f"color: {color};")
        self._clock_label.setText(format_clock(state.remaining_seconds))
        self._stats_label.setText(
            f"Break bank {format_clock(state.break_deficit)}"
            f"  ·  Sessions {state.completed_work_sessions}"
        )

        # ── primary button label ─────────────────────────────────────
        if state.phase == Phase.WORK:
            self._primary_btn.setText("Resume" if state.is_paused else "Pause")
        else:
            self._primary_btn.setText("Start")
        self._primary_btn.setVisible(state.phase in (Phase.IDLE, Phase.WORK))

        self._stop_btn.setVisible(state.phase != Phase.IDLE)
        self._rollover_row.setVisible(state.phase == Phase.ROLLOVER)
        self._take_break_btn.setEnabled(state.break_deficit > 0)

    # ── introspection (tests, tray tooltip) ──────────────────────────────

    @property
    def clock_text(self) -> str:
        return self._clock_label.text()

    @property
    def phase_text(self) -> str:
        return self._phase_label.text()
