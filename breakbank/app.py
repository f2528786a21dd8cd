"""Main application window for BreakBank."""

from __future__ import annotations

import logging
from pathlib import Path

from PyQt6.QtCore import Qt
from PyQt6.QtGui import QIcon, QImage, QPainter, QColor, QPen, QPixmap
from PyQt6.QtWidgets import (
    QMainWindow, QWidget, QVBoxLayout, QStatusBar, QSystemTrayIcon, QMenu,
    QApplication,
)

from .audio.cues import CuePlayer
from .audio.sounds import SoundManager
from .notifications import Notifier
from .settings import Settings, load_settings, save_settings
from .timer.engine import Phase, TimerEngine, TimerState
from .timer.events import PhaseTransition
from .timer.scheduler import QtScheduler
from .timer.signals import EngineSignals
from .ui.styles import build_stylesheet, phase_color
from .ui.timer_widget import TimerWidget, format_clock

logger = logging.getLogger(__name__)


# ── tray‑icon image generation ────────────────────────────────────────────


def _make_tray_icon(state: TimerState) -> QIcon:
    """32×32 icon: outline when idle, filled while counting, bars when paused."""
    size = 64  # draw at 2× for Retina
    img = QImage(size, size, QImage.Format.Format_ARGB32_Premultiplied)
    img.fill(Qt.GlobalColor.transparent)
    p = QPainter(img)
    p.setRenderHint(QPainter.RenderHint.Antialiasing)
    colour = QColor(phase_color(state.phase, state.is_paused))
    cx, cy, r = size // 2, size // 2, size // 2 - 4

    if state.is_paused:
        p.setPen(Qt.PenStyle.NoPen)
        p.setBrush(colour)
        bar_w, bar_h, gap = 8, 28, 6
        y = cy - bar_h // 2
        p.drawRoundedRect(cx - gap - bar_w, y, bar_w, bar_h, 3, 3)
        p.drawRoundedRect(cx + gap, y, bar_w, bar_h, 3, 3)
    elif state.phase == Phase.IDLE:
        p.setPen(QPen(colour, 4))
        p.setBrush(Qt.BrushStyle.NoBrush)
        p.drawEllipse(cx - r, cy - r, r * 2, r * 2)
    else:
        p.setPen(Qt.PenStyle.NoPen)
        p.setBrush(colour)
        p.drawEllipse(cx - r, cy - r, r * 2, r * 2)

    p.end()
    img.setDevicePixelRatio(2.0)
    return QIcon(QPixmap.fromImage(img))


STATUS_MESSAGES: dict[Phase, str] = {
    Phase.IDLE:     "Ready when you are",
    Phase.WORK:     "Focusing...",
    Phase.ROLLOVER: "Session done — take your break or keep going",
    Phase.BREAK:    "On break",
}


class BreakBankApp(QMainWindow):
    """Main application window.

    Owns the engine and its collaborators: the Qt tick scheduler, the
    sound cue player, the tray notifier and the tray icon.
    """

    def __init__(
        self,
        settings: Settings | None = None,
        *,
        sounds_dir: Path | None = None,
        persist: bool = True,
    ) -> None:
        super().__init__()
        self.setWindowTitle("BreakBank")

        # ── settings ──────────────────────────────────────────────────
        self._settings: Settings = settings or load_settings()
        self._persist = persist
        self.resize(self._settings.window_width, self._settings.window_height)
        if self._settings.window_x is not None and self._settings.window_y is not None:
            self.move(self._settings.window_x, self._settings.window_y)

        # ── engine ────────────────────────────────────────────────────
        self._scheduler = QtScheduler(self)
        self._engine = TimerEngine(self._settings.timer_config(), self._scheduler)
        self._signals = EngineSignals(self._engine, self)

        # ── UI ────────────────────────────────────────────────────────
        central = QWidget(self)
        layout = QVBoxLayout(central)
        layout.setContentsMargins(16, 16, 16, 16)
        self._timer_widget = TimerWidget(self._engine, self._signals, central)
        layout.addWidget(self._timer_widget)
        layout.addStretch()
        self.setCentralWidget(central)
        self.setStyleSheet(build_stylesheet())

        self._status_bar = QStatusBar(self)
        self.setStatusBar(self._status_bar)
        self._status_bar.showMessage(STATUS_MESSAGES[Phase.IDLE])

        # ── system tray icon ──────────────────────────────────────────
        self._tray_icon = QSystemTrayIcon(self)
        self._tray_icon.setIcon(_make_tray_icon(self._engine.state))
        self._tray_icon.setToolTip("BreakBank — Ready")
        self._tray_icon.activated.connect(self._on_tray_activated)
        self._build_tray_menu()
        self._tray_icon.show()

        # ── side-effect sinks ─────────────────────────────────────────
        self._sound_manager = SoundManager(parent=self, sounds_dir=sounds_dir)
        self._sound_manager.set_enabled(self._settings.sound_enabled)
        self._sound_manager.set_volume(self._settings.sound_volume)
        self._cue_player = CuePlayer(self._sound_manager)
        self._notifier = Notifier(
            self._tray_icon, enabled=self._settings.notifications_enabled,
        )
        if not self._notifier.request_permission():
            logger.info("Notifications unavailable")

        # ── wire signals ──────────────────────────────────────────────
        self._signals.phase_changed.connect(self._on_phase_changed)
        self._signals.state_changed.connect(self._on_state_changed)

    # ══════════════════════════════════════════════════════════════════
    #  PUBLIC
    # ══════════════════════════════════════════════════════════════════

    @property
    def engine(self) -> TimerEngine:
        return self._engine

    @property
    def timer_widget(self) -> TimerWidget:
        return self._timer_widget

    @property
    def status_text(self) -> str:
        return self._status_bar.currentMessage()

    # ══════════════════════════════════════════════════════════════════
    #  TIMER SIGNALS
    # ══════════════════════════════════════════════════════════════════

    def _on_phase_changed(self, transition: PhaseTransition) -> None:
        logger.debug("Transition %s -> %s", transition.source.value, transition.target.value)
        self._cue_player.on_transition(transition)
        self._notifier.on_transition(transition)

    def _on_state_changed(self, state: TimerState) -> None:
        if state.is_paused:
            self._status_bar.showMessage("Paused")
        else:
            self._status_bar.showMessage(STATUS_MESSAGES[state.phase])
        self._update_tray_state(state)

    # ══════════════════════════════════════════════════════════════════
    #  SYSTEM TRAY
    # ══════════════════════════════════════════════════════════════════

    def _build_tray_menu(self) -> None:
        menu = QMenu(self)

        self._tray_start_action = menu.addAction("Start")
        self._tray_start_action.triggered.connect(self._tray_toggle_start)

        self._tray_break_action = menu.addAction("Take break")
        self._tray_break_action.triggered.connect(lambda: self._engine.take_break())

        self._tray_skip_action = menu.addAction("Skip break")
        self._tray_skip_action.triggered.connect(self._engine.skip_break)

        menu.addSeparator()

        stop_action = menu.addAction("Stop")
        stop_action.triggered.connect(self._engine.stop)

        show_action = menu.addAction("Show BreakBank")
        show_action.triggered.connect(self._show_window)

        menu.addSeparator()

        quit_action = menu.addAction("Quit")
        quit_action.triggered.connect(self._quit_app)

        self._tray_icon.setContextMenu(menu)

    def _tray_toggle_start(self) -> None:
        state = self._engine.state
        if state.phase == Phase.IDLE:
            self._engine.start()
        elif state.phase == Phase.WORK and state.is_paused:
            self._engine.resume()
        elif state.phase == Phase.WORK:
            self._engine.pause()

    def _on_tray_activated(self, reason: QSystemTrayIcon.ActivationReason) -> None:
        if reason == QSystemTrayIcon.ActivationReason.Trigger:
            self._show_window()

    def _show_window(self) -> None:
        self.show()
        self.raise_()
        self.activateWindow()

    def _quit_app(self) -> None:
        self.close()
        QApplication.instance().quit()

    def _update_tray_state(self, state: TimerState) -> None:
        self._tray_icon.setIcon(_make_tray_icon(state))

        if state.phase == Phase.WORK:
            self._tray_start_action.setText("Resume" if state.is_paused else "Pause")
        else:
            self._tray_start_action.setText("Start")
        self._tray_start_action.setEnabled(state.phase in (Phase.IDLE, Phase.WORK))
        in_rollover = state.phase == Phase.ROLLOVER
        self._tray_break_action.setEnabled(in_rollover and state.break_deficit > 0)
        self._tray_skip_action.setEnabled(in_rollover)

        if state.phase == Phase.IDLE:
            self._tray_icon.setToolTip("BreakBank — Ready")
        else:
            self._tray_icon.setToolTip(
                f"BreakBank — {STATUS_MESSAGES[state.phase]} "
                f"{format_clock(state.remaining_seconds)}"
            )

    # ══════════════════════════════════════════════════════════════════
    #  WINDOW EVENTS
    # ══════════════════════════════════════════════════════════════════

    def _save_geometry(self) -> None:
        if not self._persist:
            return
        self._settings.window_x = self.x()
        self._settings.window_y = self.y()
        self._settings.window_width = self.width()
        self._settings.window_height = self.height()
        try:
            save_settings(self._settings)
        except OSError as error:
            logger.warning("Could not save settings: %s", error)

    def closeEvent(self, event) -> None:  # type: ignore[override]
        """Closing the window ends the session: nothing outlives the process."""
        self._save_geometry()
        self._signals.disconnect_engine()
        self._engine.destroy()
        self._scheduler.cancel_all()
        self._tray_icon.hide()
        event.accept()
