"""Timer state machine for BreakBank.

Phases
------
IDLE       Not running, waiting for the user to start.
WORK       Work countdown (may be paused).
ROLLOVER   Work just ended; short window to take the banked break or
           keep going.  Auto-continues into WORK when it runs out.
BREAK      Spending banked break time.

Transitions
-----------
IDLE → WORK                  (start)
WORK → ROLLOVER              (countdown reaches 0, break time is banked)
ROLLOVER → WORK              (countdown reaches 0, or skip_break)
ROLLOVER → BREAK | IDLE      (take_break; IDLE when nothing is banked)
BREAK → IDLE                 (countdown reaches 0)
Any → IDLE                   (stop / reset)

Break deficit
-------------
Every completed work session banks a short break, or a long break on
every ``long_break_interval``-th completion.  Breaks are paid out of the
bank, so skipped breaks carry over to the next rollover window.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from enum import Enum
from typing import TYPE_CHECKING, Callable

if TYPE_CHECKING:
    from .scheduler import Scheduler

logger = logging.getLogger(__name__)


# ── enums ─────────────────────────────────────────────────────────────────


class Phase(Enum):
    IDLE = "idle"
    WORK = "work"
    ROLLOVER = "rollover"
    BREAK = "break"


class SessionKind(Enum):
    """Simplified phase used by displays.  IDLE shows as WORK."""

    WORK = "work"
    BREAK = "break"
    ROLLOVER = "rollover"


_PHASE_TO_KIND: dict[Phase, SessionKind] = {
    Phase.IDLE: SessionKind.WORK,
    Phase.WORK: SessionKind.WORK,
    Phase.ROLLOVER: SessionKind.ROLLOVER,
    Phase.BREAK: SessionKind.BREAK,
}


def session_kind_for(phase: Phase) -> SessionKind:
    return _PHASE_TO_KIND[phase]


# ── constants ─────────────────────────────────────────────────────────────

DEFAULT_WORK_SECONDS = 25 * 60
DEFAULT_SHORT_BREAK_SECONDS = 5 * 60
DEFAULT_LONG_BREAK_SECONDS = 15 * 60
DEFAULT_ROLLOVER_SECONDS = 60
LONG_BREAK_INTERVAL = 4  # every 4th completed work session earns a long break

TICK_INTERVAL_MS = 1000


# ── value types ───────────────────────────────────────────────────────────


@dataclass(frozen=True)
class TimerConfig:
    """Durations in seconds.  Fixed for the lifetime of an engine."""

    work_duration: int = DEFAULT_WORK_SECONDS
    short_break_duration: int = DEFAULT_SHORT_BREAK_SECONDS
    long_break_duration: int = DEFAULT_LONG_BREAK_SECONDS
    rollover_duration: int = DEFAULT_ROLLOVER_SECONDS
    long_break_interval: int = LONG_BREAK_INTERVAL

    def __post_init__(self) -> None:
        for name in (
            "work_duration",
            "short_break_duration",
            "long_break_duration",
            "rollover_duration",
            "long_break_interval",
        ):
            value = getattr(self, name)
            if not isinstance(value, int) or isinstance(value, bool) or value <= 0:
                raise ValueError(f"{name} must be a positive integer, got {value!r}")

    def earned_break(self, completed_sessions: int) -> int:
        """Break seconds banked by the *completed_sessions*-th completion."""
        if completed_sessions % self.long_break_interval == 0:
            return self.long_break_duration
        return self.short_break_duration


@dataclass(frozen=True)
class TimerState:
    """Immutable snapshot delivered to every listener."""

    phase: Phase
    remaining_seconds: int
    break_deficit: int = 0
    completed_work_sessions: int = 0
    is_paused: bool = False

    @property
    def session_kind(self) -> SessionKind:
        return session_kind_for(self.phase)


Listener = Callable[[TimerState], None]


# ── engine ────────────────────────────────────────────────────────────────


class TimerEngine:
    """Single-timer pomodoro state machine with a banked break deficit.

    The engine never touches a clock itself.  A ``Scheduler`` delivers
    ticks to :meth:`tick`; every command and tick mutates state
    synchronously and publishes the resulting snapshot to listeners in
    registration order.  Commands issued in the wrong phase are ignored.
    """

    def __init__(
        self,
        config: TimerConfig | None = None,
        scheduler: Scheduler | None = None,
    ) -> None:
        self._config = config or TimerConfig()
        self._scheduler = scheduler
        self._state = self._idle_state(break_deficit=0, completed=0)

        self._listeners: dict[int, Listener] = {}
        self._next_listener_id = 0

        # ── countdown source ──────────────────────────────────────────
        self._countdown: object | None = None
        self._generation = 0
        self._destroyed = False

    # ══════════════════════════════════════════════════════════════════
    #  PUBLIC PROPERTIES
    # ══════════════════════════════════════════════════════════════════

    @property
    def config(self) -> TimerConfig:
        return self._config

    @property
    def state(self) -> TimerState:
        return self._state

    @property
    def phase(self) -> Phase:
        return self._state.phase

    @property
    def remaining(self) -> int:
        """Seconds left in the current phase."""
        return self._state.remaining_seconds

    @property
    def break_deficit(self) -> int:
        """Banked break seconds not yet taken."""
        return self._state.break_deficit

    @property
    def completed_work_sessions(self) -> int:
        return self._state.completed_work_sessions

    @property
    def is_paused(self) -> bool:
        return self._state.is_paused

    @property
    def session_kind(self) -> SessionKind:
        return self._state.session_kind

    @property
    def is_counting(self) -> bool:
        """True while a countdown source is live."""
        return self._countdown is not None

    @property
    def destroyed(self) -> bool:
        return self._destroyed

    # ══════════════════════════════════════════════════════════════════
    #  SUBSCRIPTION
    # ══════════════════════════════════════════════════════════════════

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register *listener* and call it once with the current state.

        Returns a callable that removes the listener again.
        """
        listener_id = self._next_listener_id
        self._next_listener_id += 1
        if not self._destroyed:
            self._listeners[listener_id] = listener
        listener(self._state)

        def unsubscribe() -> None:
            self._listeners.pop(listener_id, None)

        return unsubscribe

    # ══════════════════════════════════════════════════════════════════
    #  CONTROLS
    # ══════════════════════════════════════════════════════════════════

    def start(self) -> None:
        """Begin a work session.  Only valid from IDLE."""
        if not self._accepts("start", Phase.IDLE):
            return
        self._transition(
            replace(
                self._state,
                phase=Phase.WORK,
                remaining_seconds=self._config.work_duration,
                is_paused=False,
            ),
            counting=True,
        )

    def pause(self) -> None:
        if not self._accepts("pause", Phase.WORK) or self._state.is_paused:
            return
        self._transition(replace(self._state, is_paused=True), counting=False)

    def resume(self) -> None:
        if not self._accepts("resume", Phase.WORK) or not self._state.is_paused:
            return
        self._transition(replace(self._state, is_paused=False), counting=True)

    def stop(self) -> None:
        """Return to IDLE, keeping the bank and the session count."""
        if self._destroyed:
            return
        self._transition(
            self._idle_state(
                break_deficit=self._state.break_deficit,
                completed=self._state.completed_work_sessions,
            ),
            counting=False,
        )

    def reset(self) -> None:
        """Return to IDLE and clear the bank and the session count."""
        if self._destroyed:
            return
        self._transition(
            self._idle_state(break_deficit=0, completed=0),
            counting=False,
        )

    def skip_break(self) -> None:
        """Leave the rollover window and start working right away."""
        if not self._accepts("skip_break", Phase.ROLLOVER):
            return
        self._transition(self._work_state(), counting=True)

    def take_break(self, duration: int | None = None) -> None:
        """Spend *duration* seconds of banked break (all of it by default).

        The request is clamped to ``[0, break_deficit]``.  A zero-length
        break returns to IDLE with the bank untouched.
        """
        if not self._accepts("take_break", Phase.ROLLOVER):
            return
        deficit = self._state.break_deficit
        requested = deficit if duration is None else int(duration)
        break_seconds = min(max(0, requested), deficit)

        if break_seconds == 0:
            logger.info("Zero-length break, returning to idle")
            self._transition(
                self._idle_state(
                    break_deficit=deficit,
                    completed=self._state.completed_work_sessions,
                ),
                counting=False,
            )
            return

        logger.info("Break started: %ss (bank %ss -> %ss)",
                    break_seconds, deficit, deficit - break_seconds)
        self._transition(
            replace(
                self._state,
                phase=Phase.BREAK,
                remaining_seconds=break_seconds,
                break_deficit=deficit - break_seconds,
                is_paused=False,
            ),
            counting=True,
        )

    def destroy(self) -> None:
        """Release the countdown source.  The engine is inert afterwards."""
        if self._destroyed:
            return
        self._cancel_countdown()
        self._listeners.clear()
        self._destroyed = True

    # ══════════════════════════════════════════════════════════════════
    #  TICKS
    # ══════════════════════════════════════════════════════════════════

    def tick(self) -> None:
        """Advance the countdown by one second.

        Ignored while idle, paused or destroyed.  When the countdown
        runs out the phase's expiry transition happens before anything
        is published, so listeners never see ``remaining_seconds == 0``.
        """
        if self._destroyed or self._countdown is None or self._state.is_paused:
            return
        remaining = self._state.remaining_seconds - 1
        if remaining > 0:
            self._state = replace(self._state, remaining_seconds=remaining)
            self._publish()
            return
        self._expire()

    # ══════════════════════════════════════════════════════════════════
    #  INTERNAL — transitions
    # ══════════════════════════════════════════════════════════════════

    def _expire(self) -> None:
        phase = self._state.phase
        if phase == Phase.WORK:
            completed = self._state.completed_work_sessions + 1
            earned = self._config.earned_break(completed)
            logger.info(
                "Work session %d complete, banked %ss (bank %ss)",
                completed, earned, self._state.break_deficit + earned,
            )
            self._transition(
                replace(
                    self._state,
                    phase=Phase.ROLLOVER,
                    remaining_seconds=self._config.rollover_duration,
                    break_deficit=self._state.break_deficit + earned,
                    completed_work_sessions=completed,
                    is_paused=False,
                ),
                counting=True,
            )
        elif phase == Phase.ROLLOVER:
            logger.info("Rollover window elapsed, continuing with work")
            self._transition(self._work_state(), counting=True)
        elif phase == Phase.BREAK:
            logger.info("Break over")
            self._transition(
                self._idle_state(
                    break_deficit=self._state.break_deficit,
                    completed=self._state.completed_work_sessions,
                ),
                counting=False,
            )

    def _transition(self, new_state: TimerState, *, counting: bool) -> None:
        # Cancel first so there is never more than one live countdown.
        self._cancel_countdown()
        changed = new_state != self._state
        if new_state.phase != self._state.phase:
            logger.debug("Phase %s -> %s", self._state.phase.value, new_state.phase.value)
        self._state = new_state
        if counting:
            self._start_countdown()
        if changed:
            self._publish()

    def _publish(self) -> None:
        snapshot = self._state
        for listener in list(self._listeners.values()):
            listener(snapshot)

    def _accepts(self, command: str, phase: Phase) -> bool:
        if self._destroyed:
            logger.debug("Ignoring %s: engine destroyed", command)
            return False
        if self._state.phase != phase:
            logger.debug("Ignoring %s in phase %s", command, self._state.phase.value)
            return False
        return True

    def _idle_state(self, *, break_deficit: int, completed: int) -> TimerState:
        return TimerState(
            phase=Phase.IDLE,
            remaining_seconds=self._config.work_duration,
            break_deficit=break_deficit,
            completed_work_sessions=completed,
            is_paused=False,
        )

    def _work_state(self) -> TimerState:
        return replace(
            self._state,
            phase=Phase.WORK,
            remaining_seconds=self._config.work_duration,
            is_paused=False,
        )

    # ══════════════════════════════════════════════════════════════════
    #  INTERNAL — countdown source
    # ══════════════════════════════════════════════════════════════════

    def _start_countdown(self) -> None:
        self._cancel_countdown()
        self._generation += 1
        generation = self._generation
        if self._scheduler is None:
            # Headless engines are driven by calling tick() directly.
            self._countdown = generation
            return
        self._countdown = self._scheduler.schedule_repeating(
            TICK_INTERVAL_MS,
            lambda: self._on_scheduled_tick(generation),
        )

    def _cancel_countdown(self) -> None:
        if self._countdown is None:
            return
        handle = self._countdown
        self._countdown = None
        self._generation += 1
        if self._scheduler is not None:
            self._scheduler.cancel(handle)

    def _on_scheduled_tick(self, generation: int) -> None:
        # A tick queued before its countdown was cancelled is stale.
        if generation != self._generation:
            return
        self.tick()
