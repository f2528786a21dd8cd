"""Maps phase transitions to sound cues."""

from __future__ import annotations

from typing import Protocol

from ..timer.engine import Phase
from ..timer.events import PhaseTransition


class Player(Protocol):
    def play(self, name: str) -> None: ...


# (source, target) -> sound name.  WORK/ROLLOVER/BREAK -> IDLE via
# stop() or reset() is a user action and stays silent.
CUES: dict[tuple[Phase, Phase], str] = {
    (Phase.WORK, Phase.ROLLOVER): "bell",
    (Phase.IDLE, Phase.WORK): "work_start",
    (Phase.ROLLOVER, Phase.WORK): "work_start",
    (Phase.ROLLOVER, Phase.BREAK): "break_start",
    (Phase.BREAK, Phase.IDLE): "break_over",
}


def cue_for(transition: PhaseTransition) -> str | None:
    cue = CUES.get((transition.source, transition.target))
    if cue == "break_over" and transition.previous.remaining_seconds > 1:
        # Break cut short by stop()/reset(), not run out
        return None
    return cue


class CuePlayer:
    """Transition sink that plays the matching cue on *player*."""

    def __init__(self, player: Player) -> None:
        self._player = player

    def on_transition(self, transition: PhaseTransition) -> None:
        cue = cue_for(transition)
        if cue is not None:
            self._player.play(cue)
