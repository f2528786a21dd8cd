"""Audio cues."""

from .cues import CuePlayer, cue_for, CUES
from .sounds import SoundManager, SOUND_NAMES

__all__ = ["CuePlayer", "cue_for", "CUES", "SoundManager", "SOUND_NAMES"]
