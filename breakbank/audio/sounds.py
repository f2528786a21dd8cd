"""Sound synthesis and playback using numpy + QSoundEffect.

Cues are generated as WAV files from sine partials shaped by ADSR
envelopes, then cached to disk so later launches skip synthesis.

Sound names
-----------
- ``bell``        — struck bell, work session finished
- ``work_start``  — short rising chime
- ``break_start`` — soft low bell
- ``break_over``  — gentle double-tap
"""

from __future__ import annotations

import io
import logging
import wave
from pathlib import Path
from typing import Callable

import numpy as np

from PyQt6.QtCore import QObject, QUrl
from PyQt6.QtMultimedia import QSoundEffect

from ..settings import APP_SUPPORT_DIR

logger = logging.getLogger(__name__)

SOUNDS_DIR = APP_SUPPORT_DIR / "sounds"

SOUND_NAMES = (
    "bell",
    "work_start",
    "break_start",
    "break_over",
)

SAMPLE_RATE = 44100


# ═══════════════════════════════════════════════════════════════════════════
#  WAV SYNTHESIS HELPERS
# ═══════════════════════════════════════════════════════════════════════════


def _make_envelope(
    length: int,
    attack: int = 200,
    decay: int = 400,
    sustain_level: float = 0.7,
    release: int = 800,
) -> np.ndarray:
    """ADSR envelope (all durations in samples)."""
    env = np.full(length, sustain_level, dtype=np.float64)
    a_end = min(attack, length)
    if a_end > 0:
        env[:a_end] = np.linspace(0.0, 1.0, a_end)
    d_end = min(a_end + decay, length)
    if d_end > a_end:
        env[a_end:d_end] = np.linspace(1.0, sustain_level, d_end - a_end)
    r_start = max(length - release, d_end)
    if r_start < length:
        env[r_start:] = np.linspace(env[r_start - 1] if r_start else sustain_level,
                                    0.0, length - r_start)
    return env


def _partials(freqs: list[tuple[float, float]], duration_s: float) -> np.ndarray:
    """Sum of sine partials given as ``(frequency, amplitude)`` pairs."""
    t = np.arange(int(SAMPLE_RATE * duration_s)) / SAMPLE_RATE
    out = np.zeros_like(t)
    for freq, amp in freqs:
        out += amp * np.sin(2 * np.pi * freq * t)
    return out


def _silence(duration_s: float) -> np.ndarray:
    return np.zeros(int(SAMPLE_RATE * duration_s))


def _to_wav_bytes(samples: np.ndarray) -> bytes:
    """Convert a float64 array (-1..1) to mono 16-bit PCM WAV bytes."""
    pcm = (np.clip(samples, -1.0, 1.0) * 32767).astype("<i2")

    buf = io.BytesIO()
    with wave.open(buf, "wb") as wf:
        wf.setnchannels(1)
        wf.setsampwidth(2)
        wf.setframerate(SAMPLE_RATE)
        wf.writeframes(pcm.tobytes())
    return buf.getvalue()


# ═══════════════════════════════════════════════════════════════════════════
#  SOUND GENERATORS
# ═══════════════════════════════════════════════════════════════════════════


def _generate_bell() -> bytes:
    """Work complete — struck bell at E5 with inharmonic partials."""
    duration = 1.6
    tone = _partials(
        [(659.25, 0.45), (1318.5, 0.12), (1781.0, 0.06), (2637.0, 0.03)],
        duration,
    )
    # Exponential ring-out on top of a fast strike
    t = np.arange(len(tone)) / SAMPLE_RATE
    strike = _make_envelope(len(tone), attack=60, decay=800, sustain_level=1.0, release=0)
    return _to_wav_bytes(tone * strike * np.exp(-3.0 * t))


def _generate_work_start() -> bytes:
    """Work start — two rising notes (G4→C5)."""
    parts: list[np.ndarray] = []
    for freq in (392.00, 523.25):
        tone = _partials([(freq, 0.5), (freq * 2, 0.08)], 0.14)
        parts.append(tone * _make_envelope(len(tone), attack=90, decay=250,
                                           sustain_level=0.45, release=400))
        parts.append(_silence(0.03))
    parts.append(_silence(0.05))
    return _to_wav_bytes(np.concatenate(parts))


def _generate_break_start() -> bytes:
    """Break start — soft low bell (A3), slow attack, long decay."""
    duration = 1.2
    tone = _partials([(220.0, 0.4), (440.0, 0.1), (660.0, 0.04)], duration)
    env = _make_envelope(
        len(tone),
        attack=int(SAMPLE_RATE * 0.08),
        decay=int(SAMPLE_RATE * 0.35),
        sustain_level=0.25,
        release=int(SAMPLE_RATE * 0.6),
    )
    return _to_wav_bytes(tone * env)


def _generate_break_over() -> bytes:
    """Break over — gentle double-tap (880Hz), 90ms apart."""
    tap = _partials([(880.0, 0.35)], 0.045)
    tap = tap * _make_envelope(len(tap), attack=40, decay=120, sustain_level=0.2, release=250)
    return _to_wav_bytes(np.concatenate([tap, _silence(0.09), tap, _silence(0.05)]))


_GENERATORS: dict[str, Callable[[], bytes]] = {
    "bell": _generate_bell,
    "work_start": _generate_work_start,
    "break_start": _generate_break_start,
    "break_over": _generate_break_over,
}


# ═══════════════════════════════════════════════════════════════════════════
#  SOUND MANAGER
# ═══════════════════════════════════════════════════════════════════════════


class SoundManager(QObject):
    """Synthesises, caches and plays the cue sounds.

    Usage::

        mgr = SoundManager(parent=self)
        mgr.set_volume(70)
        mgr.play("bell")
    """

    def __init__(
        self,
        parent: QObject | None = None,
        *,
        sounds_dir: Path | None = None,
    ) -> None:
        super().__init__(parent)
        self._enabled = True
        self._volume = 0.7  # 0.0–1.0
        self._sounds_dir = sounds_dir or SOUNDS_DIR
        self._effects: dict[str, QSoundEffect] = {}

        self._ensure_wav_files()
        self._load_effects()

    # ── public API ────────────────────────────────────────────────────

    def set_volume(self, level: int) -> None:
        """Set volume (0-100).  Updates all loaded effects."""
        self._volume = max(0, min(level, 100)) / 100.0
        for effect in self._effects.values():
            effect.setVolume(self._volume)

    def set_enabled(self, enabled: bool) -> None:
        self._enabled = enabled

    def play(self, name: str) -> None:
        """Play a sound by name.  No-op if disabled or name unknown."""
        if not self._enabled:
            return
        effect = self._effects.get(name)
        if effect is None:
            logger.debug("No sound loaded for %r", name)
            return
        # Restart from the top if the cue is still ringing
        effect.stop()
        effect.play()

    @property
    def volume(self) -> int:
        """Current volume as 0-100 integer."""
        return round(self._volume * 100)

    @property
    def enabled(self) -> bool:
        return self._enabled

    @property
    def sounds_dir(self) -> Path:
        return self._sounds_dir

    # ── internal ──────────────────────────────────────────────────────

    def _ensure_wav_files(self) -> None:
        """Generate any missing WAV files to the cache directory."""
        self._sounds_dir.mkdir(parents=True, exist_ok=True)
        for name, generate in _GENERATORS.items():
            path = self._sounds_dir / f"{name}.wav"
            if not path.exists():
                logger.debug("Synthesising %s", path)
                path.write_bytes(generate())

    def _load_effects(self) -> None:
        for name in SOUND_NAMES:
            path = self._sounds_dir / f"{name}.wav"
            if path.exists():
                effect = QSoundEffect(self)
                effect.setSource(QUrl.fromLocalFile(str(path)))
                effect.setVolume(self._volume)
                self._effects[name] = effect
