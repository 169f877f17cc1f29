"""Sound synthesis and playback using numpy + QSoundEffect.

Sounds are synthesised as sine tones with a linear attack/release
envelope, written once to a cache directory as 16-bit mono WAV files and
played back through ``QSoundEffect``.

Sound names
-----------
- ``timer_start``: short rising two-note blip
- ``timer_end``  : three-burst alarm, the "time's up" sound
- ``snap``       : tiny click when the ruler settles on a tick
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


log = logging.getLogger(__name__)

SOUNDS_DIR = APP_SUPPORT_DIR / "sounds"

SOUND_NAMES = ("timer_start", "timer_end", "snap")

SAMPLE_RATE = 44100


# ═══════════════════════════════════════════════════════════════════════════
#  WAV SYNTHESIS HELPERS
# ═══════════════════════════════════════════════════════════════════════════


def _tone(freq: float, duration_s: float, amplitude: float = 0.5) -> np.ndarray:
    """Sine tone with a 5 ms attack and a release over the last third."""
    n = int(SAMPLE_RATE * duration_s)
    t = np.arange(n) / SAMPLE_RATE
    samples = np.sin(2 * np.pi * freq * t) * amplitude

    env = np.ones(n, dtype=np.float64)
    attack = min(n, int(SAMPLE_RATE * 0.005))
    if attack > 0:
        env[:attack] = np.linspace(0.0, 1.0, attack)
    release = n // 3
    if release > 0:
        env[n - release:] = np.linspace(1.0, 0.0, release)
    return samples * env


def _silence(duration_s: float) -> np.ndarray:
    return np.zeros(int(SAMPLE_RATE * duration_s))


def _to_wav_bytes(samples: np.ndarray) -> bytes:
    """Convert a float64 numpy array (-1..1) to 16-bit PCM WAV bytes."""
    int_samples = (np.clip(samples, -1.0, 1.0) * 32767).astype(np.int16)

    buf = io.BytesIO()
    with wave.open(buf, "wb") as wf:
        wf.setnchannels(1)
        wf.setsampwidth(2)
        wf.setframerate(SAMPLE_RATE)
        wf.writeframes(int_samples.tobytes())
    return buf.getvalue()


# ═══════════════════════════════════════════════════════════════════════════
#  SOUND GENERATORS
# ═══════════════════════════════════════════════════════════════════════════


def _generate_start() -> bytes:
    """A5 → E6, quick and light."""
    return _to_wav_bytes(np.concatenate([
        _tone(880.0, 0.07, 0.4),
        _silence(0.02),
        _tone(1318.5, 0.09, 0.4),
        _silence(0.05),
    ]))


def _generate_alarm() -> bytes:
    """Three bursts of four 1 kHz beeps, like a kitchen timer."""
    beep = _tone(1000.0, 0.06, 0.6)
    burst = np.concatenate([beep, _silence(0.04)] * 4)
    return _to_wav_bytes(np.concatenate([burst, _silence(0.35)] * 3))


def _generate_snap() -> bytes:
    # Pad with silence so QSoundEffect doesn't clip
    return _to_wav_bytes(np.concatenate([_tone(2000.0, 0.012, 0.2), _silence(0.03)]))


_GENERATORS: dict[str, Callable[[], bytes]] = {
    "timer_start": _generate_start,
    "timer_end": _generate_alarm,
    "snap": _generate_snap,
}


# ═══════════════════════════════════════════════════════════════════════════
#  SOUND MANAGER
# ═══════════════════════════════════════════════════════════════════════════


class SoundManager(QObject):
    """Caches and plays the app's sounds.

    Usage::

        mgr = SoundManager(parent=self)
        mgr.set_volume(70)
        mgr.play("timer_end")
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
        if effect is not None:
            effect.play()

    @property
    def volume(self) -> int:
        """Current volume as 0-100 integer."""
        return round(self._volume * 100)

    @property
    def enabled(self) -> bool:
        return self._enabled

    # ── internal ──────────────────────────────────────────────────────

    def _ensure_wav_files(self) -> None:
        """Generate any missing WAV files to the cache directory."""
        self._sounds_dir.mkdir(parents=True, exist_ok=True)
        for name, gen_fn in _GENERATORS.items():
            path = self._sounds_dir / f"{name}.wav"
            if not path.exists():
                path.write_bytes(gen_fn())
                log.debug("generated %s", path)

    def _load_effects(self) -> None:
        for name in SOUND_NAMES:
            path = self._sounds_dir / f"{name}.wav"
            if path.exists():
                effect = QSoundEffect(self)
                effect.setSource(QUrl.fromLocalFile(str(path)))
                effect.setVolume(self._volume)
                self._effects[name] = effect
