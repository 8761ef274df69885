"""Beep synthesis and playback using numpy + QSoundEffect.

Every cue the timer plays is a single sine tone described by
``(frequency_hz, duration_s, gain)``.  Tones are rendered to 16-bit WAV
files once, cached on disk, and played through a cached
``QSoundEffect`` per distinct tone.

Generators
----------
- ``ToneGenerator``     interface: ``play(frequency, duration, gain)``
- ``QtToneGenerator``   real output through Qt Multimedia
- ``NullToneGenerator`` silent stand-in when no audio device exists
"""

from __future__ import annotations

import io
import logging
import wave
from pathlib import Path

import numpy as np

from PyQt6.QtCore import QObject, QUrl

from ..paths import ensure_directory, sounds_dir

log = logging.getLogger(__name__)

SAMPLE_RATE = 44100
DECAY_FLOOR = 0.01          # envelope end level
ATTACK_SAMPLES = 64         # linear ramp-in length


# ═══════════════════════════════════════════════════════════════════════════
#  WAV SYNTHESIS HELPERS
# ═══════════════════════════════════════════════════════════════════════════


def _sine(freq: float, duration_s: float) -> np.ndarray:
    """Pure sine wave at *freq* Hz for *duration_s* seconds."""
    t = np.linspace(0, duration_s, int(SAMPLE_RATE * duration_s), endpoint=False)
    return np.sin(2 * np.pi * freq * t)


def _decay_envelope(length: int, peak: float) -> np.ndarray:
    """Exponential ramp from *peak* down to ``DECAY_FLOOR``."""
    if length <= 0:
        return np.zeros(0, dtype=np.float64)
    if peak <= DECAY_FLOOR:
        env = np.full(length, peak, dtype=np.float64)
    else:
        env = np.geomspace(peak, DECAY_FLOOR, length)
    a = min(ATTACK_SAMPLES, length)
    env[:a] *= np.linspace(0.0, 1.0, a)
    return env


def synthesize_tone(frequency: float, duration: float, gain: float) -> np.ndarray:
    """Sine tone whose amplitude starts at *gain* and decays exponentially."""
    gain = max(0.0, min(1.0, gain))
    tone = _sine(frequency, duration)
    return tone * _decay_envelope(len(tone), gain)


def tone_to_wav_bytes(samples: np.ndarray) -> bytes:
    """Convert a float64 numpy array (-1..1) to 16-bit PCM WAV bytes."""
    samples = np.clip(samples, -1.0, 1.0)
    int_samples = (samples * 32767).astype(np.int16)

    buf = io.BytesIO()
    with wave.open(buf, "wb") as wf:
        wf.setnchannels(1)
        wf.setsampwidth(2)
        wf.setframerate(SAMPLE_RATE)
        wf.writeframes(int_samples.tobytes())
    return buf.getvalue()


def tone_filename(frequency: float, duration: float, gain: float) -> str:
    return f"tone_{round(frequency)}hz_{round(duration * 1000)}ms_g{round(gain * 1000)}.wav"


# ═══════════════════════════════════════════════════════════════════════════
#  GENERATORS
# ═══════════════════════════════════════════════════════════════════════════


class ToneGenerator:
    """Something that can emit a short tone."""

    @property
    def available(self) -> bool:
        return True

    def play(self, frequency: float, duration: float, gain: float) -> None:
        raise NotImplementedError


class NullToneGenerator(ToneGenerator):

    @property
    def available(self) -> bool:
        return False

    def play(self, frequency: float, duration: float, gain: float) -> None:
        pass


class QtToneGenerator(QObject, ToneGenerator):
    """Plays tones via ``QSoundEffect``, caching WAVs in *cache_dir*.

    Usage::

        gen = QtToneGenerator(parent=self)
        gen.play(1000.0, 0.5, 0.21)
    """

    def __init__(
        self,
        parent: QObject | None = None,
        *,
        cache_dir: Path | None = None,
    ) -> None:
        super().__init__(parent)
        # Imported lazily: QtMultimedia may be missing from minimal builds
        from PyQt6.QtMultimedia import QSoundEffect

        self._effect_cls = QSoundEffect
        self._cache_dir = ensure_directory(cache_dir or sounds_dir())
        self._effects: dict[str, object] = {}

    def play(self, frequency: float, duration: float, gain: float) -> None:
        effect = self._effect_for(frequency, duration, gain)
        effect.play()

    def wav_path(self, frequency: float, duration: float, gain: float) -> Path:
        """Path of the cached WAV for this tone, rendering it if missing."""
        path = self._cache_dir / tone_filename(frequency, duration, gain)
        if not path.exists():
            path.write_bytes(
                tone_to_wav_bytes(synthesize_tone(frequency, duration, gain))
            )
        return path

    def _effect_for(self, frequency: float, duration: float, gain: float):
        name = tone_filename(frequency, duration, gain)
        effect = self._effects.get(name)
        if effect is None:
            path = self.wav_path(frequency, duration, gain)
            effect = self._effect_cls(self)
            effect.setSource(QUrl.fromLocalFile(str(path)))
            # gain is baked into the samples
            effect.setVolume(1.0)
            self._effects[name] = effect
        return effect


def create_tone_generator(parent: QObject | None = None) -> ToneGenerator:
    """Best available generator; silent fallback when audio is missing."""
    try:
        return QtToneGenerator(parent)
    except (ImportError, OSError) as exc:
        log.warning("audio output unavailable, continuing silently: %s", exc)
        return NullToneGenerator()
