"""Audio package: tone synthesis and timer cues."""

from .tones import (
    ToneGenerator,
    QtToneGenerator,
    NullToneGenerator,
    create_tone_generator,
    synthesize_tone,
    tone_to_wav_bytes,
)
from .cues import TimerAudio, volume_to_gain

__all__ = [
    "ToneGenerator",
    "QtToneGenerator",
    "NullToneGenerator",
    "TimerAudio",
    "create_tone_generator",
    "synthesize_tone",
    "tone_to_wav_bytes",
    "volume_to_gain",
]
