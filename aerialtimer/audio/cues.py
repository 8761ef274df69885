"""Audio cues that follow a ``TimerController``.

``TimerAudio`` listens to the controller's ``tick`` and ``phase_changed``
signals and emits beeps.  It only reads timer state, never writes it,
and any failure in tone output is logged and swallowed so the workout
keeps going.

Cues
----
- countdown     800 Hz / 0.15 s for each of the last N seconds,
                1200 Hz / 0.3 s on the final second
- work          1000 Hz / 0.5 s
- rest           500 Hz / 0.5 s
- set-rest       700 Hz / 0.5 s
- finished      1500 Hz / 0.3 s, three times, 300 ms apart
"""

from __future__ import annotations

import logging

from PyQt6.QtCore import QObject, QTimer

from ..config import TimerConfig
from ..timer.controller import TimerController
from ..timer.engine import Phase
from .tones import ToneGenerator

log = logging.getLogger(__name__)

MAX_GAIN = 0.3

COUNTDOWN_TONE = (800.0, 0.15)
FINAL_SECOND_TONE = (1200.0, 0.3)
FINISH_TONE = (1500.0, 0.3)
FINISH_REPEAT_DELAYS_MS = (0, 300, 600)

PHASE_TONES: dict[Phase, tuple[float, float]] = {
    Phase.WORK:     (1000.0, 0.5),
    Phase.REST:     (500.0, 0.5),
    Phase.SET_REST: (700.0, 0.5),
}


def volume_to_gain(volume: int) -> float:
    """Map a 0-100 volume setting to peak gain 0.0-0.3."""
    return max(0, min(100, volume)) / 100 * MAX_GAIN


class TimerAudio(QObject):
    """Beeps for countdowns and phase changes."""

    def __init__(
        self,
        controller: TimerController,
        tones: ToneGenerator,
        parent: QObject | None = None,
    ) -> None:
        super().__init__(parent)
        self._controller = controller
        self._tones = tones

        controller.tick.connect(self._on_tick)
        controller.phase_changed.connect(self._on_phase_changed)

    @property
    def config(self) -> TimerConfig:
        # read on every cue so reset(new_config) is picked up
        return self._controller.config

    # ── slots ─────────────────────────────────────────────────────────────

    def _on_tick(self, remaining: int) -> None:
        config = self.config
        if not config.enable_sound or not self._controller.is_active:
            return
        if self._controller.catching_up:
            # one countdown beep per timeout, not a burst
            return
        if 0 < remaining <= config.countdown_beeps:
            if remaining == 1:
                self._beep(*FINAL_SECOND_TONE)
            else:
                self._beep(*COUNTDOWN_TONE)

    def _on_phase_changed(self, phase: Phase, in_session: bool) -> None:
        if not self.config.enable_sound or not in_session:
            return
        if phase is Phase.FINISHED:
            for delay in FINISH_REPEAT_DELAYS_MS:
                if delay == 0:
                    self._beep(*FINISH_TONE)
                else:
                    QTimer.singleShot(delay, self._beep_finish)
            return
        tone = PHASE_TONES.get(phase)
        if tone is not None:
            self._beep(*tone)

    # ── output ────────────────────────────────────────────────────────────

    def _beep_finish(self) -> None:
        # delayed beeps honour a sound toggle made in the meantime
        if self.config.enable_sound:
            self._beep(*FINISH_TONE)

    def _beep(self, frequency: float, duration: float) -> None:
        gain = volume_to_gain(self.config.beep_volume)
        try:
            self._tones.play(frequency, duration, gain)
        except Exception:
            log.warning(
                "tone %.0f Hz failed, continuing without it",
                frequency,
                exc_info=True,
            )
