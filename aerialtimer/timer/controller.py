"""Qt session controller that owns the active ``TimerState``.

The controller is the only writer of timer state.  User commands and the
one-second ``QTimer`` both funnel through it; observers (audio, wake
lock, widgets) only listen to its signals.

Tick driver
-----------
``QTimer`` fires roughly once per second, but the controller does not
trust it blindly.  Each timeout reads a monotonic clock, works out how
many whole seconds have elapsed since the run was anchored (start or
resume), and processes every due tick that has not been processed yet.
A late or missed timeout therefore catches up instead of losing time.
"""

from __future__ import annotations

import logging
import time
from typing import Callable

from PyQt6.QtCore import QObject, QTimer, pyqtSignal

from ..config import TimerConfig, DEFAULT_CONFIG
from . import engine
from .engine import Phase, TimerState

log = logging.getLogger(__name__)

TICK_INTERVAL_MS = 1000


class TimerController(QObject):
    """Interval-timer session with start/pause/resume/reset/skip.

    Signals
    -------
    state_changed(state: TimerState)
        Emitted after every mutation.
    tick(remaining_seconds: int)
        Emitted after each processed one-second tick.
    phase_changed(phase: Phase, in_session: bool)
        Emitted when the phase differs from the previous state's.
        ``in_session`` is True when the session was running (paused or
        not) right before the change, which includes the final step
        into FINISHED.
    finished()
        Emitted once when the session reaches FINISHED.
    """

    state_changed = pyqtSignal(object)
    tick = pyqtSignal(int)
    phase_changed = pyqtSignal(object, bool)
    finished = pyqtSignal()

    def __init__(
        self,
        config: TimerConfig = DEFAULT_CONFIG,
        parent: QObject | None = None,
        *,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        super().__init__(parent)
        self._config = config
        self._state = engine.initial_state(config)
        self._clock = clock

        # ── catch-up bookkeeping ──────────────────────────────────────
        self._anchor: float | None = None
        self._ticks_since_anchor: int = 0
        self._catching_up = False

        # ── Qt timer ──────────────────────────────────────────────────
        self._qt_timer = QTimer(self)
        self._qt_timer.setInterval(TICK_INTERVAL_MS)
        self._qt_timer.timeout.connect(self._on_tick)

    # ══════════════════════════════════════════════════════════════════
    #  PUBLIC PROPERTIES
    # ══════════════════════════════════════════════════════════════════

    @property
    def state(self) -> TimerState:
        return self._state

    @property
    def config(self) -> TimerConfig:
        return self._config

    @property
    def phase(self) -> Phase:
        return self._state.phase

    @property
    def remaining(self) -> int:
        return self._state.time_remaining

    @property
    def is_active(self) -> bool:
        """Running and not paused."""
        return self._state.is_active

    @property
    def can_edit_config(self) -> bool:
        """Configuration edits are refused while the clock is moving."""
        return not self._state.is_active

    @property
    def catching_up(self) -> bool:
        """True while replaying missed ticks ahead of the current one."""
        return self._catching_up

    @property
    def ticking(self) -> bool:
        """Whether the underlying ``QTimer`` is scheduled."""
        return self._qt_timer.isActive()

    # ══════════════════════════════════════════════════════════════════
    #  CONTROLS
    # ══════════════════════════════════════════════════════════════════

    def start(self) -> None:
        """Start (or un-pause) the session.  No-op once FINISHED."""
        if self._state.is_finished or self._state.is_active:
            return
        self._apply(engine.start(self._state))
        self._start_driver()

    def pause(self) -> None:
        if not self._state.is_active:
            return
        self._stop_driver()
        self._apply(engine.pause(self._state))

    def resume(self) -> None:
        if not (self._state.is_running and self._state.is_paused):
            return
        self._apply(engine.resume(self._state))
        self._start_driver()

    def reset(self, config: TimerConfig | None = None) -> None:
        """Return to PREPARE, optionally switching to a new config."""
        self._stop_driver()
        if config is not None:
            self._config = config
        log.debug("timer reset (preset=%s)", self._config.preset_name)
        self._apply(engine.initial_state(self._config))

    def skip(self) -> None:
        """Jump to the next phase as if the countdown had reached 0."""
        if self._state.is_finished:
            return
        self._apply(engine.skip(self._state, self._config))
        if self._state.is_active:
            # fresh phase, fresh anchor
            self._reanchor()

    def advance(self, ticks: int = 1) -> None:
        """Process *ticks* one-second ticks in order."""
        for _ in range(max(0, ticks)):
            if not self._state.is_active:
                break
            self._apply(engine.tick(self._state, self._config))
            self.tick.emit(self._state.time_remaining)

    def shutdown(self) -> None:
        """Stop the tick driver; used on window teardown."""
        self._stop_driver()

    # ══════════════════════════════════════════════════════════════════
    #  INTERNAL
    # ══════════════════════════════════════════════════════════════════

    def _on_tick(self) -> None:
        due = self._due_ticks()
        if due > 1:
            log.debug("catching up %d missed ticks", due - 1)
            self._catching_up = True
            try:
                self.advance(due - 1)
            finally:
                self._catching_up = False
        self.advance(min(due, 1))

    def _due_ticks(self) -> int:
        if self._anchor is None:
            self._reanchor()
        elapsed = self._clock() - self._anchor
        # round so a timeout firing a few ms early still counts
        whole = int(elapsed + 0.5)
        due = whole - self._ticks_since_anchor
        if due <= 0:
            return 0
        self._ticks_since_anchor = whole
        return due

    def _apply(self, new_state: TimerState) -> None:
        old = self._state
        self._state = new_state

        if new_state.phase is not old.phase:
            self.phase_changed.emit(new_state.phase, old.is_running)
        self.state_changed.emit(new_state)

        if new_state.is_finished and not old.is_finished:
            self._stop_driver()
            log.info(
                "workout finished (%d sets x %d rounds)",
                self._config.sets, self._config.rounds,
            )
            self.finished.emit()

    def _start_driver(self) -> None:
        self._reanchor()
        self._qt_timer.start()

    def _stop_driver(self) -> None:
        self._qt_timer.stop()
        self._anchor = None
        self._ticks_since_anchor = 0

    def _reanchor(self) -> None:
        self._anchor = self._clock()
        self._ticks_since_anchor = 0
