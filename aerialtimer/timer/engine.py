"""Pure interval-timer state machine for AerialTimer.

Phases
------
PREPARE     Lead-in countdown before the first work interval.
WORK        Work interval counting down.
REST        Rest between two rounds of the same set.
SET_REST    Longer rest between two sets.
FINISHED    Absorbing terminal phase.

Transitions (on "time reaches 0" or ``skip``)
----------------------------------------------
PREPARE  → WORK                          round := 1
WORK     → REST        (round < rounds)  round += 1
WORK     → SET_REST    (last round, set < sets)  round := 1, set += 1
WORK     → FINISHED    (last round of last set)
REST     → WORK
SET_REST → WORK
FINISHED → FINISHED

Every function here is pure: it takes a ``TimerState`` and returns a new
one.  No I/O, no clock reads, so a fixed config plus a fixed sequence of
ticks and commands always yields the same states.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum

from ..config import TimerConfig, MIN_COUNT, MIN_DURATION


# ── enums ─────────────────────────────────────────────────────────────────


class Phase(Enum):
    PREPARE = "prepare"
    WORK = "work"
    REST = "rest"
    SET_REST = "set-rest"
    FINISHED = "finished"


# ── state ─────────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class TimerState:
    phase: Phase = Phase.PREPARE
    current_round: int = 0           # 1-indexed once work begins
    current_set: int = 1
    time_remaining: int = 0          # seconds, never negative
    is_running: bool = False
    is_paused: bool = False

    @property
    def is_active(self) -> bool:
        """True when the countdown is actually moving."""
        return self.is_running and not self.is_paused

    @property
    def is_finished(self) -> bool:
        return self.phase is Phase.FINISHED


def initial_state(config: TimerConfig) -> TimerState:
    """Fresh session in PREPARE, also the result of ``reset``."""
    return TimerState(
        phase=Phase.PREPARE,
        current_round=0,
        current_set=1,
        time_remaining=_seconds(config.prepare_time),
        is_running=False,
        is_paused=False,
    )


# ═══════════════════════════════════════════════════════════════════════════
#  TRANSITIONS
# ═══════════════════════════════════════════════════════════════════════════


def advance_phase(state: TimerState, config: TimerConfig) -> TimerState:
    """Apply the "time's up" transition for the current phase."""
    rounds = _count(config.rounds)
    sets = _count(config.sets)

    if state.phase is Phase.PREPARE:
        return replace(
            state,
            phase=Phase.WORK,
            current_round=1,
            time_remaining=_seconds(config.work_duration),
        )

    if state.phase is Phase.WORK:
        if state.current_round < rounds:
            return replace(
                state,
                phase=Phase.REST,
                current_round=state.current_round + 1,
                time_remaining=_seconds(config.rest_duration),
            )
        if state.current_set < sets:
            return replace(
                state,
                phase=Phase.SET_REST,
                current_round=1,
                current_set=state.current_set + 1,
                time_remaining=_seconds(config.rest_between_sets),
            )
        return replace(
            state,
            phase=Phase.FINISHED,
            is_running=False,
            time_remaining=0,
        )

    if state.phase in (Phase.REST, Phase.SET_REST):
        return replace(
            state,
            phase=Phase.WORK,
            time_remaining=_seconds(config.work_duration),
        )

    # FINISHED is absorbing
    return state


def tick(state: TimerState, config: TimerConfig) -> TimerState:
    """Advance the countdown by one second.

    The transition happens on the tick that would take the clock from 1
    to 0, so the last second shown before a phase change is always 1.
    """
    if not state.is_active or state.is_finished:
        return state
    if state.time_remaining <= 1:
        return advance_phase(state, config)
    return replace(state, time_remaining=state.time_remaining - 1)


def tick_many(state: TimerState, config: TimerConfig, count: int) -> TimerState:
    for _ in range(max(0, count)):
        state = tick(state, config)
    return state


# ═══════════════════════════════════════════════════════════════════════════
#  COMMANDS
#  Misuse (pausing an idle timer, resuming a running one...) is a no-op.
# ═══════════════════════════════════════════════════════════════════════════


def start(state: TimerState) -> TimerState:
    if state.is_finished:
        return state
    return replace(state, is_running=True, is_paused=False)


def pause(state: TimerState) -> TimerState:
    if not state.is_active:
        return state
    return replace(state, is_paused=True)


def resume(state: TimerState) -> TimerState:
    if not (state.is_running and state.is_paused):
        return state
    return replace(state, is_paused=False)


def skip(state: TimerState, config: TimerConfig) -> TimerState:
    if state.is_finished:
        return state
    return advance_phase(state, config)


# ═══════════════════════════════════════════════════════════════════════════
#  SESSION SHAPE
# ═══════════════════════════════════════════════════════════════════════════


def segment_count(config: TimerConfig) -> int:
    """Phase segments visited before FINISHED on an unskipped run.

    One prepare, then per set *R* work and *R - 1* rest intervals, plus
    a set-rest between consecutive sets.
    """
    rounds = _count(config.rounds)
    sets = _count(config.sets)
    return 1 + sets * (rounds + rounds - 1) + (sets - 1)


def total_duration(config: TimerConfig) -> int:
    """Seconds from start to FINISHED on an unskipped run.

    Zero-length phases still occupy one tick each.
    """
    rounds = _count(config.rounds)
    sets = _count(config.sets)

    def span(seconds: int) -> int:
        return max(1, _seconds(seconds))

    per_set = rounds * span(config.work_duration) + (rounds - 1) * span(config.rest_duration)
    return (
        span(config.prepare_time)
        + sets * per_set
        + (sets - 1) * span(config.rest_between_sets)
    )


# ── clamping ──────────────────────────────────────────────────────────────


def _seconds(value: int) -> int:
    return max(MIN_DURATION, int(value))


def _count(value: int) -> int:
    return max(MIN_COUNT, int(value))
