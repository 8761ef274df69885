"""Display helpers derived from ``(TimerState, TimerConfig)``.

Kept free of Qt so the widgets stay thin and the wording is testable.
"""

from __future__ import annotations

from ..config import TimerConfig
from .engine import Phase, TimerState


PHASE_LABELS: dict[Phase, str] = {
    Phase.PREPARE:  "GET READY",
    Phase.WORK:     "WORK",
    Phase.REST:     "REST",
    Phase.SET_REST: "REST BETWEEN SETS",
    Phase.FINISHED: "DONE!",
}


def format_time(seconds: int) -> str:
    minutes, secs = divmod(max(0, seconds), 60)
    return f"{minutes:02d}:{secs:02d}"


def phase_label(phase: Phase) -> str:
    return PHASE_LABELS.get(phase, phase.value.upper())


def total_rounds(config: TimerConfig) -> int:
    return max(1, config.rounds) * max(1, config.sets)


def completed_rounds(state: TimerState, config: TimerConfig) -> int:
    """Rounds fully behind us, counted across sets."""
    if state.phase is Phase.FINISHED:
        return total_rounds(config)
    done = (state.current_set - 1) * max(1, config.rounds) + (state.current_round - 1)
    return max(0, done)


def progress_percent(state: TimerState, config: TimerConfig) -> float:
    """0.0 → 100.0 progress through the whole workout."""
    if state.phase is Phase.FINISHED:
        return 100.0
    return 100.0 * completed_rounds(state, config) / total_rounds(config)


def round_text(state: TimerState, config: TimerConfig) -> str:
    return (
        f"Round {state.current_round}/{config.rounds}"
        f" • Set {state.current_set}/{config.sets}"
    )


def next_phase_text(state: TimerState, config: TimerConfig) -> str | None:
    """Hint about what comes after the current phase, if anything."""
    phase = state.phase
    if phase is Phase.FINISHED:
        return None
    if phase is Phase.WORK:
        if state.current_round < config.rounds:
            return f"Next: REST ({config.rest_duration}s)"
        if state.current_set < config.sets:
            return f"Next: REST BETWEEN SETS ({config.rest_between_sets}s)"
        return "Last round!"
    return f"Next: WORK ({config.work_duration}s)"
