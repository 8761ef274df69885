"""Timer package."""

from .engine import (
    Phase,
    TimerState,
    initial_state,
    advance_phase,
    tick,
    segment_count,
)
from .controller import TimerController

__all__ = [
    "Phase",
    "TimerState",
    "TimerController",
    "initial_state",
    "advance_phase",
    "tick",
    "segment_count",
]
