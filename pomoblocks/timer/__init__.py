"""Timer package."""

from .engine import (
    TimerEngine,
    TimerState,
    SessionMode,
    SESSION_LENGTHS,
    full_length,
    initial_state,
    start,
    pause,
    toggle,
    tick,
    reset,
    set_mode,
    elapsed,
)

__all__ = [
    "TimerEngine",
    "TimerState",
    "SessionMode",
    "SESSION_LENGTHS",
    "full_length",
    "initial_state",
    "start",
    "pause",
    "toggle",
    "tick",
    "reset",
    "set_mode",
    "elapsed",
]
