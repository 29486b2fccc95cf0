"""PomoBlocks: a Pomodoro timer that logs work blocks locally."""

__version__ = "0.1.0"
