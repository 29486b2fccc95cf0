"""Countdown state machine for PomoBlocks.

The countdown is an immutable ``TimerState`` value.  The module-level
functions (``start``, ``pause``, ``tick`` ...) take a state and return the
next one; they never touch Qt or the database.

``TimerEngine`` wraps those functions for the UI: it owns the current
state, drives ``tick`` from a one-second ``QTimer``, and writes saved
blocks to the local store.

Transitions
-----------
stopped → running           (start; refills the clock first if it hit 0)
running → stopped           (pause, reset, set_mode, or remaining hits 0)
any     → full clock        (reset, set_mode)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from enum import Enum

from PyQt6.QtCore import QObject, QTimer, pyqtSignal
from sqlalchemy.exc import SQLAlchemyError

from ..blocks import (
    SessionLogEntry, UserSession, append_entry, current_user, now_timestamp,
)

logger = logging.getLogger(__name__)


# ── modes ─────────────────────────────────────────────────────────────────


class SessionMode(Enum):
    SHORT = "short"
    LONG = "long"


SESSION_LENGTHS: dict[SessionMode, int] = {
    SessionMode.SHORT: 25 * 60,
    SessionMode.LONG: 50 * 60,
}

TICK_INTERVAL_MS = 1000


def full_length(mode: SessionMode) -> int:
    """Seconds on a full clock for *mode*."""
    try:
        return SESSION_LENGTHS[mode]
    except KeyError:
        raise ValueError(f"unknown session mode: {mode!r}") from None


# ── state + pure transitions ──────────────────────────────────────────────


@dataclass(frozen=True)
class TimerState:
    remaining: int
    running: bool = False
    mode: SessionMode = SessionMode.SHORT


def initial_state(mode: SessionMode = SessionMode.SHORT) -> TimerState:
    return TimerState(remaining=full_length(mode), running=False, mode=mode)


def start(state: TimerState) -> TimerState:
    if state.remaining == 0:
        state = reset(state)
    return replace(state, running=True)


def pause(state: TimerState) -> TimerState:
    return replace(state, running=False)


def toggle(state: TimerState) -> TimerState:
    """The start/pause button."""
    return pause(state) if state.running else start(state)


def tick(state: TimerState) -> tuple[TimerState, bool]:
    """Advance one second.

    Returns ``(new_state, completed)``.  ``completed`` is true only on the
    tick that takes the clock from 1 to 0; a tick at 0 just stops.
    """
    if not state.running:
        return state, False
    if state.remaining <= 0:
        return replace(state, remaining=0, running=False), False

    remaining = state.remaining - 1
    if remaining == 0:
        return replace(state, remaining=0, running=False), True
    return replace(state, remaining=remaining), False


def reset(state: TimerState) -> TimerState:
    return replace(state, remaining=full_length(state.mode), running=False)


def set_mode(state: TimerState, mode: SessionMode) -> TimerState:
    return TimerState(remaining=full_length(mode), running=False, mode=mode)


def elapsed(state: TimerState) -> int:
    """Seconds worked so far: full length minus remaining, within
    ``[0, full length]``."""
    full = full_length(state.mode)
    return max(0, min(full, full - state.remaining))


# ── engine ────────────────────────────────────────────────────────────────


class TimerEngine(QObject):
    """Qt driver around the countdown functions.

    Signals
    -------
    tick(remaining_seconds: int)
        Emitted whenever the clock value changes.
    running_changed(running: bool)
        Emitted when the countdown starts or stops.
    mode_changed(mode: SessionMode)
        Emitted after ``set_mode``.
    session_completed()
        Emitted once when the clock runs down to 0.
    block_saved(entry: SessionLogEntry)
        Emitted after ``save`` appends and persists a block.
    save_blocked()
        Emitted when ``save`` is refused because nobody is logged in.
    save_failed(message: str)
        Emitted when the store could not be written; the block is dropped.
    """

    tick = pyqtSignal(int)
    running_changed = pyqtSignal(bool)
    mode_changed = pyqtSignal(object)
    session_completed = pyqtSignal()
    block_saved = pyqtSignal(object)
    save_blocked = pyqtSignal()
    save_failed = pyqtSignal(str)

    def __init__(
        self,
        parent: QObject | None = None,
        *,
        mode: SessionMode = SessionMode.SHORT,
        db_enabled: bool = True,
    ) -> None:
        super().__init__(parent)
        self._state: TimerState = initial_state(mode)
        self._db_enabled: bool = db_enabled

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
    def remaining(self) -> int:
        """Seconds left on the clock."""
        return self._state.remaining

    @property
    def is_running(self) -> bool:
        return self._state.running

    @property
    def mode(self) -> SessionMode:
        return self._state.mode

    @property
    def total_duration(self) -> int:
        return full_length(self._state.mode)

    @property
    def elapsed(self) -> int:
        return elapsed(self._state)

    # ══════════════════════════════════════════════════════════════════
    #  CONTROLS
    # ══════════════════════════════════════════════════════════════════

    def start(self) -> None:
        self._apply(start(self._state))

    def pause(self) -> None:
        self._apply(pause(self._state))

    def toggle(self) -> None:
        self._apply(toggle(self._state))

    def reset(self) -> None:
        self._apply(reset(self._state))

    def set_mode(self, mode: SessionMode) -> None:
        self._apply(set_mode(self._state, mode))
        self.mode_changed.emit(mode)

    def save(self, title: str, notes: str) -> SessionLogEntry | None:
        """Log the time worked so far as a block.

        Returns the new entry, or ``None`` when no user is logged in or
        the store could not be written.  The clock itself is left alone.
        """
        try:
            user: UserSession | None = current_user() if self._db_enabled else None
            if user is None:
                logger.info("Save ignored: no user logged in")
                self.save_blocked.emit()
                return None

            entry = SessionLogEntry(
                timestamp=now_timestamp(),
                duration=elapsed(self._state),
                title=title,
                notes=notes,
            )
            append_entry(entry)
        except SQLAlchemyError as exc:
            logger.warning("Could not save block: %s", exc)
            self.save_failed.emit("Could not save block")
            return None
        self.block_saved.emit(entry)
        return entry

    # ══════════════════════════════════════════════════════════════════
    #  INTERNAL
    # ══════════════════════════════════════════════════════════════════

    def _on_tick(self) -> None:
        new_state, completed = tick(self._state)
        self._apply(new_state)
        if completed:
            logger.info("Session complete (%s)", self._state.mode.value)
            self.session_completed.emit()

    def _apply(self, new_state: TimerState) -> None:
        """Swap in *new_state*, keep the Qt timer in step, and notify."""
        old = self._state
        self._state = new_state

        if new_state.running and not self._qt_timer.isActive():
            self._qt_timer.start()
        elif not new_state.running and self._qt_timer.isActive():
            self._qt_timer.stop()

        if new_state.remaining != old.remaining:
            self.tick.emit(new_state.remaining)
        if new_state.running != old.running:
            self.running_changed.emit(new_state.running)
