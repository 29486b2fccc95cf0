"""Tests for the PomoBlocks countdown.

Covers: the pure state transitions (start, pause, toggle, tick, reset,
set_mode, elapsed), the Qt engine wrapper and its signals, and saving
blocks with and without a logged-in user.
"""

import pytest

from pomoblocks.blocks import load_entries, login, logout
from pomoblocks.export.formatter import format_duration
from pomoblocks.timer import engine as timer
from pomoblocks.timer.engine import (
    TimerState, SessionMode, SESSION_LENGTHS, TICK_INTERVAL_MS, full_length,
)

from helpers import SignalCollector, complete_session, run_ticks


SHORT = SESSION_LENGTHS[SessionMode.SHORT]
LONG = SESSION_LENGTHS[SessionMode.LONG]


# ═══════════════════════════════════════════════════════════════════════════
#  PURE TRANSITIONS
# ═══════════════════════════════════════════════════════════════════════════


class TestSessionLengths:

    def test_short_is_25_minutes(self):
        assert full_length(SessionMode.SHORT) == 1500

    def test_long_is_50_minutes(self):
        assert full_length(SessionMode.LONG) == 3000

    def test_unknown_mode_raises(self):
        with pytest.raises(ValueError):
            full_length("medium")

    def test_initial_state_is_full_and_stopped(self):
        state = timer.initial_state()
        assert state == TimerState(remaining=SHORT, running=False, mode=SessionMode.SHORT)

    def test_initial_state_long(self):
        assert timer.initial_state(SessionMode.LONG).remaining == LONG


class TestStartPause:

    def test_start_sets_running(self):
        state = timer.start(timer.initial_state())
        assert state.running is True
        assert state.remaining == SHORT

    def test_start_at_zero_refills_clock(self):
        state = TimerState(remaining=0, running=False, mode=SessionMode.LONG)
        state = timer.start(state)
        assert state.running is True
        assert state.remaining == LONG

    def test_start_keeps_partial_time(self):
        state = TimerState(remaining=700, mode=SessionMode.SHORT)
        assert timer.start(state).remaining == 700

    def test_pause_keeps_time(self):
        state = TimerState(remaining=1234, running=True)
        paused = timer.pause(state)
        assert paused.running is False
        assert paused.remaining == 1234

    def test_toggle_flips_running(self):
        state = timer.initial_state()
        state = timer.toggle(state)
        assert state.running is True
        state = timer.toggle(state)
        assert state.running is False

    def test_toggle_at_zero_restarts_full(self):
        state = TimerState(remaining=0, running=False)
        state = timer.toggle(state)
        assert state.running is True
        assert state.remaining == SHORT

    def test_transitions_do_not_mutate_input(self):
        state = timer.initial_state()
        timer.start(state)
        assert state.running is False


class TestTick:

    def test_tick_decrements_once(self):
        state, completed = timer.tick(TimerState(remaining=10, running=True))
        assert state.remaining == 9
        assert completed is False

    @pytest.mark.parametrize("r, n", [(1500, 1), (1500, 300), (10, 9), (3000, 3000)])
    def test_n_ticks_subtract_n(self, r, n):
        state = TimerState(remaining=r, running=True, mode=SessionMode.LONG)
        for _ in range(n):
            state, _ = timer.tick(state)
        assert state.remaining == r - n

    def test_tick_ignored_when_stopped(self):
        state = TimerState(remaining=100, running=False)
        new_state, completed = timer.tick(state)
        assert new_state == state
        assert completed is False

    def test_reaching_zero_stops_and_completes(self):
        state, completed = timer.tick(TimerState(remaining=1, running=True))
        assert state.remaining == 0
        assert state.running is False
        assert completed is True

    def test_completion_signalled_exactly_once(self):
        state = TimerState(remaining=3, running=True)
        completions = 0
        for _ in range(10):
            state, completed = timer.tick(state)
            completions += completed
        assert completions == 1
        assert state.remaining == 0
        assert state.running is False

    def test_tick_at_zero_while_running_just_stops(self):
        state, completed = timer.tick(TimerState(remaining=0, running=True))
        assert state.remaining == 0
        assert state.running is False
        assert completed is False


class TestResetAndMode:

    def test_reset_restores_full_length(self):
        state = TimerState(remaining=12, running=True, mode=SessionMode.LONG)
        state = timer.reset(state)
        assert state.remaining == LONG
        assert state.running is False

    @pytest.mark.parametrize("mode", list(SessionMode))
    @pytest.mark.parametrize("running", [True, False])
    def test_set_mode_resets_and_stops(self, mode, running):
        state = TimerState(remaining=42, running=running, mode=SessionMode.SHORT)
        state = timer.set_mode(state, mode)
        assert state.mode == mode
        assert state.remaining == full_length(mode)
        assert state.running is False


class TestElapsed:

    def test_elapsed_is_full_minus_remaining(self):
        assert timer.elapsed(TimerState(remaining=1200, mode=SessionMode.SHORT)) == 300

    def test_elapsed_zero_on_full_clock(self):
        assert timer.elapsed(timer.initial_state(SessionMode.LONG)) == 0

    def test_elapsed_clamped_to_full_length(self):
        assert timer.elapsed(TimerState(remaining=-5, mode=SessionMode.SHORT)) == SHORT
        assert timer.elapsed(TimerState(remaining=SHORT + 60, mode=SessionMode.SHORT)) == 0


# ═══════════════════════════════════════════════════════════════════════════
#  QT ENGINE
# ═══════════════════════════════════════════════════════════════════════════


class TestEngineControls:

    def test_initial_state(self, engine):
        assert engine.remaining == SHORT
        assert engine.is_running is False
        assert engine.mode == SessionMode.SHORT
        assert engine.total_duration == SHORT

    def test_start_runs_qt_timer(self, engine):
        engine.start()
        assert engine.is_running is True
        assert engine._qt_timer.isActive()
        assert engine._qt_timer.interval() == TICK_INTERVAL_MS

    def test_pause_stops_qt_timer(self, engine):
        engine.start()
        engine.pause()
        assert engine.is_running is False
        assert not engine._qt_timer.isActive()

    def test_tick_decrements_remaining(self, engine):
        engine.start()
        run_ticks(engine, 5)
        assert engine.remaining == SHORT - 5
        assert engine.elapsed == 5

    def test_tick_ignored_while_paused(self, engine):
        engine.start()
        run_ticks(engine, 2)
        engine.pause()
        run_ticks(engine, 10)
        assert engine.remaining == SHORT - 2

    def test_reset(self, engine):
        engine.start()
        run_ticks(engine, 30)
        engine.reset()
        assert engine.remaining == SHORT
        assert engine.is_running is False
        assert not engine._qt_timer.isActive()

    def test_toggle(self, engine):
        engine.toggle()
        assert engine.is_running is True
        engine.toggle()
        assert engine.is_running is False

    def test_set_mode_switches_length_and_stops(self, engine):
        engine.start()
        run_ticks(engine, 10)
        engine.set_mode(SessionMode.LONG)
        assert engine.remaining == LONG
        assert engine.is_running is False
        assert not engine._qt_timer.isActive()

    def test_long_fixture(self, engine_long):
        assert engine_long.remaining == LONG

    def test_completion_stops_timer(self, engine):
        engine.start()
        complete_session(engine)
        assert engine.remaining == 0
        assert engine.is_running is False
        assert not engine._qt_timer.isActive()

    def test_start_after_completion_refills(self, engine):
        engine.start()
        complete_session(engine)
        engine.start()
        assert engine.remaining == SHORT
        assert engine.is_running is True


class TestEngineSignals:

    def test_tick_signal_emits_remaining(self, engine):
        c = SignalCollector()
        engine.tick.connect(c)
        engine.start()
        engine._on_tick()
        assert len(c) == 1
        assert c.last == SHORT - 1

    def test_running_changed(self, engine):
        c = SignalCollector()
        engine.running_changed.connect(c)
        engine.start()
        engine.pause()
        assert c.items == [True, False]

    def test_no_running_signal_for_redundant_pause(self, engine):
        c = SignalCollector()
        engine.running_changed.connect(c)
        engine.pause()
        assert len(c) == 0

    def test_mode_changed(self, engine):
        c = SignalCollector()
        engine.mode_changed.connect(c)
        engine.set_mode(SessionMode.LONG)
        assert c.last == SessionMode.LONG

    def test_reset_emits_tick_with_full_length(self, engine):
        engine.start()
        run_ticks(engine, 3)
        c = SignalCollector()
        engine.tick.connect(c)
        engine.reset()
        assert c.last == SHORT

    def test_session_completed_fires_once(self, engine):
        c = SignalCollector()
        engine.session_completed.connect(c)
        engine.start()
        complete_session(engine)
        run_ticks(engine, 5)
        assert len(c) == 1


# ═══════════════════════════════════════════════════════════════════════════
#  SAVE
# ═══════════════════════════════════════════════════════════════════════════


class TestSave:

    def test_save_without_user_is_noop(self, engine):
        c = SignalCollector()
        engine.save_blocked.connect(c)
        engine.start()
        run_ticks(engine, 60)

        assert engine.save("Title", "Notes") is None
        assert load_entries() == []
        assert len(c) == 1

    def test_save_after_logout_is_noop(self, engine):
        login("ada@example.com")
        logout()
        assert engine.save("Title", "Notes") is None
        assert load_entries() == []

    def test_save_records_elapsed_duration(self, engine):
        login("ada@example.com")
        engine.start()
        run_ticks(engine, 300)
        assert engine.remaining == 1200

        entry = engine.save("Deep work", "Refactored the parser")

        assert entry.duration == 300
        assert format_duration(entry.duration) == "05:00"
        assert entry.title == "Deep work"
        assert entry.notes == "Refactored the parser"
        assert entry.timestamp.endswith("Z")

    def test_save_persists_in_order(self, engine):
        login("ada")
        engine.start()
        run_ticks(engine, 10)
        engine.save("first", "")
        run_ticks(engine, 20)
        engine.save("second", "")

        entries = load_entries()
        assert [e.title for e in entries] == ["first", "second"]
        assert [e.duration for e in entries] == [10, 30]

    def test_save_leaves_clock_alone(self, engine):
        login("ada")
        engine.start()
        run_ticks(engine, 10)
        engine.save("t", "n")
        assert engine.is_running is True
        assert engine.remaining == SHORT - 10

    def test_save_emits_block_saved(self, engine):
        login("ada")
        c = SignalCollector()
        engine.block_saved.connect(c)
        entry = engine.save("t", "n")
        assert c.last == entry

    def test_duration_within_session_length(self, engine_long):
        login("ada")
        engine_long.start()
        complete_session(engine_long)
        entry = engine_long.save("full", "")
        assert entry.duration == LONG
        assert 0 <= entry.duration <= LONG

    def test_save_on_fresh_clock_is_zero(self, engine):
        login("ada")
        assert engine.save("", "").duration == 0

    def test_engine_without_db_never_saves(self, engine_no_db):
        login("ada")
        assert engine_no_db.save("t", "n") is None
        assert load_entries() == []

    def test_store_failure_is_not_fatal(self, engine, monkeypatch):
        from sqlalchemy.exc import OperationalError

        def locked(_entry):
            raise OperationalError("INSERT", {}, Exception("database is locked"))

        login("ada")
        monkeypatch.setattr(timer, "append_entry", locked)
        failed, saved = SignalCollector(), SignalCollector()
        engine.save_failed.connect(failed)
        engine.block_saved.connect(saved)
        engine.start()
        run_ticks(engine, 10)

        assert engine.save("t", "n") is None
        assert failed.last == "Could not save block"
        assert len(saved) == 0
        assert engine.is_running is True
