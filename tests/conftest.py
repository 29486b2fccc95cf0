"""Shared pytest fixtures for PomoBlocks tests."""

import os
import sys

import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from PyQt6.QtWidgets import QApplication

from pomoblocks.database.db import configure_engine, init_db
from pomoblocks.timer.engine import TimerEngine, SessionMode


@pytest.fixture(scope="session")
def qapp():
    """A single QApplication instance shared across the entire test run."""
    app = QApplication.instance() or QApplication(sys.argv)
    yield app


@pytest.fixture(autouse=True)
def app_home(tmp_path, monkeypatch):
    """Keep settings and cached sounds inside the test's tmp dir."""
    monkeypatch.setenv("POMOBLOCKS_HOME", str(tmp_path))
    return tmp_path


@pytest.fixture(autouse=True)
def test_db():
    """Point every test at a fresh in-memory SQLite database."""
    configure_engine("sqlite:///:memory:")
    init_db()
    yield


@pytest.fixture
def engine(qapp):
    """Fresh 25-minute TimerEngine writing to the test database."""
    return TimerEngine(parent=None)


@pytest.fixture
def engine_long(qapp):
    """Fresh 50-minute TimerEngine."""
    return TimerEngine(parent=None, mode=SessionMode.LONG)


@pytest.fixture
def engine_no_db(qapp):
    """TimerEngine that never touches the store (pure countdown tests)."""
    return TimerEngine(parent=None, db_enabled=False)
