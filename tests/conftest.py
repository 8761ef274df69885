"""Shared pytest fixtures for AerialTimer tests."""

import os
import sys

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

import pytest

from PyQt6.QtWidgets import QApplication

from aerialtimer.config import TimerConfig, apply_preset, preset_by_name
from aerialtimer.database.db import configure_engine, init_db
from aerialtimer.timer.controller import TimerController

from helpers import FakeClock


@pytest.fixture(scope="session")
def qapp():
    """A single QApplication instance shared across the entire test run."""
    app = QApplication.instance() or QApplication(sys.argv)
    yield app


@pytest.fixture(autouse=True)
def test_db():
    """Point every test at a fresh in-memory SQLite database."""
    configure_engine("sqlite:///:memory:")
    init_db()
    yield


@pytest.fixture(autouse=True)
def app_home(tmp_path, monkeypatch):
    """Keep logs and cached sounds out of the real home directory."""
    monkeypatch.setenv("AERIALTIMER_HOME", str(tmp_path / "home"))
    yield tmp_path / "home"


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def tabata():
    return apply_preset(preset_by_name("Tabata"))


@pytest.fixture
def controller(qapp, clock):
    """Fresh controller on the documented default config."""
    ctl = TimerController(TimerConfig(), clock=clock)
    yield ctl
    ctl.shutdown()


@pytest.fixture
def tabata_controller(qapp, clock, tabata):
    ctl = TimerController(tabata, clock=clock)
    yield ctl
    ctl.shutdown()
