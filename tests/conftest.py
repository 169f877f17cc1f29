"""Shared pytest fixtures for EasyTap tests."""

import os
import sys

import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from PyQt6.QtWidgets import QApplication

from easytap.timer.events import ExpiryBus
from easytap.timer.manager import TimerManager
from easytap.timer.quantizer import TickGeometry

from helpers import FakeClock, ManualTickSource, RecordingListener


@pytest.fixture(scope="session")
def qapp():
    """A single QApplication instance shared across the entire test run."""
    app = QApplication.instance() or QApplication(sys.argv)
    yield app


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def ticks():
    return ManualTickSource()


@pytest.fixture
def bus(qapp):
    """A private expiry bus so tests never share the process-wide one."""
    return ExpiryBus()


@pytest.fixture
def listener():
    return RecordingListener()


@pytest.fixture
def geometry():
    return TickGeometry()


@pytest.fixture
def manager(qapp, clock, ticks, bus, listener):
    """Fresh TimerManager on a fake clock, default 30 s, listener attached."""
    mgr = TimerManager(clock=clock, tick_source=ticks, bus=bus)
    mgr.set_listener(listener)
    return mgr
