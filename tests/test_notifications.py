"""Tests for the expiry alert and its failure handling."""

from __future__ import annotations

import logging

import pytest

from easytap.notifications import EXPIRED_BODY, EXPIRED_TITLE, Notifier
from easytap.timer.events import ExpiryBus, default_bus

from helpers import SignalCollector, run_for


class _FakeTray:
    def __init__(self, fail: bool = False) -> None:
        self.fail = fail
        self.messages: list[tuple[str, str]] = []

    def showMessage(self, title, body):
        if self.fail:
            raise RuntimeError("permission denied")
        self.messages.append((title, body))


@pytest.fixture
def tray_available(monkeypatch):
    monkeypatch.setattr("easytap.notifications._tray_available", lambda: True)


class TestNotifier:

    def test_posts_timer_ended(self, qapp, tray_available):
        tray = _FakeTray()
        notifier = Notifier(tray)
        assert notifier.notify_expired() is True
        assert tray.messages == [(EXPIRED_TITLE, EXPIRED_BODY)]

    def test_disabled_sends_nothing(self, qapp, tray_available):
        tray = _FakeTray()
        notifier = Notifier(tray, enabled=False)
        assert notifier.notify_expired() is False
        assert tray.messages == []

    def test_delivery_failure_is_logged_not_raised(self, qapp, tray_available, caplog):
        notifier = Notifier(_FakeTray(fail=True))
        with caplog.at_level(logging.WARNING, logger="easytap.notifications"):
            assert notifier.notify_expired() is False
        assert "not delivered" in caplog.text

    def test_no_tray_is_logged(self, qapp, caplog):
        notifier = Notifier(None)
        with caplog.at_level(logging.WARNING, logger="easytap.notifications"):
            assert notifier.notify_expired() is False
        assert "no system tray" in caplog.text

    def test_wired_to_expiry_bus(self, qapp, tray_available, manager, bus, clock, ticks):
        tray = _FakeTray()
        notifier = Notifier(tray)
        bus.expired.connect(notifier.notify_expired)
        manager.start()
        run_for(clock, ticks, 30.0)
        assert tray.messages == [(EXPIRED_TITLE, EXPIRED_BODY)]


class TestExpiryBus:

    def test_default_bus_is_shared(self, qapp):
        assert default_bus() is default_bus()

    def test_many_observers(self, qapp):
        bus = ExpiryBus()
        a, b = SignalCollector(), SignalCollector()
        bus.expired.connect(a)
        bus.expired.connect(b)
        bus.expired.emit()
        assert len(a) == len(b) == 1
