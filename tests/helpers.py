"""Shared test helpers for EasyTap."""

from __future__ import annotations

from typing import Callable


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class ManualTickSource:
    """TickSource that only fires when the test says so."""

    def __init__(self) -> None:
        self._callback: Callable[[], None] | None = None
        self.starts = 0
        self.stops = 0

    @property
    def is_active(self) -> bool:
        return self._callback is not None

    def start(self, callback: Callable[[], None]) -> None:
        assert self._callback is None, "tick source started twice"
        self._callback = callback
        self.starts += 1

    def stop(self) -> None:
        self._callback = None
        self.stops += 1

    def fire(self) -> None:
        if self._callback is not None:
            self._callback()


class RecordingListener:
    """TimerEventListener that records every callback in order."""

    def __init__(self) -> None:
        self.events: list[tuple] = []

    def on_tick(self, remaining: float) -> None:
        self.events.append(("tick", remaining))

    def on_run_state_changed(self, is_running: bool) -> None:
        self.events.append(("running", is_running))

    def on_expired(self) -> None:
        self.events.append(("expired",))

    @property
    def ticks(self) -> list[float]:
        return [e[1] for e in self.events if e[0] == "tick"]

    @property
    def expirations(self) -> int:
        return sum(1 for e in self.events if e[0] == "expired")

    @property
    def last(self):
        return self.events[-1] if self.events else None

    def clear(self) -> None:
        self.events.clear()


def run_for(clock: FakeClock, ticks: ManualTickSource, seconds: float,
            period_ms: int = 100) -> None:
    """Fire one tick every *period_ms* of fake time for *seconds*.

    Times are computed from integer milliseconds so 300 ticks of 100 ms
    land on exactly 30.0 s.
    """
    base = clock.now
    steps = int(round(seconds * 1000 / period_ms))
    for i in range(1, steps + 1):
        if not ticks.is_active:
            break
        clock.now = base + (i * period_ms) / 1000
        ticks.fire()


class SignalCollector:
    """Utility to capture pyqtSignal emissions into a list."""

    def __init__(self):
        self.items: list = []

    def __call__(self, *args):
        self.items.append(args if len(args) > 1 else args[0] if args else None)

    def __len__(self):
        return len(self.items)
