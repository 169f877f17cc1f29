"""Observer plumbing between the countdown and whatever displays it.

Two channels
------------
- ``TimerEventListener``: the single direct observer of a ``TimerManager``
  (normally the main window).  Held by weak reference.
- ``ExpiryBus``: a fire-and-forget broadcast of "a countdown ended".  Any
  number of slots may connect to ``expired``; the payload is empty.
"""

from __future__ import annotations

from typing import Protocol

from PyQt6.QtCore import QObject, pyqtSignal


class TimerEventListener(Protocol):
    def on_tick(self, remaining: float) -> None: ...

    def on_run_state_changed(self, is_running: bool) -> None: ...

    def on_expired(self) -> None: ...


class ExpiryBus(QObject):
    """Process-wide expiry broadcast.

    Signals
    -------
    expired()
        Emitted once each time a countdown reaches zero.
    """

    expired = pyqtSignal()


_default_bus: ExpiryBus | None = None


def default_bus() -> ExpiryBus:
    """The shared bus, created lazily on first use."""
    global _default_bus
    if _default_bus is None:
        _default_bus = ExpiryBus()
    return _default_bus
