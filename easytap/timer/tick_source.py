"""Periodic tick sources that drive the countdown.

``TimerManager`` never talks to ``QTimer`` directly.  It receives a
``TickSource`` so tests can fire ticks by hand against a fake clock.
"""

from __future__ import annotations

from typing import Callable, Protocol

from PyQt6.QtCore import QObject, QTimer


DEFAULT_TICK_PERIOD_MS = 100


class TickSource(Protocol):
    """A cancellable periodic callback.

    At most one callback is installed at a time; ``stop()`` must cancel it
    synchronously so no stale tick fires after it returns.
    """

    @property
    def is_active(self) -> bool: ...

    def start(self, callback: Callable[[], None]) -> None: ...

    def stop(self) -> None: ...


class QtTickSource(QObject):
    """``TickSource`` backed by a repeating ``QTimer`` on the Qt event loop."""

    def __init__(
        self,
        parent: QObject | None = None,
        *,
        period_ms: int = DEFAULT_TICK_PERIOD_MS,
    ) -> None:
        super().__init__(parent)
        if period_ms <= 0:
            raise ValueError(f"period_ms must be positive, got {period_ms}")
        self._callback: Callable[[], None] | None = None
        self._qt_timer = QTimer(self)
        self._qt_timer.setInterval(period_ms)
        self._qt_timer.timeout.connect(self._on_timeout)

    @property
    def is_active(self) -> bool:
        return self._qt_timer.isActive()

    @property
    def period_ms(self) -> int:
        return self._qt_timer.interval()

    def start(self, callback: Callable[[], None]) -> None:
        if self._qt_timer.isActive():
            raise RuntimeError("tick source is already running")
        self._callback = callback
        self._qt_timer.start()

    def stop(self) -> None:
        self._qt_timer.stop()
        self._callback = None

    def _on_timeout(self) -> None:
        if self._callback is not None:
            self._callback()
