"""Countdown state machine for EasyTap.

States
------
IDLE      Not running.  The user may pick a duration on the ruler.
RUNNING   Counting down; the tick source fires every ~100 ms.

Transitions
-----------
IDLE → RUNNING          (start; resumes a stopped countdown)
RUNNING → IDLE          (stop / reset)
RUNNING → IDLE          (remaining reaches 0: expiry)

Expiry is a transient step, not a resting state: the manager settles fully
into IDLE, with ``remaining`` back at the user's chosen duration, before
``on_expired()`` and the bus broadcast fire.  A listener reacting to expiry
can therefore call ``start()`` or ``reset()`` straight away.

Drift
-----
``remaining`` is always ``initial_duration - (clock() - start_timestamp)``.
It is never decremented per tick, so timer jitter does not accumulate.
"""

from __future__ import annotations

import logging
import time
import weakref
from enum import Enum
from typing import Callable

from PyQt6.QtCore import QObject

from .events import ExpiryBus, TimerEventListener, default_bus
from .quantizer import INITIAL_DURATION, TickGeometry, quantize_duration
from .tick_source import QtTickSource, TickSource


log = logging.getLogger(__name__)


class TimerState(Enum):
    IDLE = "idle"
    RUNNING = "running"


class TimerManager(QObject):
    """Single countdown driven by an injectable clock and tick source.

    Invalid-state calls (editing while running, starting twice, stopping
    while idle) are harmless no-ops; out-of-range durations are clamped.
    Nothing here raises during normal use.
    """

    def __init__(
        self,
        parent: QObject | None = None,
        *,
        geometry: TickGeometry | None = None,
        initial_duration: float = INITIAL_DURATION,
        clock: Callable[[], float] = time.monotonic,
        tick_source: TickSource | None = None,
        bus: ExpiryBus | None = None,
    ) -> None:
        super().__init__(parent)
        self._geometry = geometry or TickGeometry()
        self._clock = clock
        self._tick_source: TickSource = (
            tick_source if tick_source is not None else QtTickSource(self)
        )
        self._bus = bus if bus is not None else default_bus()
        self._listener_ref: weakref.ReferenceType | None = None

        duration = quantize_duration(initial_duration, self._geometry)
        self._state: TimerState = TimerState.IDLE
        self._user_set_duration: float = duration
        self._initial_duration: float = duration
        self._remaining: float = duration
        self._start_timestamp: float | None = None

    # ══════════════════════════════════════════════════════════════════
    #  PUBLIC PROPERTIES
    # ══════════════════════════════════════════════════════════════════

    @property
    def state(self) -> TimerState:
        return self._state

    @property
    def is_running(self) -> bool:
        return self._state == TimerState.RUNNING

    @property
    def geometry(self) -> TickGeometry:
        return self._geometry

    @property
    def user_set_duration(self) -> float:
        """Last duration the user chose while idle."""
        return self._user_set_duration

    @property
    def initial_duration(self) -> float:
        """Baseline captured when the current run began or resumed."""
        return self._initial_duration

    @property
    def remaining(self) -> float:
        """Seconds left, as of the most recent tick."""
        return self._remaining

    @property
    def bus(self) -> ExpiryBus:
        return self._bus

    @property
    def percent_complete(self) -> float:
        """0.0 → 1.0 progress through the current run (0.0 when idle)."""
        if not self.is_running or self._initial_duration <= 0:
            return 0.0
        consumed = self._initial_duration - self._remaining
        return max(0.0, min(1.0, consumed / self._initial_duration))

    # ── listener ──────────────────────────────────────────────────────

    def set_listener(self, listener: TimerEventListener | None) -> None:
        """Register the direct observer, replacing any previous one.

        Only a weak reference is kept; the caller owns the listener.
        """
        self._listener_ref = weakref.ref(listener) if listener is not None else None

    @property
    def listener(self) -> TimerEventListener | None:
        if self._listener_ref is None:
            return None
        return self._listener_ref()

    # ══════════════════════════════════════════════════════════════════
    #  CONTROLS
    # ══════════════════════════════════════════════════════════════════

    def set_duration(self, duration: float) -> None:
        """Choose a new duration.  Only valid from IDLE."""
        if self.is_running:
            log.debug("set_duration(%s) ignored while running", duration)
            return
        self._apply_idle_duration(quantize_duration(duration, self._geometry))

    def adjust(self, delta_seconds: float) -> None:
        """Nudge the chosen duration by *delta_seconds*.  Only valid from IDLE."""
        if self.is_running:
            log.debug("adjust(%s) ignored while running", delta_seconds)
            return
        self._apply_idle_duration(
            quantize_duration(self._user_set_duration + delta_seconds, self._geometry)
        )

    def start(self) -> None:
        """Begin counting down from ``remaining``.  Only valid from IDLE."""
        if self.is_running:
            log.debug("start() ignored: already running")
            return
        self._start_timestamp = self._clock()
        self._initial_duration = self._remaining
        self._state = TimerState.RUNNING
        self._tick_source.start(self._on_tick)
        log.debug("started with %.1fs remaining", self._initial_duration)
        self._notify_run_state(True)

    def stop(self) -> None:
        """Freeze the countdown; a later ``start()`` resumes it."""
        if not self.is_running:
            return
        self._tick_source.stop()
        self._start_timestamp = None
        self._initial_duration = self._remaining
        self._state = TimerState.IDLE
        log.debug("stopped with %.1fs remaining", self._remaining)
        self._notify_run_state(False)

    def reset(self) -> None:
        """Stop and discard progress, back to the user's chosen duration."""
        self.stop()
        if self._remaining == self._user_set_duration:
            return
        self._remaining = self._user_set_duration
        self._initial_duration = self._user_set_duration
        self._notify_tick(self._remaining)

    # ══════════════════════════════════════════════════════════════════
    #  INTERNAL — timer mechanics
    # ══════════════════════════════════════════════════════════════════

    def _apply_idle_duration(self, duration: float) -> None:
        self._user_set_duration = duration
        self._initial_duration = duration
        self._remaining = duration
        self._notify_tick(duration)

    def _on_tick(self) -> None:
        if self._start_timestamp is None:
            log.warning("tick without a start timestamp; ignored")
            return
        elapsed = self._clock() - self._start_timestamp
        remaining = self._initial_duration - elapsed
        self._remaining = remaining
        self._notify_tick(remaining)

        if remaining <= 0:
            self._expire()

    def _expire(self) -> None:
        # A listener may already have stopped the run from the final on_tick
        was_running = self.is_running
        self._tick_source.stop()
        self._start_timestamp = None
        self._state = TimerState.IDLE
        self._initial_duration = self._user_set_duration
        self._remaining = self._user_set_duration
        log.info("countdown of %.0fs expired", self._user_set_duration)

        if was_running:
            self._notify_run_state(False)
        listener = self.listener
        if listener is not None:
            listener.on_expired()
        self._bus.expired.emit()

    def _notify_tick(self, remaining: float) -> None:
        listener = self.listener
        if listener is not None:
            listener.on_tick(remaining)

    def _notify_run_state(self, is_running: bool) -> None:
        listener = self.listener
        if listener is not None:
            listener.on_run_state_changed(is_running)
