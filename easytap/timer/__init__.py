"""Timer package."""

from .events import ExpiryBus, TimerEventListener, default_bus
from .manager import TimerManager, TimerState
from .quantizer import (
    TickGeometry,
    clamp_duration,
    clamp_offset,
    duration_to_offset,
    nearest_tick_offset,
    offset_to_duration,
    quantize_duration,
    ruler_content_width,
    tick_count,
    INITIAL_DURATION,
    MAJOR_TICK_EVERY,
)
from .tick_source import QtTickSource, TickSource, DEFAULT_TICK_PERIOD_MS

__all__ = [
    "ExpiryBus",
    "TimerEventListener",
    "default_bus",
    "TimerManager",
    "TimerState",
    "TickGeometry",
    "clamp_duration",
    "clamp_offset",
    "duration_to_offset",
    "nearest_tick_offset",
    "offset_to_duration",
    "quantize_duration",
    "ruler_content_width",
    "tick_count",
    "INITIAL_DURATION",
    "MAJOR_TICK_EVERY",
    "QtTickSource",
    "TickSource",
    "DEFAULT_TICK_PERIOD_MS",
]
