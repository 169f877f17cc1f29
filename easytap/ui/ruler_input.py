"""Drag handling for the duration ruler, kept free of Qt so it can be tested.

The widget feeds raw pointer motion in; ``RulerInput`` turns it into a
clamped offset, pushes the snapped duration into the ``TimerManager`` and
tells the widget where to animate to when the drag ends.
"""

from __future__ import annotations

from ..timer.manager import TimerManager
from ..timer.quantizer import (
    clamp_offset,
    duration_to_offset,
    nearest_tick_offset,
    offset_to_duration,
    ruler_content_width,
)


VELOCITY_FACTOR = 0.005  # seconds of fling added per pixel/second of velocity


def format_time(seconds: float) -> str:
    """``MM:SS`` for the big label.  Negative values show as ``00:00``."""
    total = max(0, int(seconds))
    minutes, secs = divmod(total, 60)
    return f"{minutes:02d}:{secs:02d}"


class RulerInput:
    """Scroll state of the ruler and its contract with the timer."""

    def __init__(self, manager: TimerManager, viewport_width: float = 0.0) -> None:
        self._manager = manager
        self._viewport_width = max(0.0, viewport_width)
        self._offset = duration_to_offset(manager.user_set_duration, manager.geometry)

    @property
    def offset(self) -> float:
        return self._offset

    @property
    def viewport_width(self) -> float:
        return self._viewport_width

    @property
    def content_width(self) -> float:
        return ruler_content_width(self._manager.geometry, self._viewport_width)

    def set_viewport_width(self, width: float) -> None:
        self._viewport_width = max(0.0, width)
        self._offset = clamp_offset(self._offset, self.content_width, self._viewport_width)

    def drag(self, translation: float, velocity: float = 0.0) -> float:
        """Apply one drag step and return the new offset.

        Dragging right (positive *translation*) moves the ruler right, i.e.
        towards shorter durations.  Ignored while the timer runs.
        """
        if self._manager.is_running:
            return self._offset
        delta = translation + velocity * VELOCITY_FACTOR
        self._offset = clamp_offset(
            self._offset - delta, self.content_width, self._viewport_width,
        )
        self._manager.set_duration(
            offset_to_duration(self._offset, self._manager.geometry)
        )
        return self._offset

    def release(self) -> float:
        """End the drag; returns the offset to snap back to.

        The target is the nearest tick, kept between the ticks of the
        shortest and longest allowed durations so the indicator always
        rests on the value the label shows.
        """
        geometry = self._manager.geometry
        lowest = duration_to_offset(geometry.min_duration, geometry)
        highest = duration_to_offset(geometry.max_duration, geometry)
        snapped = nearest_tick_offset(self._offset, geometry)
        self._offset = clamp_offset(
            max(lowest, min(snapped, highest)),
            self.content_width,
            self._viewport_width,
        )
        return self._offset

    def sync_to_duration(self, duration: float | None = None) -> float:
        """Re-centre the ruler on *duration* (default: the chosen one)."""
        if duration is None:
            duration = self._manager.user_set_duration
        self._offset = clamp_offset(
            duration_to_offset(duration, self._manager.geometry),
            self.content_width,
            self._viewport_width,
        )
        return self._offset
