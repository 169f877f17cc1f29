"""Ruler geometry for EasyTap.

Maps a horizontal scroll offset on the ruler to a countdown duration and
back again.  Every function here is pure: no Qt, no state.

Geometry
--------
One tick on the ruler is ``tick_interval_px`` pixels wide and is worth
``time_step`` seconds, so::

    offset   = (duration / time_step) * tick_interval_px
    duration = round(offset / tick_interval_px) * time_step

The inverse rounds to the nearest tick before converting, which makes the
mapping idempotent under snapping: offset → duration → offset reproduces
the *snapped* offset, not the raw one.
"""

from __future__ import annotations

import math
from dataclasses import dataclass


# ── defaults ─────────────────────────────────────────────────────────────

TICK_INTERVAL_PX = 10.0
TIME_STEP = 5.0
MIN_DURATION = 5.0
MAX_DURATION = 600.0
INITIAL_DURATION = 30.0
MAJOR_TICK_EVERY = 12  # 12 ticks × 5 s = one minute


@dataclass(frozen=True)
class TickGeometry:
    """Constant parameters of the ruler mapping."""

    tick_interval_px: float = TICK_INTERVAL_PX
    time_step: float = TIME_STEP
    min_duration: float = MIN_DURATION
    max_duration: float = MAX_DURATION

    def __post_init__(self) -> None:
        if self.tick_interval_px <= 0:
            raise ValueError(
                f"tick_interval_px must be positive, got {self.tick_interval_px}"
            )
        if self.time_step <= 0:
            raise ValueError(f"time_step must be positive, got {self.time_step}")
        if not (0 <= self.min_duration <= self.max_duration):
            raise ValueError(
                f"bounds must satisfy 0 <= min <= max, got "
                f"[{self.min_duration}, {self.max_duration}]"
            )
        for name in ("min_duration", "max_duration"):
            value = getattr(self, name)
            if not _is_multiple(value, self.time_step):
                raise ValueError(
                    f"{name} must be a multiple of time_step ({self.time_step}), "
                    f"got {value}"
                )


# ── helpers ──────────────────────────────────────────────────────────────


def _is_multiple(value: float, step: float) -> bool:
    ratio = value / step
    return math.isclose(ratio, round(ratio), abs_tol=1e-9)


def _round_half_away(x: float) -> float:
    """Round to the nearest integer, halves away from zero (not banker's)."""
    return math.copysign(math.floor(abs(x) + 0.5), x)


# ── duration side ───────────────────────────────────────────────────────


def clamp_duration(duration: float, geometry: TickGeometry) -> float:
    return max(geometry.min_duration, min(duration, geometry.max_duration))


def quantize_duration(duration: float, geometry: TickGeometry) -> float:
    """Snap *duration* to the nearest multiple of ``time_step``, then clamp."""
    snapped = _round_half_away(duration / geometry.time_step) * geometry.time_step
    return clamp_duration(snapped, geometry) + 0.0  # normalise -0.0


def tick_count(geometry: TickGeometry) -> int:
    """Number of tick intervals between 0 s and ``max_duration``."""
    return int(round(geometry.max_duration / geometry.time_step))


# ── offset ↔ duration ─────────────────────────────────────────────────────


def offset_to_duration(offset: float, geometry: TickGeometry) -> float:
    """Map a scroll offset to a quantized, clamped duration in seconds.

    Total: negative offsets and offsets past the end of the ruler are
    clamped on the duration side.
    """
    ticks = _round_half_away(offset / geometry.tick_interval_px)
    return clamp_duration(ticks * geometry.time_step, geometry) + 0.0


def duration_to_offset(duration: float, geometry: TickGeometry) -> float:
    """Pixel offset at which *duration* sits under the indicator."""
    return (duration / geometry.time_step) * geometry.tick_interval_px


def nearest_tick_offset(offset: float, geometry: TickGeometry) -> float:
    """Offset of the tick closest to *offset*.

    Geometry-only rounding, used for the snap-back animation at the end of
    a drag; duration bounds are not applied.
    """
    interval = geometry.tick_interval_px
    return _round_half_away(offset / interval) * interval + 0.0


# ── offset bounds ────────────────────────────────────────────────────────


def clamp_offset(offset: float, content_width: float, viewport_width: float) -> float:
    """Bound a raw drag offset to ``[0, content_width - viewport_width]``.

    A viewport as wide as (or wider than) the content collapses the range
    to the single point 0.
    """
    upper = max(0.0, content_width - viewport_width)
    return max(0.0, min(offset, upper))


def ruler_content_width(geometry: TickGeometry, viewport_width: float) -> float:
    """Scrollable width of the ruler.

    Half a viewport of padding on each side lets the first and last tick
    reach the centre indicator, so the largest valid offset maps exactly
    to ``max_duration``.
    """
    return tick_count(geometry) * geometry.tick_interval_px + viewport_width
