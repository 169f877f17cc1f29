"""Horizontal duration ruler rendered with QPainter.

- One tick per ``time_step``; a tall tick every minute.
- A fixed red indicator marks the centre; the ruler scrolls underneath.
- Drag (or wheel) to pick a duration; on release the ruler eases onto the
  nearest tick.
"""

from __future__ import annotations

import time

from PyQt6.QtCore import Qt, QPointF, QVariantAnimation, QEasingCurve, pyqtSignal
from PyQt6.QtGui import QPainter, QPen, QColor, QMouseEvent, QWheelEvent
from PyQt6.QtWidgets import QWidget

from ..timer.manager import TimerManager
from ..timer.quantizer import MAJOR_TICK_EVERY, tick_count
from .ruler_input import RulerInput


class RulerWidget(QWidget):
    """Scrollable tick ruler driving ``TimerManager.set_duration``."""

    RULER_HEIGHT = 50
    MINOR_TICK = 15
    MAJOR_TICK = 30
    TICK_WIDTH = 2
    INDICATOR_WIDTH = 3
    SNAP_MS = 200

    snapped = pyqtSignal(float)  # offset the ruler settled on

    def __init__(self, manager: TimerManager, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.setFixedHeight(self.RULER_HEIGHT)
        self.setMouseTracking(False)

        self._manager = manager
        self._input = RulerInput(manager, float(self.width()))

        self._last_x: float | None = None
        self._last_t: float = 0.0
        self._velocity: float = 0.0

        self._tick_color = QColor("#000000")
        self._indicator_color = QColor("#FF3B30")

        self._snap_anim = QVariantAnimation(self)
        self._snap_anim.setDuration(self.SNAP_MS)
        self._snap_anim.setEasingCurve(QEasingCurve.Type.OutCubic)
        self._snap_anim.valueChanged.connect(self._on_snap_anim)
        self._display_offset: float = self._input.offset

    # ── public API ────────────────────────────────────────────────────

    @property
    def ruler_input(self) -> RulerInput:
        return self._input

    @property
    def display_offset(self) -> float:
        return self._display_offset

    def sync_to_duration(self, duration: float | None = None) -> None:
        """Jump (no animation) so *duration* sits under the indicator."""
        self._snap_anim.stop()
        self._display_offset = self._input.sync_to_duration(duration)
        self.update()

    # ── Qt events ─────────────────────────────────────────────────────

    def resizeEvent(self, event) -> None:  # type: ignore[override]
        self._input.set_viewport_width(float(self.width()))
        self._display_offset = self._input.offset
        super().resizeEvent(event)

    def mousePressEvent(self, event: QMouseEvent) -> None:  # type: ignore[override]
        if event.button() != Qt.MouseButton.LeftButton:
            return
        self._snap_anim.stop()
        self._last_x = event.position().x()
        self._last_t = time.monotonic()
        self._velocity = 0.0
        event.accept()

    def mouseMoveEvent(self, event: QMouseEvent) -> None:  # type: ignore[override]
        if self._last_x is None:
            return
        x = event.position().x()
        now = time.monotonic()
        translation = x - self._last_x
        dt = now - self._last_t
        self._velocity = translation / dt if dt > 0 else 0.0
        self._last_x, self._last_t = x, now

        self._display_offset = self._input.drag(translation, self._velocity)
        self.update()
        event.accept()

    def mouseReleaseEvent(self, event: QMouseEvent) -> None:  # type: ignore[override]
        if self._last_x is None:
            return
        self._last_x = None
        self._animate_to(self._input.release())
        event.accept()

    def wheelEvent(self, event: QWheelEvent) -> None:  # type: ignore[override]
        delta = event.pixelDelta().x() or event.angleDelta().y() / 8
        if not delta:
            return
        self._snap_anim.stop()
        self._input.drag(float(delta))
        self._animate_to(self._input.release())
        event.accept()

    # ── animation ─────────────────────────────────────────────────────

    def _animate_to(self, target: float) -> None:
        self._snap_anim.stop()
        self._snap_anim.setStartValue(float(self._display_offset))
        self._snap_anim.setEndValue(float(target))
        self._snap_anim.start()
        self.snapped.emit(target)

    def _on_snap_anim(self, value) -> None:
        self._display_offset = float(value)
        self.update()

    # ── painting ──────────────────────────────────────────────────────

    def paintEvent(self, event) -> None:  # type: ignore[override]
        p = QPainter(self)
        p.setRenderHint(QPainter.RenderHint.Antialiasing)

        geometry = self._manager.geometry
        centre_x = self.width() / 2
        centre_y = self.height() / 2
        interval = geometry.tick_interval_px

        # Only ticks inside the viewport are drawn
        first = max(0, int((self._display_offset - centre_x) // interval))
        last = min(tick_count(geometry), int((self._display_offset + centre_x) // interval) + 1)

        p.setPen(QPen(self._tick_color, self.TICK_WIDTH))
        for i in range(first, last + 1):
            x = centre_x + i * interval - self._display_offset
            h = self.MAJOR_TICK if i % MAJOR_TICK_EVERY == 0 else self.MINOR_TICK
            p.drawLine(QPointF(x, centre_y - h / 2), QPointF(x, centre_y + h / 2))

        p.setPen(QPen(self._indicator_color, self.INDICATOR_WIDTH))
        p.drawLine(QPointF(centre_x + 1, 0), QPointF(centre_x + 1, self.height()))
        p.end()
