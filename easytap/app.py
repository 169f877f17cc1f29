"""Main application window for EasyTap.

Layout (top → bottom):
    - Big MM:SS label ("Tap to Start" until the first update)
    - Duration ruler with centre indicator

Interaction:
    - Click / tap anywhere outside the ruler → start or stop
    - Swipe down (drag ≥ 80 px downward) or Escape → reset
    - Space → start or stop, Up / Down → ±one tick while idle
"""

from __future__ import annotations

import logging
import time
from typing import Callable

from PyQt6.QtCore import Qt, QPointF
from PyQt6.QtGui import (
    QCloseEvent, QColor, QFont, QIcon, QKeyEvent, QMouseEvent, QPainter, QPixmap,
)
from PyQt6.QtWidgets import (
    QMainWindow, QWidget, QVBoxLayout, QLabel, QSystemTrayIcon,
)

from .audio.sounds import SoundManager
from .notifications import Notifier
from .settings import Settings, load_settings, save_settings
from .timer.events import ExpiryBus
from .timer.manager import TimerManager
from .timer.tick_source import QtTickSource, TickSource
from .ui.ruler_input import format_time
from .ui.ruler_widget import RulerWidget

log = logging.getLogger(__name__)

IDLE_PROMPT = "Tap to Start"
TRAY_TOOLTIP = "EasyTap Timer"
SWIPE_MIN_PX = 80
RUNNING_BG = "#FF3B30"
IDLE_BG = "#FFFFFF"


def _make_app_icon() -> QIcon:
    """Plain red dot; used for the window and the tray."""
    pixmap = QPixmap(64, 64)
    pixmap.fill(QColor(0, 0, 0, 0))
    p = QPainter(pixmap)
    p.setRenderHint(QPainter.RenderHint.Antialiasing)
    p.setPen(Qt.PenStyle.NoPen)
    p.setBrush(QColor(RUNNING_BG))
    p.drawEllipse(4, 4, 56, 56)
    p.end()
    return QIcon(pixmap)


class EasyTapWindow(QMainWindow):
    """The single timer screen.  Acts as the manager's listener.

    Settings loaded from disk (no *settings* passed in) are written back,
    with the current window size, when the window closes.
    """

    def __init__(
        self,
        settings: Settings | None = None,
        *,
        clock: Callable[[], float] = time.monotonic,
        tick_source: TickSource | None = None,
        bus: ExpiryBus | None = None,
        sound_manager: SoundManager | None = None,
    ) -> None:
        super().__init__()
        self._persist_settings = settings is None
        self._settings = settings or load_settings()
        self.setWindowTitle("EasyTap Timer")
        self.resize(self._settings.window_width, self._settings.window_height)
        self.setWindowIcon(_make_app_icon())

        # ── timer ─────────────────────────────────────────────────────
        self._manager = TimerManager(
            self,
            geometry=self._settings.geometry(),
            initial_duration=self._settings.initial_duration,
            tick_source=tick_source or QtTickSource(
                self, period_ms=self._settings.tick_period_ms,
            ),
            clock=clock,
            bus=bus,
        )

        # ── audio / alerts ────────────────────────────────────────────
        self._sound_manager = sound_manager or SoundManager(self)
        self._sound_manager.set_enabled(self._settings.sound_enabled)
        self._sound_manager.set_volume(self._settings.sound_volume)

        self._tray_icon = QSystemTrayIcon(_make_app_icon(), self)
        self._tray_icon.setToolTip(TRAY_TOOLTIP)
        if QSystemTrayIcon.isSystemTrayAvailable():
            self._tray_icon.show()
        self._notifier = Notifier(
            self._tray_icon, self, enabled=self._settings.notifications_enabled,
        )

        self._build_ui()

        # ── wire ──────────────────────────────────────────────────────
        self._manager.set_listener(self)
        self._manager.bus.expired.connect(self._notifier.notify_expired)
        self._manager.bus.expired.connect(self._on_bus_expired)
        self._ruler.snapped.connect(lambda _offset: self._sound_manager.play("snap"))

        self._press_pos: QPointF | None = None

    # ══════════════════════════════════════════════════════════════════
    #  BUILD
    # ══════════════════════════════════════════════════════════════════

    def _build_ui(self) -> None:
        central = QWidget(self)
        self.setCentralWidget(central)
        self._central = central
        self._apply_background(False)

        layout = QVBoxLayout(central)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.addStretch(1)

        self._time_label = QLabel(IDLE_PROMPT, central)
        self._time_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        font = QFont()
        font.setPointSize(48)
        font.setBold(True)
        font.setStyleHint(QFont.StyleHint.Monospace)
        self._time_label.setFont(font)
        layout.addWidget(self._time_label)

        layout.addSpacing(20)

        self._ruler = RulerWidget(self._manager, central)
        layout.addWidget(self._ruler)
        layout.addStretch(1)

    def _apply_background(self, running: bool) -> None:
        colour = RUNNING_BG if running else IDLE_BG
        self._central.setStyleSheet(f"background-color: {colour};")

    # ══════════════════════════════════════════════════════════════════
    #  PUBLIC
    # ══════════════════════════════════════════════════════════════════

    @property
    def manager(self) -> TimerManager:
        return self._manager

    @property
    def ruler(self) -> RulerWidget:
        return self._ruler

    @property
    def time_text(self) -> str:
        return self._time_label.text()

    @property
    def tray_tooltip(self) -> str:
        return self._tray_icon.toolTip()

    def toggle(self) -> None:
        if self._manager.is_running:
            self._manager.stop()
        else:
            self._manager.start()

    def reset(self) -> None:
        self._manager.reset()
        self._ruler.sync_to_duration()

    # ══════════════════════════════════════════════════════════════════
    #  TimerEventListener
    # ══════════════════════════════════════════════════════════════════

    def on_tick(self, remaining: float) -> None:
        self._time_label.setText(format_time(remaining))
        if self._manager.is_running:
            percent = round(self._manager.percent_complete * 100)
            self._tray_icon.setToolTip(
                f"{TRAY_TOOLTIP}: {format_time(remaining)} left ({percent}%)"
            )

    def on_run_state_changed(self, is_running: bool) -> None:
        self._apply_background(is_running)
        if is_running:
            self._sound_manager.play("timer_start")
        else:
            self._tray_icon.setToolTip(TRAY_TOOLTIP)

    def on_expired(self) -> None:
        self._time_label.setText(format_time(self._manager.remaining))
        self._ruler.sync_to_duration()

    def _on_bus_expired(self) -> None:
        self._sound_manager.play("timer_end")

    # ══════════════════════════════════════════════════════════════════
    #  INPUT
    # ══════════════════════════════════════════════════════════════════

    def mousePressEvent(self, event: QMouseEvent) -> None:  # type: ignore[override]
        if event.button() == Qt.MouseButton.LeftButton:
            self._press_pos = event.position()
        super().mousePressEvent(event)

    def mouseReleaseEvent(self, event: QMouseEvent) -> None:  # type: ignore[override]
        if self._press_pos is None:
            super().mouseReleaseEvent(event)
            return
        start, self._press_pos = self._press_pos, None
        dx = event.position().x() - start.x()
        dy = event.position().y() - start.y()
        if dy >= SWIPE_MIN_PX and abs(dy) > abs(dx):
            self.reset()
        elif abs(dx) < 10 and abs(dy) < 10:
            self.toggle()
        event.accept()

    def keyPressEvent(self, event: QKeyEvent) -> None:  # type: ignore[override]
        key = event.key()
        step = self._manager.geometry.time_step
        if key == Qt.Key.Key_Space:
            self.toggle()
        elif key == Qt.Key.Key_Escape:
            self.reset()
        elif key == Qt.Key.Key_Up:
            self._manager.adjust(step)
            self._ruler.sync_to_duration()
        elif key == Qt.Key.Key_Down:
            self._manager.adjust(-step)
            self._ruler.sync_to_duration()
        else:
            super().keyPressEvent(event)
            return
        event.accept()

    # ══════════════════════════════════════════════════════════════════
    #  LIFECYCLE
    # ══════════════════════════════════════════════════════════════════

    def closeEvent(self, event: QCloseEvent) -> None:  # type: ignore[override]
        if self._persist_settings:
            self._save_settings()
        super().closeEvent(event)

    def _save_settings(self) -> None:
        self._settings.window_width = self.width()
        self._settings.window_height = self.height()
        try:
            save_settings(self._settings)
        except OSError:
            log.warning("could not save settings", exc_info=True)
