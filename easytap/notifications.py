"""Desktop alert shown when a countdown ends.

Delivery goes through a ``QSystemTrayIcon``.  Any failure (no tray on this
desktop, platform error) is logged and dropped; an alert that cannot be
shown must never take the timer down with it.
"""

from __future__ import annotations

import logging

from PyQt6.QtCore import QObject
from PyQt6.QtWidgets import QSystemTrayIcon


log = logging.getLogger(__name__)

EXPIRED_TITLE = "Timer Ended"
EXPIRED_BODY = "Tap to dismiss"


def _tray_available() -> bool:
    return QSystemTrayIcon.isSystemTrayAvailable()


class Notifier(QObject):
    """Posts the "Timer Ended" alert."""

    def __init__(
        self,
        tray_icon: QSystemTrayIcon | None = None,
        parent: QObject | None = None,
        *,
        enabled: bool = True,
    ) -> None:
        super().__init__(parent)
        self._tray_icon = tray_icon
        self._enabled = enabled

    @property
    def enabled(self) -> bool:
        return self._enabled

    def set_enabled(self, enabled: bool) -> None:
        self._enabled = enabled

    def notify_expired(self) -> bool:
        """Slot for ``ExpiryBus.expired``.  Returns True if the alert was posted."""
        return self.send(EXPIRED_TITLE, EXPIRED_BODY)

    def send(self, title: str, body: str) -> bool:
        if not self._enabled:
            return False
        if self._tray_icon is None or not _tray_available():
            log.warning("notification %r not delivered: no system tray", title)
            return False
        try:
            self._tray_icon.showMessage(title, body)
        except Exception:
            log.warning("notification %r not delivered", title, exc_info=True)
            return False
        return True
