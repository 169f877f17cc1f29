"""Application settings with JSON persistence.

Settings are stored at:
    ~/Library/Application Support/EasyTap/settings.json

Only preferences live here.  The countdown itself is never saved.

Usage::

    settings = load_settings()
    settings.sound_volume = 50
    save_settings(settings)
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, asdict, fields
from pathlib import Path

from .timer.quantizer import (
    TickGeometry,
    TICK_INTERVAL_PX, TIME_STEP, MIN_DURATION, MAX_DURATION, INITIAL_DURATION,
)
from .timer.tick_source import DEFAULT_TICK_PERIOD_MS


log = logging.getLogger(__name__)

APP_SUPPORT_DIR = Path.home() / "Library" / "Application Support" / "EasyTap"
SETTINGS_PATH = APP_SUPPORT_DIR / "settings.json"


@dataclass
class Settings:
    """All user-configurable preferences."""

    # ── ruler ─────────────────────────────────────────────────────────
    tick_interval_px: float = TICK_INTERVAL_PX
    time_step: float = TIME_STEP              # seconds per tick
    min_duration: float = MIN_DURATION
    max_duration: float = MAX_DURATION

    # ── timer ─────────────────────────────────────────────────────────
    initial_duration: float = INITIAL_DURATION
    tick_period_ms: int = DEFAULT_TICK_PERIOD_MS

    # ── audio ─────────────────────────────────────────────────────────
    sound_enabled: bool = True
    sound_volume: int = 70                 # 0-100

    # ── notifications ─────────────────────────────────────────────────
    notifications_enabled: bool = True

    # ── window ────────────────────────────────────────────────────────
    window_width: int = 390
    window_height: int = 640

    def geometry(self) -> TickGeometry:
        """Ruler mapping built from these settings (may raise ValueError)."""
        return TickGeometry(
            tick_interval_px=self.tick_interval_px,
            time_step=self.time_step,
            min_duration=self.min_duration,
            max_duration=self.max_duration,
        )

    def validate(self) -> None:
        """Raise TypeError or ValueError if any value is unusable.

        Each field must hold the kind of value its default holds: bools
        stay bools, ints stay ints, and floats accept either number.
        """
        for f in fields(self):
            value = getattr(self, f.name)
            if isinstance(f.default, bool):
                ok = isinstance(value, bool)
            elif isinstance(f.default, int):
                ok = isinstance(value, int) and not isinstance(value, bool)
            else:
                ok = isinstance(value, (int, float)) and not isinstance(value, bool)
            if not ok:
                raise TypeError(f"{f.name} must be {type(f.default).__name__}, got {value!r}")
        if self.tick_period_ms <= 0:
            raise ValueError(f"tick_period_ms must be positive, got {self.tick_period_ms}")
        self.geometry()


def load_settings() -> Settings:
    """Load settings from disk, falling back to defaults."""
    try:
        if SETTINGS_PATH.exists():
            data = json.loads(SETTINGS_PATH.read_text(encoding="utf-8"))
            # Only use keys that exist in the dataclass
            valid_keys = {f.name for f in fields(Settings)}
            filtered = {k: v for k, v in data.items() if k in valid_keys}
            settings = Settings(**filtered)
            settings.validate()
            return settings
    except (OSError, ValueError, TypeError, AttributeError) as exc:
        log.warning("could not read %s, using defaults: %s", SETTINGS_PATH, exc)
    return Settings()


def save_settings(settings: Settings) -> None:
    """Write settings to disk as JSON."""
    APP_SUPPORT_DIR.mkdir(parents=True, exist_ok=True)
    SETTINGS_PATH.write_text(
        json.dumps(asdict(settings), indent=2) + "\n",
        encoding="utf-8",
    )
