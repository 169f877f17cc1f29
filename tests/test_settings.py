"""Tests for settings persistence and logging setup."""

from __future__ import annotations

import json
import logging

import pytest

from easytap.log import configure_logging
from easytap.settings import Settings, load_settings, save_settings
from easytap.timer.quantizer import TickGeometry


@pytest.fixture
def settings_path(tmp_path, monkeypatch):
    path = tmp_path / "settings.json"
    monkeypatch.setattr("easytap.settings.SETTINGS_PATH", path)
    monkeypatch.setattr("easytap.settings.APP_SUPPORT_DIR", tmp_path)
    return path


# ═══════════════════════════════════════════════════════════════════════
#  SETTINGS
# ═══════════════════════════════════════════════════════════════════════


class TestSettingsDefaults:
    def test_ruler_defaults(self):
        s = Settings()
        assert s.tick_interval_px == 10.0
        assert s.time_step == 5.0
        assert s.min_duration == 5.0
        assert s.max_duration == 600.0

    def test_timer_defaults(self):
        s = Settings()
        assert s.initial_duration == 30.0
        assert s.tick_period_ms == 100

    def test_audio_and_notification_defaults(self):
        s = Settings()
        assert s.sound_enabled is True
        assert s.sound_volume == 70
        assert s.notifications_enabled is True

    def test_geometry(self):
        assert Settings().geometry() == TickGeometry()

    def test_bad_geometry_raises(self):
        with pytest.raises(ValueError):
            Settings(time_step=7.0).geometry()

    def test_defaults_validate(self):
        Settings().validate()

    def test_validate_rejects_wrong_types(self):
        with pytest.raises(TypeError, match="window_width"):
            Settings(window_width=390.5).validate()


class TestSettingsPersistence:
    def test_round_trip(self, settings_path):
        save_settings(Settings(time_step=10.0, min_duration=10.0, sound_volume=20))
        loaded = load_settings()
        assert loaded.time_step == 10.0
        assert loaded.min_duration == 10.0
        assert loaded.sound_volume == 20

    def test_missing_file_gives_defaults(self, settings_path):
        assert load_settings() == Settings()

    def test_unknown_keys_ignored(self, settings_path):
        settings_path.write_text(json.dumps({"sound_volume": 5, "theme": "neon"}))
        loaded = load_settings()
        assert loaded.sound_volume == 5

    def test_corrupt_file_gives_defaults(self, settings_path, caplog):
        settings_path.write_text("{not json")
        with caplog.at_level(logging.WARNING, logger="easytap.settings"):
            assert load_settings() == Settings()
        assert "using defaults" in caplog.text

    @pytest.mark.parametrize("bad", [
        {"time_step": 7.0},
        {"min_duration": 3},
        {"max_duration": -5},
        {"tick_period_ms": 0},
        {"tick_period_ms": 100.5},
        {"time_step": "5"},
        {"sound_enabled": "yes"},
    ])
    def test_unusable_values_give_defaults(self, settings_path, caplog, bad):
        settings_path.write_text(json.dumps(bad))
        with caplog.at_level(logging.WARNING, logger="easytap.settings"):
            assert load_settings() == Settings()
        assert "using defaults" in caplog.text

    def test_integers_accepted_for_float_fields(self, settings_path):
        settings_path.write_text(json.dumps({"time_step": 10, "min_duration": 10}))
        loaded = load_settings()
        assert loaded.geometry().time_step == 10

    def test_saved_file_is_json(self, settings_path):
        save_settings(Settings())
        data = json.loads(settings_path.read_text(encoding="utf-8"))
        assert data["initial_duration"] == 30.0


# ═══════════════════════════════════════════════════════════════════════
#  LOGGING
# ═══════════════════════════════════════════════════════════════════════


class TestConfigureLogging:
    @pytest.fixture(autouse=True)
    def _clean_handlers(self):
        logger = logging.getLogger("easytap")
        before = list(logger.handlers)
        yield
        for h in list(logger.handlers):
            if h not in before:
                logger.removeHandler(h)
                h.close()

    def test_writes_log_file(self, tmp_path):
        logger = configure_logging(log_dir=tmp_path)
        logging.getLogger("easytap.timer.manager").info("hello from the timer")
        for h in logger.handlers:
            h.flush()
        text = (tmp_path / "easytap.log").read_text(encoding="utf-8")
        assert "hello from the timer" in text
        assert "easytap.timer.manager" in text

    def test_idempotent(self, tmp_path):
        logger = configure_logging(log_dir=tmp_path, console=True)
        count = len(logger.handlers)
        configure_logging(log_dir=tmp_path, console=True)
        assert len(logger.handlers) == count
