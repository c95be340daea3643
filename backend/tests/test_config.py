"""
QuickNotes Backend — Settings Tests
=====================================
"""

import pytest
from pydantic import ValidationError

from quicknotes.config import Settings


class TestSettings:

    def test_defaults(self, monkeypatch):
        for var in ("DATABASE_URL", "BACKEND_PORT", "LOG_LEVEL", "MAX_BODY_SIZE", "STRICT_MISSING_IDS"):
            monkeypatch.delenv(var, raising=False)

        s = Settings(_env_file=None)

        assert s.database_url == "sqlite+aiosqlite:///./notes.db"
        assert s.backend_port == 8080
        assert s.log_level == "INFO"
        assert s.max_body_size == 1_048_576
        assert s.strict_missing_ids is False

    def test_settings_surface(self):
        assert set(Settings.model_fields) == {
            "database_url",
            "db_busy_timeout",
            "backend_host",
            "backend_port",
            "log_level",
            "max_body_size",
            "strict_missing_ids",
        }
        assert not hasattr(Settings(_env_file=None), "is_sqlite")

    def test_log_level_normalized(self):
        assert Settings(_env_file=None, log_level="debug").log_level == "DEBUG"

    def test_invalid_log_level_rejected(self):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, log_level="chatty")

    def test_read_from_environment(self, monkeypatch):
        monkeypatch.setenv("STRICT_MISSING_IDS", "true")
        monkeypatch.setenv("BACKEND_PORT", "9090")

        s = Settings(_env_file=None)

        assert s.strict_missing_ids is True
        assert s.backend_port == 9090
