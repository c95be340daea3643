"""
QuickNotes Backend — Application Configuration
================================================

What:  Centralized configuration management using Pydantic Settings.
How:   Pydantic Settings reads from environment variables (or .env file),
       validates types/ranges, and provides a singleton `settings` object.
Who:   Imported by the application factory; tests build their own instances.
When:  Loaded once at module import time.
"""

from pydantic_settings import BaseSettings
from pydantic import Field, field_validator


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All settings have defaults suitable for running locally against a
    SQLite file in the working directory.
    """

    # ── Database ──────────────────────────────────────────────────────────
    # Format: sqlite+aiosqlite:///<path>  (three slashes = relative path)
    database_url: str = Field(
        default="sqlite+aiosqlite:///./notes.db",
        description="Async SQLAlchemy connection URL of the notes store",
    )

    # Seconds a connection waits on a locked SQLite database before failing.
    # Concurrent writers queue up instead of erroring immediately.
    db_busy_timeout: float = Field(default=5.0, ge=0, le=120)

    # ── Server ────────────────────────────────────────────────────────────
    backend_host: str = Field(default="0.0.0.0")
    backend_port: int = Field(default=8080, ge=1, le=65535)

    # Valid: DEBUG, INFO, WARNING, ERROR, CRITICAL
    log_level: str = Field(default="INFO")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Ensures log level is a valid Python logging level name."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper = v.upper()
        if upper not in valid_levels:
            raise ValueError(f"Invalid log_level '{v}'. Must be one of: {valid_levels}")
        return upper

    # ── Request Hardening ─────────────────────────────────────────────────
    # Maximum accepted request body; larger requests are answered with 413.
    # Default: 1 MiB = 1024 * 1024 = 1048576
    max_body_size: int = Field(default=1_048_576, ge=1)

    # ── Missing IDs ───────────────────────────────────────────────────────
    # False: PATCH/DELETE on an unknown id answer 200 (zero rows affected).
    # True:  the same requests answer 404.
    strict_missing_ids: bool = Field(default=False)

    # ── Pydantic Settings Config ──────────────────────────────────────────
    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,  # DATABASE_URL and database_url both work
    }


# Singleton instance — used when create_app() is called without overrides
settings = Settings()
