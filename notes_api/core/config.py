"""
Configuration helpers for the notes service.

Settings are read once from the environment so that routers, the store and the
bootstrap command never fetch os.environ directly.
"""

from dataclasses import dataclass
from functools import lru_cache
import os


@dataclass(frozen=True)
class Settings:
    """Typed view of environment variables."""

    app_env: str
    db_path: str
    host: str
    port: int
    log_level: str


@lru_cache
def get_settings() -> Settings:
    """Read the current environment and build a Settings instance."""
    def _int(value: str, default: int = 0) -> int:
        try:
            return int(value)
        except (TypeError, ValueError):
            return default

    return Settings(
        app_env=(os.getenv("APP_ENV") or "dev").lower(),
        db_path=os.getenv("NOTES_DB_PATH") or "notes.db",
        host=os.getenv("APP_HOST", "0.0.0.0"),
        port=_int(os.getenv("APP_PORT", "8080"), 8080),
        log_level=(os.getenv("LOG_LEVEL") or "INFO").upper(),
    )
