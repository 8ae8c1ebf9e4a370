"""
Configuration helpers for the catalog service.

Settings are read from environment variables once and cached; tests call
``get_settings.cache_clear()`` after changing the environment.
"""

from dataclasses import dataclass
from functools import lru_cache
import os

STORAGE_BACKENDS = {"json", "sql", "memory"}


@dataclass(frozen=True)
class Settings:
    """Typed view of environment variables."""

    app_env: str
    data_dir: str
    storage_backend: str
    database_url: str
    log_level: str
    log_file: str
    cors_origins: tuple[str, ...]
    host: str
    port: int


@lru_cache
def get_settings() -> Settings:
    """Read the current environment and build a Settings instance."""
    def _int(value: str, default: int = 0) -> int:
        try:
            return int(value)
        except (TypeError, ValueError):
            return default

    def _list(value: str | None) -> tuple[str, ...]:
        if not value:
            return ("*",)
        return tuple(item.strip() for item in value.split(",") if item.strip()) or ("*",)

    backend = (os.getenv("STORAGE_BACKEND") or "json").strip().lower()
    if backend not in STORAGE_BACKENDS:
        backend = "json"

    return Settings(
        app_env=(os.getenv("APP_ENV") or "dev").lower(),
        data_dir=os.getenv("DATA_DIR", os.path.join(os.getcwd(), "data")),
        storage_backend=backend,
        database_url=os.getenv("DATABASE_URL", ""),
        log_level=(os.getenv("LOG_LEVEL") or "INFO").upper(),
        log_file=os.getenv("LOG_FILE", ""),
        cors_origins=_list(os.getenv("CORS_ORIGINS")),
        host=os.getenv("HOST", "0.0.0.0"),
        port=_int(os.getenv("PORT", "5002"), 5002),
    )
