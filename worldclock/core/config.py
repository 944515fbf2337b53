"""Application configuration using pydantic-settings."""
from functools import lru_cache
from pathlib import Path
from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict


PACKAGE_DIR = Path(__file__).parent.parent
ENV_FILE = PACKAGE_DIR / ".env"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Server
    host: str = "0.0.0.0"
    port: int = 8080
    log_level: str = "info"
    reload: bool = False  # uvicorn auto-reload, for local development

    # Persisted clocks and theme
    storage_path: Path = Path.home() / ".worldclock" / "state.json"

    # Remote zone list, used only when the platform tz database is empty
    catalog_url: str = "https://worldtimeapi.org/api/timezone"
    catalog_timeout: float = 10.0  # seconds

    # Board
    tick_interval: float = 1.0  # seconds
    default_zones: List[str] = []

    model_config = SettingsConfigDict(
        env_file=str(ENV_FILE),
        env_file_encoding="utf-8",
        case_sensitive=False,
    )


@lru_cache
def get_settings() -> Settings:
    """Return cached Settings instance. Override in tests via lru_cache.cache_clear()."""
    return Settings()


settings = get_settings()
