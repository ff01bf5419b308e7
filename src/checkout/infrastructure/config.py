"""Application settings.

Read from ``CHECKOUT_*`` environment variables and an optional ``.env``
file in the working directory.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# When installed in editable mode the project root is the repo root.
_PROJECT_ROOT = Path(__file__).resolve().parents[3]

_LEVEL_BY_ENVIRONMENT = {
    "production": "INFO",
    "staging": "INFO",
    "development": "DEBUG",
    "test": "WARNING",
}


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="CHECKOUT_",
        env_file=".env",
        extra="ignore",
    )

    data_dir: Path = _PROJECT_ROOT / "data"
    data_file: str = "store.json"
    environment: str = "development"
    log_level: str | None = None
    strict_status_transitions: bool = False
    default_page_size: int = Field(default=10, ge=1, le=100)
    # seconds to wait for another process holding the data file; negative waits forever
    lock_timeout: float = 30.0

    @field_validator("environment")
    @classmethod
    def _normalize_environment(cls, value: str) -> str:
        return value.strip().lower()

    @property
    def store_path(self) -> Path:
        return self.data_dir / self.data_file

    @property
    def effective_log_level(self) -> str:
        if self.log_level:
            return self.log_level.upper()
        return _LEVEL_BY_ENVIRONMENT.get(self.environment, "INFO")


@lru_cache
def get_settings() -> Settings:
    return Settings()
