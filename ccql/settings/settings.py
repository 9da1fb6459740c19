"""
Environment settings for ccql.

Read with pydantic-settings from environment variables (or a .env file in
the working directory). CLAUDE_DATA_DIR points the CLI and the ingestion
service at the assistant's data directory.
"""

from enum import Enum
from functools import lru_cache
from pathlib import Path
from typing import List

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Environment(str, Enum):
    DEVELOPMENT = "development"
    TEST = "test"
    PRODUCTION = "production"


def default_data_dir() -> Path:
    """~/.claude"""
    return Path.home() / ".claude"


class Settings(BaseSettings):
    """
    Process-wide settings.

    Every field maps to the upper-cased environment variable of the same
    name (CLAUDE_DATA_DIR, API_PORT, LOG_LEVEL, ...).
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    app_name: str = "ccql"
    app_version: str = "0.1.0"
    environment: Environment = Environment.DEVELOPMENT
    debug: bool = False
    log_level: str = "WARNING"

    claude_data_dir: Path = Field(default_factory=default_data_dir)

    # API server
    api_host: str = "127.0.0.1"
    api_port: int = Field(default=8000, ge=1, le=65535)
    allowed_origins: str = "http://localhost:5173,http://127.0.0.1:5173"

    @field_validator("claude_data_dir", mode="after")
    @classmethod
    def expand_home(cls, value: Path) -> Path:
        return value.expanduser()

    def get_allowed_origins_list(self) -> List[str]:
        """ALLOWED_ORIGINS is comma separated."""
        return [origin.strip() for origin in self.allowed_origins.split(",") if origin.strip()]

    @property
    def is_production(self) -> bool:
        return self.environment == Environment.PRODUCTION


@lru_cache()
def get_settings() -> Settings:
    """Settings are read once per process; call get_settings.cache_clear() to reload."""
    return Settings()
