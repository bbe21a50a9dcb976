"""Service settings for the maze level API.

Generation constants (grid size, attempt budget, unlock levels) live on the
generator classes, not here, so a deployment cannot change which level a
given index produces.
"""
import logging
from typing import List, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Settings read from MAZEGEN_* environment variables or .env."""

    app_name: str = "Maze Level Generator"
    app_version: str = "1.0.0"
    debug: bool = False
    log_level: str = "INFO"

    host: str = "0.0.0.0"
    port: int = 8000

    # Comma-separated
    cors_origins: str = "http://localhost:5173,http://localhost:3000"

    # Highest level number served by /api/levels
    max_level: int = Field(default=100, ge=1)

    model_config = SettingsConfigDict(
        env_prefix="MAZEGEN_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @field_validator("log_level")
    @classmethod
    def _known_log_level(cls, value: str) -> str:
        level = value.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level '{value}'")
        return level

    def get_cors_origins(self) -> List[str]:
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]


_settings: Optional[Settings] = None


def get_settings(reload: bool = False) -> Settings:
    """Get the settings instance, reading the environment again on reload."""
    global _settings
    if _settings is None or reload:
        _settings = Settings()
    return _settings
