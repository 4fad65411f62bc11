"""
Application settings using Pydantic.

Settings are loaded from environment variables with .env file support.
Nested values use a double underscore, e.g. ``DINOBUS_DISPLAY__FPS=30``.
"""

from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class DisplaySettings(BaseSettings):
    """Window settings."""

    width: int = Field(default=960, ge=320)
    height: int = Field(default=540, ge=240)
    fps: int = Field(default=60, ge=1)
    title: str = "DinoBus Runner"
    resizable: bool = True


class AudioSettings(BaseSettings):
    """Sound settings."""

    enabled: bool = True
    music_volume: float = Field(default=0.3, ge=0.0, le=1.0)
    sfx_volume: float = Field(default=1.0, ge=0.0, le=1.0)


class AISettings(BaseSettings):
    """AI service settings."""

    model_config = SettingsConfigDict(populate_by_name=True)

    gemini_api_key: str = Field(
        default="",
        validation_alias=AliasChoices("GEMINI_API_KEY", "API_KEY", "gemini_api_key"),
    )
    model: str = "gemini-2.5-flash"
    timeout: float = 15.0
    max_retries: int = 3
    retry_delay: float = 1.0


class Settings(BaseSettings):
    """Main application settings."""

    model_config = SettingsConfigDict(
        env_prefix="DINOBUS_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        extra="ignore",
    )

    debug: bool = False

    # Simulation
    tick_rate: int = Field(default=60, ge=1)
    fixed_timestep: bool = True
    seed: Optional[int] = None

    # Paths
    highscore_path: Path = Field(default_factory=lambda: Path.home() / ".dinobus" / "highscore.json")

    # Nested settings
    display: DisplaySettings = Field(default_factory=DisplaySettings)
    audio: AudioSettings = Field(default_factory=AudioSettings)
    ai: AISettings = Field(default_factory=AISettings)


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
