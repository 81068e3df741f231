"""Application Settings and Configuration

Pydantic-based settings management using environment variables.
Settings are loaded from environment variables with support for .env files,
type validation, and sensible defaults. All nested sections are frozen and
immutable after initialization.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import AliasChoices, BaseModel, Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from ..domain.shared.messages import ErrorMessages
from ..domain.shared.types import FetchAttempts, MaxQueueSize, RetryDelaySeconds, VolumeFloat


class DiscordSettings(BaseModel):
    """Discord bot configuration."""

    model_config = SettingsConfigDict(frozen=True, populate_by_name=True)

    token: SecretStr = Field(
        default=SecretStr(""), validation_alias=AliasChoices("token", "bot_token", "discord_token")
    )
    command_prefix: str = Field(
        default="!",
        min_length=1,
        max_length=5,
        validation_alias=AliasChoices("command_prefix", "prefix"),
    )


class AudioSettings(BaseModel):
    """Audio extraction and rendering configuration."""

    model_config = SettingsConfigDict(frozen=True, populate_by_name=True)

    default_volume: VolumeFloat = 0.5
    ytdlp_format: str = "bestaudio/best"
    ffmpeg_before_options: str = "-reconnect 1 -reconnect_streamed 1 -reconnect_delay_max 5"
    ffmpeg_options: str = "-vn"
    cookie_header: SecretStr = Field(
        default=SecretStr(""),
        validation_alias=AliasChoices("cookie_header", "yt_cookie_header", "cookie"),
    )
    connect_timeout_seconds: float = Field(
        default=10.0,
        gt=0.0,
        le=120.0,
        validation_alias=AliasChoices("connect_timeout_seconds", "connect_timeout"),
    )
    info_cache_ttl_seconds: int = Field(
        default=300, ge=0, validation_alias=AliasChoices("info_cache_ttl_seconds", "cache_ttl")
    )


class PlaybackSettings(BaseModel):
    """Queue advancement and stream-failure recovery."""

    model_config = SettingsConfigDict(frozen=True, populate_by_name=True)

    fetch_attempts: FetchAttempts = Field(
        default=3, validation_alias=AliasChoices("fetch_attempts", "retries")
    )
    fetch_retry_delay_seconds: RetryDelaySeconds = Field(
        default=1.0,
        validation_alias=AliasChoices("fetch_retry_delay_seconds", "retry_delay"),
    )
    max_queue_size: MaxQueueSize | None = None


class Settings(BaseSettings):
    """Application settings container.

    Automatically loads configuration from environment variables.

    Environment variable naming:
    - ENVIRONMENT, LOG_LEVEL (top-level)
    - DISCORD__TOKEN, DISCORD__COMMAND_PREFIX (nested with ``__``)
    - AUDIO__COOKIE_HEADER, AUDIO__YTDLP_FORMAT, AUDIO__DEFAULT_VOLUME, ...
    - PLAYBACK__FETCH_ATTEMPTS, PLAYBACK__FETCH_RETRY_DELAY_SECONDS, PLAYBACK__MAX_QUEUE_SIZE
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
    )

    environment: Literal["development", "production", "test"] = "development"
    log_level: str = "INFO"

    discord: DiscordSettings = Field(default_factory=DiscordSettings)
    audio: AudioSettings = Field(default_factory=AudioSettings)
    playback: PlaybackSettings = Field(default_factory=PlaybackSettings)

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        v_upper = v.upper()
        if v_upper not in valid_levels:
            raise ValueError(ErrorMessages.INVALID_LOG_LEVEL.format(level=v, valid_levels=valid_levels))
        return v_upper


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get cached application settings.

    Settings are automatically loaded from:
    1. .env file (if present)
    2. Environment variables
    3. Default values
    """
    return Settings()


def clear_settings_cache() -> None:
    """Clear the settings cache (useful for testing)."""
    get_settings.cache_clear()
