"""
Settings - Pydantic-based Configuration Management

Provides centralized configuration management using Pydantic Settings.
All values can be overridden with environment variables or a .env file.

Files that USE this module:
- coinwatch.app (bot token, logging and polling configuration)
- coinwatch.adapters.providers.coingecko (base URL and HTTP timeout)
- coinwatch.application.* (page size, search limit, default time window)
- coinwatch.adapters.telegram.* (poll interval, description length)

Files that this module USES:
- coinwatch.shared.validators (validation functions for settings)
"""

from __future__ import annotations  # Enable postponed evaluation of annotations

from typing import Optional  # Type hints for optional values

from pydantic import Field, field_validator  # Data validation and field configuration
from pydantic_settings import BaseSettings, SettingsConfigDict  # Settings management with Pydantic

from coinwatch.shared.validators import validate_bot_token  # Validate Telegram bot token format

TIMEFRAME_CHOICES = ("7d", "30d", "90d", "1y")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # --- Telegram ---
    bot_token: str = Field(default="", alias="BOT_TOKEN")

    # --- CoinGecko ---
    coingecko_base_url: str = Field(
        default="https://api.coingecko.com/api/v3", alias="COINGECKO_BASE_URL"
    )

    # --- HTTP Settings ---
    http_timeout_seconds: int = Field(default=10, alias="HTTP_TIMEOUT_SECONDS", ge=1, le=60)

    # --- Listing & Search ---
    coins_per_page: int = Field(default=25, alias="COINS_PER_PAGE", ge=1, le=40)
    search_result_limit: int = Field(default=25, alias="SEARCH_RESULT_LIMIT", ge=1, le=40)

    # --- Polling ---
    poll_interval_seconds: int = Field(default=60, alias="POLL_INTERVAL_SECONDS", ge=5, le=3600)

    # --- Presentation ---
    default_timeframe: str = Field(default="7d", alias="DEFAULT_TIMEFRAME")
    description_max_chars: int = Field(default=800, alias="DESCRIPTION_MAX_CHARS", ge=50, le=3000)

    # --- Logging (for server deployment) ---
    log_file: Optional[str] = Field(default=None, alias="LOG_FILE")
    log_dir: Optional[str] = Field(default=None, alias="LOG_DIR")
    log_stdout: bool = Field(default=True, alias="COINWATCH_LOG_STDOUT")
    log_max_bytes: int = Field(default=10 * 1024 * 1024, alias="LOG_MAX_BYTES")  # 10MB
    log_backup_count: int = Field(default=5, alias="LOG_BACKUP_COUNT")

    @field_validator("bot_token")
    @classmethod
    def validate_bot_token(cls, v: str) -> str:
        """Validate bot token format (an empty token is allowed until the bot starts)."""
        if v and not validate_bot_token(v):
            raise ValueError("Invalid BOT_TOKEN format")
        return v

    @field_validator("default_timeframe")
    @classmethod
    def validate_timeframe(cls, v: str) -> str:
        """Validate default chart window."""
        v = v.strip().lower()
        if v not in TIMEFRAME_CHOICES:
            raise ValueError(f"DEFAULT_TIMEFRAME must be one of {', '.join(TIMEFRAME_CHOICES)}")
        return v

    @field_validator("coingecko_base_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")


# Global settings instance
settings = Settings()
