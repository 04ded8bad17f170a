# src/nburate/config/settings.py
"""
Settings - Pydantic-based Configuration Management

Provides centralized configuration management using Pydantic Settings.
Supports environment variables (and a .env file) with validation.

Files that USE this module:
- nburate.app (loads settings for logging and command wiring)
- nburate.adapters.providers.nbu (API URL and HTTP timeout)
- nburate.application.rates_service (cache file, prefix and expiry)

Files that this module USES:
- nburate.shared.validators (validation functions for settings)
"""

from __future__ import annotations  # Enable postponed evaluation of annotations

from datetime import timedelta  # Cache expiry window
from pathlib import Path  # Object-oriented filesystem paths
from typing import Optional  # Type hints for optional values

from pydantic import Field, field_validator  # Data validation and field configuration
from pydantic_settings import BaseSettings, SettingsConfigDict  # Settings management with Pydantic

from nburate.shared.validators import (
    validate_http_url,  # Validate API base URL
    validate_key_prefix,  # Validate cache key namespace
)


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # --- NBU API ---
    nbu_api_url: str = Field(
        default="https://bank.gov.ua/NBUStatService/v1/statdirectory/exchange",
        alias="NBU_API_URL",
    )

    # --- HTTP Settings ---
    http_timeout_seconds: int = Field(default=10, alias="HTTP_TIMEOUT_SECONDS", ge=1, le=60)

    # --- Rate cache ---
    rate_cache_file: Path = Field(default=Path("./data/rate_cache.json"), alias="RATE_CACHE_FILE")
    rate_cache_prefix: str = Field(default="nbu_rate_", alias="RATE_CACHE_PREFIX")
    rate_cache_expiry_days: int = Field(default=90, alias="RATE_CACHE_EXPIRY_DAYS", ge=1)

    # --- Batch resolution ---
    # Pause after every real API call while filling a table
    batch_delay_ms: int = Field(default=500, alias="BATCH_DELAY_MS", ge=0)

    # --- Logging ---
    log_file: Optional[str] = Field(default=None, alias="LOG_FILE")
    log_dir: Optional[str] = Field(default=None, alias="LOG_DIR")
    log_stdout: bool = Field(default=True, alias="NBURATE_LOG_STDOUT")
    log_max_bytes: int = Field(default=10 * 1024 * 1024, alias="LOG_MAX_BYTES")  # 10MB
    log_backup_count: int = Field(default=5, alias="LOG_BACKUP_COUNT")

    @property
    def cache_expiry(self) -> timedelta:
        """Retention window for cached rates."""
        return timedelta(days=self.rate_cache_expiry_days)

    @property
    def batch_delay_seconds(self) -> float:
        return self.batch_delay_ms / 1000.0

    @field_validator("nbu_api_url")
    @classmethod
    def validate_api_url(cls, v: str) -> str:
        """Validate API URL format."""
        if not validate_http_url(v):
            raise ValueError("NBU_API_URL must be an http(s) URL")
        return v

    @field_validator("rate_cache_prefix")
    @classmethod
    def validate_cache_prefix(cls, v: str) -> str:
        """Validate the cache key namespace."""
        if not validate_key_prefix(v):
            raise ValueError("RATE_CACHE_PREFIX must be non-empty and contain only letters, digits, '_', '-', ':' or '.'")
        return v


# Global settings instance
settings = Settings()
