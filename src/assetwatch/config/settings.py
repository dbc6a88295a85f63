# src/assetwatch/config/settings.py
"""
Settings - Pydantic-based Configuration Management

Provides centralized configuration management using Pydantic Settings.
Supports environment variables and a .env file with validation.

Files that USE this module:
- assetwatch.app (loads settings for logging and refresh configuration)
- assetwatch.adapters.providers.* (providers use settings for URL, shape and timeout)
- assetwatch.adapters.persistence.* (JSON store uses the investments file path)
- assetwatch.application.* (cache TTL, refresh interval and profit basis)

Files that this module USES:
- assetwatch.shared.validators (validation functions for settings)
"""

from __future__ import annotations  # Enable postponed evaluation of annotations

from pathlib import Path  # Object-oriented filesystem paths
from typing import Optional  # Type hints for optional values

from pydantic import Field, field_validator  # Data validation and field configuration
from pydantic_settings import BaseSettings, SettingsConfigDict  # Settings management with Pydantic

from assetwatch.shared.validators import (
    validate_choice,  # Validate option strings
    validate_language,  # Validate display language code
    validate_url,  # Validate HTTP endpoint URLs
)

RATE_SHAPES = ("auto", "nested", "flat")
PROFIT_BASES = ("current", "initial")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    # --- Rate Source ---
    rates_url: str = Field(
        default="https://finance.truncgil.com/api/today.json", alias="RATES_URL"
    )
    # Response shape parser: auto-detect, or force nested/flat
    rates_shape: str = Field(default="auto", alias="RATES_SHAPE")

    # --- HTTP Settings ---
    http_timeout_seconds: int = Field(default=10, alias="HTTP_TIMEOUT_SECONDS", ge=1, le=60)

    # --- Cache & Refresh (in minutes) ---
    rate_cache_minutes: int = Field(default=5, alias="RATE_CACHE_MINUTES", ge=1, le=1440)
    refresh_interval_minutes: int = Field(default=5, alias="REFRESH_INTERVAL_MINUTES", ge=1, le=1440)

    # --- Valuation ---
    # Denominator for profit percentage: current value or initial value
    profit_basis: str = Field(default="current", alias="PROFIT_BASIS")

    # --- Language Settings ---
    default_language: str = Field(default="tr", alias="DEFAULT_LANGUAGE")

    # --- Persistence ---
    investments_file: Path = Field(
        default=Path("./data/investments.json"), alias="INVESTMENTS_FILE"
    )

    # --- Logging ---
    log_file: Optional[str] = Field(default=None, alias="LOG_FILE")
    log_dir: Optional[str] = Field(default=None, alias="LOG_DIR")
    log_stdout: bool = Field(default=True, alias="ASSETWATCH_LOG_STDOUT")
    log_max_bytes: int = Field(default=10 * 1024 * 1024, alias="LOG_MAX_BYTES")  # 10MB
    log_backup_count: int = Field(default=5, alias="LOG_BACKUP_COUNT")

    @property
    def refresh_interval_seconds(self) -> float:
        return self.refresh_interval_minutes * 60.0

    @field_validator("rates_url")
    @classmethod
    def validate_rates_url(cls, v: str) -> str:
        """Validate rate endpoint URL."""
        if not validate_url(v):
            raise ValueError("RATES_URL must be an http(s) URL")
        return v

    @field_validator("rates_shape")
    @classmethod
    def validate_rates_shape(cls, v: str) -> str:
        """Validate response shape selector."""
        if not validate_choice(v, RATE_SHAPES):
            raise ValueError(f"RATES_SHAPE must be one of {', '.join(RATE_SHAPES)}")
        return v.strip().lower()

    @field_validator("profit_basis")
    @classmethod
    def validate_profit_basis(cls, v: str) -> str:
        """Validate profit percentage basis."""
        if not validate_choice(v, PROFIT_BASES):
            raise ValueError(f"PROFIT_BASIS must be one of {', '.join(PROFIT_BASES)}")
        return v.strip().lower()

    @field_validator("default_language")
    @classmethod
    def validate_language(cls, v: str) -> str:
        """Validate language code."""
        if not validate_language(v):
            raise ValueError("DEFAULT_LANGUAGE must be 'tr' or 'en'")
        return v.strip().lower()


# Global settings instance
settings = Settings()
