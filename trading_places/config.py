from __future__ import annotations

from functools import lru_cache
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Providers
    world_bank_base_url: str = "https://api.worldbank.org/v2"
    comtrade_base_url: str = "https://comtradeapi.un.org/data/v1/get"
    comtrade_api_key: Optional[str] = None
    user_agent: str = "TradingPlacesApp/1.0"
    http_timeout_seconds: float = 30.0

    # Cache / rate limiting (1 hour TTL, 100 requests per hour)
    cache_ttl_seconds: float = Field(default=3600.0, gt=0)
    rate_limit_max_requests: int = Field(default=100, ge=1)
    rate_limit_window_seconds: float = Field(default=3600.0, gt=0)

    # Retrying fetcher
    max_retries: int = Field(default=3, ge=1)
    retry_backoff_seconds: float = Field(default=1.0, ge=0)

    # Comtrade throttling
    comtrade_year_delay_seconds: float = Field(default=1.0, ge=0)
    comtrade_max_history_years: int = Field(default=5, ge=1)
    comtrade_year_fallbacks: int = Field(default=3, ge=1)
    comtrade_default_year: int = 2022

    # Year ranges
    default_start_year: int = 2015
    default_end_year: int = 2023
    snapshot_start_year: int = 2020

    # Dashboard behaviour
    enable_real_data: bool = False
    refresh_interval_seconds: float = Field(default=3600.0, gt=0)

    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_prefix="TRADING_PLACES_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


@lru_cache()
def get_settings() -> Settings:
    return Settings()
