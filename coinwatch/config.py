"""Application configuration using Pydantic Settings."""

from __future__ import annotations

from decimal import Decimal
from functools import lru_cache
from pathlib import Path
from typing import List, Union

from pydantic import BaseModel, Field, ValidationError, field_validator
from pydantic_settings import BaseSettings

from coinwatch.errors import ConfigError

# ===========================================
# Product Branding
# ===========================================
PRODUCT_NAME = "Coinwatch"
PRODUCT_TAGLINE = "Crypto holdings and price thresholds, watched around the clock."
PRODUCT_VERSION = "1.0.0"
PRODUCT_DESCRIPTION = "Track cryptocurrency balances and get alerted when prices cross your thresholds."

COINCAP_ASSETS_URL = "https://api.coincap.io/v2/assets"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Database
    database_url: str = "sqlite:///./portfolio.db"

    # Market Data
    price_api_url: str = COINCAP_ASSETS_URL
    price_request_timeout: int = 15

    # Monitoring
    monitor_interval_seconds: int = 30
    watchlist_path: str = "config.json"
    monitor_on_startup: bool = True

    # Notifications
    console_alerts: bool = True
    telegram_bot_token: str = ""
    telegram_chat_id: str = ""

    # Logging
    log_level: str = "INFO"

    class Config:
        env_file = ".env"
        case_sensitive = False


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


class AssetWatchConfig(BaseModel):
    """One monitored asset: display name, ticker symbol and alert threshold."""

    name: str = Field(..., min_length=1)
    symbol: str = Field(..., min_length=1, max_length=16)
    threshold: Decimal

    class Config:
        frozen = True

    @field_validator("symbol")
    @classmethod
    def symbol_uppercase(cls, v: str) -> str:
        return v.upper().strip()


class Watchlist(BaseModel):
    """Contents of the watch list file."""

    tokens: List[AssetWatchConfig] = Field(default_factory=list)


def load_watchlist(path: Union[str, Path, None] = None) -> List[AssetWatchConfig]:
    """Load the monitored assets from a JSON watch list file.

    The file looks like ``{"tokens": [{"name": "Bitcoin", "symbol": "BTC",
    "threshold": 50000}]}``.

    Args:
        path: File to read. Defaults to ``settings.watchlist_path``.

    Returns:
        Asset configurations in file order

    Raises:
        ConfigError: If the file is missing, unreadable or malformed
    """
    path = Path(path or get_settings().watchlist_path)
    try:
        raw = path.read_bytes()
    except OSError as e:
        raise ConfigError(f"Cannot read watch list {path}: {e}") from e

    try:
        watchlist = Watchlist.model_validate_json(raw)
    except (ValidationError, UnicodeDecodeError) as e:
        raise ConfigError(f"Invalid watch list {path}: {e}") from e

    return watchlist.tokens
