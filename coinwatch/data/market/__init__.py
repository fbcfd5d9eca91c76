"""Market data feeds (spot prices)."""

from .provider import MarketDataProvider, lookup_price, market_data
from .models import CoinCapAsset, CoinCapResponse, PriceSnapshot

__all__ = [
    "MarketDataProvider",
    "lookup_price",
    "market_data",
    "CoinCapAsset",
    "CoinCapResponse",
    "PriceSnapshot",
]
