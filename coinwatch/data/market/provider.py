"""Market data provider backed by the CoinCap assets API."""

from __future__ import annotations

import logging
from decimal import Decimal, InvalidOperation
from typing import Optional

import requests
from pydantic import ValidationError

from coinwatch.config import get_settings
from coinwatch.errors import DecodeError, FetchError, NotFoundError, ParseError
from .models import CoinCapResponse, PriceSnapshot

logger = logging.getLogger(__name__)
settings = get_settings()


def parse_price(raw: Optional[str], symbol: str) -> Decimal:
    """Convert a catalog price string to a Decimal with full precision.

    Raises:
        ParseError: If the value is missing, not numeric, or not finite
    """
    if raw is None:
        raise ParseError(f"Missing price for {symbol}")
    try:
        price = Decimal(raw.strip())
    except InvalidOperation as e:
        raise ParseError(f"Invalid price {raw!r} for {symbol}") from e
    if not price.is_finite():
        raise ParseError(f"Invalid price {raw!r} for {symbol}")
    return price


def lookup_price(snapshot: PriceSnapshot, symbol: str) -> Decimal:
    """Get the price of one symbol from a snapshot.

    Args:
        snapshot: Result of a single ``fetch_prices`` call
        symbol: Ticker symbol (e.g., 'BTC')

    Returns:
        Spot price in USD

    Raises:
        NotFoundError: If the snapshot has no entry for the symbol
    """
    try:
        return snapshot[symbol]
    except KeyError:
        raise NotFoundError(symbol) from None


class MarketDataProvider:
    """Fetches the full spot price catalog on every call, without caching."""

    def __init__(self, api_url: Optional[str] = None, timeout: Optional[int] = None):
        """Initialize provider.

        Args:
            api_url: Assets endpoint. Defaults to settings value.
            timeout: Request timeout in seconds. Defaults to settings value.
        """
        self.api_url = api_url or settings.price_api_url
        self.timeout = timeout or settings.price_request_timeout

    def fetch_prices(self) -> PriceSnapshot:
        """Fetch a fresh snapshot of every listed asset's price.

        Returns:
            Dict of symbol -> price. When the catalog lists a symbol more
            than once the first entry wins.

        Raises:
            FetchError: Transport failure or non-success HTTP status
            DecodeError: Body is not JSON or not a CoinCap assets document
            ParseError: Any price string fails to parse; the whole fetch fails
        """
        try:
            response = requests.get(self.api_url, timeout=self.timeout)
            response.raise_for_status()
        except requests.RequestException as e:
            raise FetchError(f"Error fetching {self.api_url}: {e}") from e

        try:
            payload = CoinCapResponse.model_validate(response.json())
        except (ValueError, ValidationError) as e:
            raise DecodeError(f"Malformed market data from {self.api_url}: {e}") from e

        snapshot: PriceSnapshot = {}
        for asset in payload.data:
            price = parse_price(asset.price_usd, asset.symbol)
            snapshot.setdefault(asset.symbol, price)

        logger.debug(f"Fetched {len(snapshot)} prices from {self.api_url}")
        return snapshot

    def get_price(self, symbol: str) -> Decimal:
        """Fetch a fresh snapshot and return one symbol's price.

        Raises:
            PriceSourceError: Any fetch failure, or NotFoundError for the symbol
        """
        return lookup_price(self.fetch_prices(), symbol)


# Singleton instance for convenience
market_data = MarketDataProvider()
