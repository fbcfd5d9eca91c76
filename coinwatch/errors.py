"""Exception hierarchy shared by the price source, monitors and valuation."""


class CoinwatchError(Exception):
    """Base class for all application errors."""


class ConfigError(CoinwatchError):
    """Startup configuration is missing or malformed."""


class PriceSourceError(CoinwatchError):
    """Base class for market-data failures."""


class FetchError(PriceSourceError):
    """Network or transport failure talking to the market-data API."""


class DecodeError(PriceSourceError):
    """Market-data response body is not the expected document."""


class ParseError(PriceSourceError):
    """A price string in the catalog is not a usable number."""


class NotFoundError(PriceSourceError):
    """Symbol is absent from a price snapshot."""

    def __init__(self, symbol: str):
        super().__init__(f"price data not found for symbol {symbol}")
        self.symbol = symbol
