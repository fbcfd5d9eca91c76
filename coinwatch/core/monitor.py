"""Asset monitor - one price check per polling cycle."""

from __future__ import annotations

import logging
from typing import Optional

from coinwatch.config import AssetWatchConfig
from coinwatch.core.alerts.models import AlertEvent
from coinwatch.core.alerts.notifier import BaseNotifier
from coinwatch.data.market.provider import MarketDataProvider, lookup_price, market_data
from coinwatch.errors import PriceSourceError

logger = logging.getLogger(__name__)


class AssetMonitor:
    """Watches one asset's price against its configured threshold.

    A monitor has no terminal state: every failure is logged and the next
    scheduled cycle tries again with a fresh fetch.
    """

    def __init__(
        self,
        asset: AssetWatchConfig,
        price_source: Optional[MarketDataProvider] = None,
        notifier: Optional[BaseNotifier] = None,
    ):
        """Initialize the monitor.

        Args:
            asset: Asset to watch
            price_source: Market data provider (defaults to global instance)
            notifier: Where breach events are delivered (None = log only)
        """
        self.asset = asset
        self.price_source = price_source or market_data
        self.notifier = notifier
        self.cycles = 0
        self.consecutive_failures = 0

    def check(self) -> Optional[AlertEvent]:
        """Fetch the current price and compare it to the threshold.

        Returns:
            An AlertEvent if the price is strictly above the threshold

        Raises:
            PriceSourceError: If the price could not be determined
        """
        snapshot = self.price_source.fetch_prices()
        price = lookup_price(snapshot, self.asset.symbol)
        logger.debug(f"{self.asset.symbol} at {price} (threshold {self.asset.threshold})")

        if price > self.asset.threshold:
            return AlertEvent(
                asset_name=self.asset.name,
                symbol=self.asset.symbol,
                current_price=price,
                threshold=self.asset.threshold,
            )
        return None

    def poll_once(self) -> Optional[AlertEvent]:
        """Run one polling cycle. Never raises.

        Returns:
            The emitted AlertEvent, or None if no breach or the cycle failed
        """
        self.cycles += 1
        try:
            event = self.check()
        except PriceSourceError as e:
            self.consecutive_failures += 1
            logger.warning(
                f"Error retrieving {self.asset.name} price "
                f"({self.consecutive_failures} consecutive): {e}"
            )
            return None
        except Exception:
            self.consecutive_failures += 1
            logger.exception(f"Unexpected error monitoring {self.asset.name}")
            return None

        self.consecutive_failures = 0
        if event is None:
            return None

        logger.warning(event.message)
        if self.notifier is not None:
            try:
                self.notifier.notify(event)
            except Exception as e:
                logger.error(f"Failed to deliver alert for {self.asset.symbol}: {e}")
        return event
