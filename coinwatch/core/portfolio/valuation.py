"""Portfolio valuation at current market prices."""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import Any, Dict, Iterable, List, Optional

from coinwatch.data.market.provider import MarketDataProvider, lookup_price, market_data
from .models import PositionValue

logger = logging.getLogger(__name__)


def group_quantities(holdings: Iterable[Any]) -> Dict[str, Decimal]:
    """Sum quantities per symbol.

    Args:
        holdings: Objects with ``symbol`` and ``quantity`` attributes

    Returns:
        Dict of symbol -> total quantity, in first-seen order
    """
    totals: Dict[str, Decimal] = {}
    for holding in holdings:
        quantity = Decimal(str(holding.quantity))
        totals[holding.symbol] = totals.get(holding.symbol, Decimal("0")) + quantity
    return totals


class PortfolioValuator:
    """Joins holdings with live prices."""

    def __init__(self, price_source: Optional[MarketDataProvider] = None):
        self.price_source = price_source or market_data

    def appraise(self, holdings: Iterable[Any]) -> List[PositionValue]:
        """Value each distinct symbol in the holdings.

        One catalog snapshot is fetched per call and used for every symbol.

        Raises:
            PriceSourceError: If the fetch fails or any symbol has no price.
                No partial result is returned.
        """
        totals = group_quantities(holdings)
        if not totals:
            return []

        snapshot = self.price_source.fetch_prices()
        positions = []
        for symbol, quantity in totals.items():
            price = lookup_price(snapshot, symbol)
            positions.append(
                PositionValue(symbol=symbol, quantity=quantity, price=price, value=price * quantity)
            )
        return positions

    def valuate(self, holdings: Iterable[Any]) -> Decimal:
        """Total value of the holdings in USD.

        Raises:
            PriceSourceError: If any symbol cannot be priced
        """
        return self.total(self.appraise(holdings))

    @staticmethod
    def total(positions: Iterable[PositionValue]) -> Decimal:
        """Sum per-position values."""
        total = sum((p.value for p in positions), Decimal("0"))
        logger.debug(f"Portfolio valued at {total}")
        return total
