"""Alert event model."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal


def _utcnow() -> datetime:
    return datetime.utcnow()


@dataclass(frozen=True)
class AlertEvent:
    """A detected threshold breach for one asset.

    Produced once per breaching poll and never persisted.
    """

    asset_name: str
    symbol: str
    current_price: Decimal
    threshold: Decimal
    triggered_at: datetime = field(default_factory=_utcnow)

    @property
    def message(self) -> str:
        return (
            f"{self.asset_name} price (${self.current_price:,.2f}) "
            f"is above threshold (${self.threshold:,.2f})!"
        )
