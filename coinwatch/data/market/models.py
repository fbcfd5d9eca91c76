"""Market data Pydantic models."""

from decimal import Decimal
from typing import Dict, List, Optional

from pydantic import BaseModel, Field

# Symbol -> spot price in USD for one fetch. A missing symbol means the
# price is unknown, never zero.
PriceSnapshot = Dict[str, Decimal]


class CoinCapAsset(BaseModel):
    """One entry of the CoinCap assets catalog."""

    id: str
    symbol: str
    price_usd: Optional[str] = Field(None, alias="priceUsd")


class CoinCapResponse(BaseModel):
    """Envelope returned by the CoinCap assets endpoint."""

    data: List[CoinCapAsset]
