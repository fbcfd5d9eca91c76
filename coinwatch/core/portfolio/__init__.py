"""Portfolio holdings and valuation."""

from .models import (
    HoldingCreate,
    HoldingResponse,
    PortfolioValueResponse,
    PositionValue,
    PositionValueResponse,
)
from .repository import HoldingRepository, HoldingStore
from .valuation import PortfolioValuator, group_quantities

__all__ = [
    "HoldingCreate",
    "HoldingResponse",
    "PortfolioValueResponse",
    "PositionValue",
    "PositionValueResponse",
    "HoldingRepository",
    "HoldingStore",
    "PortfolioValuator",
    "group_quantities",
]
