"""FastAPI dependencies."""

from __future__ import annotations

from typing import Generator, List

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from coinwatch.config import AssetWatchConfig
from coinwatch.core.portfolio.repository import HoldingRepository, HoldingStore
from coinwatch.data.market.provider import MarketDataProvider, market_data
from coinwatch.db.database import get_db as db_context


def get_db() -> Generator[Session, None, None]:
    """Yield a database session."""
    with db_context() as db:
        yield db


def get_holding_store(db: Session = Depends(get_db)) -> HoldingStore:
    """Holdings store bound to the request's session."""
    return HoldingRepository(db)


def get_price_source() -> MarketDataProvider:
    """Market data provider used for valuation."""
    return market_data


def get_watchlist(request: Request) -> List[AssetWatchConfig]:
    """Assets loaded at startup (empty if monitoring is disabled)."""
    return getattr(request.app.state, "watchlist", [])
