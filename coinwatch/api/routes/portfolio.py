"""Portfolio API routes."""

from __future__ import annotations

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, status

from coinwatch.api.deps import get_holding_store, get_price_source
from coinwatch.core.portfolio.models import (
    HoldingCreate,
    HoldingResponse,
    PortfolioValueResponse,
    PositionValueResponse,
)
from coinwatch.core.portfolio.repository import HoldingStore
from coinwatch.core.portfolio.valuation import PortfolioValuator
from coinwatch.data.market.provider import MarketDataProvider
from coinwatch.errors import PriceSourceError

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/", response_model=List[HoldingResponse])
def list_holdings(
    user_id: Optional[int] = None,
    store: HoldingStore = Depends(get_holding_store),
):
    """List holding records, optionally for one user."""
    return store.list_all_holdings(user_id=user_id)


@router.post("/", response_model=HoldingResponse, status_code=status.HTTP_201_CREATED)
def add_holding(
    payload: HoldingCreate,
    store: HoldingStore = Depends(get_holding_store),
):
    """Record a holding. Repeated symbols are kept as separate rows."""
    return store.insert_holding(
        user_id=payload.user_id,
        symbol=payload.symbol,
        quantity=payload.quantity,
    )


@router.get("/value", response_model=PortfolioValueResponse)
def portfolio_value(
    user_id: Optional[int] = None,
    store: HoldingStore = Depends(get_holding_store),
    price_source: MarketDataProvider = Depends(get_price_source),
):
    """Total portfolio value at current prices."""
    valuator = PortfolioValuator(price_source=price_source)
    try:
        positions = valuator.appraise(store.list_all_holdings(user_id=user_id))
    except PriceSourceError as e:
        logger.error(f"Portfolio valuation failed: {e}")
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail=f"Error fetching cryptocurrency price: {e}",
        )

    return PortfolioValueResponse(
        total_value=float(valuator.total(positions)),
        positions=[
            PositionValueResponse(
                symbol=p.symbol,
                quantity=float(p.quantity),
                price=float(p.price),
                value=float(p.value),
            )
            for p in positions
        ],
    )
