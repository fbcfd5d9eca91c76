"""Holdings store backed by SQLAlchemy."""

from __future__ import annotations

import math
from typing import List, Optional, Protocol

from sqlalchemy.orm import Session

from coinwatch.db.models import Holding


class HoldingStore(Protocol):
    """What the valuation and request layers need from a holdings ledger."""

    def list_all_holdings(self, user_id: Optional[int] = None) -> List[Holding]:
        ...

    def insert_holding(self, user_id: int, symbol: str, quantity: float) -> Holding:
        ...


class HoldingRepository:
    """Repository for Holding rows."""

    def __init__(self, db: Session):
        """Initialize repository with database session."""
        self.db = db

    def list_all_holdings(self, user_id: Optional[int] = None) -> List[Holding]:
        """Get holding records in insertion order.

        Args:
            user_id: Only this user's rows. If None, every row.

        Returns:
            List of holdings
        """
        query = self.db.query(Holding)
        if user_id is not None:
            query = query.filter_by(user_id=user_id)
        return query.order_by(Holding.id).all()

    def insert_holding(self, user_id: int, symbol: str, quantity: float) -> Holding:
        """Record a new holding.

        Rows are never merged; several rows for one symbol are summed at
        valuation time.

        Returns:
            Created holding

        Raises:
            ValueError: If quantity is not a positive finite number
        """
        if not math.isfinite(quantity) or quantity <= 0:
            raise ValueError(f"Quantity must be positive, got {quantity}")

        holding = Holding(
            user_id=user_id,
            symbol=symbol.strip().upper(),
            quantity=quantity,
        )
        self.db.add(holding)
        self.db.flush()
        return holding
