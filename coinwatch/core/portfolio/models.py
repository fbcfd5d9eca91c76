"""Pydantic schemas for portfolio operations."""

from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator


class HoldingCreate(BaseModel):
    """Schema for recording a new holding."""

    user_id: int = Field(..., ge=0)
    symbol: str = Field(..., min_length=1, max_length=16)
    quantity: float = Field(..., gt=0, allow_inf_nan=False)

    @field_validator("symbol")
    @classmethod
    def symbol_uppercase(cls, v: str) -> str:
        return v.upper().strip()


class HoldingResponse(BaseModel):
    """Schema for holding response."""

    id: int
    user_id: int
    symbol: str
    quantity: float
    created_at: datetime
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class PositionValue(BaseModel):
    """Current value of all holdings of one symbol."""

    symbol: str
    quantity: Decimal
    price: Decimal
    value: Decimal


class PositionValueResponse(BaseModel):
    """Position value as returned over HTTP."""

    symbol: str
    quantity: float
    price: float
    value: float


class PortfolioValueResponse(BaseModel):
    """Total portfolio value in USD."""

    total_value: float
    positions: List[PositionValueResponse] = Field(default_factory=list)
