"""Pydantic schemas for trade endpoints."""

from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field

from brokerage.domain.models.enums import OrderSide


class OrderRequest(BaseModel):
    """Request schema for an immediate fill."""

    bucket: str = Field(..., description="Market bucket the symbol belongs to")
    symbol: str
    # Plain str so an unknown side is reported by the executor, not the validator
    side: str = Field(..., description="buy or sell")
    quantity: Decimal
    price: Decimal


class OrderResponse(BaseModel):
    model_config = {"from_attributes": True}

    order_id: str
    account_id: str
    bucket: str
    symbol: str
    side: OrderSide
    quantity: Decimal
    price: Decimal
    created_at: Optional[datetime] = None


class OrderResultResponse(BaseModel):
    """Response for a filled order."""

    order_id: str
    new_balance: Decimal
    order: OrderResponse


class OrderListResponse(BaseModel):
    orders: list[OrderResponse]
    count: int
