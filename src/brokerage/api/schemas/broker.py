"""Pydantic schemas for broker batch orders."""

from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel

from brokerage.domain.models.enums import OrderSide, BrokerOrderStatus


class BrokerOrderCreate(BaseModel):
    symbol: str
    side: str
    quantity: Decimal


class BrokerOrderResponse(BaseModel):
    model_config = {"from_attributes": True}

    order_id: str
    broker_id: str
    symbol: str
    side: OrderSide
    quantity: Decimal
    status: BrokerOrderStatus
    created_at: Optional[datetime] = None
    approved_by: Optional[str] = None
    approved_at: Optional[datetime] = None


class BrokerOrderListResponse(BaseModel):
    orders: list[BrokerOrderResponse]
    count: int
