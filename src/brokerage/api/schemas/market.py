"""Pydantic schemas for market data and market control."""

from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field


class BucketListResponse(BaseModel):
    """Bucket registry: bucket name -> symbols."""

    buckets: dict[str, list[str]]


class QuoteLineResponse(BaseModel):
    model_config = {"from_attributes": True}

    symbol: str
    price: Optional[Decimal] = None
    error: Optional[str] = None


class QuoteBatchResponse(BaseModel):
    """Quotes for one bucket as of its last refresh."""

    model_config = {"from_attributes": True}

    bucket: str
    as_of: datetime
    quotes: list[QuoteLineResponse]


class MarketControlRequest(BaseModel):
    bucket: str = Field(..., min_length=1)
    active: bool
    price_override: Optional[Decimal] = None


class MarketControlResponse(BaseModel):
    model_config = {"from_attributes": True}

    bucket: str
    active: bool
    price_override: Optional[Decimal] = None
    paused_at: Optional[datetime] = None


class MarketControlListResponse(BaseModel):
    controls: list[MarketControlResponse]
    count: int
