"""Pydantic schemas for deposit and withdrawal endpoints."""

from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field

from brokerage.domain.models.enums import CashRequestType, CashRequestStatus


class CashRequestCreate(BaseModel):
    """Request schema for filing a deposit or withdrawal."""

    amount: Decimal = Field(..., description="Requested amount, > 0")


class CashApproveRequest(BaseModel):
    """Admin approval; `amount` may differ from the requested amount."""

    amount: Decimal = Field(..., description="Settled amount, > 0")


class CashRequestResponse(BaseModel):
    model_config = {"from_attributes": True}

    request_id: str
    account_id: str
    request_type: CashRequestType
    requested_amount: Decimal
    amount: Decimal
    status: CashRequestStatus
    created_at: Optional[datetime] = None
    decided_at: Optional[datetime] = None
    decided_by: Optional[str] = None


class CashRequestListResponse(BaseModel):
    requests: list[CashRequestResponse]
    count: int


class CashApprovalResponse(BaseModel):
    """Response for an approved cash request."""

    request_id: str
    final_amount: Decimal
    new_balance: Optional[Decimal] = None
    request: CashRequestResponse
