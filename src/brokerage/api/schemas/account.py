"""Pydantic schemas for account and ledger endpoints."""

from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field

from brokerage.domain.models.enums import Role


class AccountCreate(BaseModel):
    """Request schema for registering an account."""

    name: str = Field(..., min_length=1, max_length=255, description="Display name")
    role: str = Field(default=Role.USER.value, description="user, broker or admin")
    account_id: Optional[str] = Field(
        default=None,
        description="Identity from the auth provider; generated when omitted",
    )


class AccountResponse(BaseModel):
    """Response schema for a single account."""

    model_config = {"from_attributes": True}

    account_id: str
    name: str
    role: Role
    verified: bool
    balance: Decimal
    created_at: Optional[datetime] = None


class VerificationRequest(BaseModel):
    """Outcome of an identity document review."""

    status: str = Field(..., description="approved or rejected")


class BalanceAdjustmentRequest(BaseModel):
    """Manual balance correction."""

    amount: Decimal = Field(..., description="Signed delta applied to the balance")
    reason: Optional[str] = Field(default=None, max_length=255)


class LedgerEntryResponse(BaseModel):
    model_config = {"from_attributes": True}

    entry_id: str
    account_id: str
    delta: Decimal
    reason: str
    created_at: Optional[datetime] = None
    balance_after: Optional[Decimal] = None


class LedgerListResponse(BaseModel):
    entries: list[LedgerEntryResponse]
    count: int


class ReconciliationResponse(BaseModel):
    """Cached balance compared with the ledger replay."""

    account_id: str
    balance: Decimal
    ledger_total: Decimal
    entry_count: int
    in_balance: bool
