"""Pydantic schemas for API request/response."""

from brokerage.api.schemas.account import (
    AccountCreate,
    AccountResponse,
    VerificationRequest,
    BalanceAdjustmentRequest,
    LedgerEntryResponse,
    LedgerListResponse,
    ReconciliationResponse,
)
from brokerage.api.schemas.trade import (
    OrderRequest,
    OrderResponse,
    OrderResultResponse,
    OrderListResponse,
)
from brokerage.api.schemas.cash import (
    CashRequestCreate,
    CashApproveRequest,
    CashRequestResponse,
    CashRequestListResponse,
    CashApprovalResponse,
)
from brokerage.api.schemas.broker import (
    BrokerOrderCreate,
    BrokerOrderResponse,
    BrokerOrderListResponse,
)
from brokerage.api.schemas.market import (
    BucketListResponse,
    QuoteLineResponse,
    QuoteBatchResponse,
    MarketControlRequest,
    MarketControlResponse,
    MarketControlListResponse,
)

__all__ = [
    "AccountCreate",
    "AccountResponse",
    "VerificationRequest",
    "BalanceAdjustmentRequest",
    "LedgerEntryResponse",
    "LedgerListResponse",
    "ReconciliationResponse",
    "OrderRequest",
    "OrderResponse",
    "OrderResultResponse",
    "OrderListResponse",
    "CashRequestCreate",
    "CashApproveRequest",
    "CashRequestResponse",
    "CashRequestListResponse",
    "CashApprovalResponse",
    "BrokerOrderCreate",
    "BrokerOrderResponse",
    "BrokerOrderListResponse",
    "BucketListResponse",
    "QuoteLineResponse",
    "QuoteBatchResponse",
    "MarketControlRequest",
    "MarketControlResponse",
    "MarketControlListResponse",
]
