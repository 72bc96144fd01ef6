"""Domain layer - pure business models with no external dependencies."""

from brokerage.domain.models import (
    Account,
    Principal,
    LedgerEntry,
    Order,
    BrokerOrder,
    CashRequest,
    MarketControlEntry,
    Role,
    OrderSide,
    CashRequestType,
    CashRequestStatus,
    BrokerOrderStatus,
    VerificationStatus,
)
from brokerage.domain.markets import MARKET_BUCKETS

__all__ = [
    "Account",
    "Principal",
    "LedgerEntry",
    "Order",
    "BrokerOrder",
    "CashRequest",
    "MarketControlEntry",
    "Role",
    "OrderSide",
    "CashRequestType",
    "CashRequestStatus",
    "BrokerOrderStatus",
    "VerificationStatus",
    "MARKET_BUCKETS",
]
