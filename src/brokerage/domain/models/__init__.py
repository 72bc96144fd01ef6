"""Domain models package."""

from brokerage.domain.models.enums import (
    Role,
    OrderSide,
    CashRequestType,
    CashRequestStatus,
    BrokerOrderStatus,
    VerificationStatus,
)
from brokerage.domain.models.account import Account, Principal
from brokerage.domain.models.ledger import LedgerEntry
from brokerage.domain.models.order import Order, BrokerOrder
from brokerage.domain.models.cash_request import CashRequest
from brokerage.domain.models.market import MarketControlEntry

__all__ = [
    "Role",
    "OrderSide",
    "CashRequestType",
    "CashRequestStatus",
    "BrokerOrderStatus",
    "VerificationStatus",
    "Account",
    "Principal",
    "LedgerEntry",
    "Order",
    "BrokerOrder",
    "CashRequest",
    "MarketControlEntry",
]
