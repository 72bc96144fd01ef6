"""Repository layer - data access abstractions and implementations."""

from brokerage.repositories.protocols import (
    AccountRepository,
    LedgerRepository,
    OrderRepository,
    BrokerOrderRepository,
    CashRequestRepository,
    MarketControlRepository,
    UnitOfWork,
)

__all__ = [
    "AccountRepository",
    "LedgerRepository",
    "OrderRepository",
    "BrokerOrderRepository",
    "CashRequestRepository",
    "MarketControlRepository",
    "UnitOfWork",
]
