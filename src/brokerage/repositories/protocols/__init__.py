"""Repository protocol definitions (interfaces)."""

from brokerage.repositories.protocols.account_repo import AccountRepository
from brokerage.repositories.protocols.ledger_repo import LedgerRepository
from brokerage.repositories.protocols.order_repo import OrderRepository, BrokerOrderRepository
from brokerage.repositories.protocols.cash_request_repo import CashRequestRepository
from brokerage.repositories.protocols.market_control_repo import MarketControlRepository
from brokerage.repositories.protocols.unit_of_work import UnitOfWork

__all__ = [
    "AccountRepository",
    "LedgerRepository",
    "OrderRepository",
    "BrokerOrderRepository",
    "CashRequestRepository",
    "MarketControlRepository",
    "UnitOfWork",
]
