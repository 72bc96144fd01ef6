"""SQLAlchemy repository implementations."""

from brokerage.repositories.sqlalchemy.database import (
    get_engine,
    get_session_factory,
    get_db,
    get_session,
    init_db,
    reset_database,
    create_engine_for_url,
    Base,
)
from brokerage.repositories.sqlalchemy.unit_of_work import SqlAlchemyUnitOfWork
from brokerage.repositories.sqlalchemy.account_repo import SqlAlchemyAccountRepository
from brokerage.repositories.sqlalchemy.ledger_repo import SqlAlchemyLedgerRepository
from brokerage.repositories.sqlalchemy.order_repo import (
    SqlAlchemyOrderRepository,
    SqlAlchemyBrokerOrderRepository,
)
from brokerage.repositories.sqlalchemy.cash_request_repo import SqlAlchemyCashRequestRepository
from brokerage.repositories.sqlalchemy.market_control_repo import SqlAlchemyMarketControlRepository

__all__ = [
    "get_engine",
    "get_session_factory",
    "get_db",
    "get_session",
    "init_db",
    "reset_database",
    "create_engine_for_url",
    "Base",
    "SqlAlchemyUnitOfWork",
    "SqlAlchemyAccountRepository",
    "SqlAlchemyLedgerRepository",
    "SqlAlchemyOrderRepository",
    "SqlAlchemyBrokerOrderRepository",
    "SqlAlchemyCashRequestRepository",
    "SqlAlchemyMarketControlRepository",
]
