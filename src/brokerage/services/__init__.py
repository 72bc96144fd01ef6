"""Service layer - business logic orchestration."""

from brokerage.services.ledger_service import LedgerService
from brokerage.services.trade_executor import TradeExecutor
from brokerage.services.approval_workflow import ApprovalWorkflow
from brokerage.services.quote_cache import QuoteCache
from brokerage.services.market_data_service import MarketDataService

__all__ = [
    "LedgerService",
    "TradeExecutor",
    "ApprovalWorkflow",
    "QuoteCache",
    "MarketDataService",
]
