"""API routers package."""

from brokerage.api.routers.accounts import router as accounts_router
from brokerage.api.routers.trades import router as trades_router
from brokerage.api.routers.cash import router as cash_router
from brokerage.api.routers.broker import router as broker_router
from brokerage.api.routers.markets import router as markets_router
from brokerage.api.routers.admin import router as admin_router

__all__ = [
    "accounts_router",
    "trades_router",
    "cash_router",
    "broker_router",
    "markets_router",
    "admin_router",
]
