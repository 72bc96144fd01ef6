"""Dependency injection for FastAPI."""

import threading
from datetime import timedelta
from typing import Callable, Optional

from fastapi import Depends, Header
from sqlalchemy.orm import Session

from brokerage.config.settings import get_settings
from brokerage.core.exceptions import ForbiddenError
from brokerage.domain.models import Principal, Role
from brokerage.providers import (
    QuoteProvider,
    StubQuoteProvider,
    TwelveDataQuoteProvider,
    JwtAuthProvider,
)
from brokerage.repositories.sqlalchemy.database import get_db
from brokerage.repositories.sqlalchemy import (
    SqlAlchemyUnitOfWork,
    SqlAlchemyAccountRepository,
    SqlAlchemyLedgerRepository,
    SqlAlchemyOrderRepository,
    SqlAlchemyBrokerOrderRepository,
    SqlAlchemyCashRequestRepository,
    SqlAlchemyMarketControlRepository,
)
from brokerage.services import (
    LedgerService,
    TradeExecutor,
    ApprovalWorkflow,
    QuoteCache,
    MarketDataService,
)


# Process-wide quote cache shared by all requests
_quote_cache: Optional[QuoteCache] = None
_quote_cache_lock = threading.Lock()


def build_quote_provider() -> QuoteProvider:
    """Provide the configured QuoteProvider ("stub" or "twelvedata")."""
    settings = get_settings()
    if settings.quote_provider == "twelvedata":
        return TwelveDataQuoteProvider(
            api_key=settings.market_api_key,
            base_url=settings.market_api_url,
            timeout_seconds=settings.quote_fetch_timeout_seconds,
        )
    return StubQuoteProvider()


def get_quote_cache() -> QuoteCache:
    """Provide the shared QuoteCache, creating it on first use."""
    global _quote_cache
    if _quote_cache is not None:
        return _quote_cache
    with _quote_cache_lock:
        if _quote_cache is None:
            settings = get_settings()
            _quote_cache = QuoteCache(
                provider=build_quote_provider(),
                ttl_seconds=settings.quote_cache_ttl_seconds,
                max_symbols=settings.quote_max_symbols,
                max_workers=settings.quote_fetch_workers,
            )
        return _quote_cache


def reset_quote_cache() -> None:
    """Close and drop the shared QuoteCache (shutdown, reconfiguration)."""
    global _quote_cache
    with _quote_cache_lock:
        cache, _quote_cache = _quote_cache, None
    if cache is not None:
        cache.close()


def get_auth_provider() -> JwtAuthProvider:
    """Provide the bearer credential verifier."""
    settings = get_settings()
    return JwtAuthProvider(
        secret=settings.jwt_secret,
        algorithm=settings.jwt_algorithm,
        token_ttl=timedelta(hours=settings.token_ttl_hours),
    )


def get_principal(
    authorization: Optional[str] = Header(default=None),
    auth: JwtAuthProvider = Depends(get_auth_provider),
) -> Principal:
    """Resolve the caller from an `Authorization: Bearer <token>` header."""
    token = None
    if authorization and authorization.lower().startswith("bearer "):
        token = authorization[len("bearer "):].strip()
    return auth.verify(token)


def require_role(*roles: Role) -> Callable[..., Principal]:
    """Build a dependency that admits only principals holding one of `roles`."""
    allowed = {Role(r) for r in roles}

    def _check(principal: Principal = Depends(get_principal)) -> Principal:
        if principal.role not in allowed:
            names = ", ".join(sorted(r.value for r in allowed))
            raise ForbiddenError(f"Requires role: {names}")
        return principal

    return _check


require_admin = require_role(Role.ADMIN)
require_broker = require_role(Role.BROKER)


def get_uow(db: Session = Depends(get_db)) -> SqlAlchemyUnitOfWork:
    """Provide the request's UnitOfWork."""
    return SqlAlchemyUnitOfWork(db)


def get_ledger_service(
    db: Session = Depends(get_db),
    uow: SqlAlchemyUnitOfWork = Depends(get_uow),
) -> LedgerService:
    """Provide LedgerService instance."""
    return LedgerService(
        account_repo=SqlAlchemyAccountRepository(db),
        ledger_repo=SqlAlchemyLedgerRepository(db),
        uow=uow,
    )


def get_trade_executor(
    db: Session = Depends(get_db),
    uow: SqlAlchemyUnitOfWork = Depends(get_uow),
    ledger: LedgerService = Depends(get_ledger_service),
) -> TradeExecutor:
    """Provide TradeExecutor instance."""
    return TradeExecutor(
        ledger=ledger,
        order_repo=SqlAlchemyOrderRepository(db),
        uow=uow,
    )


def get_approval_workflow(
    db: Session = Depends(get_db),
    uow: SqlAlchemyUnitOfWork = Depends(get_uow),
    ledger: LedgerService = Depends(get_ledger_service),
) -> ApprovalWorkflow:
    """Provide ApprovalWorkflow instance."""
    return ApprovalWorkflow(
        ledger=ledger,
        cash_repo=SqlAlchemyCashRequestRepository(db),
        broker_order_repo=SqlAlchemyBrokerOrderRepository(db),
        uow=uow,
    )


def get_market_data_service(
    db: Session = Depends(get_db),
    uow: SqlAlchemyUnitOfWork = Depends(get_uow),
    quote_cache: QuoteCache = Depends(get_quote_cache),
) -> MarketDataService:
    """Provide MarketDataService instance."""
    return MarketDataService(
        quote_cache=quote_cache,
        control_repo=SqlAlchemyMarketControlRepository(db),
        uow=uow,
    )
