"""
Pytest configuration and fixtures for brokerage back office tests.

This module provides:
- In-memory SQLite database fixtures
- Repository, unit of work and service fixtures
- Deterministic, failing and controllable quote providers
- A controllable clock for cache expiry
- Factory helpers for accounts
- FastAPI test client with bearer token helpers
"""

import os

# Point settings at a throwaway database before the app module is imported
os.environ["DATABASE_URL"] = "sqlite://"
os.environ.pop("ADMIN_ACCOUNT_ID", None)

import threading
import uuid
from datetime import datetime, timedelta
from decimal import Decimal
from typing import Callable, Optional

import pytest
from sqlalchemy import create_engine, StaticPool
from sqlalchemy.orm import sessionmaker, Session
from fastapi.testclient import TestClient

from brokerage.main import app
from brokerage.api.deps import get_quote_cache, reset_quote_cache
from brokerage.repositories.sqlalchemy.database import Base, get_db
# Import ORM models to register them with Base before creating tables
from brokerage.repositories.sqlalchemy import orm_models  # noqa: F401
from brokerage.repositories.sqlalchemy import (
    SqlAlchemyUnitOfWork,
    SqlAlchemyAccountRepository,
    SqlAlchemyLedgerRepository,
    SqlAlchemyOrderRepository,
    SqlAlchemyBrokerOrderRepository,
    SqlAlchemyCashRequestRepository,
    SqlAlchemyMarketControlRepository,
)
from brokerage.providers import JwtAuthProvider
from brokerage.services import (
    LedgerService,
    TradeExecutor,
    ApprovalWorkflow,
    QuoteCache,
    MarketDataService,
)
from brokerage.domain.models import Account, Principal, Role
from brokerage.core.timezone import UTC
from brokerage.config.settings import get_settings, reset_settings


# =============================================================================
# TIME HELPERS
# =============================================================================


def utc_datetime(
    year: int,
    month: int,
    day: int,
    hour: int = 10,
    minute: int = 0,
    second: int = 0,
) -> datetime:
    """Create a localized datetime in UTC."""
    return UTC.localize(datetime(year, month, day, hour, minute, second))


class FakeClock:
    """Clock that only moves when told to."""

    def __init__(self, start: datetime):
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now = self.now + timedelta(seconds=seconds)


@pytest.fixture
def fixed_now() -> datetime:
    """Fixed 'now' timestamp for deterministic tests."""
    return utc_datetime(2024, 6, 15, 14, 30, 0)


@pytest.fixture
def clock(fixed_now) -> FakeClock:
    """Provide a controllable clock starting at fixed_now."""
    return FakeClock(fixed_now)


# =============================================================================
# DATABASE FIXTURES
# =============================================================================


@pytest.fixture(scope="function")
def test_engine():
    """Create test database engine with shared in-memory SQLite."""
    # Reset settings for clean state
    reset_settings()

    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def test_session(test_engine) -> Session:
    """Create test database session."""
    TestSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=test_engine)
    session = TestSessionLocal()
    try:
        yield session
    finally:
        session.close()


# =============================================================================
# REPOSITORY FIXTURES
# =============================================================================


@pytest.fixture
def uow(test_session) -> SqlAlchemyUnitOfWork:
    """Provide test UnitOfWork."""
    return SqlAlchemyUnitOfWork(test_session)


@pytest.fixture
def account_repo(test_session) -> SqlAlchemyAccountRepository:
    """Provide test AccountRepository."""
    return SqlAlchemyAccountRepository(test_session)


@pytest.fixture
def ledger_repo(test_session) -> SqlAlchemyLedgerRepository:
    """Provide test LedgerRepository."""
    return SqlAlchemyLedgerRepository(test_session)


@pytest.fixture
def order_repo(test_session) -> SqlAlchemyOrderRepository:
    return SqlAlchemyOrderRepository(test_session)


@pytest.fixture
def broker_order_repo(test_session) -> SqlAlchemyBrokerOrderRepository:
    return SqlAlchemyBrokerOrderRepository(test_session)


@pytest.fixture
def cash_repo(test_session) -> SqlAlchemyCashRequestRepository:
    return SqlAlchemyCashRequestRepository(test_session)


@pytest.fixture
def control_repo(test_session) -> SqlAlchemyMarketControlRepository:
    return SqlAlchemyMarketControlRepository(test_session)


# =============================================================================
# QUOTE PROVIDER FIXTURES
# =============================================================================


class DeterministicQuoteProvider:
    """
    Deterministic quote provider for testing.

    Returns fixed prices (1.00 for anything unlisted) and counts calls per
    symbol so tests can tell cache hits from refreshes.
    """

    FIXED_PRICES = {
        "AAPL": Decimal("185.50"),
        "MSFT": Decimal("378.25"),
        "GOOGL": Decimal("142.75"),
        "AMZN": Decimal("178.50"),
        "TSLA": Decimal("248.75"),
        "NVDA": Decimal("485.25"),
        "META": Decimal("505.50"),
    }

    def __init__(self):
        self.calls: dict[str, int] = {}
        self._lock = threading.Lock()
        self.closed = False

    def get_price(self, symbol: str) -> Decimal:
        with self._lock:
            self.calls[symbol] = self.calls.get(symbol, 0) + 1
        return self.FIXED_PRICES.get(symbol, Decimal("1.00"))

    @property
    def total_calls(self) -> int:
        with self._lock:
            return sum(self.calls.values())

    def close(self) -> None:
        self.closed = True


class FailingQuoteProvider:
    """Quote provider that always raises an exception."""

    def get_price(self, symbol: str) -> Decimal:
        raise ConnectionError("Network unavailable")

    def close(self) -> None:
        pass


class PartiallyFailingQuoteProvider(DeterministicQuoteProvider):
    """Deterministic provider that fails for selected symbols."""

    def __init__(self, failing: set[str]):
        super().__init__()
        self._failing = failing

    def get_price(self, symbol: str) -> Decimal:
        price = super().get_price(symbol)
        if symbol in self._failing:
            raise ConnectionError(f"No price for {symbol}")
        return price


class BlockingQuoteProvider(DeterministicQuoteProvider):
    """
    Deterministic provider whose calls block until `release` is set.

    `started` is set as soon as the first call arrives.
    """

    def __init__(self):
        super().__init__()
        self.started = threading.Event()
        self.release = threading.Event()

    def get_price(self, symbol: str) -> Decimal:
        self.started.set()
        self.release.wait(timeout=5)
        return super().get_price(symbol)


@pytest.fixture
def deterministic_provider() -> DeterministicQuoteProvider:
    """Provide deterministic quote provider."""
    return DeterministicQuoteProvider()


@pytest.fixture
def failing_provider() -> FailingQuoteProvider:
    """Provide a quote provider that always fails."""
    return FailingQuoteProvider()


# =============================================================================
# SERVICE FIXTURES
# =============================================================================


@pytest.fixture
def ledger_service(account_repo, ledger_repo, uow) -> LedgerService:
    """Provide test LedgerService."""
    return LedgerService(
        account_repo=account_repo,
        ledger_repo=ledger_repo,
        uow=uow,
    )


@pytest.fixture
def trade_executor(ledger_service, order_repo, uow) -> TradeExecutor:
    """Provide test TradeExecutor."""
    return TradeExecutor(
        ledger=ledger_service,
        order_repo=order_repo,
        uow=uow,
    )


@pytest.fixture
def approval_workflow(ledger_service, cash_repo, broker_order_repo, uow) -> ApprovalWorkflow:
    """Provide test ApprovalWorkflow."""
    return ApprovalWorkflow(
        ledger=ledger_service,
        cash_repo=cash_repo,
        broker_order_repo=broker_order_repo,
        uow=uow,
    )


@pytest.fixture
def quote_cache(deterministic_provider, clock) -> QuoteCache:
    """Provide test QuoteCache with a deterministic provider and fake clock."""
    return QuoteCache(
        provider=deterministic_provider,
        ttl_seconds=30,
        clock=clock,
    )


@pytest.fixture
def market_data_service(quote_cache, control_repo, uow) -> MarketDataService:
    """Provide test MarketDataService."""
    return MarketDataService(
        quote_cache=quote_cache,
        control_repo=control_repo,
        uow=uow,
    )


# =============================================================================
# FACTORY FIXTURES
# =============================================================================


@pytest.fixture
def account_factory(ledger_service) -> Callable[..., Account]:
    """Factory for creating test accounts, optionally verified and funded."""

    def _create_account(
        name: Optional[str] = None,
        role: str = "user",
        verified: bool = True,
        balance: Optional[Decimal] = None,
        account_id: Optional[str] = None,
    ) -> Account:
        if name is None:
            name = f"Test Account {uuid.uuid4().hex[:8]}"
        account = ledger_service.create_account(
            name=name,
            role=role,
            account_id=account_id,
            verified=verified,
        )
        if balance is not None:
            ledger_service.apply_delta(account.account_id, balance, "opening balance")
            account = ledger_service.get_account(account.account_id)
        return account

    return _create_account


@pytest.fixture
def funded_account(account_factory) -> Account:
    """Verified user account holding 10,000."""
    return account_factory(name="Funded", balance=Decimal("10000"))


# =============================================================================
# API TEST CLIENT FIXTURES
# =============================================================================


@pytest.fixture
def api_quote_cache(deterministic_provider, clock) -> QuoteCache:
    """QuoteCache injected into the app in place of the configured one."""
    return QuoteCache(provider=deterministic_provider, ttl_seconds=30, clock=clock)


@pytest.fixture
def client(test_engine, api_quote_cache) -> TestClient:
    """Provide FastAPI test client with test database."""
    TestSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=test_engine)

    def override_get_db():
        session = TestSessionLocal()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_quote_cache] = lambda: api_quote_cache
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
    reset_quote_cache()


@pytest.fixture
def api_ledger(test_engine) -> LedgerService:
    """LedgerService on its own session, for seeding data behind the API."""
    session = sessionmaker(autocommit=False, autoflush=False, bind=test_engine)()
    try:
        yield LedgerService(
            account_repo=SqlAlchemyAccountRepository(session),
            ledger_repo=SqlAlchemyLedgerRepository(session),
            uow=SqlAlchemyUnitOfWork(session),
        )
    finally:
        session.close()


def auth_headers(
    account_id: str,
    role: Role = Role.USER,
    verified: bool = True,
) -> dict[str, str]:
    """Authorization header carrying a token signed with the app's secret."""
    settings = get_settings()
    auth = JwtAuthProvider(secret=settings.jwt_secret, algorithm=settings.jwt_algorithm)
    token = auth.issue(Principal(account_id=account_id, role=role, verified=verified))
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def api_user(api_ledger) -> tuple[Account, dict[str, str]]:
    """Verified user holding 10,000, with auth headers."""
    account = api_ledger.create_account(name="Alice", verified=True)
    api_ledger.apply_delta(account.account_id, Decimal("10000"), "opening balance")
    return account, auth_headers(account.account_id)


@pytest.fixture
def api_admin(api_ledger) -> tuple[Account, dict[str, str]]:
    """Admin account with auth headers."""
    account = api_ledger.create_account(name="Admin", role="admin", verified=True)
    return account, auth_headers(account.account_id, role=Role.ADMIN)


@pytest.fixture
def api_broker(api_ledger) -> tuple[Account, dict[str, str]]:
    """Broker account with auth headers."""
    account = api_ledger.create_account(name="Broker", role="broker", verified=True)
    return account, auth_headers(account.account_id, role=Role.BROKER)


# =============================================================================
# HELPER FUNCTIONS (exported for use in tests)
# =============================================================================


def assert_decimal_equal(
    actual,
    expected: Decimal,
    tolerance: Decimal = Decimal("0.0001"),
) -> None:
    """Assert two amounts are equal within tolerance (accepts JSON strings)."""
    diff = abs(Decimal(str(actual)) - expected)
    assert diff <= tolerance, f"Expected {expected}, got {actual} (diff={diff})"
