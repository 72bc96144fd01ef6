#!/usr/bin/env python3
"""
Seed a demo database: an admin, a broker and a funded, verified user with a
few fills. Prints bearer tokens for each account.
"""

import sys
from pathlib import Path
from decimal import Decimal
import random

# Add src/ to path so the script runs from a plain checkout
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root / "src"))

from brokerage.config.settings import get_settings
from brokerage.domain.markets import MARKET_BUCKETS
from brokerage.domain.models import Principal
from brokerage.providers import JwtAuthProvider, StubQuoteProvider
from brokerage.repositories.sqlalchemy import (
    init_db,
    get_session,
    SqlAlchemyUnitOfWork,
    SqlAlchemyAccountRepository,
    SqlAlchemyLedgerRepository,
    SqlAlchemyOrderRepository,
    SqlAlchemyCashRequestRepository,
    SqlAlchemyBrokerOrderRepository,
)
from brokerage.services import LedgerService, TradeExecutor, ApprovalWorkflow


def seed_demo_data(trades: int = 12, seed: int = 7) -> None:
    """Create demo accounts and activity through the services."""
    init_db()
    db = get_session()
    uow = SqlAlchemyUnitOfWork(db)
    ledger = LedgerService(
        account_repo=SqlAlchemyAccountRepository(db),
        ledger_repo=SqlAlchemyLedgerRepository(db),
        uow=uow,
    )
    executor = TradeExecutor(ledger=ledger, order_repo=SqlAlchemyOrderRepository(db), uow=uow)
    workflow = ApprovalWorkflow(
        ledger=ledger,
        cash_repo=SqlAlchemyCashRequestRepository(db),
        broker_order_repo=SqlAlchemyBrokerOrderRepository(db),
        uow=uow,
    )
    prices = StubQuoteProvider(seed=seed)
    rng = random.Random(seed)

    try:
        admin = ledger.ensure_account("demo-admin", "Demo Admin", "admin")
        broker = ledger.ensure_account("demo-broker", "Demo Broker", "broker")
        user = ledger.ensure_account("demo-user", "Demo User", "user")
        print("✓ Accounts ready: demo-admin, demo-broker, demo-user")

        request = workflow.request_cash(user.account_id, "deposit", Decimal("50000"))
        workflow.approve_cash(request.request_id, Decimal("50000"), admin.account_id)
        print("✓ Deposit of 50,000.00 approved for demo-user")

        us_symbols = list(MARKET_BUCKETS["us"])
        for _ in range(trades):
            symbol = rng.choice(us_symbols)
            side = "buy" if rng.random() < 0.6 else "sell"
            quantity = Decimal(rng.randint(1, 20))
            result = executor.place_order(
                user.account_id, "us", symbol, side, quantity, prices.get_price(symbol)
            )
            print(f"  {side:4} {quantity:>3} {symbol:5} -> balance {result.new_balance:,.2f}")

        order = workflow.submit_broker_order(broker.account_id, "THYAO", "buy", Decimal("1000"))
        print(f"✓ Broker order {order.order_id} pending approval")

        recon = ledger.reconcile(user.account_id)
        print("=" * 60)
        print(f"Final balance: {recon.balance:,.2f} ({recon.entry_count} ledger entries, "
              f"{'in balance' if recon.in_balance else 'DRIFT'})")
    finally:
        db.close()

    settings = get_settings()
    auth = JwtAuthProvider(secret=settings.jwt_secret, algorithm=settings.jwt_algorithm)
    print("\nBearer tokens:")
    for account in (admin, broker, user):
        token = auth.issue(Principal(account.account_id, account.role, account.verified))
        print(f"  {account.account_id}: {token}")


if __name__ == "__main__":
    seed_demo_data()
