"""View models for settlement results."""

from dataclasses import dataclass
from decimal import Decimal

from brokerage.domain.models import LedgerEntry, Order, CashRequest


@dataclass(frozen=True)
class OrderResult:
    """Outcome of an immediate fill."""

    order: Order
    entry: LedgerEntry
    new_balance: Decimal

    @property
    def order_id(self) -> str:
        return self.order.order_id


@dataclass(frozen=True)
class CashApproval:
    """Outcome of approving a cash request."""

    request: CashRequest
    entry: LedgerEntry

    @property
    def request_id(self) -> str:
        return self.request.request_id

    @property
    def final_amount(self) -> Decimal:
        return self.request.amount


@dataclass(frozen=True)
class BalanceReconciliation:
    """Cached balance compared with a replay of the ledger."""

    account_id: str
    balance: Decimal
    ledger_total: Decimal
    entry_count: int

    @property
    def in_balance(self) -> bool:
        return self.balance == self.ledger_total
