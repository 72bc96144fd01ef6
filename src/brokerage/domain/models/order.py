"""Order and BrokerOrder domain models."""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Optional

from brokerage.core.money import to_money
from brokerage.domain.models.enums import OrderSide, BrokerOrderStatus


@dataclass(frozen=True)
class Order:
    """
    Immediate fill against a caller-supplied price.

    Each order settles through exactly one ledger entry.
    """

    order_id: str
    account_id: str
    bucket: str
    symbol: str
    side: OrderSide
    quantity: Decimal
    price: Decimal
    created_at: datetime

    def __post_init__(self) -> None:
        if isinstance(self.side, str):
            object.__setattr__(self, "side", OrderSide(self.side))

    @property
    def notional(self) -> Decimal:
        """quantity x price, rounded to the ledger scale."""
        return to_money(self.quantity * self.price)

    @property
    def cash_delta(self) -> Decimal:
        """Signed balance change: buys debit, sells credit."""
        if self.side == OrderSide.BUY:
            return -self.notional
        return self.notional


@dataclass
class BrokerOrder:
    """Batch order submitted by a broker; gated by admin approval."""

    order_id: str
    broker_id: str
    symbol: str
    side: OrderSide
    quantity: Decimal
    status: BrokerOrderStatus = BrokerOrderStatus.PENDING
    created_at: Optional[datetime] = field(default=None)
    approved_by: Optional[str] = None
    approved_at: Optional[datetime] = None

    def __post_init__(self) -> None:
        if isinstance(self.side, str):
            self.side = OrderSide(self.side)
        if isinstance(self.status, str):
            self.status = BrokerOrderStatus(self.status)
