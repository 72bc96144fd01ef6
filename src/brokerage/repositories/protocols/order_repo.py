"""Order and broker order repository protocols."""

from datetime import datetime
from typing import Protocol, Optional

from brokerage.domain.models import Order, BrokerOrder, BrokerOrderStatus


class OrderRepository(Protocol):
    """Interface for filled orders (immutable)."""

    def create(self, order: Order) -> Order:
        """Persist a new order."""
        ...

    def list_by_account(self, account_id: str) -> list[Order]:
        """List orders for an account, oldest first."""
        ...


class BrokerOrderRepository(Protocol):
    """Interface for broker batch orders."""

    def create(self, order: BrokerOrder) -> BrokerOrder:
        """Persist a new broker order."""
        ...

    def get_by_id(self, order_id: str) -> Optional[BrokerOrder]:
        """Retrieve broker order by ID."""
        ...

    def query(self, status: Optional[BrokerOrderStatus] = None) -> list[BrokerOrder]:
        """List broker orders, optionally filtered by status."""
        ...

    def mark_approved(
        self,
        order_id: str,
        approved_by: str,
        approved_at: datetime,
    ) -> Optional[BrokerOrder]:
        """
        Move a pending order to approved.

        Returns None when no pending order with that ID exists.
        """
        ...
