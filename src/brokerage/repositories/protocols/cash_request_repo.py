"""Cash request repository protocol."""

from datetime import datetime
from decimal import Decimal
from typing import Protocol, Optional

from brokerage.domain.models import CashRequest, CashRequestStatus


class CashRequestRepository(Protocol):
    """Interface for cash request data access."""

    def create(self, request: CashRequest) -> CashRequest:
        """Persist a new cash request."""
        ...

    def get_by_id(self, request_id: str) -> Optional[CashRequest]:
        """Retrieve cash request by ID."""
        ...

    def query(
        self,
        account_id: Optional[str] = None,
        status: Optional[CashRequestStatus] = None,
    ) -> list[CashRequest]:
        """List cash requests with optional filters, oldest first."""
        ...

    def transition(
        self,
        request_id: str,
        status: CashRequestStatus,
        decided_by: str,
        decided_at: datetime,
        amount: Optional[Decimal] = None,
    ) -> Optional[CashRequest]:
        """
        Move a pending request to `status` (and settle `amount` if given).

        The status check and the write are one statement, so only one caller
        can win the transition. Returns None when the request is not pending.
        """
        ...
