"""Cash request domain model."""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Optional

from brokerage.core.money import to_money
from brokerage.domain.models.enums import CashRequestType, CashRequestStatus


@dataclass
class CashRequest:
    """
    Deposit or withdrawal awaiting admin review.

    `amount` starts equal to `requested_amount` and is overwritten with the
    settled amount on approval, which may differ at the admin's discretion.
    """

    request_id: str
    account_id: str
    request_type: CashRequestType
    requested_amount: Decimal
    amount: Decimal
    status: CashRequestStatus = CashRequestStatus.PENDING
    created_at: Optional[datetime] = field(default=None)
    decided_at: Optional[datetime] = field(default=None)
    decided_by: Optional[str] = None

    def __post_init__(self) -> None:
        if isinstance(self.request_type, str):
            self.request_type = CashRequestType(self.request_type)
        if isinstance(self.status, str):
            self.status = CashRequestStatus(self.status)

    @property
    def is_pending(self) -> bool:
        return self.status == CashRequestStatus.PENDING

    def settlement_delta(self, settled_amount: Decimal) -> Decimal:
        """Signed ledger delta for settling this request at `settled_amount`."""
        amount = to_money(settled_amount)
        if self.request_type == CashRequestType.DEPOSIT:
            return amount
        return -amount
