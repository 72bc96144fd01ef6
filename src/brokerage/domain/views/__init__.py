"""View models for service outputs."""

from brokerage.domain.views.quotes import QuoteLine, QuoteBatch
from brokerage.domain.views.results import OrderResult, CashApproval, BalanceReconciliation

__all__ = [
    "QuoteLine",
    "QuoteBatch",
    "OrderResult",
    "CashApproval",
    "BalanceReconciliation",
]
