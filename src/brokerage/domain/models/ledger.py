"""Ledger domain model."""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Optional


@dataclass(frozen=True)
class LedgerEntry:
    """
    Append-only balance delta (source of truth for balances).

    Positive delta = money in, negative = money out. `balance_after` is the
    account's running balance once this entry was applied.
    """

    entry_id: str
    account_id: str
    delta: Decimal
    reason: str
    created_at: datetime
    balance_after: Optional[Decimal] = None
