"""Ledger repository protocol."""

from decimal import Decimal
from typing import Protocol

from brokerage.domain.models import LedgerEntry


class LedgerRepository(Protocol):
    """Interface for the append-only ledger. There is no update or delete."""

    def create(self, entry: LedgerEntry) -> LedgerEntry:
        """Append a ledger entry."""
        ...

    def list_by_account(self, account_id: str) -> list[LedgerEntry]:
        """List entries for an account, oldest first."""
        ...

    def sum_by_account(self, account_id: str) -> tuple[Decimal, int]:
        """Return (sum of deltas, entry count) for an account."""
        ...
