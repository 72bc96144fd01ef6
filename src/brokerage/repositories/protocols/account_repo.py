"""Account repository protocol."""

from decimal import Decimal
from typing import Protocol, Optional

from brokerage.domain.models import Account


class AccountRepository(Protocol):
    """Interface for account data access."""

    def create(self, account: Account) -> Account:
        """Persist a new account."""
        ...

    def get_by_id(self, account_id: str) -> Optional[Account]:
        """Retrieve account by ID."""
        ...

    def list_all(self) -> list[Account]:
        """List all accounts."""
        ...

    def set_verified(self, account_id: str, verified: bool) -> Optional[Account]:
        """Flip the verified flag. Returns None if the account does not exist."""
        ...

    def increment_balance(self, account_id: str, delta: Decimal) -> Optional[Decimal]:
        """
        Atomically add `delta` to the cached balance.

        Returns the resulting balance, or None if the account does not exist.
        """
        ...
