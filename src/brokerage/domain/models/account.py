"""Account and principal domain models."""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Optional

from brokerage.domain.models.enums import Role


@dataclass
class Account:
    """
    Local mirror of an externally registered identity.

    `balance` is a materialized cache of the ledger's running sum for the
    account. It is only ever changed together with a LedgerEntry.
    """

    account_id: str
    name: str
    role: Role = Role.USER
    verified: bool = False
    balance: Decimal = field(default_factory=lambda: Decimal("0"))
    created_at: Optional[datetime] = field(default=None)

    def __post_init__(self) -> None:
        if isinstance(self.role, str):
            self.role = Role(self.role)


@dataclass(frozen=True)
class Principal:
    """Authenticated caller as reported by the auth provider."""

    account_id: str
    role: Role
    verified: bool = False

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN
