"""Ledger service: the only writer of account balances."""

import logging
import uuid
from decimal import Decimal
from typing import Optional

from brokerage.core.timezone import now_utc
from brokerage.core.money import to_money
from brokerage.core.exceptions import ValidationError, NotFoundError
from brokerage.domain.models import (
    Account,
    LedgerEntry,
    Role,
    VerificationStatus,
)
from brokerage.domain.views import BalanceReconciliation
from brokerage.repositories.protocols import (
    AccountRepository,
    LedgerRepository,
    UnitOfWork,
)

logger = logging.getLogger(__name__)

MANUAL_ADJUSTMENT_REASON = "manual"


class LedgerService:
    """
    Service for accounts and the balance ledger.

    Every balance change is an appended LedgerEntry plus an atomic increment
    of the account's cached balance, inside one unit of work. There is no
    balance floor: overdrafts are recorded as negative balances.
    """

    def __init__(
        self,
        account_repo: AccountRepository,
        ledger_repo: LedgerRepository,
        uow: UnitOfWork,
    ):
        self._account_repo = account_repo
        self._ledger_repo = ledger_repo
        self._uow = uow

    def create_account(
        self,
        name: str,
        role: str = "user",
        account_id: Optional[str] = None,
        verified: bool = False,
    ) -> Account:
        """
        Register the local mirror of an externally authenticated identity.

        Args:
            name: Display name
            role: user (default), broker or admin
            account_id: Identity from the auth provider; generated if omitted
            verified: Initial verification flag

        Returns:
            Created Account with a zero balance
        """
        if not name or not name.strip():
            raise ValidationError("Account name is required")
        try:
            account_role = Role(role)
        except ValueError:
            raise ValidationError(f"Invalid role: {role!r}")

        account_id = account_id or str(uuid.uuid4())
        with self._uow:
            if self._account_repo.get_by_id(account_id):
                raise ValidationError(f"Account already exists: {account_id}")
            account = Account(
                account_id=account_id,
                name=name.strip(),
                role=account_role,
                verified=verified,
                balance=Decimal("0"),
                created_at=now_utc(),
            )
            created = self._account_repo.create(account)
        logger.info("Created %s account %s", account_role.value, account_id)
        return created

    def ensure_account(self, account_id: str, name: str, role: str) -> Account:
        """Return the account, creating it (verified) if it does not exist yet."""
        existing = self._account_repo.get_by_id(account_id)
        if existing:
            return existing
        return self.create_account(name=name, role=role, account_id=account_id, verified=True)

    def get_account(self, account_id: str) -> Account:
        """Get account by ID."""
        account = self._account_repo.get_by_id(account_id)
        if not account:
            raise NotFoundError("Account", account_id)
        return account

    def list_accounts(self) -> list[Account]:
        """List all accounts."""
        return self._account_repo.list_all()

    def set_verification(self, account_id: str, status: str) -> Account:
        """Record the outcome of an identity document review."""
        try:
            outcome = VerificationStatus(status)
        except ValueError:
            raise ValidationError(f"Invalid verification status: {status!r}")

        with self._uow:
            account = self._account_repo.set_verified(
                account_id, outcome == VerificationStatus.APPROVED
            )
            if account is None:
                raise NotFoundError("Account", account_id)
        logger.info("Verification for %s set to %s", account_id, outcome.value)
        return account

    def apply_delta(self, account_id: str, delta: Decimal, reason: str) -> LedgerEntry:
        """
        Append a ledger entry and move the cached balance by `delta`.

        Joins the caller's unit of work when nested, so an Order or
        CashRequest change and its ledger entry commit or roll back together.
        """
        delta = to_money(delta)
        with self._uow:
            balance_after = self._account_repo.increment_balance(account_id, delta)
            if balance_after is None:
                raise NotFoundError("Account", account_id)
            entry = LedgerEntry(
                entry_id=str(uuid.uuid4()),
                account_id=account_id,
                delta=delta,
                reason=reason,
                created_at=now_utc(),
                balance_after=balance_after,
            )
            created = self._ledger_repo.create(entry)
        logger.info(
            "Ledger %s: %s %s (balance %s)", account_id, reason, delta, balance_after
        )
        return created

    def apply_manual_adjustment(
        self,
        account_id: str,
        amount: Decimal,
        reason: Optional[str] = None,
    ) -> LedgerEntry:
        """Admin balance correction; recorded like any other delta."""
        return self.apply_delta(account_id, amount, reason or MANUAL_ADJUSTMENT_REASON)

    def list_entries(self, account_id: str) -> list[LedgerEntry]:
        """List an account's ledger, oldest first."""
        self.get_account(account_id)
        return self._ledger_repo.list_by_account(account_id)

    def reconcile(self, account_id: str) -> BalanceReconciliation:
        """Compare the cached balance with the sum of the account's ledger."""
        account = self.get_account(account_id)
        ledger_total, entry_count = self._ledger_repo.sum_by_account(account_id)
        result = BalanceReconciliation(
            account_id=account_id,
            balance=account.balance,
            ledger_total=ledger_total,
            entry_count=entry_count,
        )
        if not result.in_balance:
            logger.error(
                "Balance drift on %s: cached %s, ledger %s",
                account_id, account.balance, ledger_total,
            )
        return result
