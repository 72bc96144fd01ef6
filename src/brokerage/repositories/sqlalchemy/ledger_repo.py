"""SQLAlchemy implementation of LedgerRepository."""

from decimal import Decimal

from sqlalchemy import func
from sqlalchemy.orm import Session

from brokerage.core.timezone import to_utc
from brokerage.domain.models import LedgerEntry
from brokerage.repositories.sqlalchemy.orm_models import LedgerEntryORM


class SqlAlchemyLedgerRepository:
    """SQLAlchemy-backed ledger. Append and read only."""

    def __init__(self, db: Session):
        self._db = db

    def create(self, entry: LedgerEntry) -> LedgerEntry:
        """Append a ledger entry."""
        orm_entry = LedgerEntryORM(
            entry_id=entry.entry_id,
            account_id=entry.account_id,
            delta=entry.delta,
            reason=entry.reason,
            balance_after=entry.balance_after,
            created_at=entry.created_at,
        )
        self._db.add(orm_entry)
        self._db.flush()
        return entry

    def list_by_account(self, account_id: str) -> list[LedgerEntry]:
        """List entries for an account, oldest first."""
        orm_entries = (
            self._db.query(LedgerEntryORM)
            .filter(LedgerEntryORM.account_id == account_id)
            .order_by(LedgerEntryORM.created_at, LedgerEntryORM.entry_id)
            .all()
        )
        return [self._to_domain(e) for e in orm_entries]

    def sum_by_account(self, account_id: str) -> tuple[Decimal, int]:
        """Return (sum of deltas, entry count) for an account."""
        total, count = (
            self._db.query(func.sum(LedgerEntryORM.delta), func.count(LedgerEntryORM.entry_id))
            .filter(LedgerEntryORM.account_id == account_id)
            .one()
        )
        return (Decimal(str(total)) if total is not None else Decimal("0"), count)

    @staticmethod
    def _to_domain(orm: LedgerEntryORM) -> LedgerEntry:
        """Convert ORM model to domain model."""
        return LedgerEntry(
            entry_id=orm.entry_id,
            account_id=orm.account_id,
            delta=Decimal(str(orm.delta)),
            reason=orm.reason,
            created_at=to_utc(orm.created_at),
            balance_after=Decimal(str(orm.balance_after)) if orm.balance_after is not None else None,
        )
