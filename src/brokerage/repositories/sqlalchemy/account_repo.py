"""SQLAlchemy implementation of AccountRepository."""

from decimal import Decimal
from typing import Optional

from sqlalchemy.orm import Session

from brokerage.core.timezone import to_utc
from brokerage.domain.models import Account
from brokerage.repositories.sqlalchemy.orm_models import AccountORM


class SqlAlchemyAccountRepository:
    """SQLAlchemy-backed account repository. Writes flush; the unit of work commits."""

    def __init__(self, db: Session):
        self._db = db

    def create(self, account: Account) -> Account:
        """Persist a new account."""
        orm_account = AccountORM(
            account_id=account.account_id,
            name=account.name,
            role=account.role,
            verified=account.verified,
            balance=account.balance,
            created_at=account.created_at,
        )
        self._db.add(orm_account)
        self._db.flush()
        return self._to_domain(orm_account)

    def get_by_id(self, account_id: str) -> Optional[Account]:
        """Retrieve account by ID (always re-read; balances move under atomic updates)."""
        orm_account = (
            self._db.query(AccountORM)
            .populate_existing()
            .filter(AccountORM.account_id == account_id)
            .first()
        )
        return self._to_domain(orm_account) if orm_account else None

    def list_all(self) -> list[Account]:
        """List all accounts."""
        orm_accounts = self._db.query(AccountORM).order_by(AccountORM.name).all()
        return [self._to_domain(a) for a in orm_accounts]

    def set_verified(self, account_id: str, verified: bool) -> Optional[Account]:
        """Flip the verified flag."""
        orm_account = self._db.query(AccountORM).filter(
            AccountORM.account_id == account_id
        ).first()
        if not orm_account:
            return None
        orm_account.verified = verified
        self._db.flush()
        return self._to_domain(orm_account)

    def increment_balance(self, account_id: str, delta: Decimal) -> Optional[Decimal]:
        """
        Atomically add `delta` to the cached balance.

        Single UPDATE ... SET balance = balance + :delta, so concurrent writers
        are serialised by the database rather than racing a read-then-write.
        """
        updated = (
            self._db.query(AccountORM)
            .filter(AccountORM.account_id == account_id)
            .update(
                {AccountORM.balance: AccountORM.balance + delta},
                synchronize_session=False,
            )
        )
        if not updated:
            return None
        balance = (
            self._db.query(AccountORM.balance)
            .filter(AccountORM.account_id == account_id)
            .scalar()
        )
        return Decimal(str(balance))

    @staticmethod
    def _to_domain(orm: AccountORM) -> Account:
        """Convert ORM model to domain model."""
        return Account(
            account_id=orm.account_id,
            name=orm.name,
            role=orm.role,
            verified=bool(orm.verified),
            balance=Decimal(str(orm.balance)) if orm.balance is not None else Decimal("0"),
            created_at=to_utc(orm.created_at) if orm.created_at else None,
        )
