"""SQLAlchemy implementation of CashRequestRepository."""

from datetime import datetime
from decimal import Decimal
from typing import Optional

from sqlalchemy import and_
from sqlalchemy.orm import Session

from brokerage.core.timezone import to_utc
from brokerage.domain.models import CashRequest, CashRequestStatus
from brokerage.repositories.sqlalchemy.orm_models import CashRequestORM


class SqlAlchemyCashRequestRepository:
    """SQLAlchemy-backed cash request repository."""

    def __init__(self, db: Session):
        self._db = db

    def create(self, request: CashRequest) -> CashRequest:
        """Persist a new cash request."""
        orm_request = CashRequestORM(
            request_id=request.request_id,
            account_id=request.account_id,
            request_type=request.request_type,
            requested_amount=request.requested_amount,
            amount=request.amount,
            status=request.status,
            created_at=request.created_at,
        )
        self._db.add(orm_request)
        self._db.flush()
        return self._to_domain(orm_request)

    def get_by_id(self, request_id: str) -> Optional[CashRequest]:
        """Retrieve cash request by ID."""
        orm_request = (
            self._db.query(CashRequestORM)
            .populate_existing()
            .filter(CashRequestORM.request_id == request_id)
            .first()
        )
        return self._to_domain(orm_request) if orm_request else None

    def query(
        self,
        account_id: Optional[str] = None,
        status: Optional[CashRequestStatus] = None,
    ) -> list[CashRequest]:
        """List cash requests with optional filters, oldest first."""
        query = self._db.query(CashRequestORM)

        conditions = []
        if account_id:
            conditions.append(CashRequestORM.account_id == account_id)
        if status is not None:
            conditions.append(CashRequestORM.status == status)

        if conditions:
            query = query.filter(and_(*conditions))

        query = query.order_by(CashRequestORM.created_at, CashRequestORM.request_id)
        return [self._to_domain(r) for r in query.all()]

    def transition(
        self,
        request_id: str,
        status: CashRequestStatus,
        decided_by: str,
        decided_at: datetime,
        amount: Optional[Decimal] = None,
    ) -> Optional[CashRequest]:
        """Move a pending request to `status` in a single conditional UPDATE."""
        values = {
            CashRequestORM.status: status,
            CashRequestORM.decided_by: decided_by,
            CashRequestORM.decided_at: decided_at,
        }
        if amount is not None:
            values[CashRequestORM.amount] = amount

        updated = (
            self._db.query(CashRequestORM)
            .filter(
                CashRequestORM.request_id == request_id,
                CashRequestORM.status == CashRequestStatus.PENDING,
            )
            .update(values, synchronize_session=False)
        )
        if not updated:
            return None
        return self.get_by_id(request_id)

    @staticmethod
    def _to_domain(orm: CashRequestORM) -> CashRequest:
        """Convert ORM model to domain model."""
        return CashRequest(
            request_id=orm.request_id,
            account_id=orm.account_id,
            request_type=orm.request_type,
            requested_amount=Decimal(str(orm.requested_amount)),
            amount=Decimal(str(orm.amount)),
            status=orm.status,
            created_at=to_utc(orm.created_at) if orm.created_at else None,
            decided_at=to_utc(orm.decided_at) if orm.decided_at else None,
            decided_by=orm.decided_by,
        )
