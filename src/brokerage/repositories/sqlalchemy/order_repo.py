"""SQLAlchemy implementations of OrderRepository and BrokerOrderRepository."""

from datetime import datetime
from decimal import Decimal
from typing import Optional

from sqlalchemy.orm import Session

from brokerage.core.timezone import to_utc
from brokerage.domain.models import Order, BrokerOrder, BrokerOrderStatus
from brokerage.repositories.sqlalchemy.orm_models import OrderORM, BrokerOrderORM


class SqlAlchemyOrderRepository:
    """SQLAlchemy-backed repository for filled orders."""

    def __init__(self, db: Session):
        self._db = db

    def create(self, order: Order) -> Order:
        """Persist a new order."""
        self._db.add(
            OrderORM(
                order_id=order.order_id,
                account_id=order.account_id,
                bucket=order.bucket,
                symbol=order.symbol,
                side=order.side,
                quantity=order.quantity,
                price=order.price,
                created_at=order.created_at,
            )
        )
        self._db.flush()
        return order

    def list_by_account(self, account_id: str) -> list[Order]:
        """List orders for an account, oldest first."""
        orm_orders = (
            self._db.query(OrderORM)
            .filter(OrderORM.account_id == account_id)
            .order_by(OrderORM.created_at, OrderORM.order_id)
            .all()
        )
        return [self._to_domain(o) for o in orm_orders]

    @staticmethod
    def _to_domain(orm: OrderORM) -> Order:
        """Convert ORM model to domain model."""
        return Order(
            order_id=orm.order_id,
            account_id=orm.account_id,
            bucket=orm.bucket,
            symbol=orm.symbol,
            side=orm.side,
            quantity=Decimal(str(orm.quantity)),
            price=Decimal(str(orm.price)),
            created_at=to_utc(orm.created_at),
        )


class SqlAlchemyBrokerOrderRepository:
    """SQLAlchemy-backed repository for broker batch orders."""

    def __init__(self, db: Session):
        self._db = db

    def create(self, order: BrokerOrder) -> BrokerOrder:
        """Persist a new broker order."""
        orm_order = BrokerOrderORM(
            order_id=order.order_id,
            broker_id=order.broker_id,
            symbol=order.symbol,
            side=order.side,
            quantity=order.quantity,
            status=order.status,
            created_at=order.created_at,
        )
        self._db.add(orm_order)
        self._db.flush()
        return self._to_domain(orm_order)

    def get_by_id(self, order_id: str) -> Optional[BrokerOrder]:
        """Retrieve broker order by ID."""
        orm_order = (
            self._db.query(BrokerOrderORM)
            .populate_existing()
            .filter(BrokerOrderORM.order_id == order_id)
            .first()
        )
        return self._to_domain(orm_order) if orm_order else None

    def query(self, status: Optional[BrokerOrderStatus] = None) -> list[BrokerOrder]:
        """List broker orders, optionally filtered by status."""
        query = self._db.query(BrokerOrderORM)
        if status is not None:
            query = query.filter(BrokerOrderORM.status == status)
        query = query.order_by(BrokerOrderORM.created_at, BrokerOrderORM.order_id)
        return [self._to_domain(o) for o in query.all()]

    def mark_approved(
        self,
        order_id: str,
        approved_by: str,
        approved_at: datetime,
    ) -> Optional[BrokerOrder]:
        """Move a pending order to approved in a single conditional UPDATE."""
        updated = (
            self._db.query(BrokerOrderORM)
            .filter(
                BrokerOrderORM.order_id == order_id,
                BrokerOrderORM.status == BrokerOrderStatus.PENDING,
            )
            .update(
                {
                    BrokerOrderORM.status: BrokerOrderStatus.APPROVED,
                    BrokerOrderORM.approved_by: approved_by,
                    BrokerOrderORM.approved_at: approved_at,
                },
                synchronize_session=False,
            )
        )
        if not updated:
            return None
        return self.get_by_id(order_id)

    @staticmethod
    def _to_domain(orm: BrokerOrderORM) -> BrokerOrder:
        """Convert ORM model to domain model."""
        return BrokerOrder(
            order_id=orm.order_id,
            broker_id=orm.broker_id,
            symbol=orm.symbol,
            side=orm.side,
            quantity=Decimal(str(orm.quantity)),
            status=orm.status,
            created_at=to_utc(orm.created_at) if orm.created_at else None,
            approved_by=orm.approved_by,
            approved_at=to_utc(orm.approved_at) if orm.approved_at else None,
        )
