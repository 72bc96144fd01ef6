"""SQLAlchemy ORM model definitions."""

from datetime import datetime
from decimal import Decimal

from sqlalchemy import (
    Column,
    String,
    DateTime,
    Boolean,
    ForeignKey,
    BigInteger,
    Index,
    Enum as SqlEnum,
)
from sqlalchemy.types import TypeDecorator
from sqlalchemy.orm import relationship

from brokerage.core.money import MONEY_SCALE, PRICE_SCALE, QUANTITY_SCALE
from brokerage.repositories.sqlalchemy.database import Base
from brokerage.domain.models.enums import (
    Role,
    OrderSide,
    CashRequestType,
    CashRequestStatus,
    BrokerOrderStatus,
)


class FixedPoint(TypeDecorator):
    """
    Decimal stored as a scaled integer.

    SQLite keeps NUMERIC values as REAL, so decimals are written as
    `value * 10**scale` in a BIGINT column. `balance + :delta` then runs as
    exact integer arithmetic in the database.
    """

    impl = BigInteger
    cache_ok = True

    def __init__(self, scale: int):
        super().__init__()
        self.scale = scale

    def process_bind_param(self, value, dialect):
        if value is None:
            return None
        scaled = Decimal(str(value)).scaleb(self.scale)
        if scaled != scaled.to_integral_value():
            raise ValueError(f"{value} has more than {self.scale} decimal places")
        return int(scaled)

    def process_result_value(self, value, dialect):
        if value is None:
            return None
        return Decimal(int(value)).scaleb(-self.scale)

    def coerce_compared_value(self, op, value):
        return self


MONEY = FixedPoint(MONEY_SCALE)
PRICE = FixedPoint(PRICE_SCALE)
QUANTITY = FixedPoint(QUANTITY_SCALE)


class AccountORM(Base):
    """SQLAlchemy model for Account."""

    __tablename__ = "accounts"

    account_id = Column(String(36), primary_key=True)
    name = Column(String(255), nullable=False)
    role = Column(SqlEnum(Role), default=Role.USER, nullable=False)
    verified = Column(Boolean, default=False, nullable=False)
    balance = Column(MONEY, default=Decimal("0"), nullable=False)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)

    ledger_entries = relationship("LedgerEntryORM", back_populates="account")


class LedgerEntryORM(Base):
    """SQLAlchemy model for LedgerEntry (append-only)."""

    __tablename__ = "ledger_entries"
    __table_args__ = (Index("ix_ledger_entries_account_created", "account_id", "created_at"),)

    entry_id = Column(String(36), primary_key=True)
    account_id = Column(String(36), ForeignKey("accounts.account_id"), nullable=False)
    delta = Column(MONEY, nullable=False)
    reason = Column(String(255), nullable=False)
    balance_after = Column(MONEY, nullable=True)
    created_at = Column(DateTime, nullable=False)

    account = relationship("AccountORM", back_populates="ledger_entries")


class OrderORM(Base):
    """SQLAlchemy model for Order (immediate fill)."""

    __tablename__ = "orders"

    order_id = Column(String(36), primary_key=True)
    account_id = Column(String(36), ForeignKey("accounts.account_id"), nullable=False, index=True)
    bucket = Column(String(50), nullable=False)
    symbol = Column(String(20), nullable=False)
    side = Column(SqlEnum(OrderSide), nullable=False)
    quantity = Column(QUANTITY, nullable=False)
    price = Column(PRICE, nullable=False)
    created_at = Column(DateTime, nullable=False)


class CashRequestORM(Base):
    """SQLAlchemy model for CashRequest."""

    __tablename__ = "cash_requests"

    request_id = Column(String(36), primary_key=True)
    account_id = Column(String(36), ForeignKey("accounts.account_id"), nullable=False, index=True)
    request_type = Column(SqlEnum(CashRequestType), nullable=False)
    requested_amount = Column(MONEY, nullable=False)
    amount = Column(MONEY, nullable=False)
    status = Column(
        SqlEnum(CashRequestStatus),
        default=CashRequestStatus.PENDING,
        nullable=False,
        index=True,
    )
    created_at = Column(DateTime, nullable=False)
    decided_at = Column(DateTime, nullable=True)
    decided_by = Column(String(36), nullable=True)


class BrokerOrderORM(Base):
    """SQLAlchemy model for BrokerOrder."""

    __tablename__ = "broker_orders"

    order_id = Column(String(36), primary_key=True)
    broker_id = Column(String(36), nullable=False, index=True)
    symbol = Column(String(20), nullable=False)
    side = Column(SqlEnum(OrderSide), nullable=False)
    quantity = Column(QUANTITY, nullable=False)
    status = Column(
        SqlEnum(BrokerOrderStatus),
        default=BrokerOrderStatus.PENDING,
        nullable=False,
    )
    created_at = Column(DateTime, nullable=False)
    approved_by = Column(String(36), nullable=True)
    approved_at = Column(DateTime, nullable=True)


class MarketControlORM(Base):
    """SQLAlchemy model for MarketControlEntry (one row per bucket)."""

    __tablename__ = "market_controls"

    bucket = Column(String(50), primary_key=True)
    active = Column(Boolean, default=True, nullable=False)
    price_override = Column(PRICE, nullable=True)
    paused_at = Column(DateTime, nullable=True)
