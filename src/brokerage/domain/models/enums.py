"""Enumerations for domain models."""

from enum import Enum


class Role(str, Enum):
    """Roles carried by an authenticated principal."""

    USER = "user"
    BROKER = "broker"
    ADMIN = "admin"


class OrderSide(str, Enum):
    """Direction of a fill."""

    BUY = "buy"
    SELL = "sell"


class CashRequestType(str, Enum):
    """Kinds of cash movement a user can request."""

    DEPOSIT = "deposit"
    WITHDRAWAL = "withdrawal"


class CashRequestStatus(str, Enum):
    """Lifecycle states of a cash request."""

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class BrokerOrderStatus(str, Enum):
    """Lifecycle states of a broker batch order."""

    PENDING = "pending"
    APPROVED = "approved"


class VerificationStatus(str, Enum):
    """Outcome of an identity document review."""

    APPROVED = "approved"
    REJECTED = "rejected"
