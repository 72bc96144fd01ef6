"""Trade executor: immediate fills settled through the ledger."""

import logging
import uuid
from decimal import Decimal, InvalidOperation
from typing import Optional

from brokerage.core.timezone import now_utc
from brokerage.core.money import PRICE_SCALE, QUANTITY_SCALE, decimal_places
from brokerage.core.exceptions import (
    ValidationError,
    InvalidSideError,
    NotVerifiedError,
)
from brokerage.domain.models import Order, OrderSide
from brokerage.domain.views import OrderResult
from brokerage.repositories.protocols import OrderRepository, UnitOfWork
from brokerage.services.ledger_service import LedgerService

logger = logging.getLogger(__name__)


def parse_side(side: str) -> OrderSide:
    """Map a raw side string to OrderSide or raise InvalidSideError."""
    try:
        return OrderSide(side)
    except ValueError:
        raise InvalidSideError(side)


def to_decimal(value, field: str, places: Optional[int] = None) -> Decimal:
    """
    Coerce a numeric input to Decimal or raise ValidationError.

    When `places` is given, values with more fractional digits than the
    column can hold are rejected rather than silently rounded.
    """
    if isinstance(value, bool) or value is None:
        raise ValidationError(f"{field} must be a number")
    try:
        result = Decimal(str(value))
    except (InvalidOperation, ValueError):
        raise ValidationError(f"{field} must be a number")
    if not result.is_finite():
        raise ValidationError(f"{field} must be a finite number")
    if places is not None and decimal_places(result) > places:
        raise ValidationError(f"{field} supports at most {places} decimal places")
    return result


class TradeExecutor:
    """
    Applies buy/sell fills at the price the caller supplies.

    The price is taken at face value; it is not cross-checked against the
    quote cache. Order insert, ledger entry and balance increment share one
    unit of work.
    """

    def __init__(
        self,
        ledger: LedgerService,
        order_repo: OrderRepository,
        uow: UnitOfWork,
    ):
        self._ledger = ledger
        self._order_repo = order_repo
        self._uow = uow

    def place_order(
        self,
        account_id: str,
        bucket: str,
        symbol: str,
        side: str,
        quantity,
        price,
    ) -> OrderResult:
        """
        Fill an order immediately and settle it.

        Unverified accounts are rejected before anything else is looked at,
        so they fail with NotVerifiedError whatever else is wrong.
        """
        account = self._ledger.get_account(account_id)
        if not account.verified:
            raise NotVerifiedError(account_id)

        order_side = parse_side(side)
        if not bucket or not bucket.strip():
            raise ValidationError("bucket is required")
        if not symbol or not symbol.strip():
            raise ValidationError("symbol is required")
        qty = to_decimal(quantity, "quantity", QUANTITY_SCALE)
        px = to_decimal(price, "price", PRICE_SCALE)
        if qty <= 0:
            raise ValidationError("quantity must be > 0")
        if px < 0:
            raise ValidationError("price must be >= 0")

        order = Order(
            order_id=str(uuid.uuid4()),
            account_id=account_id,
            bucket=bucket.strip(),
            symbol=symbol.strip().upper(),
            side=order_side,
            quantity=qty,
            price=px,
            created_at=now_utc(),
        )

        with self._uow:
            self._order_repo.create(order)
            entry = self._ledger.apply_delta(
                account_id,
                order.cash_delta,
                f"{order.side.value} {order.symbol}",
            )

        logger.info(
            "Filled %s %s %s @ %s for %s",
            order.side.value, order.quantity, order.symbol, order.price, account_id,
        )
        return OrderResult(order=order, entry=entry, new_balance=entry.balance_after)

    def list_orders(self, account_id: str) -> list[Order]:
        """List an account's fills, oldest first."""
        self._ledger.get_account(account_id)
        return self._order_repo.list_by_account(account_id)
