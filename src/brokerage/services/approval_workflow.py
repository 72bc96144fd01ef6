"""Approval workflow for cash requests and broker batch orders."""

import logging
import uuid
from decimal import Decimal
from typing import Optional

from brokerage.core.timezone import now_utc
from brokerage.core.money import QUANTITY_SCALE, to_money
from brokerage.core.exceptions import ValidationError, NotFoundError, ConflictError
from brokerage.domain.models import (
    CashRequest,
    CashRequestType,
    CashRequestStatus,
    BrokerOrder,
    BrokerOrderStatus,
)
from brokerage.domain.views import CashApproval
from brokerage.repositories.protocols import (
    CashRequestRepository,
    BrokerOrderRepository,
    UnitOfWork,
)
from brokerage.services.ledger_service import LedgerService
from brokerage.services.trade_executor import parse_side, to_decimal

logger = logging.getLogger(__name__)


class ApprovalWorkflow:
    """
    Moves cash requests and broker orders from pending to a decision.

    Cash requests: pending -> approved (settles through the ledger) or
    pending -> rejected (no ledger effect). Any decision on a request that is
    no longer pending raises ConflictError, so a request settles at most once.

    Broker orders: pending -> approved. Approval is a gate only; it does not
    touch the ledger.
    """

    def __init__(
        self,
        ledger: LedgerService,
        cash_repo: CashRequestRepository,
        broker_order_repo: BrokerOrderRepository,
        uow: UnitOfWork,
    ):
        self._ledger = ledger
        self._cash_repo = cash_repo
        self._broker_order_repo = broker_order_repo
        self._uow = uow

    # Cash requests

    def request_cash(self, account_id: str, request_type: str, amount) -> CashRequest:
        """
        File a pending deposit or withdrawal.

        No balance check: a withdrawal larger than the balance is accepted.
        """
        try:
            cash_type = CashRequestType(request_type)
        except ValueError:
            raise ValidationError(f"Invalid cash request type: {request_type!r}")
        requested = self._positive_amount(amount)

        self._ledger.get_account(account_id)
        request = CashRequest(
            request_id=str(uuid.uuid4()),
            account_id=account_id,
            request_type=cash_type,
            requested_amount=requested,
            amount=requested,
            status=CashRequestStatus.PENDING,
            created_at=now_utc(),
        )
        with self._uow:
            created = self._cash_repo.create(request)
        logger.info("Cash %s request %s for %s: %s", cash_type.value, created.request_id, account_id, requested)
        return created

    def approve_cash(
        self,
        request_id: str,
        settled_amount,
        approved_by: str,
    ) -> CashApproval:
        """
        Approve a pending request and settle `settled_amount` through the ledger.

        The settled amount may differ from the requested one. The status flip
        and the ledger entry commit together.
        """
        amount = self._positive_amount(settled_amount)
        with self._uow:
            request = self._pending_cash_request(request_id)
            approved = self._cash_repo.transition(
                request_id,
                CashRequestStatus.APPROVED,
                decided_by=approved_by,
                decided_at=now_utc(),
                amount=amount,
            )
            if approved is None:
                raise ConflictError(f"Cash request {request_id} is no longer pending")
            entry = self._ledger.apply_delta(
                request.account_id,
                request.settlement_delta(amount),
                f"{request.request_type.value} approval",
            )
        logger.info("Approved cash request %s for %s", request_id, amount)
        return CashApproval(request=approved, entry=entry)

    def reject_cash(self, request_id: str, rejected_by: str) -> CashRequest:
        """Reject a pending request. Nothing is written to the ledger."""
        with self._uow:
            self._pending_cash_request(request_id)
            rejected = self._cash_repo.transition(
                request_id,
                CashRequestStatus.REJECTED,
                decided_by=rejected_by,
                decided_at=now_utc(),
            )
            if rejected is None:
                raise ConflictError(f"Cash request {request_id} is no longer pending")
        logger.info("Rejected cash request %s", request_id)
        return rejected

    def get_cash_request(self, request_id: str) -> CashRequest:
        request = self._cash_repo.get_by_id(request_id)
        if not request:
            raise NotFoundError("Cash request", request_id)
        return request

    def list_cash_requests(
        self,
        account_id: Optional[str] = None,
        status: Optional[str] = None,
    ) -> list[CashRequest]:
        return self._cash_repo.query(
            account_id=account_id,
            status=self._parse_enum(CashRequestStatus, status, "cash request status"),
        )

    # Broker orders

    def submit_broker_order(
        self,
        broker_id: str,
        symbol: str,
        side: str,
        quantity,
    ) -> BrokerOrder:
        """File a batch order for admin approval."""
        order_side = parse_side(side)
        if not symbol or not symbol.strip():
            raise ValidationError("symbol is required")
        qty = to_decimal(quantity, "quantity", QUANTITY_SCALE)
        if qty <= 0:
            raise ValidationError("quantity must be > 0")

        order = BrokerOrder(
            order_id=str(uuid.uuid4()),
            broker_id=broker_id,
            symbol=symbol.strip().upper(),
            side=order_side,
            quantity=qty,
            status=BrokerOrderStatus.PENDING,
            created_at=now_utc(),
        )
        with self._uow:
            created = self._broker_order_repo.create(order)
        logger.info("Broker %s submitted batch order %s", broker_id, created.order_id)
        return created

    def approve_broker_order(self, order_id: str, approved_by: str) -> BrokerOrder:
        """Flip a pending broker order to approved and stamp the approver."""
        with self._uow:
            existing = self._broker_order_repo.get_by_id(order_id)
            if not existing:
                raise NotFoundError("Broker order", order_id)
            approved = self._broker_order_repo.mark_approved(order_id, approved_by, now_utc())
            if approved is None:
                raise ConflictError(f"Broker order {order_id} is already {existing.status.value}")
        logger.info("Broker order %s approved by %s", order_id, approved_by)
        return approved

    def list_broker_orders(self, status: Optional[str] = None) -> list[BrokerOrder]:
        return self._broker_order_repo.query(
            status=self._parse_enum(BrokerOrderStatus, status, "broker order status"),
        )

    # Helpers

    def _pending_cash_request(self, request_id: str) -> CashRequest:
        request = self.get_cash_request(request_id)
        if not request.is_pending:
            raise ConflictError(
                f"Cash request {request_id} is already {request.status.value}"
            )
        return request

    @staticmethod
    def _positive_amount(value) -> Decimal:
        amount = to_money(to_decimal(value, "amount"))
        if amount <= 0:
            raise ValidationError("amount must be > 0")
        return amount

    @staticmethod
    def _parse_enum(enum_cls, value: Optional[str], label: str):
        if value is None:
            return None
        try:
            return enum_cls(value)
        except ValueError:
            raise ValidationError(f"Invalid {label}: {value!r}")
