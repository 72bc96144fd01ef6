"""
Unit tests for ApprovalWorkflow.

Tests cover:
- Cash request filing and validation
- Approval with adjusted amounts, exactly-once settlement
- Rejection (no ledger effect)
- Broker order submission and status-only approval
"""

import pytest
from decimal import Decimal

from brokerage.core.exceptions import (
    ValidationError,
    InvalidSideError,
    NotFoundError,
    ConflictError,
)
from brokerage.domain.models import (
    CashRequestType,
    CashRequestStatus,
    BrokerOrderStatus,
    OrderSide,
)

from tests.conftest import assert_decimal_equal


# =============================================================================
# CASH REQUEST TESTS
# =============================================================================


class TestRequestCash:
    """Tests for filing deposits and withdrawals."""

    def test_deposit_request_is_pending(self, approval_workflow, account_factory, ledger_service):
        """
        GIVEN an account
        WHEN it requests a 500 deposit
        THEN a pending request exists and the balance is unchanged
        """
        account = account_factory()

        request = approval_workflow.request_cash(account.account_id, "deposit", Decimal("500"))

        assert request.status == CashRequestStatus.PENDING
        assert request.request_type == CashRequestType.DEPOSIT
        assert request.requested_amount == Decimal("500")
        assert request.amount == Decimal("500")
        assert ledger_service.get_account(account.account_id).balance == Decimal("0")

    def test_withdrawal_above_balance_is_accepted(self, approval_workflow, account_factory):
        """
        GIVEN an account holding 100
        WHEN it requests a 5,000 withdrawal
        THEN the request is filed (no balance check at request time)
        """
        account = account_factory(balance=Decimal("100"))

        request = approval_workflow.request_cash(account.account_id, "withdrawal", 5000)

        assert request.is_pending

    @pytest.mark.parametrize("amount", [0, -10, "abc"])
    def test_invalid_amount(self, approval_workflow, account_factory, amount):
        account = account_factory()

        with pytest.raises(ValidationError):
            approval_workflow.request_cash(account.account_id, "deposit", amount)

    def test_invalid_type(self, approval_workflow, account_factory):
        account = account_factory()

        with pytest.raises(ValidationError):
            approval_workflow.request_cash(account.account_id, "transfer", 10)

    def test_unknown_account(self, approval_workflow):
        with pytest.raises(NotFoundError):
            approval_workflow.request_cash("ghost", "deposit", 10)


class TestApproveCash:
    """Tests for settling cash requests."""

    def test_approve_deposit_with_adjusted_amount(
        self, approval_workflow, account_factory, ledger_service
    ):
        """
        GIVEN a pending deposit request of 500
        WHEN an admin approves it at 450
        THEN the balance rises by 450 and the request records 450
        """
        account = account_factory()
        request = approval_workflow.request_cash(account.account_id, "deposit", 500)

        approval = approval_workflow.approve_cash(request.request_id, Decimal("450"), "admin-1")

        assert approval.request_id == request.request_id
        assert approval.final_amount == Decimal("450")
        assert approval.request.status == CashRequestStatus.APPROVED
        assert approval.request.requested_amount == Decimal("500")
        assert approval.request.decided_by == "admin-1"
        assert approval.request.decided_at is not None
        assert approval.entry.reason == "deposit approval"
        assert_decimal_equal(
            ledger_service.get_account(account.account_id).balance, Decimal("450")
        )

    def test_approve_withdrawal_debits(self, approval_workflow, account_factory, ledger_service):
        account = account_factory(balance=Decimal("1000"))
        request = approval_workflow.request_cash(account.account_id, "withdrawal", 300)

        approval = approval_workflow.approve_cash(request.request_id, 300, "admin-1")

        assert approval.entry.delta == Decimal("-300")
        assert_decimal_equal(
            ledger_service.get_account(account.account_id).balance, Decimal("700")
        )

    def test_approve_withdrawal_may_overdraw(
        self, approval_workflow, account_factory, ledger_service
    ):
        account = account_factory(balance=Decimal("100"))
        request = approval_workflow.request_cash(account.account_id, "withdrawal", 250)

        approval_workflow.approve_cash(request.request_id, 250, "admin-1")

        assert_decimal_equal(
            ledger_service.get_account(account.account_id).balance, Decimal("-150")
        )

    def test_second_approval_conflicts_and_settles_once(
        self, approval_workflow, account_factory, ledger_service
    ):
        """
        GIVEN an approved deposit
        WHEN it is approved again
        THEN ConflictError is raised and only one ledger entry exists
        """
        account = account_factory()
        request = approval_workflow.request_cash(account.account_id, "deposit", 200)
        approval_workflow.approve_cash(request.request_id, 200, "admin-1")

        with pytest.raises(ConflictError):
            approval_workflow.approve_cash(request.request_id, 200, "admin-1")

        assert len(ledger_service.list_entries(account.account_id)) == 1
        assert_decimal_equal(
            ledger_service.get_account(account.account_id).balance, Decimal("200")
        )

    def test_approve_rejected_request_conflicts(self, approval_workflow, account_factory):
        account = account_factory()
        request = approval_workflow.request_cash(account.account_id, "deposit", 200)
        approval_workflow.reject_cash(request.request_id, "admin-1")

        with pytest.raises(ConflictError):
            approval_workflow.approve_cash(request.request_id, 200, "admin-1")

    def test_approve_unknown_request(self, approval_workflow):
        with pytest.raises(NotFoundError):
            approval_workflow.approve_cash("missing", 10, "admin-1")

    def test_approve_non_positive_amount(self, approval_workflow, account_factory):
        """
        GIVEN a pending request
        WHEN approval is attempted at 0
        THEN ValidationError is raised and the request stays pending
        """
        account = account_factory()
        request = approval_workflow.request_cash(account.account_id, "deposit", 200)

        with pytest.raises(ValidationError):
            approval_workflow.approve_cash(request.request_id, 0, "admin-1")

        assert approval_workflow.get_cash_request(request.request_id).is_pending

    def test_ledger_failure_keeps_request_pending(
        self, approval_workflow, account_factory, ledger_service, monkeypatch
    ):
        """
        GIVEN the ledger write fails during approval
        WHEN the request is approved
        THEN the status change is rolled back with it
        """
        account = account_factory()
        request = approval_workflow.request_cash(account.account_id, "deposit", 200)

        def _boom(*args, **kwargs):
            raise RuntimeError("disk full")

        monkeypatch.setattr(ledger_service, "apply_delta", _boom)
        with pytest.raises(RuntimeError):
            approval_workflow.approve_cash(request.request_id, 200, "admin-1")
        monkeypatch.undo()

        assert approval_workflow.get_cash_request(request.request_id).is_pending


class TestRejectCash:
    """Tests for rejecting cash requests."""

    def test_reject_has_no_ledger_effect(
        self, approval_workflow, account_factory, ledger_service
    ):
        account = account_factory(balance=Decimal("100"))
        request = approval_workflow.request_cash(account.account_id, "withdrawal", 50)

        rejected = approval_workflow.reject_cash(request.request_id, "admin-1")

        assert rejected.status == CashRequestStatus.REJECTED
        assert rejected.decided_by == "admin-1"
        assert len(ledger_service.list_entries(account.account_id)) == 1
        assert_decimal_equal(
            ledger_service.get_account(account.account_id).balance, Decimal("100")
        )

    def test_reject_twice_conflicts(self, approval_workflow, account_factory):
        account = account_factory()
        request = approval_workflow.request_cash(account.account_id, "deposit", 50)
        approval_workflow.reject_cash(request.request_id, "admin-1")

        with pytest.raises(ConflictError):
            approval_workflow.reject_cash(request.request_id, "admin-1")


class TestListCashRequests:
    """Tests for cash request queries."""

    def test_filter_by_account_and_status(self, approval_workflow, account_factory):
        alice = account_factory(name="Alice")
        bob = account_factory(name="Bob")
        first = approval_workflow.request_cash(alice.account_id, "deposit", 10)
        approval_workflow.request_cash(alice.account_id, "withdrawal", 20)
        approval_workflow.request_cash(bob.account_id, "deposit", 30)
        approval_workflow.approve_cash(first.request_id, 10, "admin-1")

        alice_requests = approval_workflow.list_cash_requests(account_id=alice.account_id)
        pending = approval_workflow.list_cash_requests(status="pending")
        approved = approval_workflow.list_cash_requests(status="approved")

        assert len(alice_requests) == 2
        assert len(pending) == 2
        assert [r.request_id for r in approved] == [first.request_id]

    def test_invalid_status_filter(self, approval_workflow):
        with pytest.raises(ValidationError):
            approval_workflow.list_cash_requests(status="done")


# =============================================================================
# BROKER ORDER TESTS
# =============================================================================


class TestBrokerOrders:
    """Tests for broker batch orders."""

    def test_submit_is_pending(self, approval_workflow, account_factory):
        broker = account_factory(role="broker")

        order = approval_workflow.submit_broker_order(broker.account_id, "thyao", "buy", 1000)

        assert order.status == BrokerOrderStatus.PENDING
        assert order.symbol == "THYAO"
        assert order.side == OrderSide.BUY
        assert order.quantity == Decimal("1000")
        assert order.approved_by is None

    def test_submit_invalid_side(self, approval_workflow):
        with pytest.raises(InvalidSideError):
            approval_workflow.submit_broker_order("broker-1", "THYAO", "hold", 10)

    def test_submit_non_positive_quantity(self, approval_workflow):
        with pytest.raises(ValidationError):
            approval_workflow.submit_broker_order("broker-1", "THYAO", "sell", 0)

    def test_approve_is_status_only(
        self, approval_workflow, account_factory, ledger_service
    ):
        """
        GIVEN a pending broker order
        WHEN an admin approves it
        THEN it is approved and stamped, and no ledger entry is written
        """
        broker = account_factory(role="broker", balance=Decimal("50"))
        order = approval_workflow.submit_broker_order(broker.account_id, "GARAN", "sell", 100)

        approved = approval_workflow.approve_broker_order(order.order_id, "admin-1")

        assert approved.status == BrokerOrderStatus.APPROVED
        assert approved.approved_by == "admin-1"
        assert approved.approved_at is not None
        assert len(ledger_service.list_entries(broker.account_id)) == 1
        assert_decimal_equal(
            ledger_service.get_account(broker.account_id).balance, Decimal("50")
        )

    def test_second_approval_conflicts(self, approval_workflow):
        order = approval_workflow.submit_broker_order("broker-1", "GARAN", "buy", 5)
        approval_workflow.approve_broker_order(order.order_id, "admin-1")

        with pytest.raises(ConflictError):
            approval_workflow.approve_broker_order(order.order_id, "admin-2")

        assert approval_workflow.list_broker_orders()[0].approved_by == "admin-1"

    def test_approve_unknown_order(self, approval_workflow):
        with pytest.raises(NotFoundError):
            approval_workflow.approve_broker_order("missing", "admin-1")

    def test_list_by_status(self, approval_workflow):
        first = approval_workflow.submit_broker_order("broker-1", "AAPL", "buy", 1)
        approval_workflow.submit_broker_order("broker-1", "MSFT", "sell", 2)
        approval_workflow.approve_broker_order(first.order_id, "admin-1")

        assert len(approval_workflow.list_broker_orders()) == 2
        assert len(approval_workflow.list_broker_orders(status="pending")) == 1
        assert [o.order_id for o in approval_workflow.list_broker_orders(status="approved")] == [
            first.order_id
        ]


class TestWithdrawalExample:
    def test_withdraw_thousand_from_fifteen_hundred(
        self, approval_workflow, account_factory, ledger_service
    ):
        """
        GIVEN a pending 1,000 withdrawal on an account holding 1,500
        WHEN it is approved at 1,000 and then approved again
        THEN the balance is 500, the request is approved, and the repeat conflicts
        """
        account = account_factory(balance=Decimal("1500"))
        request = approval_workflow.request_cash(account.account_id, "withdrawal", 1000)

        approval = approval_workflow.approve_cash(request.request_id, 1000, "admin-1")

        assert approval.request.status == CashRequestStatus.APPROVED
        assert_decimal_equal(
            ledger_service.get_account(account.account_id).balance, Decimal("500")
        )
        with pytest.raises(ConflictError):
            approval_workflow.approve_cash(request.request_id, 1000, "admin-1")
        assert_decimal_equal(
            ledger_service.get_account(account.account_id).balance, Decimal("500")
        )
