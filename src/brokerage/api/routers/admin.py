"""Admin endpoints: accounts, cash approvals, broker orders and market control."""

from typing import Optional

from fastapi import APIRouter, Depends, Query

from brokerage.api.deps import (
    require_admin,
    get_ledger_service,
    get_approval_workflow,
    get_market_data_service,
)
from brokerage.api.schemas import (
    AccountCreate,
    AccountResponse,
    VerificationRequest,
    BalanceAdjustmentRequest,
    LedgerEntryResponse,
    ReconciliationResponse,
    CashApproveRequest,
    CashRequestResponse,
    CashRequestListResponse,
    CashApprovalResponse,
    BrokerOrderResponse,
    BrokerOrderListResponse,
    MarketControlRequest,
    MarketControlResponse,
    MarketControlListResponse,
)
from brokerage.domain.models import Principal
from brokerage.services import LedgerService, ApprovalWorkflow, MarketDataService

router = APIRouter(prefix="/api/admin", tags=["admin"])


# Accounts

@router.post("/accounts", response_model=AccountResponse, status_code=201)
def create_account(
    data: AccountCreate,
    admin: Principal = Depends(require_admin),
    service: LedgerService = Depends(get_ledger_service),
) -> AccountResponse:
    """Register the local account for an externally authenticated identity."""
    account = service.create_account(
        name=data.name,
        role=data.role,
        account_id=data.account_id,
    )
    return AccountResponse.model_validate(account)


@router.post("/accounts/{account_id}/verify", response_model=AccountResponse)
def verify_account(
    account_id: str,
    data: VerificationRequest,
    admin: Principal = Depends(require_admin),
    service: LedgerService = Depends(get_ledger_service),
) -> AccountResponse:
    account = service.set_verification(account_id, data.status)
    return AccountResponse.model_validate(account)


@router.post("/accounts/{account_id}/balance", response_model=LedgerEntryResponse)
def adjust_balance(
    account_id: str,
    data: BalanceAdjustmentRequest,
    admin: Principal = Depends(require_admin),
    service: LedgerService = Depends(get_ledger_service),
) -> LedgerEntryResponse:
    """Apply a manual correction; it is recorded in the ledger like any other delta."""
    entry = service.apply_manual_adjustment(account_id, data.amount, data.reason)
    return LedgerEntryResponse.model_validate(entry)


@router.get("/accounts/{account_id}/reconciliation", response_model=ReconciliationResponse)
def reconcile_account(
    account_id: str,
    admin: Principal = Depends(require_admin),
    service: LedgerService = Depends(get_ledger_service),
) -> ReconciliationResponse:
    result = service.reconcile(account_id)
    return ReconciliationResponse(
        account_id=result.account_id,
        balance=result.balance,
        ledger_total=result.ledger_total,
        entry_count=result.entry_count,
        in_balance=result.in_balance,
    )


# Cash requests

@router.get("/cash", response_model=CashRequestListResponse)
def list_cash_requests(
    status: Optional[str] = Query(None, description="pending, approved or rejected"),
    account_id: Optional[str] = Query(None),
    admin: Principal = Depends(require_admin),
    workflow: ApprovalWorkflow = Depends(get_approval_workflow),
) -> CashRequestListResponse:
    requests = workflow.list_cash_requests(account_id=account_id, status=status)
    return CashRequestListResponse(
        requests=[CashRequestResponse.model_validate(r) for r in requests],
        count=len(requests),
    )


@router.post("/cash/{request_id}/approve", response_model=CashApprovalResponse)
def approve_cash(
    request_id: str,
    data: CashApproveRequest,
    admin: Principal = Depends(require_admin),
    workflow: ApprovalWorkflow = Depends(get_approval_workflow),
) -> CashApprovalResponse:
    """Approve a pending request at the given (possibly adjusted) amount."""
    approval = workflow.approve_cash(request_id, data.amount, admin.account_id)
    return CashApprovalResponse(
        request_id=approval.request_id,
        final_amount=approval.final_amount,
        new_balance=approval.entry.balance_after,
        request=CashRequestResponse.model_validate(approval.request),
    )


@router.post("/cash/{request_id}/reject", response_model=CashRequestResponse)
def reject_cash(
    request_id: str,
    admin: Principal = Depends(require_admin),
    workflow: ApprovalWorkflow = Depends(get_approval_workflow),
) -> CashRequestResponse:
    request = workflow.reject_cash(request_id, admin.account_id)
    return CashRequestResponse.model_validate(request)


# Broker orders

@router.get("/broker-orders", response_model=BrokerOrderListResponse)
def list_broker_orders(
    status: Optional[str] = Query(None, description="pending or approved"),
    admin: Principal = Depends(require_admin),
    workflow: ApprovalWorkflow = Depends(get_approval_workflow),
) -> BrokerOrderListResponse:
    orders = workflow.list_broker_orders(status=status)
    return BrokerOrderListResponse(
        orders=[BrokerOrderResponse.model_validate(o) for o in orders],
        count=len(orders),
    )


@router.post("/broker-orders/{order_id}/approve", response_model=BrokerOrderResponse)
def approve_broker_order(
    order_id: str,
    admin: Principal = Depends(require_admin),
    workflow: ApprovalWorkflow = Depends(get_approval_workflow),
) -> BrokerOrderResponse:
    order = workflow.approve_broker_order(order_id, admin.account_id)
    return BrokerOrderResponse.model_validate(order)


# Market control

@router.get("/markets/control", response_model=MarketControlListResponse)
def list_market_controls(
    admin: Principal = Depends(require_admin),
    market: MarketDataService = Depends(get_market_data_service),
) -> MarketControlListResponse:
    controls = market.list_controls()
    return MarketControlListResponse(
        controls=[MarketControlResponse.model_validate(c) for c in controls],
        count=len(controls),
    )


@router.post("/markets/control", response_model=MarketControlResponse)
def set_market_control(
    data: MarketControlRequest,
    admin: Principal = Depends(require_admin),
    market: MarketDataService = Depends(get_market_data_service),
) -> MarketControlResponse:
    """Pause or resume a bucket and set or clear its price override."""
    control = market.set_control(data.bucket, data.active, data.price_override)
    return MarketControlResponse.model_validate(control)
