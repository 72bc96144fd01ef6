"""Deposit and withdrawal request endpoints."""

from typing import Optional

from fastapi import APIRouter, Depends, Query

from brokerage.api.deps import get_principal, get_approval_workflow
from brokerage.api.schemas import (
    CashRequestCreate,
    CashRequestResponse,
    CashRequestListResponse,
)
from brokerage.domain.models import Principal, CashRequestType
from brokerage.services import ApprovalWorkflow

router = APIRouter(prefix="/api", tags=["cash"])


@router.post("/deposits/request", response_model=CashRequestResponse, status_code=201)
def request_deposit(
    data: CashRequestCreate,
    principal: Principal = Depends(get_principal),
    workflow: ApprovalWorkflow = Depends(get_approval_workflow),
) -> CashRequestResponse:
    """File a deposit for admin review."""
    request = workflow.request_cash(
        principal.account_id, CashRequestType.DEPOSIT.value, data.amount
    )
    return CashRequestResponse.model_validate(request)


@router.post("/withdrawals/request", response_model=CashRequestResponse, status_code=201)
def request_withdrawal(
    data: CashRequestCreate,
    principal: Principal = Depends(get_principal),
    workflow: ApprovalWorkflow = Depends(get_approval_workflow),
) -> CashRequestResponse:
    """File a withdrawal for admin review. The balance is not checked here."""
    request = workflow.request_cash(
        principal.account_id, CashRequestType.WITHDRAWAL.value, data.amount
    )
    return CashRequestResponse.model_validate(request)


@router.get("/cash/requests", response_model=CashRequestListResponse)
def list_my_cash_requests(
    status: Optional[str] = Query(None, description="pending, approved or rejected"),
    principal: Principal = Depends(get_principal),
    workflow: ApprovalWorkflow = Depends(get_approval_workflow),
) -> CashRequestListResponse:
    requests = workflow.list_cash_requests(account_id=principal.account_id, status=status)
    return CashRequestListResponse(
        requests=[CashRequestResponse.model_validate(r) for r in requests],
        count=len(requests),
    )
