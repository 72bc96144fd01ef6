"""Broker batch order endpoint."""

from fastapi import APIRouter, Depends

from brokerage.api.deps import require_broker, get_approval_workflow
from brokerage.api.schemas import BrokerOrderCreate, BrokerOrderResponse
from brokerage.domain.models import Principal
from brokerage.services import ApprovalWorkflow

router = APIRouter(prefix="/api/broker", tags=["broker"])


@router.post("/batch-order", response_model=BrokerOrderResponse, status_code=201)
def submit_batch_order(
    data: BrokerOrderCreate,
    principal: Principal = Depends(require_broker),
    workflow: ApprovalWorkflow = Depends(get_approval_workflow),
) -> BrokerOrderResponse:
    """Submit a batch order; it stays pending until an admin approves it."""
    order = workflow.submit_broker_order(
        broker_id=principal.account_id,
        symbol=data.symbol,
        side=data.side,
        quantity=data.quantity,
    )
    return BrokerOrderResponse.model_validate(order)
