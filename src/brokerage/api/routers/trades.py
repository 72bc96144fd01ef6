"""Trade endpoints."""

from fastapi import APIRouter, Depends

from brokerage.api.deps import get_principal, get_trade_executor
from brokerage.api.schemas import (
    OrderRequest,
    OrderResponse,
    OrderResultResponse,
    OrderListResponse,
)
from brokerage.domain.models import Principal
from brokerage.services import TradeExecutor

router = APIRouter(prefix="/api/trades", tags=["trades"])


@router.post("/order", response_model=OrderResultResponse, status_code=201)
def place_order(
    data: OrderRequest,
    principal: Principal = Depends(get_principal),
    executor: TradeExecutor = Depends(get_trade_executor),
) -> OrderResultResponse:
    """
    Fill an order at the submitted price.

    Buys debit and sells credit the caller's balance immediately.
    """
    result = executor.place_order(
        account_id=principal.account_id,
        bucket=data.bucket,
        symbol=data.symbol,
        side=data.side,
        quantity=data.quantity,
        price=data.price,
    )
    return OrderResultResponse(
        order_id=result.order_id,
        new_balance=result.new_balance,
        order=OrderResponse.model_validate(result.order),
    )


@router.get("/orders", response_model=OrderListResponse)
def list_orders(
    principal: Principal = Depends(get_principal),
    executor: TradeExecutor = Depends(get_trade_executor),
) -> OrderListResponse:
    """List the caller's filled orders."""
    orders = executor.list_orders(principal.account_id)
    return OrderListResponse(
        orders=[OrderResponse.model_validate(o) for o in orders],
        count=len(orders),
    )
