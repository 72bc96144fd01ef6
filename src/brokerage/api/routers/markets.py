"""Market data endpoints."""

from fastapi import APIRouter, Depends

from brokerage.api.deps import get_principal, get_market_data_service
from brokerage.api.schemas import BucketListResponse, QuoteBatchResponse
from brokerage.domain.models import Principal
from brokerage.services import MarketDataService

router = APIRouter(prefix="/api/markets", tags=["markets"])


@router.get("", response_model=BucketListResponse)
def list_buckets(
    principal: Principal = Depends(get_principal),
    market: MarketDataService = Depends(get_market_data_service),
) -> BucketListResponse:
    """List market buckets and their symbols."""
    return BucketListResponse(buckets=market.list_buckets())


@router.get("/{bucket}", response_model=QuoteBatchResponse)
def get_quotes(
    bucket: str,
    principal: Principal = Depends(get_principal),
    market: MarketDataService = Depends(get_market_data_service),
) -> QuoteBatchResponse:
    """
    Get quotes for a bucket.

    Served from cache while fresh. A paused bucket answers 423; a symbol the
    provider could not price carries an `error` instead of a `price`.
    """
    batch = market.get_quotes(bucket)
    return QuoteBatchResponse.model_validate(batch)
