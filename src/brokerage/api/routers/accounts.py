"""Account endpoints for the authenticated caller."""

from fastapi import APIRouter, Depends

from brokerage.api.deps import get_principal, get_ledger_service
from brokerage.api.schemas import AccountResponse, LedgerEntryResponse, LedgerListResponse
from brokerage.domain.models import Principal
from brokerage.services import LedgerService

router = APIRouter(prefix="/api/accounts", tags=["accounts"])


@router.get("/me", response_model=AccountResponse)
def get_my_account(
    principal: Principal = Depends(get_principal),
    service: LedgerService = Depends(get_ledger_service),
) -> AccountResponse:
    """Get the caller's profile and balance."""
    account = service.get_account(principal.account_id)
    return AccountResponse.model_validate(account)


@router.get("/me/ledger", response_model=LedgerListResponse)
def list_my_ledger(
    principal: Principal = Depends(get_principal),
    service: LedgerService = Depends(get_ledger_service),
) -> LedgerListResponse:
    """List the caller's ledger entries, oldest first."""
    entries = service.list_entries(principal.account_id)
    return LedgerListResponse(
        entries=[LedgerEntryResponse.model_validate(e) for e in entries],
        count=len(entries),
    )
