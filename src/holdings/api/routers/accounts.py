"""Account endpoints."""

from typing import Optional

from fastapi import APIRouter, Depends

from holdings.api.deps import get_ledger_service, get_owner_id
from holdings.api.schemas import AccountCreateRequest, AccountListResponse, AccountResponse
from holdings.services import LedgerService

router = APIRouter(prefix="/accounts", tags=["accounts"])


@router.get("", response_model=AccountListResponse)
def list_accounts(
    owner_id: Optional[str] = Depends(get_owner_id),
    service: LedgerService = Depends(get_ledger_service),
) -> AccountListResponse:
    """List the caller's accounts."""
    accounts = service.list_accounts(owner_id)
    return AccountListResponse(
        accounts=[AccountResponse.model_validate(a) for a in accounts],
        count=len(accounts),
    )


@router.post("", response_model=AccountResponse, status_code=201)
def create_account(
    data: AccountCreateRequest,
    owner_id: Optional[str] = Depends(get_owner_id),
    service: LedgerService = Depends(get_ledger_service),
) -> AccountResponse:
    """Create a new account owned by the caller."""
    account = service.create_account(owner_id, data.name, data.account_type)
    return AccountResponse.model_validate(account)
