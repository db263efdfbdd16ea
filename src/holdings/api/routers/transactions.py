"""Transaction endpoints."""

from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query

from holdings.api.deps import get_ledger_service, get_owner_id
from holdings.api.schemas import (
    TransactionCreateRequest,
    TransactionListResponse,
    TransactionResponse,
    TransactionUpdateRequest,
)
from holdings.services import (
    LedgerService,
    TransactionCreate,
    TransactionFilters,
    TransactionUpdate,
)

router = APIRouter(prefix="/transactions", tags=["transactions"])


@router.get("", response_model=TransactionListResponse)
def list_transactions(
    account_id: Optional[str] = Query(None),
    security_id: Optional[str] = Query(None),
    start_date: Optional[date] = Query(None),
    end_date: Optional[date] = Query(None),
    owner_id: Optional[str] = Depends(get_owner_id),
    service: LedgerService = Depends(get_ledger_service),
) -> TransactionListResponse:
    """List the caller's transactions, oldest first."""
    transactions = service.list_transactions(
        owner_id,
        TransactionFilters(
            account_id=account_id,
            security_id=security_id,
            start_date=start_date,
            end_date=end_date,
        ),
    )
    return TransactionListResponse(
        transactions=[TransactionResponse.model_validate(t) for t in transactions],
        count=len(transactions),
    )


@router.post("", response_model=TransactionResponse, status_code=201)
def create_transaction(
    data: TransactionCreateRequest,
    owner_id: Optional[str] = Depends(get_owner_id),
    service: LedgerService = Depends(get_ledger_service),
) -> TransactionResponse:
    """Create a new transaction."""
    created = service.create_transaction(
        owner_id,
        TransactionCreate(
            account_id=data.account_id,
            txn_type=data.txn_type,
            txn_date=data.txn_date,
            security_id=data.security_id,
            symbol=data.symbol,
            quantity=data.quantity,
            price=data.price,
            fees=data.fees,
            notes=data.notes,
        ),
    )
    return TransactionResponse.model_validate(created)


@router.patch("/{txn_id}", response_model=TransactionResponse)
def update_transaction(
    txn_id: str,
    data: TransactionUpdateRequest,
    owner_id: Optional[str] = Depends(get_owner_id),
    service: LedgerService = Depends(get_ledger_service),
) -> TransactionResponse:
    """Partially update a transaction."""
    updated = service.update_transaction(
        owner_id,
        txn_id,
        TransactionUpdate(**data.model_dump(exclude_unset=True)),
    )
    return TransactionResponse.model_validate(updated)


@router.delete("/{txn_id}", status_code=204)
def delete_transaction(
    txn_id: str,
    owner_id: Optional[str] = Depends(get_owner_id),
    service: LedgerService = Depends(get_ledger_service),
) -> None:
    """Delete a transaction."""
    service.delete_transaction(owner_id, txn_id)
