"""Precomputed position endpoints (written by the incremental position writer)."""

from typing import Optional

from fastapi import APIRouter, Depends

from holdings.api.deps import get_ledger_service, get_owner_id
from holdings.api.schemas import PositionResponse, PositionUpsertRequest
from holdings.domain.models import Position
from holdings.services import LedgerService

router = APIRouter(prefix="/positions", tags=["positions"])


@router.put("", response_model=PositionResponse)
def upsert_position(
    data: PositionUpsertRequest,
    owner_id: Optional[str] = Depends(get_owner_id),
    service: LedgerService = Depends(get_ledger_service),
) -> PositionResponse:
    """Insert or replace a position row."""
    saved = service.upsert_position(owner_id, Position(**data.model_dump()))
    return PositionResponse.model_validate(saved)


@router.delete("/{account_id}", status_code=204)
def delete_positions(
    account_id: str,
    owner_id: Optional[str] = Depends(get_owner_id),
    service: LedgerService = Depends(get_ledger_service),
) -> None:
    """Drop an account's precomputed positions."""
    service.delete_positions(owner_id, account_id)
