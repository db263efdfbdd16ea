"""Security and price snapshot endpoints."""

from typing import Optional

from fastapi import APIRouter, Depends, Query

from holdings.api.deps import get_ledger_service, get_owner_id
from holdings.api.schemas import (
    PriceCreateRequest,
    PriceResponse,
    SecurityCreateRequest,
    SecurityResponse,
)
from holdings.services import LedgerService

router = APIRouter(prefix="/securities", tags=["securities"])


@router.get("", response_model=list[SecurityResponse])
def list_securities(service: LedgerService = Depends(get_ledger_service)):
    """List all securities by symbol."""
    return [SecurityResponse.model_validate(s) for s in service.list_securities()]


@router.post("", response_model=SecurityResponse, status_code=201)
def create_security(
    data: SecurityCreateRequest,
    service: LedgerService = Depends(get_ledger_service),
):
    """Register a security."""
    security = service.create_security(
        symbol=data.symbol,
        name=data.name,
        asset_class=data.asset_class,
        sector=data.sector,
    )
    return SecurityResponse.model_validate(security)


@router.get("/prices", response_model=list[PriceResponse])
def list_prices(
    security_id: Optional[str] = Query(None),
    service: LedgerService = Depends(get_ledger_service),
):
    """List price snapshots, newest first."""
    return [PriceResponse.model_validate(p) for p in service.list_prices(security_id)]


@router.post("/prices", response_model=PriceResponse, status_code=201)
def record_price(
    data: PriceCreateRequest,
    owner_id: Optional[str] = Depends(get_owner_id),
    service: LedgerService = Depends(get_ledger_service),
):
    """Record a price snapshot."""
    snapshot = service.record_price(owner_id, data.security_id, data.price_date, data.price)
    return PriceResponse.model_validate(snapshot)
