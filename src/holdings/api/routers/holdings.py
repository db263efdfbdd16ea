"""Holdings endpoints."""

from typing import Optional

from fastapi import APIRouter, Depends, Query

from holdings.api.deps import get_owner_id, get_portfolio_service
from holdings.api.schemas import (
    CacheInvalidateResponse,
    HoldingResponse,
    HoldingsListResponse,
    PortfolioValueResponse,
)
from holdings.services import PortfolioService

router = APIRouter(prefix="/holdings", tags=["holdings"])


@router.get("", response_model=HoldingsListResponse)
def list_holdings(
    account_id: Optional[str] = Query(None, description="Restrict to one account"),
    owner_id: Optional[str] = Depends(get_owner_id),
    service: PortfolioService = Depends(get_portfolio_service),
) -> HoldingsListResponse:
    """
    Current holdings of the caller.

    Missing owner or inaccessible account yields an empty list, not an error.
    """
    holdings = service.get_holdings(owner_id, account_id=account_id)
    return HoldingsListResponse(
        holdings=[HoldingResponse.model_validate(h) for h in holdings],
        count=len(holdings),
    )


@router.get("/value", response_model=PortfolioValueResponse)
def portfolio_value(
    account_id: Optional[str] = Query(None, description="Restrict to one account"),
    owner_id: Optional[str] = Depends(get_owner_id),
    service: PortfolioService = Depends(get_portfolio_service),
) -> PortfolioValueResponse:
    """Total market value of the caller's holdings."""
    return PortfolioValueResponse(
        account_id=account_id,
        total_market_value=service.get_portfolio_value(owner_id, account_id=account_id),
    )


@router.post("/invalidate", response_model=CacheInvalidateResponse)
def invalidate_cache(
    owner_id: Optional[str] = Depends(get_owner_id),
    service: PortfolioService = Depends(get_portfolio_service),
) -> CacheInvalidateResponse:
    """Drop the caller's cached holdings."""
    if not owner_id:
        return CacheInvalidateResponse(invalidated=0)
    return CacheInvalidateResponse(invalidated=service.invalidate_holdings_cache(owner_id))
