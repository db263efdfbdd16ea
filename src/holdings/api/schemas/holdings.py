"""Pydantic schemas for holdings endpoints."""

from decimal import Decimal
from typing import Optional

from pydantic import BaseModel

from holdings.domain.models.enums import AssetType


class HoldingResponse(BaseModel):
    """One valued position in one account."""

    model_config = {"from_attributes": True}

    security_id: str
    symbol: str
    name: str
    asset_type: AssetType
    sector: str
    quantity: Decimal
    avg_price: Decimal
    book_value: Decimal
    last_price: Decimal
    market_value: Decimal
    unrealized_pnl: Decimal
    unrealized_pnl_percent: Decimal
    account_id: str
    account_name: str


class HoldingsListResponse(BaseModel):
    """Response schema for listing holdings."""

    holdings: list[HoldingResponse]
    count: int


class PortfolioValueResponse(BaseModel):
    """Total market value over an owner's holdings."""

    account_id: Optional[str] = None
    total_market_value: Decimal


class CacheInvalidateResponse(BaseModel):
    invalidated: int
