"""Pydantic schemas for security and price endpoints."""

from datetime import date
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field


class SecurityCreateRequest(BaseModel):
    """Request schema for registering a security."""

    symbol: str = Field(..., min_length=1, max_length=20)
    name: str = Field(default="", max_length=255)
    asset_class: Optional[str] = Field(
        default=None,
        description="Free-form class (e.g. 'equity', 'mutual fund'); normalized on save",
    )
    sector: Optional[str] = Field(default=None, max_length=64)


class SecurityResponse(BaseModel):
    model_config = {"from_attributes": True}

    security_id: str
    symbol: str
    name: str
    asset_class: str
    sector: Optional[str] = None


class PriceCreateRequest(BaseModel):
    """Request schema for recording a price snapshot."""

    security_id: str
    price_date: date
    price: Decimal = Field(..., ge=0)


class PriceResponse(BaseModel):
    model_config = {"from_attributes": True}

    snapshot_id: Optional[int] = None
    security_id: str
    price_date: date
    price: Decimal
