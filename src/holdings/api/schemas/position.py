"""Pydantic schemas for precomputed position endpoints."""

from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field


class PositionUpsertRequest(BaseModel):
    """Request schema for writing a precomputed position."""

    account_id: str
    security_id: str
    quantity: Decimal = Field(..., ge=0)
    avg_price: Decimal = Field(..., ge=0)
    book_value: Decimal = Field(..., ge=0)
    last_price: Optional[Decimal] = Field(default=None, ge=0)


class PositionResponse(BaseModel):
    model_config = {"from_attributes": True}

    account_id: str
    security_id: str
    quantity: Decimal
    avg_price: Decimal
    book_value: Decimal
    last_price: Optional[Decimal] = None
    updated_at: Optional[datetime] = None
