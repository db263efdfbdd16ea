"""Pydantic schemas for transaction endpoints."""

from datetime import date, datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from holdings.domain.models.enums import TransactionType


class TransactionCreateRequest(BaseModel):
    """Request schema for creating a transaction."""

    account_id: str = Field(..., description="Account ID")
    txn_type: TransactionType = Field(..., description="Transaction type")
    txn_date: Optional[date] = Field(
        default=None,
        description="Trade date (US/Eastern); defaults to today",
    )
    security_id: Optional[str] = Field(default=None, description="Security ID")
    symbol: Optional[str] = Field(
        default=None,
        max_length=20,
        description="Symbol of an existing security (alternative to security_id)",
    )
    quantity: Optional[Decimal] = Field(
        default=None,
        gt=0,
        description="Number of units (required for buy/sell)",
    )
    price: Optional[Decimal] = Field(
        default=None,
        ge=0,
        description="Price per unit (required for buy/sell)",
    )
    fees: Decimal = Field(default=Decimal("0"), ge=0, description="Transaction fees")
    notes: Optional[str] = Field(default=None, max_length=500, description="Optional note")

    @field_validator("symbol")
    @classmethod
    def uppercase_symbol(cls, v: Optional[str]) -> Optional[str]:
        return v.upper() if v else None


class TransactionUpdateRequest(BaseModel):
    """Request schema for updating a transaction (partial update)."""

    txn_date: Optional[date] = None
    txn_type: Optional[TransactionType] = None
    security_id: Optional[str] = None
    quantity: Optional[Decimal] = Field(default=None, gt=0)
    price: Optional[Decimal] = Field(default=None, ge=0)
    fees: Optional[Decimal] = Field(default=None, ge=0)
    notes: Optional[str] = Field(default=None, max_length=500)


class TransactionResponse(BaseModel):
    """Response schema for a single transaction."""

    model_config = {"from_attributes": True}

    txn_id: str
    account_id: str
    txn_date: date
    txn_type: TransactionType
    security_id: Optional[str] = None
    quantity: Optional[Decimal] = None
    price: Optional[Decimal] = None
    fees: Decimal
    notes: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class TransactionListResponse(BaseModel):
    """Response schema for listing transactions."""

    transactions: list[TransactionResponse]
    count: int
