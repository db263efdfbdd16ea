"""Pydantic schemas for API request/response."""

from holdings.api.schemas.account import (
    AccountCreateRequest,
    AccountResponse,
    AccountListResponse,
)
from holdings.api.schemas.holdings import (
    HoldingResponse,
    HoldingsListResponse,
    PortfolioValueResponse,
    CacheInvalidateResponse,
)
from holdings.api.schemas.position import PositionUpsertRequest, PositionResponse
from holdings.api.schemas.security import (
    SecurityCreateRequest,
    SecurityResponse,
    PriceCreateRequest,
    PriceResponse,
)
from holdings.api.schemas.transaction import (
    TransactionCreateRequest,
    TransactionUpdateRequest,
    TransactionResponse,
    TransactionListResponse,
)

__all__ = [
    "AccountCreateRequest",
    "AccountResponse",
    "AccountListResponse",
    "HoldingResponse",
    "HoldingsListResponse",
    "PortfolioValueResponse",
    "CacheInvalidateResponse",
    "PositionUpsertRequest",
    "PositionResponse",
    "SecurityCreateRequest",
    "SecurityResponse",
    "PriceCreateRequest",
    "PriceResponse",
    "TransactionCreateRequest",
    "TransactionUpdateRequest",
    "TransactionResponse",
    "TransactionListResponse",
]
