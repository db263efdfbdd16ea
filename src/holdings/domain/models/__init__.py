"""Domain models package."""

from holdings.domain.models.enums import TransactionType, AssetType, HoldingsSource
from holdings.domain.models.account import Account
from holdings.domain.models.transaction import Transaction
from holdings.domain.models.security import Security, PriceSnapshot
from holdings.domain.models.position import Position

__all__ = [
    "TransactionType",
    "AssetType",
    "HoldingsSource",
    "Account",
    "Transaction",
    "Security",
    "PriceSnapshot",
    "Position",
]
