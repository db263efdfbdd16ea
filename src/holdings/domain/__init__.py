"""Domain layer - pure business models with no external dependencies."""

from holdings.domain.models import (
    Account,
    Transaction,
    Security,
    PriceSnapshot,
    Position,
    TransactionType,
    AssetType,
    HoldingsSource,
)

__all__ = [
    "Account",
    "Transaction",
    "Security",
    "PriceSnapshot",
    "Position",
    "TransactionType",
    "AssetType",
    "HoldingsSource",
]
