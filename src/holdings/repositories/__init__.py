"""Repository layer - data access abstractions and implementations."""

from holdings.repositories.protocols import (
    AccountRepository,
    TransactionRepository,
    SecurityRepository,
    PositionRepository,
)

__all__ = [
    "AccountRepository",
    "TransactionRepository",
    "SecurityRepository",
    "PositionRepository",
]
