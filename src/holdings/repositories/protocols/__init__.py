"""Repository protocol definitions (interfaces)."""

from holdings.repositories.protocols.account_repo import AccountRepository
from holdings.repositories.protocols.transaction_repo import TransactionRepository
from holdings.repositories.protocols.security_repo import SecurityRepository
from holdings.repositories.protocols.position_repo import PositionRepository

__all__ = [
    "AccountRepository",
    "TransactionRepository",
    "SecurityRepository",
    "PositionRepository",
]
