"""Enumerations for domain models."""

from enum import Enum


class TransactionType(str, Enum):
    """Types of ledger transactions."""

    BUY = "buy"
    SELL = "sell"
    DIVIDEND = "dividend"
    INTEREST = "interest"
    TRANSFER_IN = "transfer_in"
    TRANSFER_OUT = "transfer_out"


class AssetType(str, Enum):
    """Normalized asset classes shown on holdings."""

    STOCK = "Stock"
    ETF = "ETF"
    BOND = "Bond"
    CRYPTO = "Crypto"
    CASH = "Cash"
    OTHER = "Other"


class HoldingsSource(str, Enum):
    """Where a holdings result came from."""

    CACHE = "cache"
    POSITIONS = "positions"
    TRANSACTIONS = "transactions"
    NONE = "none"
