"""Transaction domain model."""

from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from typing import Optional

from holdings.domain.models.enums import TransactionType


@dataclass
class Transaction:
    """
    Ledger transaction entry (source of truth).

    Supports: buy, sell, dividend, interest, transfer_in, transfer_out.
    - Only buy/sell with a security_id move a position
    - Other types are informational and never touch cost basis
    - Fractional quantities supported via Decimal
    """

    txn_id: str
    account_id: str
    txn_date: date
    txn_type: TransactionType
    security_id: Optional[str] = None
    quantity: Optional[Decimal] = None
    price: Optional[Decimal] = None
    fees: Decimal = field(default_factory=lambda: Decimal("0"))
    notes: Optional[str] = None
    created_at: Optional[datetime] = field(default=None)
    updated_at: Optional[datetime] = field(default=None)

    def __post_init__(self) -> None:
        if isinstance(self.txn_type, str):
            self.txn_type = TransactionType(self.txn_type)

    @property
    def is_trade(self) -> bool:
        """Return True if this is a buy or sell against a security."""
        return (
            self.txn_type in (TransactionType.BUY, TransactionType.SELL)
            and bool(self.security_id)
        )
