"""Precomputed position model (fast-path source)."""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Optional


@dataclass
class Position:
    """
    Precomputed holdings row per account/security.

    Maintained by an external incremental writer. When present for an owner it
    is authoritative and the ledger is not replayed.
    """

    security_id: str
    account_id: str
    quantity: Decimal = field(default_factory=lambda: Decimal("0"))
    avg_price: Decimal = field(default_factory=lambda: Decimal("0"))
    book_value: Decimal = field(default_factory=lambda: Decimal("0"))
    last_price: Optional[Decimal] = None
    updated_at: Optional[datetime] = field(default=None)
