"""Security and price snapshot domain models."""

from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from typing import Optional


@dataclass
class Security:
    """Tradable instrument referenced by transactions and positions."""

    security_id: str
    symbol: str
    name: str
    asset_class: str = "Stock"
    sector: Optional[str] = None
    created_at: Optional[datetime] = field(default=None)


@dataclass
class PriceSnapshot:
    """
    Stored price for a security on a date.

    snapshot_id is the insertion sequence assigned by storage; it breaks ties
    between snapshots sharing a date (higher wins).
    """

    security_id: str
    price_date: date
    price: Decimal
    snapshot_id: Optional[int] = None
