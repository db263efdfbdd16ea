"""View models for holdings computation outputs."""

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Optional

from holdings.core.exceptions import AppError
from holdings.domain.models.enums import AssetType, HoldingsSource


@dataclass
class AggregateState:
    """Running weighted-average state for one (security, account) pair."""

    quantity: Decimal = field(default_factory=lambda: Decimal("0"))
    avg_price: Decimal = field(default_factory=lambda: Decimal("0"))
    book_value: Decimal = field(default_factory=lambda: Decimal("0"))


@dataclass(frozen=True)
class Holding:
    """A valued position as shown on the portfolio dashboard."""

    security_id: str
    symbol: str
    name: str
    asset_type: AssetType
    sector: str
    quantity: Decimal
    avg_price: Decimal
    book_value: Decimal
    last_price: Decimal
    market_value: Decimal
    unrealized_pnl: Decimal
    unrealized_pnl_percent: Decimal
    account_id: str
    account_name: str


@dataclass
class HoldingsResult:
    """
    Outcome of a holdings computation.

    Access failures from storage are carried in ``error`` instead of being
    raised, so the caller chooses between degrading to an empty list and
    surfacing the failure.
    """

    holdings: list[Holding] = field(default_factory=list)
    source: HoldingsSource = HoldingsSource.NONE
    error: Optional[AppError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> list[Holding]:
        """Return holdings, raising the carried error if there is one."""
        if self.error is not None:
            raise self.error
        return self.holdings
