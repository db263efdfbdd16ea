"""Builds valued Holding records from positions or replayed aggregates."""

from collections.abc import Iterable, Mapping
from decimal import Decimal
from typing import Optional

from holdings.domain.classification import classify
from holdings.domain.models import Account, Position, Security
from holdings.domain.views import AggregateState, Holding
from holdings.services.cost_basis import AggregateKey

ZERO = Decimal("0")
HUNDRED = Decimal("100")
UNKNOWN_ACCOUNT_NAME = "Unknown Account"


class HoldingsAssembler:
    """
    Classifies, enriches and values holdings.

    Pure and synchronous: all lookups arrive as already-fetched collections.
    Missing securities or accounts never raise; they yield placeholder labels.
    """

    def from_positions(
        self,
        positions: Iterable[Position],
        securities: Iterable[Security],
        accounts: Iterable[Account],
        prices: Optional[Mapping[str, Decimal]] = None,
    ) -> list[Holding]:
        """
        Build holdings from precomputed positions.

        A resolved snapshot price wins over the writer-supplied last_price;
        with neither, the position is valued at its average price.
        """
        security_map = {s.security_id: s for s in securities}
        account_map = {a.account_id: a for a in accounts}
        prices = prices or {}

        holdings = []
        for position in positions:
            price = prices.get(position.security_id)
            if not _is_usable_price(price):
                price = position.last_price
            holdings.append(
                self._build(
                    security_id=position.security_id,
                    account_id=position.account_id,
                    quantity=position.quantity,
                    avg_price=position.avg_price,
                    book_value=position.book_value,
                    price=price,
                    security=security_map.get(position.security_id),
                    account=account_map.get(position.account_id),
                )
            )
        return self._finalize(holdings)

    def from_aggregates(
        self,
        aggregates: Mapping[AggregateKey, AggregateState],
        prices: Mapping[str, Decimal],
        securities: Iterable[Security],
        accounts: Iterable[Account],
    ) -> list[Holding]:
        """Build holdings from replayed (security, account) aggregates."""
        security_map = {s.security_id: s for s in securities}
        account_map = {a.account_id: a for a in accounts}

        holdings = []
        for (security_id, account_id), state in aggregates.items():
            holdings.append(
                self._build(
                    security_id=security_id,
                    account_id=account_id,
                    quantity=state.quantity,
                    avg_price=state.avg_price,
                    book_value=state.book_value,
                    price=prices.get(security_id),
                    security=security_map.get(security_id),
                    account=account_map.get(account_id),
                )
            )
        return self._finalize(holdings)

    @staticmethod
    def _build(
        security_id: str,
        account_id: str,
        quantity: Decimal,
        avg_price: Decimal,
        book_value: Decimal,
        price: Optional[Decimal],
        security: Optional[Security],
        account: Optional[Account],
    ) -> Holding:
        symbol = security.symbol if security else ""
        asset_type, sector = classify(
            security.asset_class if security else None,
            security.sector if security else None,
            symbol,
        )

        if _is_usable_price(price):
            last_price = price
            market_value = quantity * last_price
            unrealized_pnl = market_value - book_value
        else:
            # No usable quote: value at cost, zero P&L
            last_price = avg_price
            market_value = quantity * avg_price
            unrealized_pnl = ZERO

        pnl_percent = unrealized_pnl / book_value * HUNDRED if book_value > 0 else ZERO

        return Holding(
            security_id=security_id,
            symbol=symbol,
            name=(security.name or symbol) if security else symbol,
            asset_type=asset_type,
            sector=sector,
            quantity=quantity,
            avg_price=avg_price,
            book_value=book_value,
            last_price=last_price,
            market_value=market_value,
            unrealized_pnl=unrealized_pnl,
            unrealized_pnl_percent=pnl_percent,
            account_id=account_id,
            account_name=account.name if account else UNKNOWN_ACCOUNT_NAME,
        )

    @staticmethod
    def _finalize(holdings: list[Holding]) -> list[Holding]:
        kept = [h for h in holdings if h.quantity > 0]
        kept.sort(key=lambda h: (h.account_name, h.symbol, h.security_id))
        return kept


def _is_usable_price(price: Optional[Decimal]) -> bool:
    return price is not None and price > 0
