"""Weighted-average cost basis replay over the transaction ledger."""

import logging
from collections.abc import Iterable
from decimal import Decimal

from holdings.domain.models import Transaction, TransactionType
from holdings.domain.views import AggregateState

logger = logging.getLogger(__name__)

ZERO = Decimal("0")

AggregateKey = tuple[str, str]  # (security_id, account_id)


class CostBasisAggregator:
    """
    Replays buy/sell transactions into one weighted-average position per
    (security, account).

    All held units of a security in an account share a single blended average
    price. Buys recompute it from the full prior book value plus the incoming
    cost; sells remove book value at that average and leave it unchanged. This
    is not tax-lot accounting.

    Over-sells are clamped: quantity and book value never go below zero and no
    error is raised, since holdings are a read-side projection of the ledger.
    """

    def replay(self, transactions: Iterable[Transaction]) -> dict[AggregateKey, AggregateState]:
        """
        Replay transactions in date order and return the resulting aggregates.

        Input is sorted here (stable on txn_date, so same-day transactions keep
        their arrival order); callers do not need to pre-sort.
        """
        aggregates: dict[AggregateKey, AggregateState] = {}
        clamped = 0

        for txn in sorted(transactions, key=lambda t: t.txn_date):
            if not txn.is_trade:
                continue

            key = (txn.security_id, txn.account_id)

            if txn.txn_type == TransactionType.BUY:
                if not txn.quantity or not txn.price:
                    continue
                state = aggregates.setdefault(key, AggregateState())
                self._apply_buy(state, txn)
            else:
                if not txn.quantity:
                    continue
                state = aggregates.setdefault(key, AggregateState())
                if txn.quantity > state.quantity:
                    clamped += 1
                self._apply_sell(state, txn)

        if clamped:
            logger.debug("Clamped %d over-sell(s) during replay", clamped)
        return aggregates

    @staticmethod
    def _apply_buy(state: AggregateState, txn: Transaction) -> None:
        cost = txn.quantity * txn.price + (txn.fees or ZERO)
        new_book = state.book_value + cost
        new_qty = state.quantity + txn.quantity

        state.avg_price = new_book / new_qty if new_qty > 0 else txn.price
        state.quantity = new_qty
        state.book_value = new_book

    @staticmethod
    def _apply_sell(state: AggregateState, txn: Transaction) -> None:
        sold_cost = txn.quantity * state.avg_price
        state.book_value = max(ZERO, state.book_value - sold_cost)
        state.quantity = max(ZERO, state.quantity - txn.quantity)
