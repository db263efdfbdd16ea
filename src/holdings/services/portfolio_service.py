"""Portfolio holdings façade: fast path, replay fallback, cache."""

import logging
from concurrent.futures import ThreadPoolExecutor
from decimal import Decimal
from typing import Optional

from holdings.config.settings import get_settings
from holdings.core.exceptions import ACCESS_ERRORS, NotAuthenticatedError
from holdings.domain.models import Account, HoldingsSource, Security
from holdings.domain.views import Holding, HoldingsResult
from holdings.repositories.protocols import (
    AccountRepository,
    PositionRepository,
    SecurityRepository,
    TransactionRepository,
)
from holdings.services.cost_basis import CostBasisAggregator
from holdings.services.holdings_assembler import HoldingsAssembler
from holdings.services.holdings_cache import HoldingsCache, cache_key, get_holdings_cache
from holdings.services.position_source import PositionSource
from holdings.services.price_resolver import PriceResolver

logger = logging.getLogger(__name__)


class PortfolioService:
    """
    Computes an owner's current holdings.

    Per call: cache hit -> return. Otherwise precomputed positions are used
    when any exist; if none, the ledger is replayed into weighted-average
    aggregates and valued with the latest stored prices. Results are cached
    per (owner, account scope).

    Storage access failures (no owner, permission denied) surface as
    HoldingsResult.error from get_holdings_result; get_holdings degrades them
    to an empty list so dashboards never hard-fail on partial auth.
    """

    def __init__(
        self,
        transaction_repo: TransactionRepository,
        security_repo: SecurityRepository,
        account_repo: AccountRepository,
        position_repo: PositionRepository,
        cache: Optional[HoldingsCache] = None,
        aggregator: Optional[CostBasisAggregator] = None,
        assembler: Optional[HoldingsAssembler] = None,
        fanout_workers: Optional[int] = None,
    ):
        self._transaction_repo = transaction_repo
        self._security_repo = security_repo
        self._account_repo = account_repo
        self._position_source = PositionSource(position_repo)
        self._price_resolver = PriceResolver(security_repo)
        self._cache = cache if cache is not None else get_holdings_cache()
        self._aggregator = aggregator or CostBasisAggregator()
        self._assembler = assembler or HoldingsAssembler()
        if fanout_workers is None:
            fanout_workers = get_settings().holdings_fanout_workers
        self._fanout_workers = max(1, fanout_workers)

    def get_holdings(
        self,
        owner_id: Optional[str],
        account_id: Optional[str] = None,
        use_cache: bool = True,
    ) -> list[Holding]:
        """
        Return holdings for an owner, optionally scoped to one account.

        Missing owner or permission failures yield an empty list.
        """
        result = self.get_holdings_result(owner_id, account_id=account_id, use_cache=use_cache)
        if result.error is not None:
            if isinstance(result.error, NotAuthenticatedError):
                logger.debug("No owner context; returning empty holdings")
            else:
                logger.warning(
                    "Holdings unavailable for owner %s (account=%s): %s",
                    owner_id,
                    account_id or "all",
                    result.error.message,
                )
        return result.holdings

    def get_holdings_result(
        self,
        owner_id: Optional[str],
        account_id: Optional[str] = None,
        use_cache: bool = True,
    ) -> HoldingsResult:
        """Compute holdings, returning access failures instead of raising them."""
        if not owner_id:
            return HoldingsResult(error=NotAuthenticatedError())

        key = cache_key(owner_id, account_id)
        if use_cache:
            cached = self._cache.get(key)
            if cached is not None:
                return HoldingsResult(holdings=cached, source=HoldingsSource.CACHE)

        # Taken before reading storage; a write that lands mid-compute
        # invalidates the ticket and the result below is not cached.
        ticket = self._cache.ticket(owner_id)
        try:
            holdings, source = self._compute(owner_id, account_id)
        except ACCESS_ERRORS as exc:
            return HoldingsResult(error=exc)

        if use_cache:
            self._cache.put(key, holdings, ticket=ticket)
        return HoldingsResult(holdings=holdings, source=source)

    def get_portfolio_value(
        self,
        owner_id: Optional[str],
        account_id: Optional[str] = None,
    ) -> Decimal:
        """Sum of market value over the owner's holdings."""
        holdings = self.get_holdings(owner_id, account_id=account_id)
        return sum((h.market_value for h in holdings), Decimal("0"))

    def invalidate_holdings_cache(self, owner_id: Optional[str]) -> int:
        """
        Drop every cached scope of an owner, regardless of TTL.

        Must be called by any path that creates, updates or deletes a
        transaction, position or price snapshot. None clears all owners.
        """
        return self._cache.invalidate(owner_id)

    def _compute(
        self,
        owner_id: str,
        account_id: Optional[str],
    ) -> tuple[list[Holding], HoldingsSource]:
        positions = self._position_source.find(owner_id, account_id)
        if positions:
            securities, accounts, prices = self._fetch_lookups(
                {p.security_id for p in positions},
                {p.account_id for p in positions},
            )
            holdings = self._assembler.from_positions(positions, securities, accounts, prices)
            logger.debug("Built %d holdings from positions for owner %s", len(holdings), owner_id)
            return holdings, HoldingsSource.POSITIONS

        transactions = self._transaction_repo.find_transactions(owner_id, account_id=account_id)
        if not transactions:
            return [], HoldingsSource.NONE

        aggregates = self._aggregator.replay(transactions)
        securities, accounts, prices = self._fetch_lookups(
            {security_id for security_id, _ in aggregates},
            {acct_id for _, acct_id in aggregates},
        )
        holdings = self._assembler.from_aggregates(aggregates, prices, securities, accounts)
        logger.debug(
            "Replayed %d transactions into %d holdings for owner %s",
            len(transactions),
            len(holdings),
            owner_id,
        )
        return holdings, HoldingsSource.TRANSACTIONS

    def _fetch_lookups(
        self,
        security_ids: set[str],
        account_ids: set[str],
    ) -> tuple[list[Security], list[Account], dict[str, Decimal]]:
        """Fetch securities, accounts and latest prices, concurrently when enabled."""
        sec_ids = sorted(security_ids)
        acct_ids = sorted(account_ids)

        if self._fanout_workers == 1:
            return (
                self._security_repo.find_by_ids(sec_ids),
                self._account_repo.find_by_ids(acct_ids),
                self._price_resolver.latest(sec_ids),
            )

        with ThreadPoolExecutor(max_workers=min(self._fanout_workers, 3)) as ex:
            securities_future = ex.submit(self._security_repo.find_by_ids, sec_ids)
            accounts_future = ex.submit(self._account_repo.find_by_ids, acct_ids)
            prices_future = ex.submit(self._price_resolver.latest, sec_ids)
            return (
                securities_future.result(),
                accounts_future.result(),
                prices_future.result(),
            )
