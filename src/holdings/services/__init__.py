"""Service layer - holdings computation and ledger mutations."""

from holdings.services.cost_basis import CostBasisAggregator
from holdings.services.price_resolver import PriceResolver, select_latest
from holdings.services.position_source import PositionSource
from holdings.services.holdings_cache import (
    CacheTicket,
    HoldingsCache,
    InMemoryHoldingsCache,
    cache_key,
    get_holdings_cache,
    set_holdings_cache,
    reset_holdings_cache,
)
from holdings.services.holdings_assembler import HoldingsAssembler, UNKNOWN_ACCOUNT_NAME
from holdings.services.portfolio_service import PortfolioService
from holdings.services.ledger_service import (
    LedgerService,
    TransactionCreate,
    TransactionUpdate,
    TransactionFilters,
)

__all__ = [
    "CostBasisAggregator",
    "PriceResolver",
    "select_latest",
    "PositionSource",
    "CacheTicket",
    "HoldingsCache",
    "InMemoryHoldingsCache",
    "cache_key",
    "get_holdings_cache",
    "set_holdings_cache",
    "reset_holdings_cache",
    "HoldingsAssembler",
    "UNKNOWN_ACCOUNT_NAME",
    "PortfolioService",
    "LedgerService",
    "TransactionCreate",
    "TransactionUpdate",
    "TransactionFilters",
]
