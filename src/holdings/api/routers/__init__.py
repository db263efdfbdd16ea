"""API routers package."""

from holdings.api.routers.accounts import router as accounts_router
from holdings.api.routers.holdings import router as holdings_router
from holdings.api.routers.positions import router as positions_router
from holdings.api.routers.securities import router as securities_router
from holdings.api.routers.transactions import router as transactions_router

__all__ = [
    "accounts_router",
    "holdings_router",
    "positions_router",
    "securities_router",
    "transactions_router",
]
