"""
Pytest configuration and fixtures for holdings engine tests.

This module provides:
- File-backed SQLite database fixtures (one per test)
- Repository and service fixtures
- Factory helpers for accounts, securities, trades and positions
- A controllable clock for cache expiry tests
- FastAPI test client wired to the test database
"""

import uuid
from datetime import date
from decimal import Decimal
from typing import Callable, Optional

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker

from holdings.main import app
from holdings.api.deps import get_db_session_factory
from holdings.config.settings import reset_settings
from holdings.domain.models import (
    Account,
    Position,
    PriceSnapshot,
    Security,
    Transaction,
    TransactionType,
)
from holdings.repositories.sqlalchemy import (
    init_db_with_url,
    reset_database,
    SqlAlchemyAccountRepository,
    SqlAlchemyTransactionRepository,
    SqlAlchemySecurityRepository,
    SqlAlchemyPositionRepository,
)
from holdings.services import (
    InMemoryHoldingsCache,
    LedgerService,
    PortfolioService,
    TransactionCreate,
    reset_holdings_cache,
    set_holdings_cache,
)

OWNER = "owner-1"
OTHER_OWNER = "owner-2"


# =============================================================================
# CLOCK
# =============================================================================


class FakeClock:
    """Monotonic clock that only moves when told to."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


# =============================================================================
# GLOBAL STATE
# =============================================================================


@pytest.fixture(autouse=True)
def clean_globals():
    """Reset process-wide settings, cache and database between tests."""
    reset_settings()
    reset_holdings_cache()
    yield
    reset_holdings_cache()
    reset_database()
    reset_settings()


# =============================================================================
# DATABASE FIXTURES
# =============================================================================


@pytest.fixture(scope="function")
def session_factory(tmp_path) -> sessionmaker:
    """
    Session factory bound to a file-backed SQLite database.

    A file (not :memory:) lets fan-out worker threads open their own
    connections to the same data.
    """
    factory = init_db_with_url(f"sqlite:///{tmp_path / 'holdings_test.db'}")
    yield factory
    reset_database()


# =============================================================================
# REPOSITORY FIXTURES
# =============================================================================


@pytest.fixture
def account_repo(session_factory) -> SqlAlchemyAccountRepository:
    """Provide test AccountRepository."""
    return SqlAlchemyAccountRepository(session_factory)


@pytest.fixture
def transaction_repo(session_factory) -> SqlAlchemyTransactionRepository:
    """Provide test TransactionRepository."""
    return SqlAlchemyTransactionRepository(session_factory)


@pytest.fixture
def security_repo(session_factory) -> SqlAlchemySecurityRepository:
    """Provide test SecurityRepository."""
    return SqlAlchemySecurityRepository(session_factory)


@pytest.fixture
def position_repo(session_factory) -> SqlAlchemyPositionRepository:
    """Provide test PositionRepository."""
    return SqlAlchemyPositionRepository(session_factory)


# =============================================================================
# SERVICE FIXTURES
# =============================================================================


@pytest.fixture
def holdings_cache(clock) -> InMemoryHoldingsCache:
    """Provide a cache driven by the fake clock."""
    return InMemoryHoldingsCache(ttl_seconds=30, sweep_interval_seconds=60, clock=clock)


@pytest.fixture
def portfolio_service(
    transaction_repo,
    security_repo,
    account_repo,
    position_repo,
    holdings_cache,
) -> PortfolioService:
    """Provide test PortfolioService (concurrent lookups enabled)."""
    return PortfolioService(
        transaction_repo=transaction_repo,
        security_repo=security_repo,
        account_repo=account_repo,
        position_repo=position_repo,
        cache=holdings_cache,
        fanout_workers=3,
    )


@pytest.fixture
def ledger_service(
    account_repo,
    transaction_repo,
    security_repo,
    position_repo,
    portfolio_service,
) -> LedgerService:
    """Provide test LedgerService."""
    return LedgerService(
        account_repo=account_repo,
        transaction_repo=transaction_repo,
        security_repo=security_repo,
        position_repo=position_repo,
        portfolio_service=portfolio_service,
    )


# =============================================================================
# FACTORY FIXTURES
# =============================================================================


@pytest.fixture
def account_factory(ledger_service) -> Callable[..., Account]:
    """Factory for creating test accounts."""

    def _create_account(
        name: Optional[str] = None,
        owner_id: str = OWNER,
        account_type: str = "investment",
    ) -> Account:
        if name is None:
            name = f"Test Account {uuid.uuid4().hex[:8]}"
        return ledger_service.create_account(owner_id, name, account_type)

    return _create_account


@pytest.fixture
def security_factory(ledger_service) -> Callable[..., Security]:
    """Factory for creating test securities."""

    def _create_security(
        symbol: str,
        name: Optional[str] = None,
        asset_class: Optional[str] = "Stock",
        sector: Optional[str] = None,
    ) -> Security:
        return ledger_service.create_security(
            symbol=symbol,
            name=name or f"{symbol} Inc.",
            asset_class=asset_class,
            sector=sector,
        )

    return _create_security


@pytest.fixture
def trade_factory(ledger_service) -> Callable[..., Transaction]:
    """Factory for recording buy/sell transactions through the ledger."""

    def _create_trade(
        account: Account,
        security: Security,
        txn_type: TransactionType,
        quantity: Decimal,
        price: Decimal = Decimal("0"),
        fees: Decimal = Decimal("0"),
        txn_date: date = date(2024, 1, 15),
    ) -> Transaction:
        return ledger_service.create_transaction(
            account.owner_id,
            TransactionCreate(
                account_id=account.account_id,
                txn_type=txn_type,
                txn_date=txn_date,
                security_id=security.security_id,
                quantity=quantity,
                price=price,
                fees=fees,
            ),
        )

    return _create_trade


@pytest.fixture
def price_factory(security_repo) -> Callable[..., PriceSnapshot]:
    """Factory for storing price snapshots directly (bypasses validation)."""

    def _create_price(
        security: Security,
        price: Decimal,
        price_date: date = date(2024, 6, 14),
    ) -> PriceSnapshot:
        return security_repo.create_price(
            PriceSnapshot(security_id=security.security_id, price_date=price_date, price=price)
        )

    return _create_price


@pytest.fixture
def position_factory(position_repo) -> Callable[..., Position]:
    """Factory for writing precomputed positions directly."""

    def _create_position(
        account: Account,
        security: Security,
        quantity: Decimal,
        avg_price: Decimal,
        last_price: Optional[Decimal] = None,
    ) -> Position:
        return position_repo.upsert(
            Position(
                security_id=security.security_id,
                account_id=account.account_id,
                quantity=quantity,
                avg_price=avg_price,
                book_value=quantity * avg_price,
                last_price=last_price,
            )
        )

    return _create_position


# =============================================================================
# API TEST CLIENT FIXTURE
# =============================================================================


@pytest.fixture
def client(session_factory) -> TestClient:
    """Provide FastAPI test client with test database and a fresh cache."""
    set_holdings_cache(InMemoryHoldingsCache(ttl_seconds=30))
    app.dependency_overrides[get_db_session_factory] = lambda: session_factory
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


# =============================================================================
# HELPER FUNCTIONS (exported for use in tests)
# =============================================================================


def assert_decimal_equal(
    actual: Decimal,
    expected: Decimal,
    tolerance: Decimal = Decimal("0.01"),
) -> None:
    """Assert two Decimals are equal within tolerance."""
    diff = abs(Decimal(actual) - Decimal(expected))
    assert diff <= tolerance, f"Expected {expected}, got {actual} (diff={diff})"


def make_trade(
    txn_type: TransactionType,
    quantity: Optional[str],
    price: Optional[str] = None,
    fees: str = "0",
    txn_date: date = date(2024, 1, 15),
    security_id: Optional[str] = "sec-s",
    account_id: str = "acc-a",
) -> Transaction:
    """Build an in-memory Transaction for aggregator tests."""
    return Transaction(
        txn_id=uuid.uuid4().hex,
        account_id=account_id,
        txn_date=txn_date,
        txn_type=txn_type,
        security_id=security_id,
        quantity=Decimal(quantity) if quantity is not None else None,
        price=Decimal(price) if price is not None else None,
        fees=Decimal(fees),
    )
