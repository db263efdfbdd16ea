"""Dependency injection for FastAPI."""

from typing import Optional

from fastapi import Depends, Header
from sqlalchemy.orm import sessionmaker

from holdings.repositories.sqlalchemy import (
    get_session_factory,
    SqlAlchemyAccountRepository,
    SqlAlchemyTransactionRepository,
    SqlAlchemySecurityRepository,
    SqlAlchemyPositionRepository,
)
from holdings.services import LedgerService, PortfolioService, get_holdings_cache

OWNER_HEADER = "X-Owner-Id"


def get_db_session_factory() -> sessionmaker:
    """Provide the session factory repositories open their sessions from."""
    return get_session_factory()


def get_owner_id(x_owner_id: Optional[str] = Header(default=None)) -> Optional[str]:
    """Caller identity; authentication happens upstream of this service."""
    return x_owner_id or None


def get_account_repo(
    session_factory: sessionmaker = Depends(get_db_session_factory),
) -> SqlAlchemyAccountRepository:
    """Provide AccountRepository instance."""
    return SqlAlchemyAccountRepository(session_factory)


def get_transaction_repo(
    session_factory: sessionmaker = Depends(get_db_session_factory),
) -> SqlAlchemyTransactionRepository:
    """Provide TransactionRepository instance."""
    return SqlAlchemyTransactionRepository(session_factory)


def get_security_repo(
    session_factory: sessionmaker = Depends(get_db_session_factory),
) -> SqlAlchemySecurityRepository:
    """Provide SecurityRepository instance."""
    return SqlAlchemySecurityRepository(session_factory)


def get_position_repo(
    session_factory: sessionmaker = Depends(get_db_session_factory),
) -> SqlAlchemyPositionRepository:
    """Provide PositionRepository instance."""
    return SqlAlchemyPositionRepository(session_factory)


def get_portfolio_service(
    transaction_repo: SqlAlchemyTransactionRepository = Depends(get_transaction_repo),
    security_repo: SqlAlchemySecurityRepository = Depends(get_security_repo),
    account_repo: SqlAlchemyAccountRepository = Depends(get_account_repo),
    position_repo: SqlAlchemyPositionRepository = Depends(get_position_repo),
) -> PortfolioService:
    """Provide PortfolioService bound to the process-wide holdings cache."""
    return PortfolioService(
        transaction_repo=transaction_repo,
        security_repo=security_repo,
        account_repo=account_repo,
        position_repo=position_repo,
        cache=get_holdings_cache(),
    )


def get_ledger_service(
    account_repo: SqlAlchemyAccountRepository = Depends(get_account_repo),
    transaction_repo: SqlAlchemyTransactionRepository = Depends(get_transaction_repo),
    security_repo: SqlAlchemySecurityRepository = Depends(get_security_repo),
    position_repo: SqlAlchemyPositionRepository = Depends(get_position_repo),
    portfolio_service: PortfolioService = Depends(get_portfolio_service),
) -> LedgerService:
    """Provide LedgerService instance."""
    return LedgerService(
        account_repo=account_repo,
        transaction_repo=transaction_repo,
        security_repo=security_repo,
        position_repo=position_repo,
        portfolio_service=portfolio_service,
    )
