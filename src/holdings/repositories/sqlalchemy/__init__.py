"""SQLAlchemy repository implementations."""

from holdings.repositories.sqlalchemy.database import (
    get_engine,
    get_session_factory,
    init_db,
    init_db_with_url,
    reset_database,
    Base,
)
from holdings.repositories.sqlalchemy.account_repo import SqlAlchemyAccountRepository
from holdings.repositories.sqlalchemy.transaction_repo import SqlAlchemyTransactionRepository
from holdings.repositories.sqlalchemy.security_repo import SqlAlchemySecurityRepository
from holdings.repositories.sqlalchemy.position_repo import SqlAlchemyPositionRepository

__all__ = [
    "get_engine",
    "get_session_factory",
    "init_db",
    "init_db_with_url",
    "reset_database",
    "Base",
    "SqlAlchemyAccountRepository",
    "SqlAlchemyTransactionRepository",
    "SqlAlchemySecurityRepository",
    "SqlAlchemyPositionRepository",
]
