"""SQLAlchemy implementation of AccountRepository."""

from datetime import datetime
from typing import Optional

from sqlalchemy.orm import sessionmaker

from holdings.domain.models import Account
from holdings.repositories.sqlalchemy.orm_models import AccountORM


class SqlAlchemyAccountRepository:
    """SQLAlchemy-backed account repository."""

    def __init__(self, session_factory: sessionmaker):
        self._session_factory = session_factory

    def create(self, account: Account) -> Account:
        """Persist a new account."""
        with self._session_factory() as db:
            orm_account = AccountORM(
                account_id=account.account_id,
                owner_id=account.owner_id,
                name=account.name,
                account_type=account.account_type,
                created_at=account.created_at or datetime.utcnow(),
            )
            db.add(orm_account)
            db.commit()
            db.refresh(orm_account)
            return self._to_domain(orm_account)

    def get_by_id(self, account_id: str) -> Optional[Account]:
        """Retrieve account by ID."""
        with self._session_factory() as db:
            orm_account = db.query(AccountORM).filter(
                AccountORM.account_id == account_id
            ).first()
            return self._to_domain(orm_account) if orm_account else None

    def find_by_ids(self, account_ids: list[str]) -> list[Account]:
        """Retrieve accounts by ID; unknown IDs are omitted."""
        if not account_ids:
            return []
        with self._session_factory() as db:
            orm_accounts = db.query(AccountORM).filter(
                AccountORM.account_id.in_(account_ids)
            ).all()
            return [self._to_domain(a) for a in orm_accounts]

    def list_by_owner(self, owner_id: str) -> list[Account]:
        """List all accounts of an owner."""
        with self._session_factory() as db:
            orm_accounts = (
                db.query(AccountORM)
                .filter(AccountORM.owner_id == owner_id)
                .order_by(AccountORM.name)
                .all()
            )
            return [self._to_domain(a) for a in orm_accounts]

    @staticmethod
    def _to_domain(orm: AccountORM) -> Account:
        """Convert ORM model to domain model."""
        return Account(
            account_id=orm.account_id,
            name=orm.name,
            owner_id=orm.owner_id,
            account_type=orm.account_type,
            created_at=orm.created_at,
        )
