"""SQLAlchemy implementation of TransactionRepository."""

from datetime import date, datetime
from decimal import Decimal
from typing import Optional

from sqlalchemy.orm import sessionmaker

from holdings.domain.models import Transaction
from holdings.repositories.sqlalchemy.access import ensure_account_access, to_decimal
from holdings.repositories.sqlalchemy.orm_models import AccountORM, TransactionORM


class SqlAlchemyTransactionRepository:
    """SQLAlchemy-backed transaction repository (one session per call)."""

    def __init__(self, session_factory: sessionmaker):
        self._session_factory = session_factory

    def create(self, transaction: Transaction) -> Transaction:
        """Persist a new transaction."""
        with self._session_factory() as db:
            orm_txn = self._to_orm(transaction)
            db.add(orm_txn)
            db.commit()
            db.refresh(orm_txn)
            return self._to_domain(orm_txn)

    def get_by_id(self, txn_id: str) -> Optional[Transaction]:
        """Retrieve transaction by ID."""
        with self._session_factory() as db:
            orm_txn = db.query(TransactionORM).filter(
                TransactionORM.txn_id == txn_id
            ).first()
            return self._to_domain(orm_txn) if orm_txn else None

    def update(self, transaction: Transaction) -> Transaction:
        """Update an existing transaction."""
        with self._session_factory() as db:
            orm_txn = db.query(TransactionORM).filter(
                TransactionORM.txn_id == transaction.txn_id
            ).first()
            if not orm_txn:
                raise ValueError(f"Transaction not found: {transaction.txn_id}")

            orm_txn.account_id = transaction.account_id
            orm_txn.txn_date = transaction.txn_date
            orm_txn.txn_type = transaction.txn_type
            orm_txn.security_id = transaction.security_id
            orm_txn.quantity = transaction.quantity
            orm_txn.price = transaction.price
            orm_txn.fees = transaction.fees
            orm_txn.notes = transaction.notes
            orm_txn.updated_at = datetime.utcnow()

            db.commit()
            db.refresh(orm_txn)
            return self._to_domain(orm_txn)

    def delete(self, txn_id: str) -> None:
        """Delete a transaction (hard delete)."""
        with self._session_factory() as db:
            db.query(TransactionORM).filter(TransactionORM.txn_id == txn_id).delete()
            db.commit()

    def find_transactions(
        self,
        owner_id: str,
        account_id: Optional[str] = None,
        security_id: Optional[str] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> list[Transaction]:
        """List the owner's transactions matching the filters, ordered by date."""
        with self._session_factory() as db:
            query = (
                db.query(TransactionORM)
                .join(AccountORM, AccountORM.account_id == TransactionORM.account_id)
                .filter(AccountORM.owner_id == owner_id)
            )
            if account_id:
                if not ensure_account_access(db, owner_id, account_id):
                    return []
                query = query.filter(TransactionORM.account_id == account_id)
            if security_id:
                query = query.filter(TransactionORM.security_id == security_id)
            if start_date:
                query = query.filter(TransactionORM.txn_date >= start_date)
            if end_date:
                query = query.filter(TransactionORM.txn_date <= end_date)

            query = query.order_by(TransactionORM.txn_date, TransactionORM.created_at)
            return [self._to_domain(t) for t in query.all()]

    @staticmethod
    def _to_orm(txn: Transaction) -> TransactionORM:
        """Convert domain model to ORM model."""
        return TransactionORM(
            txn_id=txn.txn_id,
            account_id=txn.account_id,
            txn_date=txn.txn_date,
            txn_type=txn.txn_type,
            security_id=txn.security_id,
            quantity=txn.quantity,
            price=txn.price,
            fees=txn.fees,
            notes=txn.notes,
            created_at=txn.created_at or datetime.utcnow(),
            updated_at=txn.updated_at,
        )

    @staticmethod
    def _to_domain(orm: TransactionORM) -> Transaction:
        """Convert ORM model to domain model."""
        return Transaction(
            txn_id=orm.txn_id,
            account_id=orm.account_id,
            txn_date=orm.txn_date,
            txn_type=orm.txn_type,
            security_id=orm.security_id,
            quantity=to_decimal(orm.quantity),
            price=to_decimal(orm.price),
            fees=to_decimal(orm.fees) or Decimal("0"),
            notes=orm.notes,
            created_at=orm.created_at,
            updated_at=orm.updated_at,
        )
