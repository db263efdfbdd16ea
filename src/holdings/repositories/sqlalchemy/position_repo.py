"""SQLAlchemy implementation of PositionRepository."""

from datetime import datetime
from decimal import Decimal
from typing import Optional

from sqlalchemy.orm import sessionmaker

from holdings.domain.models import Position
from holdings.repositories.sqlalchemy.access import ensure_account_access, to_decimal
from holdings.repositories.sqlalchemy.orm_models import AccountORM, PositionORM


class SqlAlchemyPositionRepository:
    """SQLAlchemy-backed repository for precomputed positions."""

    def __init__(self, session_factory: sessionmaker):
        self._session_factory = session_factory

    def find_positions(
        self,
        owner_id: str,
        account_id: Optional[str] = None,
    ) -> list[Position]:
        """List the owner's precomputed positions, optionally for one account."""
        with self._session_factory() as db:
            query = (
                db.query(PositionORM)
                .join(AccountORM, AccountORM.account_id == PositionORM.account_id)
                .filter(AccountORM.owner_id == owner_id)
            )
            if account_id:
                if not ensure_account_access(db, owner_id, account_id):
                    return []
                query = query.filter(PositionORM.account_id == account_id)
            query = query.order_by(PositionORM.account_id, PositionORM.security_id)
            return [self._to_domain(p) for p in query.all()]

    def upsert(self, position: Position) -> Position:
        """Insert or update a position row."""
        with self._session_factory() as db:
            orm_pos = (
                db.query(PositionORM)
                .filter(
                    PositionORM.account_id == position.account_id,
                    PositionORM.security_id == position.security_id,
                )
                .first()
            )

            if orm_pos:
                orm_pos.quantity = position.quantity
                orm_pos.avg_price = position.avg_price
                orm_pos.book_value = position.book_value
                orm_pos.last_price = position.last_price
                orm_pos.updated_at = position.updated_at or datetime.utcnow()
            else:
                orm_pos = PositionORM(
                    account_id=position.account_id,
                    security_id=position.security_id,
                    quantity=position.quantity,
                    avg_price=position.avg_price,
                    book_value=position.book_value,
                    last_price=position.last_price,
                    updated_at=position.updated_at or datetime.utcnow(),
                )
                db.add(orm_pos)

            db.commit()
            db.refresh(orm_pos)
            return self._to_domain(orm_pos)

    def delete_by_account(self, account_id: str) -> None:
        """Delete all position rows of an account."""
        with self._session_factory() as db:
            db.query(PositionORM).filter(
                PositionORM.account_id == account_id
            ).delete()
            db.commit()

    @staticmethod
    def _to_domain(orm: PositionORM) -> Position:
        """Convert ORM position to domain model."""
        return Position(
            security_id=orm.security_id,
            account_id=orm.account_id,
            quantity=to_decimal(orm.quantity) or Decimal("0"),
            avg_price=to_decimal(orm.avg_price) or Decimal("0"),
            book_value=to_decimal(orm.book_value) or Decimal("0"),
            last_price=to_decimal(orm.last_price),
            updated_at=orm.updated_at,
        )
