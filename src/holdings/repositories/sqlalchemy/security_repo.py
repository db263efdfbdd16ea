"""SQLAlchemy implementation of SecurityRepository."""

from datetime import datetime
from typing import Optional

from sqlalchemy.orm import sessionmaker

from holdings.domain.models import Security, PriceSnapshot
from holdings.repositories.sqlalchemy.access import to_decimal
from holdings.repositories.sqlalchemy.orm_models import SecurityORM, PriceSnapshotORM


class SqlAlchemySecurityRepository:
    """SQLAlchemy-backed security and price snapshot repository."""

    def __init__(self, session_factory: sessionmaker):
        self._session_factory = session_factory

    def create(self, security: Security) -> Security:
        """Persist a new security."""
        with self._session_factory() as db:
            orm_security = SecurityORM(
                security_id=security.security_id,
                symbol=security.symbol,
                name=security.name,
                asset_class=security.asset_class,
                sector=security.sector,
                created_at=security.created_at or datetime.utcnow(),
            )
            db.add(orm_security)
            db.commit()
            db.refresh(orm_security)
            return self._to_domain(orm_security)

    def get_by_symbol(self, symbol: str) -> Optional[Security]:
        """Retrieve a security by its symbol."""
        with self._session_factory() as db:
            orm_security = db.query(SecurityORM).filter(
                SecurityORM.symbol == symbol
            ).first()
            return self._to_domain(orm_security) if orm_security else None

    def find_by_ids(self, security_ids: list[str]) -> list[Security]:
        """Retrieve securities by ID; unknown IDs are omitted."""
        if not security_ids:
            return []
        with self._session_factory() as db:
            orm_securities = db.query(SecurityORM).filter(
                SecurityORM.security_id.in_(security_ids)
            ).all()
            return [self._to_domain(s) for s in orm_securities]

    def list_all(self) -> list[Security]:
        """List all securities."""
        with self._session_factory() as db:
            orm_securities = db.query(SecurityORM).order_by(SecurityORM.symbol).all()
            return [self._to_domain(s) for s in orm_securities]

    # Price snapshot operations

    def create_price(self, snapshot: PriceSnapshot) -> PriceSnapshot:
        """Persist a price snapshot, assigning its insertion sequence."""
        with self._session_factory() as db:
            orm_price = PriceSnapshotORM(
                security_id=snapshot.security_id,
                price_date=snapshot.price_date,
                price=snapshot.price,
            )
            db.add(orm_price)
            db.commit()
            db.refresh(orm_price)
            return self._price_to_domain(orm_price)

    def find_prices(self, security_ids: list[str]) -> list[PriceSnapshot]:
        """All snapshots for the given securities, in insertion order."""
        if not security_ids:
            return []
        with self._session_factory() as db:
            orm_prices = (
                db.query(PriceSnapshotORM)
                .filter(PriceSnapshotORM.security_id.in_(security_ids))
                .order_by(PriceSnapshotORM.snapshot_id)
                .all()
            )
            return [self._price_to_domain(p) for p in orm_prices]

    def list_prices(self, security_id: Optional[str] = None) -> list[PriceSnapshot]:
        """List snapshots, newest date first."""
        with self._session_factory() as db:
            query = db.query(PriceSnapshotORM)
            if security_id:
                query = query.filter(PriceSnapshotORM.security_id == security_id)
            query = query.order_by(
                PriceSnapshotORM.price_date.desc(),
                PriceSnapshotORM.snapshot_id.desc(),
            )
            return [self._price_to_domain(p) for p in query.all()]

    @staticmethod
    def _to_domain(orm: SecurityORM) -> Security:
        """Convert ORM security to domain model."""
        return Security(
            security_id=orm.security_id,
            symbol=orm.symbol,
            name=orm.name,
            asset_class=orm.asset_class,
            sector=orm.sector,
            created_at=orm.created_at,
        )

    @staticmethod
    def _price_to_domain(orm: PriceSnapshotORM) -> PriceSnapshot:
        """Convert ORM price snapshot to domain model."""
        return PriceSnapshot(
            security_id=orm.security_id,
            price_date=orm.price_date,
            price=to_decimal(orm.price),
            snapshot_id=orm.snapshot_id,
        )
