"""SQLAlchemy ORM model definitions."""

from datetime import datetime
from decimal import Decimal

from sqlalchemy import (
    Column,
    String,
    Date,
    DateTime,
    Integer,
    Text,
    ForeignKey,
    Numeric,
    Enum as SqlEnum,
)
from sqlalchemy.orm import relationship

from holdings.repositories.sqlalchemy.database import Base
from holdings.domain.models.enums import TransactionType


class AccountORM(Base):
    """SQLAlchemy model for Account."""

    __tablename__ = "accounts"

    account_id = Column(String(36), primary_key=True)
    owner_id = Column(String(64), nullable=False, index=True)
    name = Column(String(255), nullable=False)
    account_type = Column(String(32), nullable=False, default="investment")
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)

    transactions = relationship("TransactionORM", back_populates="account")


class SecurityORM(Base):
    """SQLAlchemy model for Security."""

    __tablename__ = "securities"

    security_id = Column(String(36), primary_key=True)
    symbol = Column(String(20), unique=True, nullable=False)
    name = Column(String(255), nullable=False)
    asset_class = Column(String(32), nullable=False, default="Stock")
    sector = Column(String(64), nullable=True)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)


class PriceSnapshotORM(Base):
    """SQLAlchemy model for PriceSnapshot; snapshot_id doubles as insertion order."""

    __tablename__ = "security_prices"

    snapshot_id = Column(Integer, primary_key=True, autoincrement=True)
    security_id = Column(
        String(36), ForeignKey("securities.security_id"), nullable=False, index=True
    )
    price_date = Column(Date, nullable=False)
    price = Column(Numeric(precision=18, scale=6), nullable=False)


class TransactionORM(Base):
    """SQLAlchemy model for Transaction (ledger entry)."""

    __tablename__ = "transactions"

    txn_id = Column(String(36), primary_key=True)
    account_id = Column(String(36), ForeignKey("accounts.account_id"), nullable=False)
    txn_date = Column(Date, nullable=False)
    txn_type = Column(SqlEnum(TransactionType), nullable=False)
    security_id = Column(String(36), ForeignKey("securities.security_id"), nullable=True)
    quantity = Column(Numeric(precision=18, scale=8), nullable=True)
    price = Column(Numeric(precision=18, scale=6), nullable=True)
    fees = Column(Numeric(precision=18, scale=2), default=Decimal("0"))
    notes = Column(Text, nullable=True)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)
    updated_at = Column(DateTime, nullable=True, onupdate=datetime.utcnow)

    account = relationship("AccountORM", back_populates="transactions")


class PositionORM(Base):
    """SQLAlchemy model for precomputed Position rows."""

    __tablename__ = "positions"

    account_id = Column(String(36), ForeignKey("accounts.account_id"), primary_key=True)
    security_id = Column(String(36), ForeignKey("securities.security_id"), primary_key=True)
    quantity = Column(Numeric(precision=18, scale=8), default=Decimal("0"))
    avg_price = Column(Numeric(precision=18, scale=6), default=Decimal("0"))
    book_value = Column(Numeric(precision=18, scale=2), default=Decimal("0"))
    last_price = Column(Numeric(precision=18, scale=6), nullable=True)
    updated_at = Column(DateTime, nullable=True)
