"""Ledger service: mutations that feed the holdings computation."""

import logging
import uuid
from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from typing import Optional, Union

from holdings.core.exceptions import (
    NotAuthenticatedError,
    NotFoundError,
    PermissionDeniedError,
    ValidationError,
)
from holdings.core.timezone import as_market_date, now_eastern, today_eastern
from holdings.domain.classification import normalize_asset_type
from holdings.domain.models import (
    Account,
    Position,
    PriceSnapshot,
    Security,
    Transaction,
    TransactionType,
)
from holdings.repositories.protocols import (
    AccountRepository,
    PositionRepository,
    SecurityRepository,
    TransactionRepository,
)
from holdings.services.portfolio_service import PortfolioService

logger = logging.getLogger(__name__)


@dataclass
class TransactionCreate:
    """Input data for creating a transaction."""

    account_id: str
    txn_type: TransactionType
    txn_date: Optional[Union[date, datetime, str]] = None
    security_id: Optional[str] = None
    symbol: Optional[str] = None
    quantity: Optional[Decimal] = None
    price: Optional[Decimal] = None
    fees: Decimal = Decimal("0")
    notes: Optional[str] = None


@dataclass
class TransactionUpdate:
    """Partial update data for editing a transaction."""

    txn_date: Optional[Union[date, datetime, str]] = None
    txn_type: Optional[TransactionType] = None
    security_id: Optional[str] = None
    quantity: Optional[Decimal] = None
    price: Optional[Decimal] = None
    fees: Optional[Decimal] = None
    notes: Optional[str] = None


@dataclass
class TransactionFilters:
    """Filters for listing an owner's transactions."""

    account_id: Optional[str] = None
    security_id: Optional[str] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None


class LedgerService:
    """
    Service for managing the ledger and the data holdings are derived from.

    Every successful write of a transaction, position or price drops the
    affected cached holdings so the next read recomputes.
    """

    def __init__(
        self,
        account_repo: AccountRepository,
        transaction_repo: TransactionRepository,
        security_repo: SecurityRepository,
        position_repo: PositionRepository,
        portfolio_service: PortfolioService,
    ):
        self._account_repo = account_repo
        self._transaction_repo = transaction_repo
        self._security_repo = security_repo
        self._position_repo = position_repo
        self._portfolio = portfolio_service

    # Accounts

    def create_account(
        self,
        owner_id: Optional[str],
        name: str,
        account_type: str = "investment",
    ) -> Account:
        """Create an investment account for an owner."""
        self._require_owner(owner_id)
        if not name or not name.strip():
            raise ValidationError("Account name is required")

        account = Account(
            account_id=str(uuid.uuid4()),
            name=name.strip(),
            owner_id=owner_id,
            account_type=account_type or "investment",
            created_at=now_eastern(),
        )
        return self._account_repo.create(account)

    def list_accounts(self, owner_id: Optional[str]) -> list[Account]:
        """List an owner's accounts."""
        self._require_owner(owner_id)
        return self._account_repo.list_by_owner(owner_id)

    # Transactions

    def create_transaction(self, owner_id: Optional[str], data: TransactionCreate) -> Transaction:
        """
        Add a transaction to one of the owner's accounts.

        A symbol may be given instead of a security_id; it must name an
        existing security.
        """
        self._require_owner(owner_id)
        self._require_owned_account(owner_id, data.account_id)

        security_id = data.security_id
        if not security_id and data.symbol:
            security = self._security_repo.get_by_symbol(data.symbol.strip().upper())
            if not security:
                raise NotFoundError("Security", data.symbol)
            security_id = security.security_id

        transaction = Transaction(
            txn_id=str(uuid.uuid4()),
            account_id=data.account_id,
            txn_date=as_market_date(data.txn_date) if data.txn_date else today_eastern(),
            txn_type=data.txn_type,
            security_id=security_id,
            quantity=data.quantity,
            price=data.price,
            fees=data.fees if data.fees is not None else Decimal("0"),
            notes=data.notes,
            created_at=now_eastern(),
        )
        self._validate_transaction(transaction)

        created = self._transaction_repo.create(transaction)
        self._portfolio.invalidate_holdings_cache(owner_id)
        logger.info(
            "Created %s transaction %s in account %s",
            created.txn_type.value,
            created.txn_id,
            created.account_id,
        )
        return created

    def update_transaction(
        self,
        owner_id: Optional[str],
        txn_id: str,
        patch: TransactionUpdate,
    ) -> Transaction:
        """Apply a partial update to one of the owner's transactions."""
        self._require_owner(owner_id)
        transaction = self._require_owned_transaction(owner_id, txn_id)

        if patch.txn_date is not None:
            transaction.txn_date = as_market_date(patch.txn_date)
        if patch.txn_type is not None:
            transaction.txn_type = TransactionType(patch.txn_type)
        if patch.security_id is not None:
            transaction.security_id = patch.security_id
        if patch.quantity is not None:
            transaction.quantity = patch.quantity
        if patch.price is not None:
            transaction.price = patch.price
        if patch.fees is not None:
            transaction.fees = patch.fees
        if patch.notes is not None:
            transaction.notes = patch.notes

        self._validate_transaction(transaction)
        transaction.updated_at = now_eastern()

        updated = self._transaction_repo.update(transaction)
        self._portfolio.invalidate_holdings_cache(owner_id)
        return updated

    def delete_transaction(self, owner_id: Optional[str], txn_id: str) -> None:
        """Remove one of the owner's transactions."""
        self._require_owner(owner_id)
        self._require_owned_transaction(owner_id, txn_id)
        self._transaction_repo.delete(txn_id)
        self._portfolio.invalidate_holdings_cache(owner_id)
        logger.info("Deleted transaction %s", txn_id)

    def list_transactions(
        self,
        owner_id: Optional[str],
        filters: Optional[TransactionFilters] = None,
    ) -> list[Transaction]:
        """List the owner's transactions, oldest first."""
        self._require_owner(owner_id)
        filters = filters or TransactionFilters()
        return self._transaction_repo.find_transactions(
            owner_id,
            account_id=filters.account_id,
            security_id=filters.security_id,
            start_date=filters.start_date,
            end_date=filters.end_date,
        )

    # Securities and prices

    def create_security(
        self,
        symbol: str,
        name: str,
        asset_class: Optional[str] = None,
        sector: Optional[str] = None,
    ) -> Security:
        """Register a security; symbol is upper-cased, asset class normalized."""
        symbol = (symbol or "").strip().upper()
        if not symbol:
            raise ValidationError("Security symbol is required")
        if self._security_repo.get_by_symbol(symbol):
            raise ValidationError(f"Security with symbol '{symbol}' already exists")

        security = Security(
            security_id=str(uuid.uuid4()),
            symbol=symbol,
            name=(name or "").strip() or symbol,
            asset_class=normalize_asset_type(asset_class).value,
            sector=sector or None,
            created_at=now_eastern(),
        )
        return self._security_repo.create(security)

    def list_securities(self) -> list[Security]:
        return self._security_repo.list_all()

    def record_price(
        self,
        owner_id: Optional[str],
        security_id: str,
        price_date: Union[date, datetime, str],
        price: Decimal,
    ) -> PriceSnapshot:
        """
        Store a price snapshot for a security.

        Prices are shared by every owner holding the security, so all cached
        holdings are dropped rather than only the caller's.
        """
        self._require_owner(owner_id)
        if not self._security_repo.find_by_ids([security_id]):
            raise NotFoundError("Security", security_id)
        if price is None or price < 0:
            raise ValidationError("Price must be >= 0")

        snapshot = self._security_repo.create_price(
            PriceSnapshot(
                security_id=security_id,
                price_date=as_market_date(price_date),
                price=price,
            )
        )
        self._portfolio.invalidate_holdings_cache(None)
        return snapshot

    def list_prices(self, security_id: Optional[str] = None) -> list[PriceSnapshot]:
        return self._security_repo.list_prices(security_id)

    # Precomputed positions

    def upsert_position(self, owner_id: Optional[str], position: Position) -> Position:
        """Insert or replace a precomputed position in one of the owner's accounts."""
        self._require_owner(owner_id)
        self._require_owned_account(owner_id, position.account_id)
        if not self._security_repo.find_by_ids([position.security_id]):
            raise NotFoundError("Security", position.security_id)
        if position.quantity < 0 or position.book_value < 0:
            raise ValidationError("Position quantity and book value cannot be negative")

        position.updated_at = position.updated_at or now_eastern()
        saved = self._position_repo.upsert(position)
        self._portfolio.invalidate_holdings_cache(owner_id)
        return saved

    def delete_positions(self, owner_id: Optional[str], account_id: str) -> None:
        """Drop all precomputed positions of an account (reverts it to ledger replay)."""
        self._require_owner(owner_id)
        self._require_owned_account(owner_id, account_id)
        self._position_repo.delete_by_account(account_id)
        self._portfolio.invalidate_holdings_cache(owner_id)

    # Helpers

    @staticmethod
    def _require_owner(owner_id: Optional[str]) -> None:
        if not owner_id:
            raise NotAuthenticatedError()

    def _require_owned_account(self, owner_id: str, account_id: str) -> Account:
        account = self._account_repo.get_by_id(account_id)
        if not account:
            raise NotFoundError("Account", account_id)
        if account.owner_id != owner_id:
            raise PermissionDeniedError("Account", account_id)
        return account

    def _require_owned_transaction(self, owner_id: str, txn_id: str) -> Transaction:
        transaction = self._transaction_repo.get_by_id(txn_id)
        if not transaction:
            raise NotFoundError("Transaction", txn_id)
        self._require_owned_account(owner_id, transaction.account_id)
        return transaction

    def _validate_transaction(self, txn: Transaction) -> None:
        """Validate a transaction against its type's requirements."""
        if txn.fees is not None and txn.fees < 0:
            raise ValidationError("Fees cannot be negative")

        if txn.txn_type in (TransactionType.BUY, TransactionType.SELL):
            label = txn.txn_type.value
            if not txn.security_id:
                raise ValidationError(f"{label} requires a security")
            if txn.quantity is None or txn.quantity <= 0:
                raise ValidationError(f"{label} requires quantity > 0")
            if txn.price is None or txn.price < 0:
                raise ValidationError(f"{label} requires price >= 0")
            if not self._security_repo.find_by_ids([txn.security_id]):
                raise NotFoundError("Security", txn.security_id)
