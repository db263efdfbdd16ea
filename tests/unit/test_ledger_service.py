"""
Unit tests for LedgerService.

Tests cover:
- Account creation and listing per owner
- Transaction create / update / delete / list
- Validation errors
- Ownership checks
- Security registration and price snapshots
- Precomputed position writes
- Cache invalidation on every mutation
"""

from datetime import date
from decimal import Decimal

import pytest

from holdings.core.exceptions import (
    NotAuthenticatedError,
    NotFoundError,
    PermissionDeniedError,
    ValidationError,
)
from holdings.domain.models import Position, TransactionType
from holdings.services import (
    LedgerService,
    TransactionCreate,
    TransactionFilters,
    TransactionUpdate,
    cache_key,
)

from tests.conftest import OTHER_OWNER, OWNER

BUY = TransactionType.BUY
SELL = TransactionType.SELL


def buy_data(account_id: str, security_id: str, **overrides) -> TransactionCreate:
    fields = dict(
        account_id=account_id,
        txn_type=BUY,
        txn_date=date(2024, 1, 15),
        security_id=security_id,
        quantity=Decimal("10"),
        price=Decimal("185.50"),
    )
    fields.update(overrides)
    return TransactionCreate(**fields)


# =============================================================================
# ACCOUNT TESTS
# =============================================================================


class TestAccounts:
    """Tests for account creation functionality."""

    def test_create_account(self, ledger_service: LedgerService):
        """
        GIVEN an authenticated owner
        WHEN they create an account named "Brokerage"
        THEN the account is persisted under that owner
        """
        account = ledger_service.create_account(OWNER, "Brokerage")

        assert account.account_id is not None
        assert account.name == "Brokerage"
        assert account.owner_id == OWNER
        assert account.account_type == "investment"
        assert account.created_at is not None

    def test_create_account_requires_owner(self, ledger_service: LedgerService):
        with pytest.raises(NotAuthenticatedError):
            ledger_service.create_account(None, "Brokerage")

    def test_create_account_requires_name(self, ledger_service: LedgerService):
        with pytest.raises(ValidationError):
            ledger_service.create_account(OWNER, "   ")

    def test_list_accounts_is_per_owner(self, ledger_service: LedgerService):
        ledger_service.create_account(OWNER, "B")
        ledger_service.create_account(OWNER, "A")
        ledger_service.create_account(OTHER_OWNER, "C")

        names = [a.name for a in ledger_service.list_accounts(OWNER)]

        assert names == ["A", "B"]


# =============================================================================
# TRANSACTION TESTS
# =============================================================================


class TestCreateTransaction:
    """Tests for adding ledger entries."""

    def test_create_buy(self, ledger_service, account_factory, security_factory):
        account = account_factory()
        sec = security_factory("AAPL")

        txn = ledger_service.create_transaction(OWNER, buy_data(account.account_id, sec.security_id))

        assert txn.txn_id is not None
        assert txn.txn_type == BUY
        assert txn.quantity == Decimal("10")
        assert txn.txn_date == date(2024, 1, 15)

    def test_symbol_resolves_security(self, ledger_service, account_factory, security_factory):
        account = account_factory()
        sec = security_factory("AAPL")

        txn = ledger_service.create_transaction(
            OWNER,
            buy_data(account.account_id, None, symbol="aapl"),
        )

        assert txn.security_id == sec.security_id

    def test_unknown_symbol_raises(self, ledger_service, account_factory):
        account = account_factory()

        with pytest.raises(NotFoundError):
            ledger_service.create_transaction(
                OWNER,
                buy_data(account.account_id, None, symbol="NOPE"),
            )

    def test_interest_without_security_is_allowed(self, ledger_service, account_factory):
        account = account_factory()

        txn = ledger_service.create_transaction(
            OWNER,
            TransactionCreate(
                account_id=account.account_id,
                txn_type=TransactionType.INTEREST,
                price=Decimal("12.50"),
            ),
        )

        assert txn.security_id is None
        assert txn.txn_date is not None

    def test_requires_owner(self, ledger_service, account_factory, security_factory):
        account = account_factory()
        sec = security_factory("AAPL")

        with pytest.raises(NotAuthenticatedError):
            ledger_service.create_transaction(None, buy_data(account.account_id, sec.security_id))

    def test_unknown_account_raises(self, ledger_service, security_factory):
        sec = security_factory("AAPL")

        with pytest.raises(NotFoundError):
            ledger_service.create_transaction(OWNER, buy_data("missing", sec.security_id))

    def test_foreign_account_is_denied(self, ledger_service, account_factory, security_factory):
        foreign = account_factory(owner_id=OTHER_OWNER)
        sec = security_factory("AAPL")

        with pytest.raises(PermissionDeniedError):
            ledger_service.create_transaction(OWNER, buy_data(foreign.account_id, sec.security_id))


class TestTransactionValidation:
    """Tests for buy/sell input validation."""

    def test_buy_requires_security(self, ledger_service, account_factory):
        """
        GIVEN an account
        WHEN I add a buy without a security
        THEN a ValidationError is raised
        """
        account = account_factory()

        with pytest.raises(ValidationError) as exc_info:
            ledger_service.create_transaction(OWNER, buy_data(account.account_id, None))

        assert "security" in exc_info.value.message

    @pytest.mark.parametrize("quantity", [None, Decimal("0"), Decimal("-1")])
    def test_sell_requires_positive_quantity(
        self,
        ledger_service,
        account_factory,
        security_factory,
        quantity,
    ):
        account = account_factory()
        sec = security_factory("AAPL")

        with pytest.raises(ValidationError):
            ledger_service.create_transaction(
                OWNER,
                buy_data(account.account_id, sec.security_id, txn_type=SELL, quantity=quantity),
            )

    def test_buy_requires_non_negative_price(self, ledger_service, account_factory, security_factory):
        account = account_factory()
        sec = security_factory("AAPL")

        with pytest.raises(ValidationError):
            ledger_service.create_transaction(
                OWNER,
                buy_data(account.account_id, sec.security_id, price=Decimal("-1")),
            )

    def test_fees_cannot_be_negative(self, ledger_service, account_factory, security_factory):
        account = account_factory()
        sec = security_factory("AAPL")

        with pytest.raises(ValidationError):
            ledger_service.create_transaction(
                OWNER,
                buy_data(account.account_id, sec.security_id, fees=Decimal("-0.01")),
            )

    def test_unknown_security_raises(self, ledger_service, account_factory):
        account = account_factory()

        with pytest.raises(NotFoundError):
            ledger_service.create_transaction(OWNER, buy_data(account.account_id, "no-such-sec"))


class TestEditTransaction:
    """Tests for update, delete and list."""

    def test_update_applies_patch(self, ledger_service, account_factory, security_factory):
        account = account_factory()
        sec = security_factory("AAPL")
        txn = ledger_service.create_transaction(OWNER, buy_data(account.account_id, sec.security_id))

        updated = ledger_service.update_transaction(
            OWNER,
            txn.txn_id,
            TransactionUpdate(quantity=Decimal("12"), notes="fixed qty"),
        )

        assert updated.quantity == Decimal("12")
        assert updated.notes == "fixed qty"
        assert updated.price == Decimal("185.50")
        assert updated.updated_at is not None

    def test_update_is_revalidated(self, ledger_service, account_factory, security_factory):
        account = account_factory()
        sec = security_factory("AAPL")
        txn = ledger_service.create_transaction(OWNER, buy_data(account.account_id, sec.security_id))

        with pytest.raises(ValidationError):
            ledger_service.update_transaction(OWNER, txn.txn_id, TransactionUpdate(fees=Decimal("-5")))

    def test_update_unknown_raises(self, ledger_service):
        with pytest.raises(NotFoundError):
            ledger_service.update_transaction(OWNER, "missing", TransactionUpdate(notes="x"))

    def test_update_foreign_is_denied(self, ledger_service, account_factory, security_factory):
        foreign = account_factory(owner_id=OTHER_OWNER)
        sec = security_factory("AAPL")
        txn = ledger_service.create_transaction(
            OTHER_OWNER,
            buy_data(foreign.account_id, sec.security_id),
        )

        with pytest.raises(PermissionDeniedError):
            ledger_service.update_transaction(OWNER, txn.txn_id, TransactionUpdate(notes="x"))

    def test_delete_removes(self, ledger_service, account_factory, security_factory):
        account = account_factory()
        sec = security_factory("AAPL")
        txn = ledger_service.create_transaction(OWNER, buy_data(account.account_id, sec.security_id))

        ledger_service.delete_transaction(OWNER, txn.txn_id)

        assert ledger_service.list_transactions(OWNER) == []
        with pytest.raises(NotFoundError):
            ledger_service.delete_transaction(OWNER, txn.txn_id)

    def test_list_filters(self, ledger_service, account_factory, security_factory):
        first = account_factory()
        second = account_factory()
        aapl = security_factory("AAPL")
        msft = security_factory("MSFT")
        ledger_service.create_transaction(
            OWNER, buy_data(first.account_id, aapl.security_id, txn_date=date(2024, 3, 1))
        )
        ledger_service.create_transaction(
            OWNER, buy_data(first.account_id, msft.security_id, txn_date=date(2024, 1, 1))
        )
        ledger_service.create_transaction(
            OWNER, buy_data(second.account_id, aapl.security_id, txn_date=date(2024, 2, 1))
        )

        everything = ledger_service.list_transactions(OWNER)
        by_account = ledger_service.list_transactions(
            OWNER, TransactionFilters(account_id=first.account_id)
        )
        by_security = ledger_service.list_transactions(
            OWNER, TransactionFilters(security_id=aapl.security_id)
        )
        by_date = ledger_service.list_transactions(
            OWNER, TransactionFilters(start_date=date(2024, 2, 1), end_date=date(2024, 2, 28))
        )

        assert [t.txn_date for t in everything] == [
            date(2024, 1, 1),
            date(2024, 2, 1),
            date(2024, 3, 1),
        ]
        assert len(by_account) == 2
        assert len(by_security) == 2
        assert [t.account_id for t in by_date] == [second.account_id]

    def test_list_hides_other_owners(self, ledger_service, account_factory, security_factory):
        foreign = account_factory(owner_id=OTHER_OWNER)
        sec = security_factory("AAPL")
        ledger_service.create_transaction(OTHER_OWNER, buy_data(foreign.account_id, sec.security_id))

        assert ledger_service.list_transactions(OWNER) == []


# =============================================================================
# SECURITY AND PRICE TESTS
# =============================================================================


class TestSecurities:
    def test_symbol_uppercased_and_class_normalized(self, ledger_service):
        sec = ledger_service.create_security(" voo ", "Vanguard S&P 500", "Exchange Traded Fund")

        assert sec.symbol == "VOO"
        assert sec.asset_class == "ETF"

    def test_missing_class_defaults_to_stock(self, ledger_service):
        assert ledger_service.create_security("AAPL", "Apple").asset_class == "Stock"

    def test_duplicate_symbol_rejected(self, ledger_service):
        ledger_service.create_security("AAPL", "Apple")

        with pytest.raises(ValidationError) as exc_info:
            ledger_service.create_security("aapl", "Apple again")

        assert "already exists" in exc_info.value.message

    def test_list_securities_sorted(self, ledger_service):
        ledger_service.create_security("MSFT", "Microsoft")
        ledger_service.create_security("AAPL", "Apple")

        assert [s.symbol for s in ledger_service.list_securities()] == ["AAPL", "MSFT"]

    def test_record_and_list_prices(self, ledger_service, security_factory):
        sec = security_factory("AAPL")
        ledger_service.record_price(OWNER, sec.security_id, date(2024, 6, 13), Decimal("180"))
        ledger_service.record_price(OWNER, sec.security_id, date(2024, 6, 14), Decimal("182"))

        prices = ledger_service.list_prices(sec.security_id)

        assert [p.price_date for p in prices] == [date(2024, 6, 14), date(2024, 6, 13)]
        assert prices[0].snapshot_id is not None

    def test_price_for_unknown_security(self, ledger_service):
        with pytest.raises(NotFoundError):
            ledger_service.record_price(OWNER, "missing", date(2024, 6, 14), Decimal("1"))

    def test_negative_price_rejected(self, ledger_service, security_factory):
        sec = security_factory("AAPL")

        with pytest.raises(ValidationError):
            ledger_service.record_price(OWNER, sec.security_id, date(2024, 6, 14), Decimal("-1"))


# =============================================================================
# POSITION TESTS
# =============================================================================


class TestPositions:
    def test_upsert_then_replace(self, ledger_service, account_factory, security_factory, position_repo):
        account = account_factory()
        sec = security_factory("AAPL")
        position = Position(
            security_id=sec.security_id,
            account_id=account.account_id,
            quantity=Decimal("5"),
            avg_price=Decimal("100"),
            book_value=Decimal("500"),
        )

        ledger_service.upsert_position(OWNER, position)
        ledger_service.upsert_position(
            OWNER,
            Position(
                security_id=sec.security_id,
                account_id=account.account_id,
                quantity=Decimal("6"),
                avg_price=Decimal("100"),
                book_value=Decimal("600"),
            ),
        )

        stored = position_repo.find_positions(OWNER)
        assert len(stored) == 1
        assert stored[0].quantity == Decimal("6")

    def test_upsert_foreign_account_denied(self, ledger_service, account_factory, security_factory):
        foreign = account_factory(owner_id=OTHER_OWNER)
        sec = security_factory("AAPL")

        with pytest.raises(PermissionDeniedError):
            ledger_service.upsert_position(
                OWNER,
                Position(security_id=sec.security_id, account_id=foreign.account_id),
            )

    def test_negative_quantity_rejected(self, ledger_service, account_factory, security_factory):
        account = account_factory()
        sec = security_factory("AAPL")

        with pytest.raises(ValidationError):
            ledger_service.upsert_position(
                OWNER,
                Position(
                    security_id=sec.security_id,
                    account_id=account.account_id,
                    quantity=Decimal("-1"),
                ),
            )

    def test_delete_positions(self, ledger_service, account_factory, security_factory, position_factory, position_repo):
        account = account_factory()
        position_factory(account, security_factory("AAPL"), Decimal("1"), Decimal("10"))

        ledger_service.delete_positions(OWNER, account.account_id)

        assert position_repo.find_positions(OWNER) == []


# =============================================================================
# CACHE INVALIDATION TESTS
# =============================================================================


class TestInvalidation:
    """Every successful mutation drops the owner's cached holdings."""

    @pytest.fixture
    def warm(self, holdings_cache):
        def _warm():
            holdings_cache.put(cache_key(OWNER), [])
            holdings_cache.put(cache_key(OWNER, "some-account"), [])

        return _warm

    def test_create_update_delete_invalidate(
        self,
        ledger_service,
        holdings_cache,
        account_factory,
        security_factory,
        warm,
    ):
        account = account_factory()
        sec = security_factory("AAPL")

        warm()
        txn = ledger_service.create_transaction(OWNER, buy_data(account.account_id, sec.security_id))
        assert len(holdings_cache) == 0

        warm()
        ledger_service.update_transaction(OWNER, txn.txn_id, TransactionUpdate(notes="n"))
        assert len(holdings_cache) == 0

        warm()
        ledger_service.delete_transaction(OWNER, txn.txn_id)
        assert len(holdings_cache) == 0

    def test_position_writes_invalidate(
        self,
        ledger_service,
        holdings_cache,
        account_factory,
        security_factory,
        warm,
    ):
        account = account_factory()
        sec = security_factory("AAPL")

        warm()
        ledger_service.upsert_position(
            OWNER,
            Position(security_id=sec.security_id, account_id=account.account_id, quantity=Decimal("1")),
        )
        assert len(holdings_cache) == 0

        warm()
        ledger_service.delete_positions(OWNER, account.account_id)
        assert len(holdings_cache) == 0

    def test_price_write_invalidates_every_owner(
        self,
        ledger_service,
        holdings_cache,
        security_factory,
        warm,
    ):
        sec = security_factory("AAPL")
        warm()
        holdings_cache.put(cache_key(OTHER_OWNER), [])

        ledger_service.record_price(OWNER, sec.security_id, date(2024, 6, 14), Decimal("10"))

        assert len(holdings_cache) == 0

    def test_failed_write_keeps_cache(self, ledger_service, holdings_cache, warm):
        warm()

        with pytest.raises(NotFoundError):
            ledger_service.delete_transaction(OWNER, "missing")

        assert len(holdings_cache) == 2


class TestDateCoercion:
    def test_string_dates_are_parsed(self, ledger_service, account_factory, security_factory):
        account = account_factory()
        sec = security_factory("AAPL")

        txn = ledger_service.create_transaction(
            OWNER,
            buy_data(account.account_id, sec.security_id, txn_date="2024-03-08"),
        )
        snapshot = ledger_service.record_price(OWNER, sec.security_id, "2024-03-08", Decimal("1"))

        assert txn.txn_date == date(2024, 3, 8)
        assert snapshot.price_date == date(2024, 3, 8)
