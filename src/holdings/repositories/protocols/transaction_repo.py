"""Transaction repository protocol."""

from datetime import date
from typing import Protocol, Optional

from holdings.domain.models import Transaction


class TransactionRepository(Protocol):
    """Interface for transaction (ledger) data access."""

    def create(self, transaction: Transaction) -> Transaction:
        """Persist a new transaction."""
        ...

    def get_by_id(self, txn_id: str) -> Optional[Transaction]:
        """Retrieve transaction by ID."""
        ...

    def update(self, transaction: Transaction) -> Transaction:
        """Update an existing transaction."""
        ...

    def delete(self, txn_id: str) -> None:
        """Delete a transaction (hard delete)."""
        ...

    def find_transactions(
        self,
        owner_id: str,
        account_id: Optional[str] = None,
        security_id: Optional[str] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> list[Transaction]:
        """
        List the owner's transactions matching the filters, ordered by date.

        Raises PermissionDeniedError when account_id belongs to another owner.
        """
        ...
