"""Account repository protocol."""

from typing import Protocol, Optional

from holdings.domain.models import Account


class AccountRepository(Protocol):
    """Interface for account data access."""

    def create(self, account: Account) -> Account:
        """Persist a new account."""
        ...

    def get_by_id(self, account_id: str) -> Optional[Account]:
        """Retrieve account by ID."""
        ...

    def find_by_ids(self, account_ids: list[str]) -> list[Account]:
        """Retrieve accounts by ID; unknown IDs are omitted."""
        ...

    def list_by_owner(self, owner_id: str) -> list[Account]:
        """List all accounts of an owner."""
        ...
