"""Precomputed position repository protocol."""

from typing import Protocol, Optional

from holdings.domain.models import Position


class PositionRepository(Protocol):
    """Interface for precomputed position data access."""

    def find_positions(
        self,
        owner_id: str,
        account_id: Optional[str] = None,
    ) -> list[Position]:
        """
        List the owner's precomputed positions, optionally for one account.

        Raises PermissionDeniedError when account_id belongs to another owner.
        """
        ...

    def upsert(self, position: Position) -> Position:
        """Insert or update a position row."""
        ...

    def delete_by_account(self, account_id: str) -> None:
        """Delete all position rows of an account."""
        ...
