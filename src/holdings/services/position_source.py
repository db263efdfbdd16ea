"""Fast-path source of precomputed positions."""

from typing import Optional

from holdings.domain.models import Position
from holdings.repositories.protocols import PositionRepository


class PositionSource:
    """
    Reads precomputed positions maintained by an external writer.

    Pure read: an empty list means "nothing precomputed" and sends the caller
    down the ledger replay path. Never replays itself.
    """

    def __init__(self, position_repo: PositionRepository):
        self._position_repo = position_repo

    def find(self, owner_id: str, account_id: Optional[str] = None) -> list[Position]:
        """Return the owner's positions, optionally restricted to one account."""
        return self._position_repo.find_positions(owner_id, account_id=account_id) or []
