"""Security and price snapshot repository protocol."""

from typing import Protocol, Optional

from holdings.domain.models import Security, PriceSnapshot


class SecurityRepository(Protocol):
    """Interface for security and price snapshot data access."""

    def create(self, security: Security) -> Security:
        """Persist a new security."""
        ...

    def get_by_symbol(self, symbol: str) -> Optional[Security]:
        """Retrieve a security by its symbol."""
        ...

    def find_by_ids(self, security_ids: list[str]) -> list[Security]:
        """Retrieve securities by ID; unknown IDs are omitted."""
        ...

    def list_all(self) -> list[Security]:
        """List all securities."""
        ...

    def create_price(self, snapshot: PriceSnapshot) -> PriceSnapshot:
        """Persist a price snapshot, assigning its insertion sequence."""
        ...

    def find_prices(self, security_ids: list[str]) -> list[PriceSnapshot]:
        """All snapshots for the given securities, in insertion order."""
        ...

    def list_prices(self, security_id: Optional[str] = None) -> list[PriceSnapshot]:
        """List snapshots, newest date first."""
        ...
