"""Latest stored price lookup."""

from collections.abc import Iterable
from decimal import Decimal

from holdings.domain.models import PriceSnapshot
from holdings.repositories.protocols import SecurityRepository


def select_latest(snapshots: Iterable[PriceSnapshot]) -> dict[str, Decimal]:
    """
    Pick the most recent snapshot per security.

    Maximum price_date wins; on a date tie the most recently inserted snapshot
    wins (higher snapshot_id, or later position when ids are absent).
    """
    best: dict[str, tuple[tuple, PriceSnapshot]] = {}
    for position, snapshot in enumerate(snapshots):
        rank = (
            snapshot.price_date,
            snapshot.snapshot_id if snapshot.snapshot_id is not None else -1,
            position,
        )
        current = best.get(snapshot.security_id)
        if current is None or rank > current[0]:
            best[snapshot.security_id] = (rank, snapshot)
    return {security_id: snap.price for security_id, (_, snap) in best.items()}


class PriceResolver:
    """Resolves the latest stored price for a set of securities."""

    def __init__(self, security_repo: SecurityRepository):
        self._security_repo = security_repo

    def latest(self, security_ids: Iterable[str]) -> dict[str, Decimal]:
        """
        Return security_id -> latest price.

        Securities without any snapshot are absent from the result; callers
        fall back to average cost for those.
        """
        ids = sorted(set(security_ids))
        if not ids:
            return {}
        return select_latest(self._security_repo.find_prices(ids))
