"""Time-bounded memoization of computed holdings."""

import logging
import threading
import time
from dataclasses import dataclass
from typing import Callable, Optional, Protocol

from holdings.config.settings import get_settings
from holdings.domain.views import Holding

logger = logging.getLogger(__name__)

KEY_PREFIX = "holdings"


def cache_key(owner_id: str, account_id: Optional[str] = None) -> str:
    """Build the cache key for an owner and account scope ("all" when unscoped)."""
    return f"{KEY_PREFIX}:{owner_id}:{account_id or 'all'}"


def owner_prefix(owner_id: str) -> str:
    return f"{KEY_PREFIX}:{owner_id}:"


@dataclass(frozen=True)
class CacheTicket:
    """Invalidation generation of an owner, observed before a computation starts."""

    owner_id: str
    generation: int


class HoldingsCache(Protocol):
    """
    Interface for a holdings cache backend.

    The local implementation below serves a single process; a distributed
    backend can implement the same methods for multi-instance deployments.
    """

    def get(self, key: str) -> Optional[list[Holding]]:
        """Return cached holdings, or None on a miss or expired entry."""
        ...

    def ticket(self, owner_id: str) -> CacheTicket:
        """Capture the owner's invalidation generation before computing."""
        ...

    def put(
        self,
        key: str,
        holdings: list[Holding],
        ttl: Optional[float] = None,
        ticket: Optional[CacheTicket] = None,
    ) -> bool:
        """
        Store holdings under key for ttl seconds (backend default if None).

        When a ticket is given and the owner was invalidated after it was
        taken, nothing is stored. Returns whether the entry was stored.
        """
        ...

    def invalidate(self, owner_id: Optional[str] = None) -> int:
        """Drop every entry of an owner (all entries if None); return count removed."""
        ...

    def clear(self) -> int:
        """Drop every entry; return count removed."""
        ...

    def sweep(self) -> int:
        """Evict expired entries; return count removed."""
        ...


@dataclass
class _Entry:
    holdings: list[Holding]
    expires_at: float


class InMemoryHoldingsCache:
    """
    Process-local holdings cache with TTL expiry and owner-prefix invalidation.

    Expired entries are treated as misses and evicted when touched. A full
    sweep runs on access at most once per sweep_interval to bound memory.
    All operations hold one lock, so concurrent requests for the same
    dashboard can race safely.

    Every invalidation advances a generation counter for the owner (or for
    everyone on a full clear). A put carrying a ticket from an older
    generation is dropped, so a result computed from pre-write data is
    never stored after the write invalidated it.
    """

    def __init__(
        self,
        ttl_seconds: float = 30.0,
        sweep_interval_seconds: float = 60.0,
        clock: Callable[[], float] = time.monotonic,
    ):
        self._ttl = ttl_seconds
        self._sweep_interval = sweep_interval_seconds
        self._clock = clock
        self._entries: dict[str, _Entry] = {}
        self._lock = threading.RLock()
        self._last_sweep = clock()
        self._counter = 0
        self._clear_generation = 0
        self._owner_generations: dict[str, int] = {}

    def get(self, key: str) -> Optional[list[Holding]]:
        with self._lock:
            now = self._clock()
            self._maybe_sweep(now)
            entry = self._entries.get(key)
            if entry is None:
                return None
            if now >= entry.expires_at:
                del self._entries[key]
                return None
            return list(entry.holdings)

    def ticket(self, owner_id: str) -> CacheTicket:
        with self._lock:
            return CacheTicket(owner_id=owner_id, generation=self._generation(owner_id))

    def put(
        self,
        key: str,
        holdings: list[Holding],
        ttl: Optional[float] = None,
        ticket: Optional[CacheTicket] = None,
    ) -> bool:
        with self._lock:
            if ticket is not None and ticket.generation != self._generation(ticket.owner_id):
                logger.debug("Skipped stale holdings cache put for %s", key)
                return False
            now = self._clock()
            self._maybe_sweep(now)
            lifetime = self._ttl if ttl is None else ttl
            self._entries[key] = _Entry(holdings=list(holdings), expires_at=now + lifetime)
            return True

    def invalidate(self, owner_id: Optional[str] = None) -> int:
        if owner_id is None:
            return self.clear()
        with self._lock:
            self._counter += 1
            self._owner_generations[owner_id] = self._counter
            prefix = owner_prefix(owner_id)
            stale = [k for k in self._entries if k.startswith(prefix)]
            for k in stale:
                del self._entries[k]
        if stale:
            logger.debug("Invalidated %d holdings cache entries (owner=%s)", len(stale), owner_id)
        return len(stale)

    def clear(self) -> int:
        with self._lock:
            self._counter += 1
            self._clear_generation = self._counter
            self._owner_generations.clear()
            removed = len(self._entries)
            self._entries.clear()
        if removed:
            logger.debug("Cleared %d holdings cache entries", removed)
        return removed

    def sweep(self) -> int:
        with self._lock:
            return self._sweep(self._clock())

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def _generation(self, owner_id: str) -> int:
        return max(self._owner_generations.get(owner_id, 0), self._clear_generation)

    def _maybe_sweep(self, now: float) -> None:
        if now - self._last_sweep >= self._sweep_interval:
            self._sweep(now)

    def _sweep(self, now: float) -> int:
        expired = [k for k, e in self._entries.items() if now >= e.expires_at]
        for k in expired:
            del self._entries[k]
        self._last_sweep = now
        return len(expired)


# Process-wide cache instance (can be replaced at runtime)
_holdings_cache: Optional[HoldingsCache] = None


def get_holdings_cache() -> HoldingsCache:
    """Return the process-wide holdings cache, creating it from settings."""
    global _holdings_cache
    if _holdings_cache is None:
        settings = get_settings()
        _holdings_cache = InMemoryHoldingsCache(
            ttl_seconds=settings.holdings_cache_ttl_seconds,
            sweep_interval_seconds=settings.holdings_cache_sweep_interval_seconds,
        )
    return _holdings_cache


def set_holdings_cache(cache: HoldingsCache) -> None:
    """Install a different cache backend."""
    global _holdings_cache
    _holdings_cache = cache


def reset_holdings_cache() -> None:
    """Drop the process-wide cache so the next access rebuilds it."""
    global _holdings_cache
    _holdings_cache = None
