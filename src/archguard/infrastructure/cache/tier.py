"""Single cache tier: TTL, capacity eviction, hit/miss accounting.

Mutations and counters are serialized by one lock per tier. Content
fingerprints are computed by the caller-supplied function outside the
lock, so slow file reads never block other workers.
"""

from __future__ import annotations

import logging
import threading
import time
from collections import OrderedDict
from dataclasses import dataclass
from typing import TYPE_CHECKING, Generic, TypeVar

from archguard.domain.model.configuration import CacheOptions
from archguard.domain.model.enums import EvictionPolicy

if TYPE_CHECKING:
    from collections.abc import Callable

logger = logging.getLogger(__name__)

V = TypeVar("V")


@dataclass(frozen=True, slots=True)
class CacheEntry(Generic[V]):
    """Stored value.

    Attributes:
        key: Tier key
        value: Cached value
        inserted_at: Clock reading at insertion
        fingerprint: Content fingerprint (tier 1 only)
    """

    key: str
    value: V
    inserted_at: float
    fingerprint: str | None = None


@dataclass(frozen=True, slots=True)
class TierStats:
    """Snapshot of tier counters.

    Attributes:
        hits: Successful lookups
        misses: Failed lookups (absent, expired, stale)
        hit_rate: hits / (hits + misses), 0.0 before any lookup
        size: Current number of entries
    """

    hits: int
    misses: int
    hit_rate: float
    size: int

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if self.hits < 0 or self.misses < 0 or self.size < 0:
            raise ValueError("counters must be >= 0")
        if not 0.0 <= self.hit_rate <= 1.0:
            raise ValueError(f"hit_rate must be in [0, 1], got {self.hit_rate}")


class CacheTier(Generic[V]):
    """Thread-safe keyed cache with TTL and capacity eviction.

    Eviction runs on set() when size exceeds max_size and removes the
    oldest eviction_fraction of entries (at least one), never the key
    being inserted. "Oldest" is insertion order, or access order under
    EvictionPolicy.RECENCY.
    """

    def __init__(
        self,
        name: str,
        options: CacheOptions | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        """Initialize tier.

        Args:
            name: Tier name used in logs and stats
            options: Limits. Uses defaults if None.
            clock: Monotonic time source (injectable for tests)
        """
        if not name:
            raise ValueError("tier name must not be empty")
        self._name = name
        self._options = options or CacheOptions()
        self._clock = clock
        self._entries: OrderedDict[str, CacheEntry[V]] = OrderedDict()
        self._lock = threading.Lock()
        self._hits = 0
        self._misses = 0

    @property
    def name(self) -> str:
        """Tier name."""
        return self._name

    @property
    def options(self) -> CacheOptions:
        """Tier limits."""
        return self._options

    def get(
        self,
        key: str,
        fingerprint: Callable[[], str | None] | None = None,
    ) -> V | None:
        """Look up key.

        TTL is checked first. If the entry carries a fingerprint and a
        fingerprint function is given, the fresh fingerprint must match;
        a mismatch or None (unreadable source) is a miss and drops the entry.

        Args:
            key: Tier key
            fingerprint: Computes the current content fingerprint

        Returns:
            Cached value, or None on miss
        """
        with self._lock:
            entry = self._live_entry(key)
            if entry is None:
                return None
            if fingerprint is None or entry.fingerprint is None:
                return self._hit(entry)

        current = fingerprint()

        with self._lock:
            if current is None or current != entry.fingerprint:
                if self._entries.get(key) is entry:
                    del self._entries[key]
                self._misses += 1
                logger.debug("cache %s: stale entry %s", self._name, key)
                return None
            return self._hit(entry)

    def set(self, key: str, value: V, fingerprint: str | None = None) -> None:
        """Store value under key, evicting old entries if over capacity.

        Re-setting a key refreshes its insertion time and order.

        Raises:
            ValueError: If value is None (None means miss)
        """
        if value is None:
            raise ValueError("cannot cache None")
        with self._lock:
            self._entries.pop(key, None)
            self._entries[key] = CacheEntry(
                key=key,
                value=value,
                inserted_at=self._clock(),
                fingerprint=fingerprint,
            )
            if len(self._entries) > self._options.max_size:
                self._evict(keep=key)

    def invalidate(self, key: str) -> bool:
        """Drop key without touching counters. True if it was present."""
        with self._lock:
            return self._entries.pop(key, None) is not None

    def clear(self) -> None:
        """Drop all entries and reset counters."""
        with self._lock:
            self._entries.clear()
            self._hits = 0
            self._misses = 0

    def stats(self) -> TierStats:
        """Consistent snapshot of counters and size."""
        with self._lock:
            total = self._hits + self._misses
            return TierStats(
                hits=self._hits,
                misses=self._misses,
                hit_rate=self._hits / total if total else 0.0,
                size=len(self._entries),
            )

    def keys(self) -> tuple[str, ...]:
        """Keys from oldest to newest."""
        with self._lock:
            return tuple(self._entries)

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._entries

    # Internal, lock held

    def _live_entry(self, key: str) -> CacheEntry[V] | None:
        """Entry if present and within TTL; counts the miss otherwise."""
        entry = self._entries.get(key)
        if entry is None:
            self._misses += 1
            return None
        if self._clock() - entry.inserted_at > self._options.ttl_seconds:
            del self._entries[key]
            self._misses += 1
            logger.debug("cache %s: expired %s", self._name, key)
            return None
        return entry

    def _hit(self, entry: CacheEntry[V]) -> V:
        self._hits += 1
        if self._options.eviction_policy is EvictionPolicy.RECENCY and entry.key in self._entries:
            self._entries.move_to_end(entry.key)
        return entry.value

    def _evict(self, keep: str) -> None:
        count = max(1, int(self._options.max_size * self._options.eviction_fraction))
        victims = [k for k in self._entries if k != keep][:count]
        for victim in victims:
            del self._entries[victim]
        logger.debug("cache %s: evicted %d entries", self._name, len(victims))
