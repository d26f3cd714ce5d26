"""Three-tier cache manager.

Tiers:
    1 entities     parsed entities per file, validated by content fingerprint
    2 populations  assembled populations per traversal key, TTL only
    3 rules        rule results and graphs per rule/population key, TTL only

Every component takes a CacheManager explicitly. The process-wide
instance from get_global_cache() is a convenience for single-process
tools and can always be replaced by a constructed one.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from archguard.infrastructure.cache.fingerprint import file_fingerprint
from archguard.infrastructure.cache.tier import CacheTier, TierStats

if TYPE_CHECKING:
    from pathlib import Path

    from archguard.domain.model.class_entity import ClassEntity
    from archguard.domain.model.configuration import CacheOptions
    from archguard.domain.model.population import Population

logger = logging.getLogger(__name__)

TIER_ENTITIES = 1
TIER_POPULATIONS = 2
TIER_RULES = 3


@dataclass(frozen=True, slots=True)
class CacheStats:
    """Per-tier statistics snapshot.

    Attributes:
        entities: Tier 1
        populations: Tier 2
        rules: Tier 3
    """

    entities: TierStats
    populations: TierStats
    rules: TierStats

    def by_tier(self) -> tuple[tuple[str, TierStats], ...]:
        """(name, stats) pairs in tier order."""
        return (
            ("entities", self.entities),
            ("populations", self.populations),
            ("rules", self.rules),
        )


class CacheManager:
    """Owner of the three cache tiers."""

    def __init__(self, options: CacheOptions | None = None) -> None:
        """Initialize empty tiers.

        Args:
            options: Limits applied to every tier. Uses defaults if None.
        """
        self.entities: CacheTier[tuple[ClassEntity, ...]] = CacheTier("entities", options)
        self.populations: CacheTier[Population] = CacheTier("populations", options)
        self.rules: CacheTier[object] = CacheTier("rules", options)

    # Tier 1

    def get_entities(
        self,
        path: Path | str,
        fingerprint: str | None = None,
    ) -> tuple[ClassEntity, ...] | None:
        """Cached entities for path if the file content is unchanged.

        Args:
            path: Source file
            fingerprint: Precomputed current fingerprint. Computed from
                the file if None.
        """
        if fingerprint is not None:
            return self.entities.get(str(path), lambda: fingerprint)
        return self.entities.get(str(path), lambda: file_fingerprint(path))

    def set_entities(
        self,
        path: Path | str,
        entities: tuple[ClassEntity, ...],
        fingerprint: str | None = None,
    ) -> None:
        """Store entities for path.

        Args:
            path: Source file
            entities: Parsed entities
            fingerprint: Content fingerprint. Computed from the file if None;
                nothing is stored when the file is unreadable.
        """
        if fingerprint is None:
            fingerprint = file_fingerprint(path)
        if fingerprint is None:
            logger.debug("Not caching entities for unreadable %s", path)
            return
        self.entities.set(str(path), entities, fingerprint)

    # Tier 2

    def get_population(self, key: str) -> Population | None:
        """Cached population for key."""
        return self.populations.get(key)

    def set_population(self, key: str, population: Population) -> None:
        """Store population under key."""
        self.populations.set(key, population)

    # Tier 3

    def get_rule_result(self, key: str) -> object | None:
        """Cached rule result (or graph) for key."""
        return self.rules.get(key)

    def set_rule_result(self, key: str, value: object) -> None:
        """Store rule result (or graph) under key."""
        self.rules.set(key, value)

    # Maintenance

    def tier(self, number: int) -> CacheTier[Any]:
        """Tier by number (1, 2 or 3).

        Raises:
            ValueError: If number is not a tier
        """
        if number == TIER_ENTITIES:
            return self.entities
        if number == TIER_POPULATIONS:
            return self.populations
        if number == TIER_RULES:
            return self.rules
        raise ValueError(f"tier must be 1, 2 or 3, got {number}")

    def clear_tier(self, number: int) -> None:
        """Reset entries and counters of one tier only."""
        self.tier(number).clear()

    def clear_all(self) -> None:
        """Reset entries and counters of every tier."""
        self.entities.clear()
        self.populations.clear()
        self.rules.clear()

    def stats(self) -> CacheStats:
        """Snapshot of all tier counters."""
        return CacheStats(
            entities=self.entities.stats(),
            populations=self.populations.stats(),
            rules=self.rules.stats(),
        )


_global_cache: CacheManager | None = None
_global_lock = threading.Lock()


def get_global_cache() -> CacheManager:
    """Process-wide CacheManager, created on first access."""
    global _global_cache
    with _global_lock:
        if _global_cache is None:
            _global_cache = CacheManager()
        return _global_cache


def reset_global_cache() -> None:
    """Discard the process-wide CacheManager; next access builds a fresh one."""
    global _global_cache
    with _global_lock:
        _global_cache = None
