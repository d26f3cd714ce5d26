"""In-memory three-tier cache."""

from archguard.infrastructure.cache.fingerprint import (
    file_fingerprint,
    graph_key,
    hash_text,
    population_fingerprint,
    population_key,
    rule_key,
)
from archguard.infrastructure.cache.manager import (
    CacheManager,
    CacheStats,
    get_global_cache,
    reset_global_cache,
)
from archguard.infrastructure.cache.tier import CacheEntry, CacheTier, TierStats

__all__ = [
    "CacheEntry",
    "CacheManager",
    "CacheStats",
    "CacheTier",
    "TierStats",
    "file_fingerprint",
    "get_global_cache",
    "graph_key",
    "hash_text",
    "population_fingerprint",
    "population_key",
    "reset_global_cache",
]
