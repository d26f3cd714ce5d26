"""Configuration DTOs.

Immutable, validated on construction. Built by hand or loaded from
[tool.archguard] in pyproject.toml.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from archguard.domain.model.enums import EvictionPolicy
from archguard.domain.model.layer import AccessRule

DEFAULT_MAX_SIZE = 1000
DEFAULT_TTL_SECONDS = 300.0
DEFAULT_EVICTION_FRACTION = 0.2


@dataclass(frozen=True, slots=True)
class CacheOptions:
    """Per-tier cache limits (applied to every tier).

    Attributes:
        max_size: Max entries per tier
        ttl_seconds: Entry lifetime
        eviction_fraction: Share of entries removed when over capacity
        eviction_policy: INSERTION_ORDER or RECENCY
    """

    max_size: int = DEFAULT_MAX_SIZE
    ttl_seconds: float = DEFAULT_TTL_SECONDS
    eviction_fraction: float = DEFAULT_EVICTION_FRACTION
    eviction_policy: EvictionPolicy = EvictionPolicy.INSERTION_ORDER

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if self.max_size < 1:
            raise ValueError(f"max_size must be >= 1, got {self.max_size}")
        if self.ttl_seconds <= 0:
            raise ValueError(f"ttl_seconds must be > 0, got {self.ttl_seconds}")
        if not 0.0 < self.eviction_fraction <= 1.0:
            raise ValueError(f"eviction_fraction must be in (0, 1], got {self.eviction_fraction}")


@dataclass(frozen=True, slots=True)
class ArchGuardConfig:
    """Project configuration.

    Attributes:
        cache: Cache limits
        layers: Layer name -> module path patterns, declaration order
        access_rules: Layer access rules, declaration order
        max_workers: Parser thread pool size. None = executor default.
    """

    cache: CacheOptions = field(default_factory=CacheOptions)
    layers: Mapping[str, tuple[str, ...]] = field(
        default_factory=lambda: MappingProxyType({})
    )
    access_rules: tuple[AccessRule, ...] = ()
    max_workers: int | None = None

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if self.max_workers is not None and self.max_workers < 1:
            raise ValueError(f"max_workers must be >= 1, got {self.max_workers}")
        for rule in self.access_rules:
            unknown = [n for n in (rule.source, *rule.targets) if n not in self.layers]
            if unknown:
                raise ValueError(f"access rule references undefined layers: {', '.join(unknown)}")

    def has_layers(self) -> bool:
        """Check if layered architecture is configured."""
        return bool(self.layers)
