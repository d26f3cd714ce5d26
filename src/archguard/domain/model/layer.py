"""Layer definitions and access rules."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from archguard.domain.model.enums import AccessMode
from archguard.domain.predicates.package import module_contains

if TYPE_CHECKING:
    from archguard.domain.model.class_entity import ClassEntity


@dataclass(frozen=True, slots=True)
class Layer:
    """Named partition of the population.

    Membership: any pattern occurs in the module path (substring
    semantics, dots and slashes interchangeable).

    Attributes:
        name: Layer name
        patterns: Module path patterns
    """

    name: str
    patterns: tuple[str, ...]

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if not self.name:
            raise ValueError("layer name must not be empty")
        if not self.patterns:
            raise ValueError(f"layer '{self.name}' needs at least one pattern")
        if not all(self.patterns):
            raise ValueError(f"layer '{self.name}' has an empty pattern")

    def contains_module(self, module_path: str) -> bool:
        """True if any pattern occurs in module_path."""
        return any(module_contains(module_path, p) for p in self.patterns)

    def contains(self, entity: ClassEntity) -> bool:
        """True if entity's module path matches this layer."""
        return self.contains_module(entity.module_path)

    def overlaps(self, other: Layer) -> tuple[str, str] | None:
        """First (own, other) pattern pair where one contains the other.

        Two such patterns can both match one module path.
        """
        for own in self.patterns:
            for theirs in other.patterns:
                if module_contains(own, theirs) or module_contains(theirs, own):
                    return own, theirs
        return None


@dataclass(frozen=True, slots=True)
class AccessRule:
    """Directed constraint between layers.

    Attributes:
        source: Layer whose classes are checked
        targets: Allowed (MAY_ONLY) or forbidden (MAY_NOT) layers
        mode: MAY_ONLY or MAY_NOT
    """

    source: str
    targets: tuple[str, ...]
    mode: AccessMode

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if not self.source:
            raise ValueError("source layer must not be empty")
        if not self.targets:
            raise ValueError(f"access rule for '{self.source}' needs at least one target layer")

    def is_violated_by(self, layer_name: str) -> bool:
        """True if a dependency into layer_name breaks this rule."""
        if self.mode is AccessMode.MAY_ONLY:
            return layer_name not in self.targets
        return layer_name in self.targets

    def describe(self) -> str:
        """e.g. "Layer 'Models' may not access layers [Services, Controllers]"."""
        verb = "may only" if self.mode is AccessMode.MAY_ONLY else "may not"
        return f"Layer '{self.source}' {verb} access layers [{', '.join(self.targets)}]"
