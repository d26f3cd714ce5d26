"""Dependency resolution result.

Every lookup of a raw dependency name returns exactly one of
Resolved or Unresolved; call sites pattern-match on the result.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, TypeAlias

if TYPE_CHECKING:
    from archguard.domain.model.class_entity import ClassEntity


@dataclass(frozen=True, slots=True)
class Resolved:
    """Dependency name resolved to a class of the population.

    Attributes:
        class_id: Graph node id of the target
        entity: Target class
    """

    class_id: str
    entity: ClassEntity

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if not self.class_id:
            raise ValueError("class_id must not be empty")


@dataclass(frozen=True, slots=True)
class Unresolved:
    """Dependency name with no matching class (external or unknown).

    Attributes:
        name: Raw dependency name as written by the parser
    """

    name: str


Resolution: TypeAlias = Resolved | Unresolved
