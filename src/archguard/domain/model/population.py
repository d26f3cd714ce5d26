"""Population: ordered immutable collection of analyzed classes."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from typing import TYPE_CHECKING

from archguard.domain.predicates import class_predicates

if TYPE_CHECKING:
    import re
    from collections.abc import Iterable

    from archguard.domain.model.class_entity import ClassEntity
    from archguard.domain.predicates.base import ClassPredicate


@dataclass(frozen=True, slots=True)
class Population:
    """Ordered sequence of ClassEntity.

    Order is discovery order and is preserved by every operation,
    so violations come out in a stable order between runs.
    Every operation returns a new Population.

    Attributes:
        classes: Entities in discovery order
    """

    classes: tuple[ClassEntity, ...] = ()

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if not isinstance(self.classes, tuple):
            raise TypeError(f"classes must be a tuple, got {type(self.classes).__name__}")

    @classmethod
    def of(cls, entities: Iterable[ClassEntity]) -> Population:
        """Create population from any iterable, keeping order."""
        return cls(tuple(entities))

    def __iter__(self) -> Iterator[ClassEntity]:
        return iter(self.classes)

    def __len__(self) -> int:
        return len(self.classes)

    @property
    def is_empty(self) -> bool:
        """True if population has no classes."""
        return not self.classes

    def that(self, predicate: ClassPredicate) -> Population:
        """Keep classes matching predicate.

        Args:
            predicate: Pure function of one class

        Returns:
            New filtered population (order preserved)
        """
        return Population(tuple(c for c in self.classes if predicate(c)))

    def merge(self, other: Population) -> Population:
        """Concatenate two populations (self first, duplicates kept)."""
        return Population((*self.classes, *other.classes))

    def add(self, entity: ClassEntity) -> Population:
        """Return new population with entity appended."""
        return Population((*self.classes, entity))

    def find(self, name: str) -> ClassEntity | None:
        """First class with simple name, or None."""
        for entity in self.classes:
            if entity.name == name:
                return entity
        return None

    # Convenience filters

    def reside_in_package(self, pattern: str) -> Population:
        """Classes whose module or file path contains the package."""
        return self.that(class_predicates.resides_in_package(pattern))

    def are_annotated_with(self, decorator: str) -> Population:
        """Classes carrying the decorator."""
        return self.that(class_predicates.is_annotated_with(decorator))

    def have_simple_name_ending_with(self, suffix: str) -> Population:
        """Classes whose name ends with suffix."""
        return self.that(class_predicates.has_name_ending_with(suffix))

    def have_simple_name_starting_with(self, prefix: str) -> Population:
        """Classes whose name starts with prefix."""
        return self.that(class_predicates.has_name_starting_with(prefix))

    def have_simple_name_matching(self, pattern: str | re.Pattern[str]) -> Population:
        """Classes whose name matches the regex (search semantics)."""
        return self.that(class_predicates.has_name_matching(pattern))

    def are_assignable_to(self, type_name: str) -> Population:
        """Classes that are, extend or implement type_name."""
        return self.that(class_predicates.is_assignable_to(type_name))
