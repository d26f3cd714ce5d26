"""Predicate type aliases."""

from collections.abc import Callable
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from archguard.domain.model.class_entity import ClassEntity

# Pure function of one class, no side effects
ClassPredicate = Callable[["ClassEntity"], bool]
