"""Resolve raw dependency names against a population."""

from __future__ import annotations

from typing import TYPE_CHECKING

from archguard.domain.model.resolution import Resolved, Unresolved

if TYPE_CHECKING:
    from collections.abc import Iterable

    from archguard.domain.model.class_entity import ClassEntity
    from archguard.domain.model.resolution import Resolution


class DependencyResolver:
    """Name index over a fixed set of classes.

    Lookup order for class references: simple name, then qualified name.
    Module references resolve to the first class declared in that module.
    The first class in discovery order wins on duplicate names.
    """

    def __init__(self, classes: Iterable[ClassEntity]) -> None:
        self._by_name: dict[str, ClassEntity] = {}
        self._by_qualified: dict[str, ClassEntity] = {}
        self._by_module: dict[str, ClassEntity] = {}
        for entity in classes:
            self._by_name.setdefault(entity.name, entity)
            self._by_qualified.setdefault(entity.qualified_name, entity)
            if entity.module_path:
                self._by_module.setdefault(entity.module_path, entity)

    def resolve_class(self, name: str) -> Resolution:
        """Resolve a type reference by simple or qualified name."""
        entity = self._by_name.get(name) or self._by_qualified.get(name)
        if entity is None:
            return Unresolved(name)
        return Resolved(entity.node_id, entity)

    def resolve_module(self, name: str) -> Resolution:
        """Resolve a module reference (import of a whole module)."""
        entity = self._by_module.get(name)
        if entity is None:
            return Unresolved(name)
        return Resolved(entity.node_id, entity)

    def resolve(self, name: str) -> Resolution:
        """Class lookup first, module lookup second."""
        result = self.resolve_class(name)
        if isinstance(result, Resolved):
            return result
        return self.resolve_module(name)
