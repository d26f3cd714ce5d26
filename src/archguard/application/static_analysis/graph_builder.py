"""Dependency graph builder from a Population."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from archguard.application.static_analysis.resolver import DependencyResolver
from archguard.domain.model.dependency_graph import DependencyGraph, GraphEdge, GraphNode
from archguard.domain.model.enums import DependencyType
from archguard.domain.model.resolution import Resolved, Unresolved

if TYPE_CHECKING:
    from archguard.domain.model.class_entity import ClassEntity
    from archguard.domain.model.population import Population
    from archguard.domain.model.resolution import Resolution

logger = logging.getLogger(__name__)


class DependencyGraphBuilder:
    """Builds a fresh DependencyGraph from a Population.

    One node per class. Edges:
        extends        -> INHERITANCE
        implements     -> IMPLEMENTATION
        dependencies   -> USAGE when resolved by class name,
                          IMPORT when resolved by module path

    Unresolved names and self references produce no edge.
    Stateless - no state between build() calls.
    """

    def build(self, population: Population) -> DependencyGraph:
        """Build graph; nodes are all added before any edge.

        Raises:
            TypeError: If population is None (FAIL-FIRST)
        """
        if population is None:
            raise TypeError("population must not be None")

        graph = DependencyGraph()
        for entity in population:
            graph.add_node(_node_for(entity))

        resolver = DependencyResolver(population)
        for entity in population:
            for base in entity.extends:
                self._link(graph, entity, resolver.resolve_class(base), DependencyType.INHERITANCE)
            for interface in entity.implements:
                self._link(
                    graph, entity, resolver.resolve_class(interface), DependencyType.IMPLEMENTATION
                )
            for dep in entity.dependencies:
                by_class = resolver.resolve_class(dep)
                if isinstance(by_class, Resolved):
                    self._link(graph, entity, by_class, DependencyType.USAGE)
                else:
                    self._link(graph, entity, resolver.resolve_module(dep), DependencyType.IMPORT)

        logger.debug("Built dependency graph: %d nodes, %d edges", len(graph), len(graph.edges))
        return graph

    def _link(
        self,
        graph: DependencyGraph,
        source: ClassEntity,
        target: Resolution,
        dep_type: DependencyType,
    ) -> None:
        match target:
            case Unresolved(name=name):
                logger.debug("Unresolved reference %s in %s", name, source.qualified_name)
            case Resolved(class_id=class_id) if class_id != source.node_id:
                graph.add_edge(GraphEdge(source.node_id, class_id, dep_type, source.location))


def _node_for(entity: ClassEntity) -> GraphNode:
    return GraphNode(
        id=entity.node_id,
        name=entity.name,
        kind=entity.kind,
        file_path=entity.file_path,
        module_path=entity.module_path,
    )


def build_dependency_graph(population: Population) -> DependencyGraph:
    """Build a fresh DependencyGraph (convenience for DependencyGraphBuilder)."""
    return DependencyGraphBuilder().build(population)
