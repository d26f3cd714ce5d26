"""Tests for application/static_analysis/graph_builder.py."""

import pytest

from archguard.application.static_analysis.graph_builder import (
    DependencyGraphBuilder,
    build_dependency_graph,
)
from archguard.domain.model.enums import DependencyType
from archguard.domain.model.population import Population
from tests.factories import make_class, make_population


class TestDependencyGraphBuilder:
    """Tests for DependencyGraphBuilder.build."""

    def test_none_population_raises(self) -> None:
        with pytest.raises(TypeError, match="population must not be None"):
            DependencyGraphBuilder().build(None)  # type: ignore[arg-type]

    def test_empty_population(self) -> None:
        graph = build_dependency_graph(Population())
        assert len(graph) == 0

    def test_one_node_per_class(self) -> None:
        population = make_population(make_class("A"), make_class("B"))
        graph = build_dependency_graph(population)
        assert [n.name for n in graph.nodes] == ["A", "B"]

    def test_edge_types(self) -> None:
        base = make_class("Base", "myapp.base")
        port = make_class("Port", "myapp.ports", is_interface=True)
        user = make_class("User", "myapp.models.user")
        service = make_class(
            "Service",
            "myapp.services",
            extends=("Base",),
            implements=("Port",),
            dependencies=("User", "myapp.models.user", "requests"),
        )
        graph = build_dependency_graph(make_population(base, port, user, service))

        types = [(e.target, e.type) for e in graph.get_edges_from(service.node_id)]

        assert types == [
            (base.node_id, DependencyType.INHERITANCE),
            (port.node_id, DependencyType.IMPLEMENTATION),
            (user.node_id, DependencyType.USAGE),
            (user.node_id, DependencyType.IMPORT),
        ]

    def test_unresolved_and_self_references_skipped(self) -> None:
        entity = make_class("A", dependencies=("A", "os.path"))
        graph = build_dependency_graph(make_population(entity))
        assert graph.edges == ()

    def test_forward_reference_resolves(self) -> None:
        population = make_population(
            make_class("A", "myapp.a", dependencies=("B",)),
            make_class("B", "myapp.b"),
        )
        graph = build_dependency_graph(population)
        assert len(graph.edges) == 1
