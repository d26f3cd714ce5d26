"""Dependency graph over analyzed classes.

Nodes are keyed by the synthetic id "kind:module:name". Edges are typed
(import, inheritance, implementation, usage). Adjacency and reverse
adjacency are derived indices owned by the graph.

Traversals are iterative: deep chains do not hit the recursion limit.
Cycle search on very large, densely cyclic graphs is unbounded in time;
no timeout is applied.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING

from archguard.domain.model.enums import DependencyType, NodeKind

if TYPE_CHECKING:
    from collections.abc import Iterator

    from archguard.domain.model.location import Location


@dataclass(frozen=True, slots=True)
class GraphNode:
    """Graph node.

    Attributes:
        id: Synthetic id (kind:module:name)
        name: Simple name
        kind: CLASS/INTERFACE/FUNCTION/MODULE
        file_path: Source file
        module_path: Module path
        metadata: Free-form extra data
    """

    id: str
    name: str
    kind: NodeKind
    file_path: str = ""
    module_path: str = ""
    metadata: Mapping[str, object] = field(default_factory=lambda: MappingProxyType({}))

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if not self.id:
            raise ValueError("node id must not be empty")
        if not self.name:
            raise ValueError("node name must not be empty")


@dataclass(frozen=True, slots=True)
class GraphEdge:
    """Directed typed edge source -> target.

    Attributes:
        source: Source node id
        target: Target node id
        type: Dependency type
        location: Where the dependency occurs, if known
    """

    source: str
    target: str
    type: DependencyType
    location: Location | None = None

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if not self.source:
            raise ValueError("edge source must not be empty")
        if not self.target:
            raise ValueError("edge target must not be empty")


@dataclass(frozen=True, slots=True)
class GraphFilter:
    """Subgraph selection criteria. None = no constraint.

    Module filters use substring matching on the node's module path.

    Attributes:
        include_kinds: Keep only these node kinds
        exclude_kinds: Drop these node kinds
        include_modules: Keep nodes whose module contains any of these
        exclude_modules: Drop nodes whose module contains any of these
        dependency_types: Keep only edges of these types
    """

    include_kinds: frozenset[NodeKind] | None = None
    exclude_kinds: frozenset[NodeKind] | None = None
    include_modules: tuple[str, ...] | None = None
    exclude_modules: tuple[str, ...] | None = None
    dependency_types: frozenset[DependencyType] | None = None

    def keeps_node(self, node: GraphNode) -> bool:
        """True if node survives the filter."""
        if self.include_kinds is not None and node.kind not in self.include_kinds:
            return False
        if self.exclude_kinds is not None and node.kind in self.exclude_kinds:
            return False
        if self.include_modules is not None and not any(
            m in node.module_path for m in self.include_modules
        ):
            return False
        if self.exclude_modules is not None and any(
            m in node.module_path for m in self.exclude_modules
        ):
            return False
        return True

    def keeps_edge_type(self, edge: GraphEdge) -> bool:
        """True if edge type survives the filter."""
        return self.dependency_types is None or edge.type in self.dependency_types


@dataclass(frozen=True, slots=True)
class GraphStats:
    """Graph statistics.

    Attributes:
        node_count: Number of nodes
        edge_count: Number of edges (duplicates counted)
        avg_dependencies: Mean distinct out-degree (0.0 on empty graph)
        max_dependencies: Max distinct out-degree (0 on empty graph)
        has_cycles: Whether any cycle exists
    """

    node_count: int
    edge_count: int
    avg_dependencies: float
    max_dependencies: int
    has_cycles: bool


class DependencyGraph:
    """Mutable typed dependency graph.

    Built fully, then queried. Building and querying are never
    interleaved on one instance.
    """

    __slots__ = ("_edges", "_forward", "_nodes", "_reverse")

    def __init__(self) -> None:
        self._nodes: dict[str, GraphNode] = {}
        self._edges: list[GraphEdge] = []
        # dict used as insertion-ordered set
        self._forward: dict[str, dict[str, None]] = {}
        self._reverse: dict[str, dict[str, None]] = {}

    def add_node(self, node: GraphNode) -> None:
        """Add node; re-adding an id replaces its data and keeps its edges."""
        self._nodes[node.id] = node
        self._forward.setdefault(node.id, {})
        self._reverse.setdefault(node.id, {})

    def add_edge(self, edge: GraphEdge) -> None:
        """Add edge between existing nodes.

        Duplicate edges accumulate in edges; adjacency stays deduplicated.

        Raises:
            KeyError: If an endpoint is not a node of this graph
        """
        if edge.source not in self._nodes:
            raise KeyError(f"edge source '{edge.source}' is not a node")
        if edge.target not in self._nodes:
            raise KeyError(f"edge target '{edge.target}' is not a node")
        self._edges.append(edge)
        self._forward[edge.source][edge.target] = None
        self._reverse[edge.target][edge.source] = None

    def has_node(self, node_id: str) -> bool:
        """True if node exists."""
        return node_id in self._nodes

    def get_node(self, node_id: str) -> GraphNode | None:
        """Node by id, or None."""
        return self._nodes.get(node_id)

    @property
    def nodes(self) -> tuple[GraphNode, ...]:
        """All nodes in insertion order."""
        return tuple(self._nodes.values())

    @property
    def edges(self) -> tuple[GraphEdge, ...]:
        """All edges in insertion order (duplicates kept)."""
        return tuple(self._edges)

    def get_dependencies(self, node_id: str) -> tuple[str, ...]:
        """Distinct targets of node_id (empty for unknown ids)."""
        return tuple(self._forward.get(node_id, ()))

    def get_dependents(self, node_id: str) -> tuple[str, ...]:
        """Distinct sources pointing at node_id (empty for unknown ids)."""
        return tuple(self._reverse.get(node_id, ()))

    def get_edges_from(self, node_id: str) -> tuple[GraphEdge, ...]:
        """Edges leaving node_id."""
        return tuple(e for e in self._edges if e.source == node_id)

    def get_edges_to(self, node_id: str) -> tuple[GraphEdge, ...]:
        """Edges entering node_id."""
        return tuple(e for e in self._edges if e.target == node_id)

    def __len__(self) -> int:
        return len(self._nodes)

    def __contains__(self, node_id: object) -> bool:
        return node_id in self._nodes

    def has_cycles(self) -> bool:
        """True on the first back edge found by DFS."""
        visited: set[str] = set()
        for start in self._nodes:
            if start in visited:
                continue
            for _cycle in self._walk(start, visited):
                return True
        return False

    def find_cycles(self) -> tuple[tuple[str, ...], ...]:
        """All distinct elementary cycles reachable by DFS back edges.

        Each cycle is the recursion-stack suffix from the repeated node,
        closed by repeating that node (A, B, C, A). Rotations of one
        cycle collapse to the first one discovered.

        Returns:
            Cycles in discovery order
        """
        visited: set[str] = set()
        seen_keys: set[tuple[str, ...]] = set()
        cycles: list[tuple[str, ...]] = []
        for start in self._nodes:
            if start in visited:
                continue
            for cycle in self._walk(start, visited):
                key = tuple(sorted(cycle[:-1]))
                if key in seen_keys:
                    continue
                seen_keys.add(key)
                cycles.append(cycle)
        return tuple(cycles)

    def _walk(self, start: str, visited: set[str]) -> Iterator[tuple[str, ...]]:
        """Iterative DFS from start, yielding one cycle per back edge.

        Marks nodes in the shared visited set.
        """
        stack: list[str] = [start]
        on_stack: dict[str, int] = {start: 0}
        iterators: list[Iterator[str]] = [iter(self._forward[start])]
        visited.add(start)

        while iterators:
            advanced = False
            for neighbor in iterators[-1]:
                if neighbor in on_stack:
                    yield (*stack[on_stack[neighbor] :], neighbor)
                    continue
                if neighbor in visited:
                    continue
                visited.add(neighbor)
                on_stack[neighbor] = len(stack)
                stack.append(neighbor)
                iterators.append(iter(self._forward[neighbor]))
                advanced = True
                break
            if not advanced:
                iterators.pop()
                del on_stack[stack.pop()]

    def filter(self, criteria: GraphFilter) -> DependencyGraph:
        """Independent subgraph.

        Nodes are filtered first, then edges are kept only when both
        endpoints survived, so the result has no dangling edges.
        """
        result = DependencyGraph()
        for node in self._nodes.values():
            if criteria.keeps_node(node):
                result.add_node(node)
        for edge in self._edges:
            if edge.source in result and edge.target in result and criteria.keeps_edge_type(edge):
                result.add_edge(edge)
        return result

    def get_stats(self) -> GraphStats:
        """Node/edge counts and distinct out-degree statistics."""
        degrees = [len(targets) for targets in self._forward.values()]
        if not degrees:
            return GraphStats(
                node_count=0,
                edge_count=0,
                avg_dependencies=0.0,
                max_dependencies=0,
                has_cycles=False,
            )
        return GraphStats(
            node_count=len(self._nodes),
            edge_count=len(self._edges),
            avg_dependencies=sum(degrees) / len(degrees),
            max_dependencies=max(degrees),
            has_cycles=self.has_cycles(),
        )
