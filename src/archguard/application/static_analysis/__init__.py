"""Static analysis over populations.

Exports:
    - DependencyResolver: Raw dependency name -> Resolved | Unresolved
    - DependencyGraphBuilder: Builds DependencyGraph from Population
"""

from archguard.application.static_analysis.graph_builder import (
    DependencyGraphBuilder,
    build_dependency_graph,
)
from archguard.application.static_analysis.resolver import DependencyResolver

__all__ = [
    "DependencyGraphBuilder",
    "DependencyResolver",
    "build_dependency_graph",
]
