"""Domain model entities."""

from archguard.domain.model.class_entity import ClassEntity
from archguard.domain.model.configuration import ArchGuardConfig, CacheOptions
from archguard.domain.model.decorator import Decorator
from archguard.domain.model.dependency_graph import (
    DependencyGraph,
    GraphEdge,
    GraphFilter,
    GraphNode,
    GraphStats,
)
from archguard.domain.model.enums import (
    AccessMode,
    Combinator,
    CompositeOperator,
    DependencyType,
    EvictionPolicy,
    NodeKind,
    Severity,
    Visibility,
)
from archguard.domain.model.layer import AccessRule, Layer
from archguard.domain.model.location import Location
from archguard.domain.model.member import Method, Property, visibility_of
from archguard.domain.model.population import Population
from archguard.domain.model.resolution import Resolution, Resolved, Unresolved
from archguard.domain.model.violation import Violation

__all__ = [
    "AccessMode",
    "AccessRule",
    "ArchGuardConfig",
    "CacheOptions",
    "ClassEntity",
    "Combinator",
    "CompositeOperator",
    "Decorator",
    "DependencyGraph",
    "DependencyType",
    "EvictionPolicy",
    "GraphEdge",
    "GraphFilter",
    "GraphNode",
    "GraphStats",
    "Layer",
    "Location",
    "Method",
    "NodeKind",
    "Population",
    "Property",
    "Resolution",
    "Resolved",
    "Severity",
    "Unresolved",
    "Violation",
    "Visibility",
    "visibility_of",
]
