"""archguard domain layer.

Pure domain logic with no external dependencies.
"""

from archguard.domain.exceptions import (
    ArchGuardError,
    ArchitectureViolationError,
    ConfigurationError,
    LayerNotDefinedError,
    LayerOverlapWarning,
    ParsingError,
    RuleValidationError,
)
from archguard.domain.model import (
    AccessMode,
    AccessRule,
    ClassEntity,
    DependencyGraph,
    DependencyType,
    Layer,
    NodeKind,
    Population,
    Severity,
    Violation,
)

__all__ = [
    "AccessMode",
    "AccessRule",
    "ArchGuardError",
    "ArchitectureViolationError",
    "ClassEntity",
    "ConfigurationError",
    "DependencyGraph",
    "DependencyType",
    "Layer",
    "LayerNotDefinedError",
    "LayerOverlapWarning",
    "NodeKind",
    "ParsingError",
    "Population",
    "RuleValidationError",
    "Severity",
    "Violation",
]
