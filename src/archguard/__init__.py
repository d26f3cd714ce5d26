"""archguard - architecture rules for Python codebases, checked in pytest."""

__version__ = "0.1.0"

from archguard.application.reporters.console import ConsoleConfig, ConsoleReporter
from archguard.application.services import EvaluationResult, PopulationLoader, RuleEngine
from archguard.application.validators import (
    CompositeRule,
    CycleRule,
    LayeredArchitecture,
    all_of,
    any_of,
    clean_architecture,
    ddd_architecture,
    layered_architecture,
    layered_architecture_from_config,
    no_cycles,
    not_,
    onion_architecture,
    xor,
)
from archguard.domain.exceptions import (
    ArchGuardError,
    ArchitectureViolationError,
    ConfigurationError,
    LayerNotDefinedError,
    LayerOverlapWarning,
    ParsingError,
    RuleValidationError,
)
from archguard.domain.model import ClassEntity, DependencyGraph, Population, Severity, Violation
from archguard.infrastructure.cache import CacheManager, get_global_cache, reset_global_cache
from archguard.infrastructure.config import load_config
from archguard.presentation.api import (
    ArchRule,
    classes,
    cqrs_architecture,
    event_driven_architecture,
    mvc_architecture,
    mvvm_architecture,
    no_classes,
    ports_and_adapters_architecture,
    templates,
)

__all__ = [
    "ArchGuardError",
    "ArchRule",
    "ArchitectureViolationError",
    "CacheManager",
    "ClassEntity",
    "CompositeRule",
    "ConfigurationError",
    "ConsoleConfig",
    "ConsoleReporter",
    "CycleRule",
    "DependencyGraph",
    "EvaluationResult",
    "LayerNotDefinedError",
    "LayerOverlapWarning",
    "LayeredArchitecture",
    "ParsingError",
    "Population",
    "RuleEngine",
    "PopulationLoader",
    "RuleValidationError",
    "Severity",
    "Violation",
    "__version__",
    "all_of",
    "any_of",
    "classes",
    "clean_architecture",
    "cqrs_architecture",
    "ddd_architecture",
    "event_driven_architecture",
    "get_global_cache",
    "layered_architecture",
    "layered_architecture_from_config",
    "load_config",
    "mvc_architecture",
    "mvvm_architecture",
    "no_classes",
    "no_cycles",
    "not_",
    "onion_architecture",
    "ports_and_adapters_architecture",
    "reset_global_cache",
    "templates",
    "xor",
]
