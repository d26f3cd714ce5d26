"""Domain exceptions."""

from archguard.domain.exceptions.base import ArchGuardError
from archguard.domain.exceptions.configuration import ConfigurationError
from archguard.domain.exceptions.parsing import ParsingError
from archguard.domain.exceptions.validation import (
    LayerNotDefinedError,
    LayerOverlapWarning,
    RuleValidationError,
)
from archguard.domain.exceptions.violation import ArchitectureViolationError

__all__ = [
    "ArchGuardError",
    "ArchitectureViolationError",
    "ConfigurationError",
    "LayerNotDefinedError",
    "LayerOverlapWarning",
    "ParsingError",
    "RuleValidationError",
]
