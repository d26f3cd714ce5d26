"""Rules beyond the fluent DSL: layers, cycles, presets, composition."""

from archguard.application.validators._base import BaseRule
from archguard.application.validators.architectures import (
    CleanArchitecture,
    DDDArchitecture,
    OnionArchitecture,
    clean_architecture,
    ddd_architecture,
    onion_architecture,
    preset_architecture,
)
from archguard.application.validators.composite import (
    CompositeRule,
    all_of,
    any_of,
    not_,
    xor,
)
from archguard.application.validators.cycles import CycleRule, cycle_violations, no_cycles
from archguard.application.validators.layered_architecture import (
    LayeredArchitecture,
    layered_architecture,
    layered_architecture_from_config,
)

__all__ = [
    "BaseRule",
    "CleanArchitecture",
    "CompositeRule",
    "CycleRule",
    "DDDArchitecture",
    "LayeredArchitecture",
    "OnionArchitecture",
    "all_of",
    "any_of",
    "clean_architecture",
    "cycle_violations",
    "ddd_architecture",
    "layered_architecture",
    "layered_architecture_from_config",
    "no_cycles",
    "not_",
    "onion_architecture",
    "preset_architecture",
    "xor",
]
