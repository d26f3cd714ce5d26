"""Public fluent API."""

from archguard.presentation.api import templates
from archguard.presentation.api.dsl import (
    ArchRule,
    Classes,
    ClassesShould,
    ClassesThat,
    ClassSelector,
    DependencyTargetBuilder,
    classes,
    no_classes,
)
from archguard.presentation.api.presets import (
    CQRSArchitecture,
    EventDrivenArchitecture,
    MVCArchitecture,
    MVVMArchitecture,
    PatternArchitecture,
    PortsAndAdaptersArchitecture,
    cqrs_architecture,
    event_driven_architecture,
    mvc_architecture,
    mvvm_architecture,
    ports_and_adapters_architecture,
)

__all__ = [
    "ArchRule",
    "CQRSArchitecture",
    "ClassSelector",
    "Classes",
    "ClassesShould",
    "ClassesThat",
    "DependencyTargetBuilder",
    "EventDrivenArchitecture",
    "MVCArchitecture",
    "MVVMArchitecture",
    "PatternArchitecture",
    "PortsAndAdaptersArchitecture",
    "classes",
    "cqrs_architecture",
    "event_driven_architecture",
    "mvc_architecture",
    "mvvm_architecture",
    "no_classes",
    "ports_and_adapters_architecture",
    "templates",
]
