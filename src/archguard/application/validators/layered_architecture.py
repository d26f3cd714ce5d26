"""Layered architecture access checker.

Layers are declared in order, each by module path patterns. A class
belongs to the FIRST declared layer whose pattern matches its module
path; overlapping patterns are reported with LayerOverlapWarning at
definition time.

Example:
    rule = (
        layered_architecture()
        .layer("Domain").defined_by("models")
        .layer("App").defined_by("services")
        .where_layer("Domain").may_not_access_layers("App")
    )
    rule.check(population)
"""

from __future__ import annotations

import logging
import warnings
from dataclasses import dataclass, replace
from typing import TYPE_CHECKING

from archguard.application.validators._base import BaseRule
from archguard.domain.exceptions.validation import (
    LayerNotDefinedError,
    LayerOverlapWarning,
    RuleValidationError,
)
from archguard.domain.model.enums import AccessMode, Severity
from archguard.domain.model.layer import AccessRule, Layer
from archguard.domain.model.resolution import Resolved, Unresolved
from archguard.domain.model.violation import Violation
from archguard.domain.predicates.package import module_contains

if TYPE_CHECKING:
    from archguard.domain.model.class_entity import ClassEntity
    from archguard.domain.model.configuration import ArchGuardConfig
    from archguard.domain.model.population import Population
    from archguard.domain.model.resolution import Resolution
    from archguard.domain.ports.rule import ResultCachePort

logger = logging.getLogger(__name__)

RULE_NAME = "layered_architecture"


@dataclass(frozen=True, slots=True)
class LayeredArchitecture(BaseRule):
    """Immutable layered architecture rule.

    Every builder call returns a new instance.

    Attributes:
        layers: Layers in declaration order
        access_rules: Access rules in declaration order
        severity: Severity of produced violations
    """

    layers: tuple[Layer, ...] = ()
    access_rules: tuple[AccessRule, ...] = ()
    severity: Severity = Severity.ERROR

    # Builder

    def layer(self, name: str) -> LayerDefinition:
        """Start defining a layer; finish with defined_by()."""
        if not name:
            raise RuleValidationError(RULE_NAME, "layer name must not be empty")
        if name in self.layer_names:
            raise RuleValidationError(RULE_NAME, f"layer '{name}' is already defined")
        return LayerDefinition(self, name)

    def with_layer(self, layer: Layer) -> LayeredArchitecture:
        """Append a layer, warning about patterns overlapping earlier layers.

        Raises:
            RuleValidationError: If a layer with the same name exists
        """
        if layer.name in self.layer_names:
            raise RuleValidationError(RULE_NAME, f"layer '{layer.name}' is already defined")
        for existing in self.layers:
            overlap = existing.overlaps(layer)
            if overlap is not None:
                warnings.warn(
                    LayerOverlapWarning(
                        f"Layer '{layer.name}' pattern '{overlap[1]}' overlaps layer "
                        f"'{existing.name}' pattern '{overlap[0]}'; "
                        f"'{existing.name}' wins for matching classes"
                    ),
                    stacklevel=3,
                )
        return replace(self, layers=(*self.layers, layer))

    def where_layer(self, name: str) -> LayerAccessRuleBuilder:
        """Start an access rule for a defined layer.

        Raises:
            LayerNotDefinedError: If name is not a defined layer
        """
        self._require_layer(name)
        return LayerAccessRuleBuilder(self, name)

    def with_access_rule(self, rule: AccessRule) -> LayeredArchitecture:
        """Append an access rule.

        Raises:
            LayerNotDefinedError: If source or any target is undefined
        """
        self._require_layer(rule.source)
        for target in rule.targets:
            self._require_layer(target)
        return replace(self, access_rules=(*self.access_rules, rule))

    def _require_layer(self, name: str) -> None:
        if name not in self.layer_names:
            raise LayerNotDefinedError(name, self.layer_names)

    # Queries

    @property
    def layer_names(self) -> tuple[str, ...]:
        """Layer names in declaration order."""
        return tuple(layer.name for layer in self.layers)

    @property
    def description(self) -> str:
        """Layers and access rules, e.g. "Layered architecture [Domain{models}]: ..."."""
        layers = ", ".join(f"{ly.name}{{{', '.join(ly.patterns)}}}" for ly in self.layers)
        rules = "; ".join(rule.describe() for rule in self.access_rules)
        return f"Layered architecture [{layers}]: {rules or 'no access rules'}"

    def layer_of(self, entity: ClassEntity) -> str | None:
        """First declared layer containing entity, or None."""
        for layer in self.layers:
            if layer.contains(entity):
                return layer.name
        return None

    def partition(self, population: Population) -> dict[str, tuple[ClassEntity, ...]]:
        """Layer name -> member classes (first match wins, order preserved)."""
        members: dict[str, list[ClassEntity]] = {layer.name: [] for layer in self.layers}
        for entity in population:
            name = self.layer_of(entity)
            if name is not None:
                members[name].append(entity)
        return {name: tuple(classes) for name, classes in members.items()}

    # Evaluation

    def check(
        self,
        population: Population,
        *,
        cache: ResultCachePort | None = None,
    ) -> tuple[Violation, ...]:
        """Evaluate every access rule against population.

        Dependencies that resolve to no layer are skipped.

        Returns:
            Violations ordered by access rule, then class, then dependency
        """
        members = self.partition(population)
        resolver = _LayerResolver(self.layers, members)
        description = self.description

        violations: list[Violation] = []
        for rule in self.access_rules:
            for entity in members[rule.source]:
                for dep in entity.dependencies:
                    dep_layer = resolver.layer_of(dep)
                    if dep_layer is None or not rule.is_violated_by(dep_layer):
                        continue
                    violations.append(
                        _violation(description, self.severity, rule, entity, dep, dep_layer)
                    )
        return tuple(violations)


@dataclass(frozen=True, slots=True)
class LayerDefinition:
    """Pending layer: name known, patterns not yet given."""

    architecture: LayeredArchitecture
    name: str

    def defined_by(self, *patterns: str) -> LayeredArchitecture:
        """Finish the layer with its module path patterns.

        Raises:
            RuleValidationError: If no pattern or an empty pattern is given
        """
        if not patterns or not all(patterns):
            raise RuleValidationError(
                RULE_NAME, f"layer '{self.name}' needs at least one non-empty pattern"
            )
        return self.architecture.with_layer(Layer(self.name, patterns))


@dataclass(frozen=True, slots=True)
class LayerAccessRuleBuilder:
    """Pending access rule for one source layer."""

    architecture: LayeredArchitecture
    source: str

    def may_only_access_layers(self, *names: str) -> LayeredArchitecture:
        """Source layer may depend only on the named layers."""
        return self._finish(names, AccessMode.MAY_ONLY)

    def may_not_access_layers(self, *names: str) -> LayeredArchitecture:
        """Source layer must not depend on the named layers."""
        return self._finish(names, AccessMode.MAY_NOT)

    def _finish(self, names: tuple[str, ...], mode: AccessMode) -> LayeredArchitecture:
        if not names:
            raise RuleValidationError(
                RULE_NAME, f"access rule for '{self.source}' needs at least one layer"
            )
        return self.architecture.with_access_rule(AccessRule(self.source, names, mode))


class _LayerResolver:
    """Dependency name -> layer for one check() call.

    Exact class name first, then module path containment in either
    direction; both passes scan layers in declaration order.
    """

    def __init__(
        self,
        layers: tuple[Layer, ...],
        members: dict[str, tuple[ClassEntity, ...]],
    ) -> None:
        self._ordered = [(layer.name, entity) for layer in layers for entity in members[layer.name]]
        self._layer_by_id = {entity.node_id: name for name, entity in self._ordered}
        self._memo: dict[str, str | None] = {}

    def resolve(self, dependency: str) -> Resolution:
        for _name, entity in self._ordered:
            if entity.name == dependency:
                return Resolved(entity.node_id, entity)
        for _name, entity in self._ordered:
            module = entity.module_path
            if module and (
                module_contains(module, dependency) or module_contains(dependency, module)
            ):
                return Resolved(entity.node_id, entity)
        return Unresolved(dependency)

    def layer_of(self, dependency: str) -> str | None:
        if dependency in self._memo:
            return self._memo[dependency]
        layer: str | None
        match self.resolve(dependency):
            case Resolved(class_id=class_id):
                layer = self._layer_by_id[class_id]
            case Unresolved():
                logger.debug("Dependency %s is in no layer", dependency)
                layer = None
        self._memo[dependency] = layer
        return layer


def _violation(
    rule_text: str,
    severity: Severity,
    rule: AccessRule,
    entity: ClassEntity,
    dependency: str,
    dep_layer: str,
) -> Violation:
    return Violation(
        rule=rule_text,
        message=(
            f"{rule.describe()}, but '{entity.name}' accesses '{dependency}' "
            f"in layer '{dep_layer}'"
        ),
        file_path=entity.file_path,
        severity=severity,
        location=entity.location,
        subject=entity.name,
        expected=rule.describe(),
        actual=f"accesses '{dependency}' in layer '{dep_layer}'",
    )


def layered_architecture() -> LayeredArchitecture:
    """Start an empty layered architecture."""
    return LayeredArchitecture()


def layered_architecture_from_config(config: ArchGuardConfig) -> LayeredArchitecture:
    """Build from [tool.archguard] layers and access rules.

    Raises:
        LayerNotDefinedError: If an access rule names an undefined layer
    """
    arch = layered_architecture()
    for name, patterns in config.layers.items():
        arch = arch.layer(name).defined_by(*patterns)
    for rule in config.access_rules:
        arch = arch.with_access_rule(rule)
    return arch
