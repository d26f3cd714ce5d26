"""Architecture presets converting to LayeredArchitecture.

"may only" rules list the source layer itself: dependencies inside
one layer are always allowed by the presets. Rules naming layers that
were not declared are narrowed to the declared ones.
"""

from __future__ import annotations

from dataclasses import dataclass, replace

from archguard.application.validators.layered_architecture import (
    LayeredArchitecture,
    layered_architecture,
)
from archguard.domain.exceptions.validation import RuleValidationError
from archguard.domain.model.enums import AccessMode

PresetRule = tuple[str, AccessMode, tuple[str, ...]]


@dataclass(frozen=True, slots=True)
class OnionArchitecture:
    """Onion (hexagonal) architecture.

    Domain depends on nothing outer, Application only on Domain,
    adapters never on each other.

    Attributes:
        domain_packages: Domain model patterns
        application_packages: Application service patterns
        adapters: (name, patterns) pairs, declaration order
    """

    domain_packages: tuple[str, ...] = ()
    application_packages: tuple[str, ...] = ()
    adapters: tuple[tuple[str, tuple[str, ...]], ...] = ()

    def domain_models(self, *packages: str) -> OnionArchitecture:
        """Set domain layer patterns."""
        return replace(self, domain_packages=packages)

    def application_services(self, *packages: str) -> OnionArchitecture:
        """Set application layer patterns."""
        return replace(self, application_packages=packages)

    def adapter(self, name: str) -> AdapterDefinition:
        """Start an adapter layer; finish with defined_by()."""
        if not name:
            raise RuleValidationError("onion_architecture", "adapter name must not be empty")
        return AdapterDefinition(self, name)

    def to_layered_architecture(self) -> LayeredArchitecture:
        """Equivalent layered architecture with onion access rules."""
        arch = layered_architecture()
        if self.domain_packages:
            arch = arch.layer("Domain").defined_by(*self.domain_packages)
        if self.application_packages:
            arch = arch.layer("Application").defined_by(*self.application_packages)
        for name, packages in self.adapters:
            arch = arch.layer(name).defined_by(*packages)

        adapter_names = tuple(name for name, _ in self.adapters)
        if self.domain_packages:
            outer = adapter_names
            if self.application_packages:
                outer = ("Application", *outer)
            if outer:
                arch = arch.where_layer("Domain").may_not_access_layers(*outer)
        if self.application_packages and self.domain_packages:
            arch = arch.where_layer("Application").may_only_access_layers("Application", "Domain")
        for name in adapter_names:
            others = tuple(n for n in adapter_names if n != name)
            if others:
                arch = arch.where_layer(name).may_not_access_layers(*others)
        return arch


@dataclass(frozen=True, slots=True)
class AdapterDefinition:
    """Pending onion adapter."""

    architecture: OnionArchitecture
    name: str

    def defined_by(self, *packages: str) -> OnionArchitecture:
        """Finish the adapter with its patterns."""
        if not packages:
            raise RuleValidationError(
                "onion_architecture", f"adapter '{self.name}' needs at least one pattern"
            )
        return replace(
            self.architecture,
            adapters=(*self.architecture.adapters, (self.name, packages)),
        )


@dataclass(frozen=True, slots=True)
class CleanArchitecture:
    """Clean architecture preset.

    Layers, innermost to outermost: Entities, UseCases, then the
    Controllers, Presenters and Gateways adapters.

    Attributes:
        entities_packages: Enterprise business rules
        use_cases_packages: Application business rules
        controllers_packages: Input adapters
        presenters_packages: Output adapters
        gateways_packages: Data access
    """

    entities_packages: tuple[str, ...] = ()
    use_cases_packages: tuple[str, ...] = ()
    controllers_packages: tuple[str, ...] = ()
    presenters_packages: tuple[str, ...] = ()
    gateways_packages: tuple[str, ...] = ()

    def entities(self, *packages: str) -> CleanArchitecture:
        return replace(self, entities_packages=packages)

    def use_cases(self, *packages: str) -> CleanArchitecture:
        return replace(self, use_cases_packages=packages)

    def controllers(self, *packages: str) -> CleanArchitecture:
        return replace(self, controllers_packages=packages)

    def presenters(self, *packages: str) -> CleanArchitecture:
        return replace(self, presenters_packages=packages)

    def gateways(self, *packages: str) -> CleanArchitecture:
        return replace(self, gateways_packages=packages)

    def to_layered_architecture(self) -> LayeredArchitecture:
        """Equivalent layered architecture with clean access rules."""
        declared = tuple(
            (name, packages)
            for name, packages in (
                ("Entities", self.entities_packages),
                ("UseCases", self.use_cases_packages),
                ("Controllers", self.controllers_packages),
                ("Presenters", self.presenters_packages),
                ("Gateways", self.gateways_packages),
            )
            if packages
        )
        arch = layered_architecture()
        for name, packages in declared:
            arch = arch.layer(name).defined_by(*packages)

        names = arch.layer_names
        if "Entities" in names:
            outer = tuple(n for n in names if n != "Entities")
            if outer:
                arch = arch.where_layer("Entities").may_not_access_layers(*outer)
        if "UseCases" in names and "Entities" in names:
            arch = arch.where_layer("UseCases").may_only_access_layers("UseCases", "Entities")
        inner = tuple(n for n in ("UseCases", "Entities") if n in names)
        for adapter in ("Controllers", "Presenters", "Gateways"):
            if adapter in names and inner:
                arch = arch.where_layer(adapter).may_only_access_layers(adapter, *inner)
        return arch


def onion_architecture() -> OnionArchitecture:
    """Start an onion architecture preset."""
    return OnionArchitecture()


def clean_architecture() -> CleanArchitecture:
    """Start a clean architecture preset."""
    return CleanArchitecture()


@dataclass(frozen=True, slots=True)
class DDDArchitecture:
    """Domain-driven design building blocks as layers.

    Value objects know no entities or aggregates, entities know no
    aggregates, repositories never call application services, and
    application services only use the domain building blocks.

    Attributes:
        aggregates_packages: Aggregate roots
        entities_packages: Entities
        value_objects_packages: Value objects
        domain_services_packages: Domain services
        repositories_packages: Repositories
        factories_packages: Factories
        application_services_packages: Application services
    """

    aggregates_packages: tuple[str, ...] = ()
    entities_packages: tuple[str, ...] = ()
    value_objects_packages: tuple[str, ...] = ()
    domain_services_packages: tuple[str, ...] = ()
    repositories_packages: tuple[str, ...] = ()
    factories_packages: tuple[str, ...] = ()
    application_services_packages: tuple[str, ...] = ()

    def aggregates(self, *packages: str) -> DDDArchitecture:
        return replace(self, aggregates_packages=packages)

    def entities(self, *packages: str) -> DDDArchitecture:
        return replace(self, entities_packages=packages)

    def value_objects(self, *packages: str) -> DDDArchitecture:
        return replace(self, value_objects_packages=packages)

    def domain_services(self, *packages: str) -> DDDArchitecture:
        return replace(self, domain_services_packages=packages)

    def repositories(self, *packages: str) -> DDDArchitecture:
        return replace(self, repositories_packages=packages)

    def factories(self, *packages: str) -> DDDArchitecture:
        return replace(self, factories_packages=packages)

    def application_services(self, *packages: str) -> DDDArchitecture:
        return replace(self, application_services_packages=packages)

    def to_layered_architecture(self) -> LayeredArchitecture:
        """Equivalent layered architecture with DDD access rules."""
        domain = (
            "Aggregates",
            "Entities",
            "ValueObjects",
            "DomainServices",
            "Repositories",
            "Factories",
        )
        return preset_architecture(
            (
                ("Aggregates", self.aggregates_packages),
                ("Entities", self.entities_packages),
                ("ValueObjects", self.value_objects_packages),
                ("DomainServices", self.domain_services_packages),
                ("Repositories", self.repositories_packages),
                ("Factories", self.factories_packages),
                ("ApplicationServices", self.application_services_packages),
            ),
            (
                ("ValueObjects", AccessMode.MAY_NOT, ("Entities", "Aggregates")),
                ("Entities", AccessMode.MAY_NOT, ("Aggregates",)),
                ("Repositories", AccessMode.MAY_NOT, ("ApplicationServices",)),
                ("ApplicationServices", AccessMode.MAY_ONLY, domain),
            ),
        )


def ddd_architecture() -> DDDArchitecture:
    """Start a domain-driven design preset."""
    return DDDArchitecture()


def preset_architecture(
    declared: tuple[tuple[str, tuple[str, ...]], ...],
    rules: tuple[PresetRule, ...],
) -> LayeredArchitecture:
    """Layered architecture from a fixed rule table.

    Layers with no packages are skipped. Each rule keeps only declared
    targets; "may only" rules also allow their own layer. A rule whose
    source is undeclared, or that is left without another layer to
    name, is dropped.

    Args:
        declared: (layer name, packages) in declaration order
        rules: (source, mode, targets) in declaration order

    Returns:
        LayeredArchitecture with the surviving rules
    """
    arch = layered_architecture()
    for name, packages in declared:
        if packages:
            arch = arch.layer(name).defined_by(*packages)

    names = arch.layer_names
    for source, mode, targets in rules:
        kept = tuple(t for t in targets if t in names and t != source)
        if source not in names or not kept:
            continue
        if mode is AccessMode.MAY_ONLY:
            arch = arch.where_layer(source).may_only_access_layers(source, *kept)
        else:
            arch = arch.where_layer(source).may_not_access_layers(*kept)
    return arch
