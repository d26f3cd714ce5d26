"""Pattern presets: layer access rules plus class conventions.

Each preset is a rule. Its layers are declared by package patterns,
undeclared layers drop out of the access rules, and conventions apply
only to declared packages.

Example:
    rule = (
        ports_and_adapters_architecture()
        .domain("domain")
        .ports("ports")
        .adapters("adapters")
    )
    rule.assert_check(population)
"""

from __future__ import annotations

from abc import abstractmethod
from dataclasses import dataclass, replace
from typing import TYPE_CHECKING, ClassVar

from archguard.application.validators._base import BaseRule
from archguard.application.validators.architectures import preset_architecture
from archguard.domain.model.enums import AccessMode, Severity
from archguard.presentation.api.dsl import classes

if TYPE_CHECKING:
    from archguard.application.validators.layered_architecture import LayeredArchitecture
    from archguard.domain.model.population import Population
    from archguard.domain.model.violation import Violation
    from archguard.domain.ports.rule import ResultCachePort, RuleProtocol
    from archguard.presentation.api.dsl import ArchRule

MAY_NOT = AccessMode.MAY_NOT
MAY_ONLY = AccessMode.MAY_ONLY

SETTER_PREFIX = "set_"


class PatternArchitecture(BaseRule):
    """Preset checking layer access and class conventions together.

    Subclasses are frozen dataclasses with one packages field per layer
    and a `severity` field.
    """

    __slots__ = ()

    name: ClassVar[str]

    @abstractmethod
    def to_layered_architecture(self) -> LayeredArchitecture:
        """Access rules of the declared layers."""

    def conventions(self) -> tuple[ArchRule, ...]:
        """Class rules beyond layer access."""
        return ()

    def rules(self) -> tuple[RuleProtocol, ...]:
        return (self.to_layered_architecture(), *self.conventions())

    @property
    def description(self) -> str:
        parts = [self.to_layered_architecture().description]
        parts.extend(rule.description for rule in self.conventions())
        return f"{self.name} architecture: {'; '.join(parts)}"

    def check(
        self,
        population: Population,
        *,
        cache: ResultCachePort | None = None,
    ) -> tuple[Violation, ...]:
        """Access violations first, then conventions, all with this severity."""
        return tuple(
            replace(violation, severity=self.severity)
            for rule in self.rules()
            for violation in rule.check(population, cache=cache)
        )


@dataclass(frozen=True, slots=True)
class MVCArchitecture(PatternArchitecture):
    """Model-View-Controller.

    Models know neither views nor controllers, views know no
    controllers, controllers use models and views only.
    """

    name: ClassVar[str] = "MVC"

    models_packages: tuple[str, ...] = ()
    views_packages: tuple[str, ...] = ()
    controllers_packages: tuple[str, ...] = ()
    severity: Severity = Severity.ERROR

    def models(self, *packages: str) -> MVCArchitecture:
        return replace(self, models_packages=packages)

    def views(self, *packages: str) -> MVCArchitecture:
        return replace(self, views_packages=packages)

    def controllers(self, *packages: str) -> MVCArchitecture:
        return replace(self, controllers_packages=packages)

    def to_layered_architecture(self) -> LayeredArchitecture:
        return preset_architecture(
            (
                ("Models", self.models_packages),
                ("Views", self.views_packages),
                ("Controllers", self.controllers_packages),
            ),
            (
                ("Models", MAY_NOT, ("Views", "Controllers")),
                ("Views", MAY_NOT, ("Controllers",)),
                ("Controllers", MAY_ONLY, ("Models", "Views")),
            ),
        )


@dataclass(frozen=True, slots=True)
class MVVMArchitecture(PatternArchitecture):
    """Model-View-ViewModel: views bind to view models, view models to models."""

    name: ClassVar[str] = "MVVM"

    models_packages: tuple[str, ...] = ()
    view_models_packages: tuple[str, ...] = ()
    views_packages: tuple[str, ...] = ()
    severity: Severity = Severity.ERROR

    def models(self, *packages: str) -> MVVMArchitecture:
        return replace(self, models_packages=packages)

    def view_models(self, *packages: str) -> MVVMArchitecture:
        return replace(self, view_models_packages=packages)

    def views(self, *packages: str) -> MVVMArchitecture:
        return replace(self, views_packages=packages)

    def to_layered_architecture(self) -> LayeredArchitecture:
        return preset_architecture(
            (
                ("Models", self.models_packages),
                ("ViewModels", self.view_models_packages),
                ("Views", self.views_packages),
            ),
            (
                ("Models", MAY_NOT, ("ViewModels", "Views")),
                ("ViewModels", MAY_ONLY, ("Models",)),
                ("Views", MAY_ONLY, ("ViewModels",)),
            ),
        )


@dataclass(frozen=True, slots=True)
class CQRSArchitecture(PatternArchitecture):
    """Command Query Responsibility Segregation.

    Commands and queries stay apart, as do read and write models;
    handlers tie them together. Command classes return no data and
    read models expose no setters.
    """

    name: ClassVar[str] = "CQRS"

    commands_packages: tuple[str, ...] = ()
    queries_packages: tuple[str, ...] = ()
    handlers_packages: tuple[str, ...] = ()
    domain_packages: tuple[str, ...] = ()
    read_model_packages: tuple[str, ...] = ()
    write_model_packages: tuple[str, ...] = ()
    severity: Severity = Severity.ERROR

    def commands(self, *packages: str) -> CQRSArchitecture:
        return replace(self, commands_packages=packages)

    def queries(self, *packages: str) -> CQRSArchitecture:
        return replace(self, queries_packages=packages)

    def handlers(self, *packages: str) -> CQRSArchitecture:
        return replace(self, handlers_packages=packages)

    def domain(self, *packages: str) -> CQRSArchitecture:
        return replace(self, domain_packages=packages)

    def read_model(self, *packages: str) -> CQRSArchitecture:
        return replace(self, read_model_packages=packages)

    def write_model(self, *packages: str) -> CQRSArchitecture:
        return replace(self, write_model_packages=packages)

    def to_layered_architecture(self) -> LayeredArchitecture:
        return preset_architecture(
            (
                ("Commands", self.commands_packages),
                ("Queries", self.queries_packages),
                ("Handlers", self.handlers_packages),
                ("Domain", self.domain_packages),
                ("ReadModel", self.read_model_packages),
                ("WriteModel", self.write_model_packages),
            ),
            (
                ("Domain", MAY_NOT, ("Commands", "Queries", "Handlers")),
                ("Commands", MAY_NOT, ("Queries",)),
                ("Queries", MAY_NOT, ("Commands",)),
                ("ReadModel", MAY_NOT, ("WriteModel",)),
                ("WriteModel", MAY_NOT, ("ReadModel",)),
                (
                    "Handlers",
                    MAY_ONLY,
                    ("Commands", "Queries", "Domain", "ReadModel", "WriteModel"),
                ),
            ),
        )

    def conventions(self) -> tuple[ArchRule, ...]:
        rules: list[ArchRule] = []
        if self.commands_packages:
            rules.append(
                classes()
                .that()
                .reside_in_any_package(*self.commands_packages)
                .should()
                .not_have_methods_returning_data()
            )
        if self.read_model_packages:
            rules.append(
                classes()
                .that()
                .reside_in_any_package(*self.read_model_packages)
                .should()
                .not_have_methods_starting_with(SETTER_PREFIX)
            )
        return tuple(rules)


@dataclass(frozen=True, slots=True)
class EventDrivenArchitecture(PatternArchitecture):
    """Publishers and subscribers meet only through events and the bus.

    Events are immutable: read-only fields and no setters.
    """

    name: ClassVar[str] = "Event-driven"

    events_packages: tuple[str, ...] = ()
    publishers_packages: tuple[str, ...] = ()
    subscribers_packages: tuple[str, ...] = ()
    event_bus_packages: tuple[str, ...] = ()
    domain_packages: tuple[str, ...] = ()
    severity: Severity = Severity.ERROR

    def events(self, *packages: str) -> EventDrivenArchitecture:
        return replace(self, events_packages=packages)

    def publishers(self, *packages: str) -> EventDrivenArchitecture:
        return replace(self, publishers_packages=packages)

    def subscribers(self, *packages: str) -> EventDrivenArchitecture:
        return replace(self, subscribers_packages=packages)

    def event_bus(self, *packages: str) -> EventDrivenArchitecture:
        return replace(self, event_bus_packages=packages)

    def domain(self, *packages: str) -> EventDrivenArchitecture:
        return replace(self, domain_packages=packages)

    def to_layered_architecture(self) -> LayeredArchitecture:
        return preset_architecture(
            (
                ("Events", self.events_packages),
                ("Publishers", self.publishers_packages),
                ("Subscribers", self.subscribers_packages),
                ("EventBus", self.event_bus_packages),
                ("Domain", self.domain_packages),
            ),
            (
                ("Events", MAY_NOT, ("Publishers", "Subscribers", "EventBus")),
                ("Publishers", MAY_NOT, ("Subscribers",)),
                ("Subscribers", MAY_NOT, ("Publishers",)),
                ("Publishers", MAY_ONLY, ("Events", "EventBus", "Domain")),
                ("Subscribers", MAY_ONLY, ("Events", "Domain")),
                ("EventBus", MAY_NOT, ("Publishers", "Subscribers")),
            ),
        )

    def conventions(self) -> tuple[ArchRule, ...]:
        if not self.events_packages:
            return ()
        events = classes().that().reside_in_any_package(*self.events_packages).should()
        return (
            events.not_have_methods_starting_with(SETTER_PREFIX),
            events.have_only_readonly_fields(),
        )


@dataclass(frozen=True, slots=True)
class PortsAndAdaptersArchitecture(PatternArchitecture):
    """Hexagonal architecture with explicit ports.

    Ports are interfaces or abstract classes; adapters implement them
    and nothing inside the hexagon knows an adapter.
    """

    name: ClassVar[str] = "Ports and adapters"

    domain_packages: tuple[str, ...] = ()
    ports_packages: tuple[str, ...] = ()
    application_packages: tuple[str, ...] = ()
    adapters_packages: tuple[str, ...] = ()
    severity: Severity = Severity.ERROR

    def domain(self, *packages: str) -> PortsAndAdaptersArchitecture:
        return replace(self, domain_packages=packages)

    def ports(self, *packages: str) -> PortsAndAdaptersArchitecture:
        return replace(self, ports_packages=packages)

    def application(self, *packages: str) -> PortsAndAdaptersArchitecture:
        return replace(self, application_packages=packages)

    def adapters(self, *packages: str) -> PortsAndAdaptersArchitecture:
        return replace(self, adapters_packages=packages)

    def to_layered_architecture(self) -> LayeredArchitecture:
        return preset_architecture(
            (
                ("Domain", self.domain_packages),
                ("Ports", self.ports_packages),
                ("Application", self.application_packages),
                ("Adapters", self.adapters_packages),
            ),
            (
                ("Domain", MAY_NOT, ("Adapters",)),
                ("Ports", MAY_NOT, ("Adapters",)),
                ("Application", MAY_ONLY, ("Domain", "Ports")),
                ("Adapters", MAY_ONLY, ("Ports", "Domain")),
            ),
        )

    def conventions(self) -> tuple[ArchRule, ...]:
        if not self.ports_packages:
            return ()
        return (
            classes()
            .that()
            .reside_in_any_package(*self.ports_packages)
            .and_()
            .not_()
            .are_interfaces()
            .should()
            .be_abstract(),
        )


def mvc_architecture() -> MVCArchitecture:
    return MVCArchitecture()


def mvvm_architecture() -> MVVMArchitecture:
    return MVVMArchitecture()


def cqrs_architecture() -> CQRSArchitecture:
    return CQRSArchitecture()


def event_driven_architecture() -> EventDrivenArchitecture:
    return EventDrivenArchitecture()


def ports_and_adapters_architecture() -> PortsAndAdaptersArchitecture:
    return PortsAndAdaptersArchitecture()
