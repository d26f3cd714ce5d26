"""Ready-made rules for common conventions.

Every template takes the package it applies to, with the usual name
as default, and returns a plain ArchRule.

Example:
    for rule in all_naming_convention_rules():
        rule.as_warning().check(population)
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from archguard.presentation.api.dsl import classes

if TYPE_CHECKING:
    from archguard.presentation.api.dsl import ArchRule


def _named_with_suffix(package: str, suffix: str) -> ArchRule:
    return classes().that().reside_in_package(package).should().have_simple_name_ending_with(suffix)


def _named_matching(package: str, pattern: str) -> ArchRule:
    return classes().that().reside_in_package(package).should().have_simple_name_matching(pattern)


def _must_not_depend(source: str, target: str) -> ArchRule:
    return (
        classes()
        .that()
        .reside_in_package(source)
        .should()
        .not_depend_on_classes_that()
        .reside_in_package(target)
    )


# Naming conventions


def service_naming(package: str = "services") -> ArchRule:
    return _named_with_suffix(package, "Service")


def controller_naming(package: str = "controllers") -> ArchRule:
    return _named_with_suffix(package, "Controller")


def repository_naming(package: str = "repositories") -> ArchRule:
    return _named_with_suffix(package, "Repository")


def dto_naming(package: str = "dto") -> ArchRule:
    """Names end with 'Dto' or 'DTO'."""
    return _named_matching(package, r"(Dto|DTO)$")


def validator_naming(package: str = "validators") -> ArchRule:
    return _named_with_suffix(package, "Validator")


def middleware_naming(package: str = "middleware") -> ArchRule:
    return _named_with_suffix(package, "Middleware")


def guard_naming(package: str = "guards") -> ArchRule:
    return _named_with_suffix(package, "Guard")


def handler_naming(package: str = "handlers") -> ArchRule:
    return _named_with_suffix(package, "Handler")


def factory_naming(package: str = "factories") -> ArchRule:
    return _named_with_suffix(package, "Factory")


def entity_naming(package: str = "entities") -> ArchRule:
    return _named_with_suffix(package, "Entity")


def value_object_naming(package: str = "value_objects") -> ArchRule:
    """Names end with 'VO' or 'ValueObject'."""
    return _named_matching(package, r"(VO|ValueObject)$")


def exception_naming(package: str = "exceptions") -> ArchRule:
    """Names end with 'Exception' or 'Error'."""
    return _named_matching(package, r"(Exception|Error)$")


def abstract_class_naming() -> ArchRule:
    """Abstract classes start with 'Abstract' or 'Base'."""
    return classes().that().are_abstract().should().have_simple_name_matching(r"^(Abstract|Base)")


def unit_test_naming(package: str = "tests") -> ArchRule:
    """pytest collects only classes starting with 'Test'."""
    return (
        classes()
        .that()
        .reside_in_package(package)
        .should()
        .have_simple_name_starting_with("Test")
    )


def utility_naming(package: str = "utils") -> ArchRule:
    """Names end with 'Utils' or 'Helper'."""
    return _named_matching(package, r"(Utils|Helper)$")


def builder_naming(package: str = "builders") -> ArchRule:
    return _named_with_suffix(package, "Builder")


def adapter_naming(package: str = "adapters") -> ArchRule:
    return _named_with_suffix(package, "Adapter")


def provider_naming(package: str = "providers") -> ArchRule:
    return _named_with_suffix(package, "Provider")


# Dependencies


def controllers_not_depend_on_repositories(
    controllers: str = "controllers", repositories: str = "repositories"
) -> ArchRule:
    return _must_not_depend(controllers, repositories)


def repositories_not_depend_on_services(
    repositories: str = "repositories", services: str = "services"
) -> ArchRule:
    return _must_not_depend(repositories, services)


def services_not_depend_on_controllers(
    services: str = "services", controllers: str = "controllers"
) -> ArchRule:
    return _must_not_depend(services, controllers)


def domain_not_depend_on_infrastructure(
    domain: str = "domain", infrastructure: str = "infrastructure"
) -> ArchRule:
    return _must_not_depend(domain, infrastructure)


def domain_not_depend_on_application(
    domain: str = "domain", application: str = "application"
) -> ArchRule:
    return _must_not_depend(domain, application)


# Class patterns


def value_objects_immutable(package: str = "value_objects") -> ArchRule:
    return classes().that().reside_in_package(package).should().have_only_readonly_fields()


def abstract_named_classes_abstract() -> ArchRule:
    """Classes named Abstract*/Base* must really be abstract."""
    return (
        classes()
        .that()
        .have_simple_name_matching(r"^(Abstract|Base)[A-Z]")
        .should()
        .be_abstract()
    )


# Aggregates


def all_naming_convention_rules() -> tuple[ArchRule, ...]:
    """Every naming template with its default package."""
    return (
        service_naming(),
        controller_naming(),
        repository_naming(),
        dto_naming(),
        validator_naming(),
        middleware_naming(),
        guard_naming(),
        handler_naming(),
        factory_naming(),
        entity_naming(),
        value_object_naming(),
        exception_naming(),
        abstract_class_naming(),
        unit_test_naming(),
        utility_naming(),
        builder_naming(),
        adapter_naming(),
        provider_naming(),
    )


def all_dependency_rules() -> tuple[ArchRule, ...]:
    return (
        controllers_not_depend_on_repositories(),
        repositories_not_depend_on_services(),
        services_not_depend_on_controllers(),
        domain_not_depend_on_infrastructure(),
        domain_not_depend_on_application(),
    )


def all_pattern_rules() -> tuple[ArchRule, ...]:
    return (value_objects_immutable(), abstract_named_classes_abstract())


def all_template_rules() -> tuple[ArchRule, ...]:
    return (*all_naming_convention_rules(), *all_dependency_rules(), *all_pattern_rules())
