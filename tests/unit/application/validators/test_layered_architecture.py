"""Tests for validators/layered_architecture.py."""

import warnings
from types import MappingProxyType

import pytest

from archguard.application.validators.layered_architecture import (
    LayeredArchitecture,
    layered_architecture,
    layered_architecture_from_config,
)
from archguard.domain.exceptions.validation import (
    LayerNotDefinedError,
    LayerOverlapWarning,
    RuleValidationError,
)
from archguard.domain.model.configuration import ArchGuardConfig
from archguard.domain.model.enums import AccessMode, Severity
from archguard.domain.model.layer import AccessRule
from archguard.domain.model.population import Population
from tests.factories import make_class, make_population


def domain_app() -> LayeredArchitecture:
    return (
        layered_architecture()
        .layer("Domain")
        .defined_by("models")
        .layer("App")
        .defined_by("services")
        .where_layer("Domain")
        .may_not_access_layers("App")
    )


class TestBuilder:
    """Tests for immutable builder and construction errors."""

    def test_builder_is_immutable(self) -> None:
        empty = layered_architecture()
        with_layer = empty.layer("Domain").defined_by("models")
        assert empty.layers == ()
        assert with_layer.layer_names == ("Domain",)

    def test_undefined_source_raises(self) -> None:
        with pytest.raises(LayerNotDefinedError, match="layer 'App' is not defined"):
            layered_architecture().layer("Domain").defined_by("models").where_layer("App")

    def test_undefined_target_raises(self) -> None:
        arch = layered_architecture().layer("Domain").defined_by("models")
        with pytest.raises(LayerNotDefinedError, match="layer 'Infra'"):
            arch.where_layer("Domain").may_not_access_layers("Infra")

    def test_duplicate_layer_raises(self) -> None:
        arch = layered_architecture().layer("Domain").defined_by("models")
        with pytest.raises(RuleValidationError, match="already defined"):
            arch.layer("Domain")

    def test_empty_patterns_raise(self) -> None:
        with pytest.raises(RuleValidationError, match="at least one non-empty pattern"):
            layered_architecture().layer("Domain").defined_by()

    def test_access_rule_needs_targets(self) -> None:
        arch = layered_architecture().layer("Domain").defined_by("models")
        with pytest.raises(RuleValidationError, match="at least one layer"):
            arch.where_layer("Domain").may_only_access_layers()

    def test_overlap_warns(self) -> None:
        arch = layered_architecture().layer("Domain").defined_by("domain")
        with pytest.warns(LayerOverlapWarning, match="overlaps layer 'Domain'"):
            arch.layer("Model").defined_by("domain.model")

    def test_disjoint_layers_do_not_warn(self) -> None:
        with warnings.catch_warnings():
            warnings.simplefilter("error")
            domain_app()

    def test_description_encodes_layers_and_rules(self) -> None:
        assert domain_app().description == (
            "Layered architecture [Domain{models}, App{services}]: "
            "Layer 'Domain' may not access layers [App]"
        )


class TestPartition:
    def test_first_match_wins(self) -> None:
        with pytest.warns(LayerOverlapWarning):
            arch = (
                layered_architecture()
                .layer("Domain")
                .defined_by("domain")
                .layer("Model")
                .defined_by("domain.model")
            )
        entity = make_class("User", "myapp.domain.model.user")
        assert arch.layer_of(entity) == "Domain"
        assert arch.partition(make_population(entity)) == {"Domain": (entity,), "Model": ()}

    def test_class_in_no_layer(self) -> None:
        assert domain_app().layer_of(make_class("Util", "myapp.utils")) is None


class TestCheck:
    """Tests for LayeredArchitecture.check."""

    def test_domain_app_example(self) -> None:
        population = make_population(
            make_class("User", "myapp.models.user", dependencies=("UserService",), line=3),
            make_class("UserService", "myapp.services.user_service"),
        )

        violations = domain_app().check(population)

        assert len(violations) == 1
        violation = violations[0]
        assert violation.message == (
            "Layer 'Domain' may not access layers [App], "
            "but 'User' accesses 'UserService' in layer 'App'"
        )
        assert violation.rule == domain_app().description
        assert violation.subject == "User"
        assert violation.file_path == "/src/myapp/models/user.py"
        assert violation.position == "/src/myapp/models/user.py:3:0"

    def test_allowed_direction_passes(self) -> None:
        population = make_population(
            make_class("User", "myapp.models.user"),
            make_class("UserService", "myapp.services.user_service", dependencies=("User",)),
        )
        assert domain_app().check(population) == ()

    def test_unresolved_dependency_skipped(self) -> None:
        population = make_population(
            make_class("User", "myapp.models.user", dependencies=("pydantic.BaseModel",)),
        )
        assert domain_app().check(population) == ()

    def test_module_path_dependency_resolves(self) -> None:
        population = make_population(
            make_class("User", "myapp.models.user", dependencies=("myapp.services.user_service",)),
            make_class("UserService", "myapp.services.user_service"),
        )
        assert len(domain_app().check(population)) == 1

    def test_may_only_is_literal(self) -> None:
        arch = (
            layered_architecture()
            .layer("Domain")
            .defined_by("models")
            .layer("App")
            .defined_by("services")
            .where_layer("App")
            .may_only_access_layers("Domain")
        )
        population = make_population(
            make_class("A", "myapp.services.a", dependencies=("B",)),
            make_class("B", "myapp.services.b"),
        )
        violations = arch.check(population)
        assert len(violations) == 1
        assert "in layer 'App'" in violations[0].message

    def test_one_violation_per_dependency(self) -> None:
        population = make_population(
            make_class("User", "myapp.models.user", dependencies=("S1", "S2", "S1")),
            make_class("S1", "myapp.services.s1"),
            make_class("S2", "myapp.services.s2"),
        )
        assert len(domain_app().check(population)) == 3

    def test_empty_population(self) -> None:
        assert domain_app().check(Population()) == ()

    def test_warning_severity(self) -> None:
        population = make_population(
            make_class("User", "myapp.models.user", dependencies=("UserService",)),
            make_class("UserService", "myapp.services.user_service"),
        )
        rule = domain_app().as_warning()
        assert rule.severity is Severity.WARNING
        assert rule.check(population)[0].severity is Severity.WARNING
        rule.assert_check(population)


class TestFromConfig:
    def test_builds_layers_and_rules(self) -> None:
        config = ArchGuardConfig(
            layers=MappingProxyType({"Domain": ("models",), "App": ("services",)}),
            access_rules=(AccessRule("Domain", ("App",), AccessMode.MAY_NOT),),
        )
        assert layered_architecture_from_config(config) == domain_app()
