"""Tests for presentation/api/dsl.py selection and rule mechanics."""

import re

import pytest

from archguard.domain.exceptions.violation import ArchitectureViolationError
from archguard.domain.model.enums import Severity
from archguard.domain.model.population import Population
from archguard.presentation.api.dsl import ArchRule, ClassSelector, classes, no_classes
from tests.factories import make_class, make_population

POPULATION = make_population(
    make_class("UserController", "myapp.controllers.user"),
    make_class("UserService", "myapp.services.user"),
    make_class("OrderService", "myapp.services.order"),
    make_class("Helper", "myapp.services.helper"),
    make_class("User", "myapp.models.user"),
)


def names(population: Population) -> list[str]:
    return [c.name for c in population]


class TestClassesThat:
    """Tests for filter accumulation, combinators and negation."""

    def test_and_is_default(self) -> None:
        selected = (
            classes()
            .that()
            .reside_in_package("services")
            .have_simple_name_starting_with("User")
            .execute(POPULATION)
        )
        assert names(selected) == ["UserService"]

    def test_or_switches_combinator(self) -> None:
        selected = (
            classes()
            .that()
            .reside_in_package("models")
            .or_()
            .have_simple_name_ending_with("Controller")
            .execute(POPULATION)
        )
        assert names(selected) == ["UserController", "User"]

    def test_and_resets_combinator(self) -> None:
        builder = classes().that().reside_in_package("services").or_().and_()
        selected = builder.have_simple_name_ending_with("Service").execute(POPULATION)
        assert names(selected) == ["UserService", "OrderService"]

    def test_not_negates_only_next(self) -> None:
        selected = (
            classes()
            .that()
            .not_()
            .reside_in_package("services")
            .have_simple_name_starting_with("User")
            .execute(POPULATION)
        )
        assert names(selected) == ["UserController", "User"]

    def test_or_resets_pending_negation(self) -> None:
        selected = (
            classes()
            .that()
            .reside_in_package("models")
            .not_()
            .or_()
            .reside_in_package("controllers")
            .execute(POPULATION)
        )
        assert names(selected) == ["UserController", "User"]

    def test_builder_is_immutable(self) -> None:
        base = classes().that().reside_in_package("services")
        base.have_simple_name("Helper")
        assert names(base.execute(POPULATION)) == ["UserService", "OrderService", "Helper"]

    def test_custom_predicate(self) -> None:
        selected = classes().that(lambda c: len(c.name) == 4, "have short names")
        assert names(selected.execute(POPULATION)) == ["User"]

    def test_non_callable_predicate_raises(self) -> None:
        with pytest.raises(TypeError, match="predicate must be callable"):
            classes().that().match("not callable")  # type: ignore[arg-type]

    def test_no_filters_selects_all(self) -> None:
        assert len(classes().that().execute(POPULATION)) == len(POPULATION)

    @pytest.mark.parametrize(
        ("builder_name", "args", "expected"),
        [
            ("reside_outside_of_package", ("services",), ["UserController", "User"]),
            ("reside_in_any_package", ("models", "controllers"), ["UserController", "User"]),
            ("have_simple_name", ("Helper",), ["Helper"]),
            ("have_simple_name_matching", ("^Order",), ["OrderService"]),
        ],
    )
    def test_filters(self, builder_name: str, args: tuple[str, ...], expected: list[str]) -> None:
        builder = getattr(classes().that(), builder_name)(*args)
        assert names(builder.execute(POPULATION)) == expected

    def test_type_filters(self) -> None:
        population = make_population(
            make_class("Port", is_interface=True),
            make_class("Base", is_abstract=True, decorators=("abc",)),
            make_class("Impl", extends=("Base",), implements=("Port",)),
        )
        that = classes().that()
        assert names(that.are_interfaces().execute(population)) == ["Port"]
        assert names(that.are_abstract().execute(population)) == ["Base"]
        assert names(that.implement("Port").execute(population)) == ["Impl"]
        assert names(that.extend("Base").execute(population)) == ["Impl"]
        assert names(that.are_assignable_to("Base").execute(population)) == ["Base", "Impl"]
        assert names(that.are_annotated_with("@abc").execute(population)) == ["Base"]
        assert names(that.are_not_annotated_with("abc").execute(population)) == ["Port", "Impl"]


class TestDescriptions:
    """Tests for generated rule descriptions."""

    def test_without_filters(self) -> None:
        rule = classes().should().have_simple_name_ending_with("Service")
        assert rule.description == "Classes should have simple name ending with 'Service'"

    def test_with_filters(self) -> None:
        rule = (
            classes()
            .that()
            .reside_in_package("services")
            .not_()
            .are_interfaces()
            .should()
            .have_simple_name_ending_with("Service")
        )
        assert rule.description == (
            "Classes that reside in package 'services' and not are interfaces "
            "should have simple name ending with 'Service'"
        )

    def test_or_description(self) -> None:
        selector = classes().that().have_simple_name("A").or_().have_simple_name("B").should()
        rule = selector.be_abstract()
        assert rule.description == (
            "Classes that have simple name 'A' or have simple name 'B' should be abstract"
        )

    def test_regex_flags_in_description(self) -> None:
        rule = (
            classes()
            .that()
            .have_simple_name_matching(re.compile("service", re.IGNORECASE))
            .should()
            .be_abstract()
        )
        assert rule.description.startswith(
            "Classes that have simple name matching 'service' with flags "
        )
        assert "IGNORECASE" in rule.description

    def test_plain_compiled_pattern_has_no_flags(self) -> None:
        rule = classes().that().have_simple_name_matching(re.compile("Service$")).should()
        assert rule.be_abstract().description == (
            "Classes that have simple name matching 'Service$' should be abstract"
        )

    def test_and_should(self) -> None:
        rule = (
            classes()
            .that()
            .reside_in_package("services")
            .should()
            .have_simple_name_ending_with("Service")
            .and_should()
            .not_be_interfaces()
        )
        assert rule.description == (
            "Classes that reside in package 'services' should have simple name ending with "
            "'Service' and should not be interfaces"
        )


class TestArchRule:
    """Tests for ArchRule evaluation mechanics."""

    def test_requires_condition(self) -> None:
        with pytest.raises(ValueError, match="at least one condition"):
            ArchRule(selector=ClassSelector(), conditions=())

    def test_selector_lengths_must_match(self) -> None:
        with pytest.raises(ValueError, match="same length"):
            ClassSelector(predicates=(lambda c: True,), descriptions=())

    def test_one_violation_per_failing_class(self) -> None:
        rule = classes().that().reside_in_package("services").should().have_simple_name_ending_with(
            "Service"
        )
        violations = rule.check(POPULATION)
        assert [v.subject for v in violations] == ["Helper"]
        assert violations[0].rule == rule.description

    def test_conditions_evaluated_in_order(self) -> None:
        rule = (
            classes()
            .that()
            .have_simple_name("Helper")
            .should()
            .have_simple_name_ending_with("Service")
            .and_should()
            .reside_in_package("models")
        )
        violations = rule.check(POPULATION)
        assert [v.expected for v in violations] == [
            "have simple name ending with 'Service'",
            "reside in package 'models'",
        ]

    def test_empty_population_passes(self) -> None:
        rule = classes().should().have_simple_name_ending_with("Service")
        assert rule.check(Population()) == ()
        assert rule.is_valid(Population()) is True

    def test_severity_last_call_wins(self) -> None:
        rule = classes().should().have_simple_name_ending_with("Service")
        warning = rule.as_error().as_warning()
        error = rule.as_warning().as_error()
        assert {v.severity for v in warning.check(POPULATION)} == {Severity.WARNING}
        assert {v.severity for v in error.check(POPULATION)} == {Severity.ERROR}

    def test_and_should_keeps_severity(self) -> None:
        rule = classes().should().have_simple_name("X").as_warning().and_should().be_abstract()
        assert rule.severity is Severity.WARNING

    def test_assert_check_raises_on_errors(self) -> None:
        rule = classes().should().have_simple_name_ending_with("Service")
        with pytest.raises(ArchitectureViolationError, match="Found 3 architecture violation"):
            rule.assert_check(POPULATION)

    def test_assert_check_ignores_warnings(self) -> None:
        classes().should().have_simple_name_ending_with("Service").as_warning().assert_check(
            POPULATION
        )

    def test_collect_matches_check(self) -> None:
        rule = classes().should().reside_in_package("myapp")
        assert rule.collect(POPULATION) == rule.check(POPULATION) == ()


class TestNoClasses:
    """Tests for no_classes(): each condition must fail for every selected class."""

    def test_description(self) -> None:
        rule = no_classes().that().reside_in_package("models").should().be_abstract()
        assert rule.description == "No classes that reside in package 'models' should be abstract"
        assert no_classes().should().be_abstract().description == "No classes should be abstract"

    def test_reports_classes_satisfying_condition(self) -> None:
        rule = (
            no_classes()
            .that()
            .reside_in_package("services")
            .should()
            .have_simple_name_ending_with("Service")
        )
        violations = rule.check(POPULATION)

        assert [v.subject for v in violations] == ["UserService", "OrderService"]
        assert violations[0].message == (
            "Class 'UserService' should not have simple name ending with 'Service' but does"
        )

    def test_passes_when_no_class_satisfies(self) -> None:
        rule = no_classes().should().reside_in_package("legacy")
        assert rule.check(POPULATION) == ()

    def test_dependency_condition(self) -> None:
        population = make_population(
            make_class("UserController", "myapp.controllers", dependencies=("UserService",)),
            make_class("UserService", "myapp.services"),
        )
        rule = (
            no_classes()
            .that()
            .reside_in_package("controllers")
            .should()
            .only_depend_on_classes_that()
            .reside_in_package("services")
        )
        assert [v.subject for v in rule.check(population)] == ["UserController"]

    def test_custom_predicate_keeps_negation(self) -> None:
        rule = no_classes().that(lambda c: c.name == "User").should().reside_in_package("models")
        assert [v.subject for v in rule.check(POPULATION)] == ["User"]
        assert rule.description.startswith("No classes that match custom predicate")

    def test_cycle_condition_rejected(self) -> None:
        with pytest.raises(ValueError, match="cannot assert 'not form cyclic dependencies'"):
            no_classes().should().not_form_cycles()

    def test_cache_identity_differs_from_classes(self) -> None:
        positive = classes().should().be_abstract()
        negative = no_classes().should().be_abstract()
        assert positive.cache_identity != negative.cache_identity


class TestCacheIdentity:
    def test_custom_predicate_has_none(self) -> None:
        assert classes().that().match(lambda c: True).should().be_abstract().cache_identity is None

    def test_custom_predicate_survives_later_filters(self) -> None:
        rule = (
            classes()
            .that(lambda c: True)
            .or_()
            .not_()
            .reside_in_package("x")
            .should()
            .be_abstract()
        )
        assert rule.cache_identity is None

    def test_builtin_filters_have_identity(self) -> None:
        rule = classes().that().reside_in_package("x").should().be_abstract()
        assert rule.cache_identity == f"ArchRule|{rule.description}"
