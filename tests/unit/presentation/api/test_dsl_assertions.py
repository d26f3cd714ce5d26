"""Tests for DSL assertions: messages name class, expectation and actual value."""

from dataclasses import replace

import pytest

from archguard.domain.model.member import Method, Property
from archguard.presentation.api.dsl import classes
from tests.factories import make_class, make_population


class TestLocationAssertions:
    def test_reside_in_package_message(self) -> None:
        population = make_population(make_class("User", "myapp.models.user", line=7))
        violations = classes().should().reside_in_package("services").check(population)

        assert len(violations) == 1
        violation = violations[0]
        assert violation.message == (
            "Class 'User' should reside in package 'services' but resides in 'myapp.models.user'"
        )
        assert violation.expected == "reside in package 'services'"
        assert violation.actual == "resides in 'myapp.models.user'"
        assert violation.position == "/src/myapp/models/user.py:7:0"

    def test_reside_outside_of_package(self) -> None:
        population = make_population(make_class("A", "myapp.legacy"), make_class("B", "myapp.core"))
        violations = classes().should().reside_outside_of_package("legacy").check(population)
        assert [v.subject for v in violations] == ["A"]

    def test_reside_in_any_package(self) -> None:
        population = make_population(make_class("A", "myapp.a"), make_class("B", "myapp.b"))
        violations = classes().should().reside_in_any_package("a", "c").check(population)
        assert [v.subject for v in violations] == ["B"]

    def test_reside_in_any_package_requires_pattern(self) -> None:
        with pytest.raises(ValueError, match="at least one pattern"):
            classes().should().reside_in_any_package()


class TestDecoratorAssertions:
    def test_be_annotated_with(self) -> None:
        population = make_population(
            make_class("A", decorators=("injectable",)),
            make_class("B"),
            make_class("C", decorators=("dataclass",)),
        )
        violations = classes().should().be_annotated_with("@injectable").check(population)
        assert [v.message for v in violations] == [
            "Class 'B' should be annotated with '@injectable' but has no decorators",
            "Class 'C' should be annotated with '@injectable' but is annotated with @dataclass",
        ]

    def test_not_be_annotated_with(self) -> None:
        population = make_population(make_class("A", decorators=("deprecated",)))
        violations = classes().should().not_be_annotated_with("deprecated").check(population)
        assert violations[0].actual == "is annotated with '@deprecated'"


class TestNamingAssertions:
    """Tests for name-based assertions."""

    def test_have_simple_name_ending_with(self) -> None:
        population = make_population(make_class("UserRepo", "myapp.services"))
        violations = classes().should().have_simple_name_ending_with("Service").check(population)
        assert violations[0].message == (
            "Class 'UserRepo' should have simple name ending with 'Service' but is named 'UserRepo'"
        )

    def test_other_name_assertions(self) -> None:
        population = make_population(make_class("UserService", "myapp.services"))
        should = classes().should()
        assert should.have_simple_name("UserService").check(population) == ()
        assert should.have_simple_name_starting_with("User").check(population) == ()
        assert should.have_simple_name_matching("Serv").check(population) == ()
        assert len(should.have_simple_name_matching("^Serv").check(population)) == 1

    def test_have_fully_qualified_name(self) -> None:
        population = make_population(make_class("User", "myapp.models"))
        rule = classes().should().have_fully_qualified_name("myapp.domain.User")
        violations = rule.check(population)
        assert violations[0].actual == "has fully qualified name 'myapp.models.User'"


class TestKindAssertions:
    def test_interfaces(self) -> None:
        population = make_population(make_class("Port", is_interface=True), make_class("Impl"))
        assert [v.subject for v in classes().should().be_interfaces().check(population)] == [
            "Impl"
        ]
        assert [v.subject for v in classes().should().not_be_interfaces().check(population)] == [
            "Port"
        ]

    def test_abstract(self) -> None:
        population = make_population(make_class("Base", is_abstract=True), make_class("Impl"))
        assert classes().should().be_abstract().check(population)[0].actual == "is not abstract"
        assert classes().should().not_be_abstract().check(population)[0].actual == "is abstract"

    def test_assignable(self) -> None:
        population = make_population(make_class("Impl", extends=("Base",)), make_class("Other"))
        violations = classes().should().be_assignable_to("Base").check(population)
        assert [v.actual for v in violations] == ["has no supertypes"]
        negated = classes().should().not_be_assignable_to("Base").check(population)
        assert [v.actual for v in negated] == ["has supertypes [Base]"]


class TestMemberAssertions:
    """Tests for field and method assertions."""

    def test_readonly_fields(self) -> None:
        entity = make_class(
            "Money",
            properties=(Property("amount", is_readonly=True), Property("currency")),
        )
        violations = classes().should().have_only_readonly_fields().check(
            make_population(entity)
        )
        assert violations[0].message == (
            "Class 'Money' should have only readonly fields but has mutable fields [currency]"
        )

    def test_public_methods(self) -> None:
        entity = make_class("Api", methods=("__init__", "get", "_helper", "__secret"))
        violations = classes().should().have_only_public_methods().check(make_population(entity))
        assert violations[0].actual == "has non-public methods [_helper, __secret]"

    def test_max_methods(self) -> None:
        entity = make_class("God", methods=("a", "b", "c"))
        rule = classes().should().have_max_methods(2)
        assert rule.check(make_population(entity))[0].message == (
            "Class 'God' should have at most 2 methods but has 3 methods"
        )
        assert classes().should().have_max_methods(3).check(make_population(entity)) == ()

    def test_no_setter_methods(self) -> None:
        entity = make_class("OrderView", methods=("total", "set_total", "set_status"))
        rule = classes().should().not_have_methods_starting_with("set_")
        assert rule.check(make_population(entity))[0].message == (
            "Class 'OrderView' should not have methods named 'set_*' "
            "but has methods [set_total, set_status]"
        )
        assert rule.check(make_population(make_class("Clean", methods=("total",)))) == ()

    def test_empty_method_prefix_raises(self) -> None:
        with pytest.raises(ValueError, match="prefix must not be empty"):
            classes().should().not_have_methods_starting_with("")

    def test_methods_returning_data(self) -> None:
        entity = replace(
            make_class("PlaceOrder"),
            methods=(
                Method("__init__", return_type="None"),
                Method("__repr__", return_type="str"),
                Method("execute", return_type="Order"),
                Method("validate", return_type="None"),
                Method("log"),
            ),
        )
        violations = classes().should().not_have_methods_returning_data().check(
            make_population(entity)
        )
        assert len(violations) == 1
        assert violations[0].actual == "has methods [execute -> Order]"

    def test_max_methods_negative_raises(self) -> None:
        with pytest.raises(ValueError, match="limit must be >= 0"):
            classes().should().have_max_methods(-1)


class TestDependencyAssertions:
    """Tests for only_depend_on / not_depend_on target filters."""

    def test_only_depend_on_package(self) -> None:
        population = make_population(
            make_class(
                "UserService",
                "myapp.services.user",
                dependencies=("User", "Helper", "requests.Session"),
            ),
            make_class("User", "myapp.models.user"),
            make_class("Helper", "myapp.utils.helper"),
        )
        rule = (
            classes()
            .that()
            .reside_in_package("services")
            .should()
            .only_depend_on_classes_that()
            .reside_in_package("models")
        )

        violations = rule.check(population)

        assert [v.message for v in violations] == [
            "Class 'UserService' should only depend on classes that reside in package 'models' "
            "but depends on: Helper"
        ]

    def test_only_depend_on_segment_matching(self) -> None:
        population = make_population(
            make_class("A", "myapp.core.a", dependencies=("B",)),
            make_class("B", "myapp.my_models.b"),
        )
        rule = classes().that().have_simple_name("A").should().only_depend_on_classes_that()
        assert len(rule.reside_in_package("models").check(population)) == 1
        assert rule.reside_in_package("myapp.*").check(population) == ()

    def test_only_depend_on_any_package(self) -> None:
        population = make_population(
            make_class("A", "myapp.core.a", dependencies=("B", "C")),
            make_class("B", "myapp.models.b"),
            make_class("C", "myapp.dto.c"),
        )
        rule = (
            classes()
            .that()
            .have_simple_name("A")
            .should()
            .only_depend_on_classes_that()
            .reside_in_any_package("models", "dto")
        )
        assert rule.check(population) == ()

    def test_not_depend_on_judges_raw_names(self) -> None:
        population = make_population(
            make_class("User", "myapp.models.user", dependencies=("myapp.controllers.api", "json")),
        )
        rule = classes().should().not_depend_on_classes_that().reside_in_package("controllers")
        violations = rule.check(population)
        assert violations[0].actual == "depends on: myapp.controllers.api"

    def test_not_depend_on_name_suffix(self) -> None:
        population = make_population(
            make_class(
                "Repo", "myapp.repos", dependencies=("UserController", "web.AdminController")
            ),
            make_class("UserController", "myapp.controllers"),
        )
        rule = (
            classes()
            .that()
            .have_simple_name("Repo")
            .should()
            .not_depend_on_classes_that()
            .have_simple_name_ending_with("Controller")
        )
        violations = rule.check(population)
        assert violations[0].actual == "depends on: UserController, web.AdminController"

    def test_dependency_target_validation(self) -> None:
        builder = classes().should().not_depend_on_classes_that()
        with pytest.raises(ValueError, match="pattern must not be empty"):
            builder.reside_in_package("")
        with pytest.raises(ValueError, match="at least one pattern"):
            builder.reside_in_any_package()


class TestCycleAssertions:
    """Tests for not_form_cycles / form_cycles."""

    def test_cycle_among_selected_classes(self) -> None:
        population = make_population(
            make_class("A", "myapp.services.a", dependencies=("B",)),
            make_class("B", "myapp.services.b", dependencies=("A",)),
        )
        rule = classes().that().reside_in_package("services").should().not_form_cycles()
        violations = rule.check(population)
        assert [v.message for v in violations] == ["Cyclic dependency detected: A -> B -> A"]
        assert violations[0].rule == rule.description

    def test_filtered_out_class_breaks_cycle(self) -> None:
        population = make_population(
            make_class("A", "myapp.services.a", dependencies=("B",)),
            make_class("B", "myapp.models.b", dependencies=("A",)),
        )
        rule = classes().that().reside_in_package("services").should().not_form_cycles()
        assert rule.check(population) == ()

    def test_form_cycles(self) -> None:
        population = make_population(make_class("A"))
        violations = classes().should().form_cycles().check(population)
        assert violations[0].message == "No cyclic dependencies found, but cycles were expected"
