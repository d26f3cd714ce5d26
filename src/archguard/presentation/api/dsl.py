"""Fluent API (DSL) for class rules.

Entry point for fluent class selections and assertions.

Example:
    rule = (
        classes()
        .that()
        .reside_in_package("services")
        .should()
        .have_simple_name_ending_with("Service")
    )
    rule.assert_check(population)
"""

from __future__ import annotations

import re
from collections.abc import Callable
from dataclasses import dataclass, replace
from typing import TYPE_CHECKING

from archguard.application.static_analysis.resolver import DependencyResolver
from archguard.application.validators._base import BaseRule
from archguard.domain.model.enums import Combinator, Severity
from archguard.domain.predicates import class_predicates
from archguard.presentation.api._checks import (
    CheckContext,
    Condition,
    DependencyTarget,
    make_abstract_check,
    make_annotated_check,
    make_assignable_check,
    make_cycles_check,
    make_dependency_check,
    make_interface_check,
    make_max_methods_check,
    make_name_ending_check,
    make_name_matching_check,
    make_name_starting_check,
    make_no_data_returning_methods_check,
    make_no_methods_starting_with_check,
    make_public_methods_check,
    make_qualified_name_check,
    make_readonly_fields_check,
    make_reside_in_any_package_check,
    make_reside_in_package_check,
    make_reside_outside_of_package_check,
    make_simple_name_check,
    satisfied_violations,
    target_in_any_package,
    target_in_package,
    target_name_ending_with,
)
from archguard.presentation.api._helpers import join_clauses, quote_all

if TYPE_CHECKING:
    from archguard.domain.model.class_entity import ClassEntity
    from archguard.domain.model.population import Population
    from archguard.domain.model.violation import Violation
    from archguard.domain.ports.rule import ResultCachePort
    from archguard.domain.predicates.base import ClassPredicate


def classes() -> Classes:
    """Start a class rule.

    Returns:
        Classes entry builder (no filters)
    """
    return Classes()


def no_classes() -> Classes:
    """Start a rule that no selected class may satisfy.

    Each condition is asserted per class and inverted: a class that
    satisfies it is a violation.
    """
    return Classes(_negated=True)


@dataclass(frozen=True, slots=True)
class ClassSelector:
    """Resolved filter set of a rule.

    Attributes:
        predicates: Filters in declaration order
        descriptions: Filter descriptions, parallel to predicates
        combinator: How filters combine (AND/OR)
        negated: Rule asserts that no selected class satisfies the conditions
        opaque: A filter is a custom callable its description does not capture
    """

    predicates: tuple[ClassPredicate, ...] = ()
    descriptions: tuple[str, ...] = ()
    combinator: Combinator = Combinator.AND
    negated: bool = False
    opaque: bool = False

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if len(self.predicates) != len(self.descriptions):
            raise ValueError(
                f"predicates ({len(self.predicates)}) and descriptions "
                f"({len(self.descriptions)}) must have the same length"
            )

    @property
    def description(self) -> str:
        """'Classes', 'No classes' or either followed by 'that <filters>'."""
        subject = "No classes" if self.negated else "Classes"
        if not self.descriptions:
            return subject
        word = "or" if self.combinator is Combinator.OR else "and"
        return f"{subject} that {join_clauses(self.descriptions, word)}"

    def select(self, population: Population) -> Population:
        """Classes of population satisfying the filters."""
        if not self.predicates:
            return population
        return population.that(class_predicates.combine(self.predicates, self.combinator))


@dataclass(frozen=True, slots=True)
class Classes:
    """Entry builder returned by classes() and no_classes()."""

    _negated: bool = False

    def that(
        self,
        predicate: ClassPredicate | None = None,
        description: str | None = None,
    ) -> ClassesThat:
        """Start filtering, optionally with a custom first predicate.

        Args:
            predicate: Optional custom filter
            description: Description of the custom filter

        Returns:
            ClassesThat builder
        """
        start = ClassesThat(_negated=self._negated)
        if predicate is None:
            return start
        return start.match(predicate, description)

    def should(self) -> ClassesShould:
        """Assert on all classes of the population."""
        return ClassesShould(_selector=ClassSelector(negated=self._negated))


@dataclass(frozen=True, slots=True)
class ClassesThat:
    """Immutable filter builder.

    Filters accumulate; AND by default. or_() switches the whole chain
    to OR, and_() back to AND. not_() negates exactly the next filter.
    """

    _predicates: tuple[ClassPredicate, ...] = ()
    _descriptions: tuple[str, ...] = ()
    _combinator: Combinator = Combinator.AND
    _negate_next: bool = False
    _negated: bool = False
    _opaque: bool = False

    def _with_predicate(self, predicate: ClassPredicate, description: str) -> ClassesThat:
        """Return new builder with additional filter.

        Args:
            predicate: Filter predicate
            description: Filter description

        Returns:
            New ClassesThat with added filter (immutable)
        """
        if self._negate_next:
            predicate = class_predicates.negate(predicate)
            description = f"not {description}"
        return replace(
            self,
            _predicates=(*self._predicates, predicate),
            _descriptions=(*self._descriptions, description),
            _negate_next=False,
        )

    def _with_combinator(self, combinator: Combinator) -> ClassesThat:
        return replace(self, _combinator=combinator, _negate_next=False)

    def not_(self) -> ClassesThat:
        """Negate the next filter."""
        return replace(self, _negate_next=True)

    def or_(self) -> ClassesThat:
        """Combine filters with OR."""
        return self._with_combinator(Combinator.OR)

    def and_(self) -> ClassesThat:
        """Combine filters with AND (default)."""
        return self._with_combinator(Combinator.AND)

    def reside_in_package(self, pattern: str) -> ClassesThat:
        """Filter classes whose module path contains pattern.

        Example: reside_in_package("services") matches myapp.services.user
        """
        return self._with_predicate(
            class_predicates.resides_in_package(pattern), f"reside in package '{pattern}'"
        )

    def reside_outside_of_package(self, pattern: str) -> ClassesThat:
        return self._with_predicate(
            class_predicates.negate(class_predicates.resides_in_package(pattern)),
            f"reside outside of package '{pattern}'",
        )

    def reside_in_any_package(self, *patterns: str) -> ClassesThat:
        """Filter classes residing in any of patterns.

        Raises:
            ValueError: If no patterns provided
        """
        return self._with_predicate(
            class_predicates.resides_in_any_package(*patterns),
            f"reside in any package [{quote_all(patterns)}]",
        )

    def are_annotated_with(self, decorator: str) -> ClassesThat:
        name = decorator.removeprefix("@")
        return self._with_predicate(
            class_predicates.is_annotated_with(name), f"are annotated with '@{name}'"
        )

    def are_not_annotated_with(self, decorator: str) -> ClassesThat:
        name = decorator.removeprefix("@")
        return self._with_predicate(
            class_predicates.negate(class_predicates.is_annotated_with(name)),
            f"are not annotated with '@{name}'",
        )

    def have_simple_name(self, name: str) -> ClassesThat:
        return self._with_predicate(
            class_predicates.has_simple_name(name), f"have simple name '{name}'"
        )

    def have_simple_name_matching(self, pattern: str | re.Pattern[str]) -> ClassesThat:
        """Filter classes whose name contains a regex match.

        Flags of a compiled pattern (other than the default UNICODE) are
        part of the description.
        """
        if isinstance(pattern, str):
            shown = f"'{pattern}'"
        else:
            shown = f"'{pattern.pattern}'"
            flags = pattern.flags & ~re.UNICODE
            if flags:
                shown += f" with flags {re.RegexFlag(flags)!s}"
        return self._with_predicate(
            class_predicates.has_name_matching(pattern), f"have simple name matching {shown}"
        )

    def have_simple_name_ending_with(self, suffix: str) -> ClassesThat:
        return self._with_predicate(
            class_predicates.has_name_ending_with(suffix),
            f"have simple name ending with '{suffix}'",
        )

    def have_simple_name_starting_with(self, prefix: str) -> ClassesThat:
        return self._with_predicate(
            class_predicates.has_name_starting_with(prefix),
            f"have simple name starting with '{prefix}'",
        )

    def are_assignable_to(self, type_name: str) -> ClassesThat:
        """Filter classes named type_name or listing it as a supertype."""
        return self._with_predicate(
            class_predicates.is_assignable_to(type_name), f"are assignable to '{type_name}'"
        )

    def implement(self, interface: str) -> ClassesThat:
        return self._with_predicate(
            class_predicates.implements(interface), f"implement '{interface}'"
        )

    def extend(self, base: str) -> ClassesThat:
        return self._with_predicate(class_predicates.extends(base), f"extend '{base}'")

    def are_interfaces(self) -> ClassesThat:
        return self._with_predicate(class_predicates.is_interface(), "are interfaces")

    def are_abstract(self) -> ClassesThat:
        return self._with_predicate(class_predicates.is_abstract(), "are abstract")

    def match(
        self,
        predicate: Callable[[ClassEntity], bool],
        description: str | None = None,
    ) -> ClassesThat:
        """Filter by custom predicate.

        Args:
            predicate: Function returning True for matching classes
            description: Shown in rule descriptions

        Raises:
            TypeError: If predicate is not callable
        """
        if not callable(predicate):
            raise TypeError(f"predicate must be callable, got {type(predicate).__name__}")
        with_filter = self._with_predicate(predicate, description or "match custom predicate")
        return replace(with_filter, _opaque=True)

    def should(self) -> ClassesShould:
        """Transition to assertion mode.

        Returns:
            ClassesShould bound to the accumulated filters
        """
        selector = ClassSelector(
            predicates=self._predicates,
            descriptions=self._descriptions,
            combinator=self._combinator,
            negated=self._negated,
            opaque=self._opaque,
        )
        return ClassesShould(_selector=selector)

    def execute(self, population: Population) -> Population:
        """Select matching classes without asserting anything."""
        return self.should()._selector.select(population)


@dataclass(frozen=True, slots=True)
class ClassesShould:
    """Immutable assertion builder.

    Each assertion returns an ArchRule; conditions added through
    ArchRule.and_should() are carried in _conditions.
    """

    _selector: ClassSelector
    _conditions: tuple[Condition, ...] = ()
    _severity: Severity = Severity.ERROR

    def _rule(self, condition: Condition) -> ArchRule:
        return ArchRule(
            selector=self._selector,
            conditions=(*self._conditions, condition),
            severity=self._severity,
        )

    # Location

    def reside_in_package(self, pattern: str) -> ArchRule:
        return self._rule(make_reside_in_package_check(pattern))

    def reside_outside_of_package(self, pattern: str) -> ArchRule:
        return self._rule(make_reside_outside_of_package_check(pattern))

    def reside_in_any_package(self, *patterns: str) -> ArchRule:
        """Assert classes reside in any of patterns.

        Raises:
            ValueError: If no patterns provided
        """
        if not patterns:
            raise ValueError("at least one pattern required")
        return self._rule(make_reside_in_any_package_check(patterns))

    # Decorators

    def be_annotated_with(self, decorator: str) -> ArchRule:
        return self._rule(make_annotated_check(decorator))

    def not_be_annotated_with(self, decorator: str) -> ArchRule:
        return self._rule(make_annotated_check(decorator, negated=True))

    # Naming

    def have_simple_name(self, name: str) -> ArchRule:
        return self._rule(make_simple_name_check(name))

    def have_simple_name_matching(self, pattern: str) -> ArchRule:
        return self._rule(make_name_matching_check(pattern))

    def have_simple_name_ending_with(self, suffix: str) -> ArchRule:
        return self._rule(make_name_ending_check(suffix))

    def have_simple_name_starting_with(self, prefix: str) -> ArchRule:
        return self._rule(make_name_starting_check(prefix))

    def have_fully_qualified_name(self, qualified: str) -> ArchRule:
        """Assert module_path.name equals qualified."""
        return self._rule(make_qualified_name_check(qualified))

    # Kind

    def be_interfaces(self) -> ArchRule:
        return self._rule(make_interface_check())

    def not_be_interfaces(self) -> ArchRule:
        return self._rule(make_interface_check(negated=True))

    def be_abstract(self) -> ArchRule:
        return self._rule(make_abstract_check())

    def not_be_abstract(self) -> ArchRule:
        return self._rule(make_abstract_check(negated=True))

    def be_assignable_to(self, type_name: str) -> ArchRule:
        return self._rule(make_assignable_check(type_name))

    def not_be_assignable_to(self, type_name: str) -> ArchRule:
        return self._rule(make_assignable_check(type_name, negated=True))

    # Members

    def have_only_readonly_fields(self) -> ArchRule:
        return self._rule(make_readonly_fields_check())

    def have_only_public_methods(self) -> ArchRule:
        """Assert no method is protected (_name) or private (__name)."""
        return self._rule(make_public_methods_check())

    def have_max_methods(self, limit: int) -> ArchRule:
        """Assert classes have at most limit methods.

        Raises:
            ValueError: If limit is negative
        """
        if limit < 0:
            raise ValueError(f"limit must be >= 0, got {limit}")
        return self._rule(make_max_methods_check(limit))

    def not_have_methods_starting_with(self, prefix: str) -> ArchRule:
        """Assert no method name starts with prefix, e.g. 'set_' for setters.

        Raises:
            ValueError: If prefix is empty
        """
        if not prefix:
            raise ValueError("prefix must not be empty")
        return self._rule(make_no_methods_starting_with_check(prefix))

    def not_have_methods_returning_data(self) -> ArchRule:
        """Assert no non-dunder method has a return annotation other than None."""
        return self._rule(make_no_data_returning_methods_check())

    # Dependencies

    def only_depend_on_classes_that(self) -> DependencyTargetBuilder:
        """Assert every in-population dependency matches a target filter.

        Dependencies that do not resolve to an analyzed class are ignored.
        """
        return DependencyTargetBuilder(_should=self, _negated=False)

    def not_depend_on_classes_that(self) -> DependencyTargetBuilder:
        """Assert no dependency (resolved or raw name) matches a target filter."""
        return DependencyTargetBuilder(_should=self, _negated=True)

    # Cycles

    def not_form_cycles(self) -> ArchRule:
        return self._rule(make_cycles_check(expect_cycles=False))

    def form_cycles(self) -> ArchRule:
        return self._rule(make_cycles_check(expect_cycles=True))


@dataclass(frozen=True, slots=True)
class DependencyTargetBuilder:
    """Target filter for only_depend_on / not_depend_on assertions."""

    _should: ClassesShould
    _negated: bool

    def _rule(self, target: DependencyTarget) -> ArchRule:
        return self._should._rule(make_dependency_check(target, negated=self._negated))

    def reside_in_package(self, pattern: str) -> ArchRule:
        """Targets whose module path matches pattern segment by segment.

        '*' matches one segment, '**' any number of segments.
        """
        if not pattern:
            raise ValueError("pattern must not be empty")
        return self._rule(target_in_package(pattern))

    def reside_in_any_package(self, *patterns: str) -> ArchRule:
        if not patterns:
            raise ValueError("at least one pattern required")
        return self._rule(target_in_any_package(patterns))

    def have_simple_name_ending_with(self, suffix: str) -> ArchRule:
        return self._rule(target_name_ending_with(suffix))


@dataclass(frozen=True, slots=True)
class ArchRule(BaseRule):
    """Immutable class rule: selector plus one or more conditions.

    Attributes:
        selector: Which classes the rule applies to
        conditions: Assertions, all must hold
        severity: Stamped on violations when check() runs
    """

    selector: ClassSelector
    conditions: tuple[Condition, ...]
    severity: Severity = Severity.ERROR

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if not self.conditions:
            raise ValueError("rule requires at least one condition")
        if self.selector.negated:
            for condition in self.conditions:
                if not condition.negatable:
                    raise ValueError(f"no_classes() cannot assert '{condition.description}'")

    @property
    def description(self) -> str:
        clauses = " and should ".join(c.description for c in self.conditions)
        return f"{self.selector.description} should {clauses}"

    @property
    def cache_identity(self) -> str | None:
        """None when a filter is a custom callable."""
        if self.selector.opaque:
            return None
        return f"{type(self).__qualname__}|{self.description}"

    def and_should(self) -> ClassesShould:
        """Add further conditions to this rule."""
        return ClassesShould(
            _selector=self.selector,
            _conditions=self.conditions,
            _severity=self.severity,
        )

    def check(
        self,
        population: Population,
        *,
        cache: ResultCachePort | None = None,
    ) -> tuple[Violation, ...]:
        """Evaluate every condition on the selected classes.

        Dependencies resolve against the whole population, not only
        the selected classes.

        Returns:
            Violations, condition-major then population order
        """
        selected = tuple(self.selector.select(population))
        if not selected:
            return ()
        ctx = CheckContext(
            rule=self.description,
            severity=self.severity,
            resolver=DependencyResolver(population),
            cache=cache,
        )
        violations: list[Violation] = []
        for condition in self.conditions:
            if self.selector.negated:
                violations.extend(satisfied_violations(condition, selected, ctx))
            else:
                violations.extend(condition.evaluate(selected, ctx))
        return tuple(violations)

    def collect(self, population: Population) -> tuple[Violation, ...]:
        """Alias of check() without cache."""
        return self.check(population)
