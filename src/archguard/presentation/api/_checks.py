"""Check functions for DSL assertions.

Internal module - not part of public API.
Each check_* function returns Violation | None for one class;
make_* factories bind arguments and return a Condition.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING

from archguard.application.static_analysis.resolver import DependencyResolver
from archguard.application.validators.cycles import cycle_violations
from archguard.domain.model.enums import Visibility
from archguard.domain.model.population import Population
from archguard.domain.model.resolution import Resolved, Unresolved
from archguard.domain.model.violation import Violation
from archguard.domain.predicates import class_predicates
from archguard.domain.predicates.package import matches_package_segments, split_segments
from archguard.presentation.api._helpers import execute_checks, quote_all

if TYPE_CHECKING:
    from archguard.domain.model.class_entity import ClassEntity
    from archguard.domain.model.enums import Severity
    from archguard.domain.model.resolution import Resolution
    from archguard.domain.ports.rule import ResultCachePort
    from archguard.domain.predicates.base import ClassPredicate


@dataclass(frozen=True, slots=True)
class CheckContext:
    """Per-check() state shared by all conditions of one rule.

    Attributes:
        rule: Rule description stamped on violations
        severity: Severity stamped on violations
        resolver: Name index over the whole population
        cache: Optional tier 3 cache
    """

    rule: str
    severity: Severity
    resolver: DependencyResolver
    cache: ResultCachePort | None = None


@dataclass(frozen=True, slots=True)
class Condition:
    """One assertion of a rule.

    Attributes:
        description: Clause after "should", e.g. "reside in package 'x'"
        evaluate: Selected classes + context -> violations
        negatable: False if the condition cannot be asserted per class (no_classes)
    """

    description: str
    evaluate: Callable[[tuple[ClassEntity, ...], CheckContext], tuple[Violation, ...]]
    negatable: bool = True


ClassCheck = Callable[["ClassEntity", CheckContext], "Violation | None"]


@dataclass(frozen=True, slots=True)
class DependencyTarget:
    """Predicate over dependency targets for *_depend_on_classes_that().

    Attributes:
        description: e.g. "reside in package 'services'"
        on_class: Test for a dependency resolved to a class
        on_name: Test for an unresolved raw dependency name
    """

    description: str
    on_class: ClassPredicate
    on_name: Callable[[str], bool]

    def matches(self, resolution: Resolution) -> bool:
        """Apply the test matching the resolution kind."""
        match resolution:
            case Resolved(entity=entity):
                return self.on_class(entity)
            case Unresolved(name=name):
                return self.on_name(name)
        return False


def class_violation(
    entity: ClassEntity,
    ctx: CheckContext,
    expected: str,
    actual: str,
) -> Violation:
    """Violation naming the class, the expected condition and the actual value."""
    return Violation(
        rule=ctx.rule,
        message=f"Class '{entity.name}' should {expected} but {actual}",
        file_path=entity.file_path,
        severity=ctx.severity,
        location=entity.location,
        subject=entity.name,
        expected=expected,
        actual=actual,
    )


def per_class(description: str, check: ClassCheck) -> Condition:
    """Condition evaluating check on each selected class."""

    def evaluate(selected: tuple[ClassEntity, ...], ctx: CheckContext) -> tuple[Violation, ...]:
        return execute_checks(selected, (lambda entity: check(entity, ctx),))

    return Condition(description, evaluate)


def predicate_condition(
    expected: str,
    predicate: ClassPredicate,
    actual: Callable[[ClassEntity], str],
) -> Condition:
    """Condition failing classes where predicate is False.

    Args:
        expected: Clause after "should"
        predicate: Test each class must satisfy
        actual: Describes the observed value of a failing class
    """

    def check(entity: ClassEntity, ctx: CheckContext) -> Violation | None:
        if predicate(entity):
            return None
        return class_violation(entity, ctx, expected, actual(entity))

    return per_class(expected, check)


def satisfied_violations(
    condition: Condition,
    selected: tuple[ClassEntity, ...],
    ctx: CheckContext,
) -> tuple[Violation, ...]:
    """One violation per selected class that satisfies condition (no_classes rules)."""
    expected = f"not {condition.description}"
    return tuple(
        class_violation(entity, ctx, expected, "does")
        for entity in selected
        if not condition.evaluate((entity,), ctx)
    )


def _module_of(entity: ClassEntity) -> str:
    return f"resides in '{entity.module_path or entity.file_path}'"


def _decorators_of(entity: ClassEntity) -> str:
    if not entity.decorators:
        return "has no decorators"
    return f"is annotated with {', '.join(str(d) for d in entity.decorators)}"


def _supertypes_of(entity: ClassEntity) -> str:
    if not entity.supertypes:
        return "has no supertypes"
    return f"has supertypes [{', '.join(entity.supertypes)}]"


# Location


def make_reside_in_package_check(pattern: str) -> Condition:
    return predicate_condition(
        f"reside in package '{pattern}'",
        class_predicates.resides_in_package(pattern),
        _module_of,
    )


def make_reside_outside_of_package_check(pattern: str) -> Condition:
    return predicate_condition(
        f"reside outside of package '{pattern}'",
        class_predicates.negate(class_predicates.resides_in_package(pattern)),
        _module_of,
    )


def make_reside_in_any_package_check(patterns: tuple[str, ...]) -> Condition:
    return predicate_condition(
        f"reside in any package [{quote_all(patterns)}]",
        class_predicates.resides_in_any_package(*patterns),
        _module_of,
    )


# Decorators


def make_annotated_check(decorator: str, *, negated: bool = False) -> Condition:
    """be_annotated_with / not_be_annotated_with."""
    name = decorator.removeprefix("@")
    predicate = class_predicates.is_annotated_with(name)
    if negated:
        return predicate_condition(
            f"not be annotated with '@{name}'",
            class_predicates.negate(predicate),
            lambda _entity: f"is annotated with '@{name}'",
        )
    return predicate_condition(f"be annotated with '@{name}'", predicate, _decorators_of)


# Naming


def _named(entity: ClassEntity) -> str:
    return f"is named '{entity.name}'"


def make_simple_name_check(name: str) -> Condition:
    return predicate_condition(
        f"have simple name '{name}'", class_predicates.has_simple_name(name), _named
    )


def make_name_matching_check(pattern: str) -> Condition:
    return predicate_condition(
        f"have simple name matching '{pattern}'",
        class_predicates.has_name_matching(pattern),
        _named,
    )


def make_name_ending_check(suffix: str) -> Condition:
    return predicate_condition(
        f"have simple name ending with '{suffix}'",
        class_predicates.has_name_ending_with(suffix),
        _named,
    )


def make_name_starting_check(prefix: str) -> Condition:
    return predicate_condition(
        f"have simple name starting with '{prefix}'",
        class_predicates.has_name_starting_with(prefix),
        _named,
    )


def make_qualified_name_check(qualified: str) -> Condition:
    return predicate_condition(
        f"have fully qualified name '{qualified}'",
        lambda entity: entity.qualified_name == qualified,
        lambda entity: f"has fully qualified name '{entity.qualified_name}'",
    )


# Kind


def make_interface_check(*, negated: bool = False) -> Condition:
    if negated:
        return predicate_condition(
            "not be interfaces",
            lambda entity: not entity.is_interface,
            lambda _entity: "is an interface",
        )
    return predicate_condition(
        "be interfaces",
        lambda entity: entity.is_interface,
        lambda _entity: "is not an interface",
    )


def make_abstract_check(*, negated: bool = False) -> Condition:
    if negated:
        return predicate_condition(
            "not be abstract",
            lambda entity: not entity.is_abstract,
            lambda _entity: "is abstract",
        )
    return predicate_condition(
        "be abstract",
        lambda entity: entity.is_abstract,
        lambda _entity: "is not abstract",
    )


def make_assignable_check(type_name: str, *, negated: bool = False) -> Condition:
    predicate = class_predicates.is_assignable_to(type_name)
    if negated:
        return predicate_condition(
            f"not be assignable to '{type_name}'",
            class_predicates.negate(predicate),
            _supertypes_of,
        )
    return predicate_condition(f"be assignable to '{type_name}'", predicate, _supertypes_of)


# Members


def check_only_readonly_fields(entity: ClassEntity, ctx: CheckContext) -> Violation | None:
    """Check that every property of entity is read-only.

    Returns:
        Violation listing mutable properties, or None
    """
    mutable = [p.name for p in entity.properties if not p.is_readonly]
    if not mutable:
        return None
    return class_violation(
        entity, ctx, "have only readonly fields", f"has mutable fields [{', '.join(mutable)}]"
    )


def check_only_public_methods(entity: ClassEntity, ctx: CheckContext) -> Violation | None:
    """Check that every method of entity is public.

    Returns:
        Violation listing protected/private methods, or None
    """
    hidden = [m.name for m in entity.methods if m.visibility is not Visibility.PUBLIC]
    if not hidden:
        return None
    return class_violation(
        entity, ctx, "have only public methods", f"has non-public methods [{', '.join(hidden)}]"
    )


def check_max_methods(entity: ClassEntity, ctx: CheckContext, limit: int) -> Violation | None:
    """Check that entity has at most limit methods.

    Args:
        entity: Class to check
        ctx: Check context
        limit: Maximum number of methods

    Returns:
        Violation if too many methods, None otherwise
    """
    count = len(entity.methods)
    if count <= limit:
        return None
    return class_violation(entity, ctx, f"have at most {limit} methods", f"has {count} methods")


def check_no_methods_starting_with(
    entity: ClassEntity, ctx: CheckContext, prefix: str
) -> Violation | None:
    """Check that no method name of entity starts with prefix (e.g. 'set_')."""
    found = [m.name for m in entity.methods if m.name.startswith(prefix)]
    if not found:
        return None
    return class_violation(
        entity,
        ctx,
        f"not have methods named '{prefix}*'",
        f"has methods [{', '.join(found)}]",
    )


def check_no_data_returning_methods(entity: ClassEntity, ctx: CheckContext) -> Violation | None:
    """Check that no non-dunder method is annotated to return a value.

    Unannotated methods and '-> None' count as returning nothing.
    """
    returning = [
        f"{m.name} -> {m.return_type}"
        for m in entity.methods
        if not m.name.startswith("__") and m.return_type not in (None, "None")
    ]
    if not returning:
        return None
    return class_violation(
        entity,
        ctx,
        "not have methods returning data",
        f"has methods [{', '.join(returning)}]",
    )


def make_readonly_fields_check() -> Condition:
    return per_class("have only readonly fields", check_only_readonly_fields)


def make_public_methods_check() -> Condition:
    return per_class("have only public methods", check_only_public_methods)


def make_max_methods_check(limit: int) -> Condition:
    return per_class(
        f"have at most {limit} methods",
        lambda entity, ctx: check_max_methods(entity, ctx, limit),
    )


def make_no_methods_starting_with_check(prefix: str) -> Condition:
    return per_class(
        f"not have methods named '{prefix}*'",
        lambda entity, ctx: check_no_methods_starting_with(entity, ctx, prefix),
    )


def make_no_data_returning_methods_check() -> Condition:
    return per_class("not have methods returning data", check_no_data_returning_methods)


# Dependencies


def _last_segment(name: str) -> str:
    segments = split_segments(name)
    return segments[-1] if segments else name


def target_in_package(pattern: str) -> DependencyTarget:
    """Dependency target resides in package (segment-aware)."""
    return DependencyTarget(
        description=f"reside in package '{pattern}'",
        on_class=lambda entity: matches_package_segments(entity.module_path, pattern),
        on_name=lambda name: matches_package_segments(name, pattern),
    )


def target_in_any_package(patterns: tuple[str, ...]) -> DependencyTarget:
    """Dependency target resides in any package (segment-aware)."""
    return DependencyTarget(
        description=f"reside in any package [{quote_all(patterns)}]",
        on_class=lambda entity: any(
            matches_package_segments(entity.module_path, p) for p in patterns
        ),
        on_name=lambda name: any(matches_package_segments(name, p) for p in patterns),
    )


def target_name_ending_with(suffix: str) -> DependencyTarget:
    """Dependency target's simple name ends with suffix."""
    return DependencyTarget(
        description=f"have simple name ending with '{suffix}'",
        on_class=lambda entity: entity.name.endswith(suffix),
        on_name=lambda name: _last_segment(name).endswith(suffix),
    )


def check_not_depend_on(
    entity: ClassEntity,
    ctx: CheckContext,
    target: DependencyTarget,
) -> Violation | None:
    """Check that no dependency of entity (resolved or not) matches target.

    Returns:
        One violation listing every forbidden dependency, or None
    """
    forbidden = [
        dep for dep in entity.dependencies if target.matches(ctx.resolver.resolve(dep))
    ]
    if not forbidden:
        return None
    return class_violation(
        entity,
        ctx,
        f"not depend on classes that {target.description}",
        f"depends on: {', '.join(forbidden)}",
    )


def check_only_depend_on(
    entity: ClassEntity,
    ctx: CheckContext,
    target: DependencyTarget,
) -> Violation | None:
    """Check that every dependency resolved inside the population matches target.

    Unresolved names (external libraries) are not judged.

    Returns:
        One violation listing every non-matching dependency, or None
    """
    invalid: list[str] = []
    for dep in entity.dependencies:
        resolution = ctx.resolver.resolve(dep)
        if isinstance(resolution, Resolved) and not target.matches(resolution):
            invalid.append(dep)
    if not invalid:
        return None
    return class_violation(
        entity,
        ctx,
        f"only depend on classes that {target.description}",
        f"depends on: {', '.join(invalid)}",
    )


def make_dependency_check(target: DependencyTarget, *, negated: bool) -> Condition:
    """only_depend_on (negated=False) / not_depend_on (negated=True)."""
    if negated:
        return per_class(
            f"not depend on classes that {target.description}",
            lambda entity, ctx: check_not_depend_on(entity, ctx, target),
        )
    return per_class(
        f"only depend on classes that {target.description}",
        lambda entity, ctx: check_only_depend_on(entity, ctx, target),
    )


# Cycles


def make_cycles_check(*, expect_cycles: bool) -> Condition:
    """Population-level cycle condition over the selected classes."""

    def evaluate(selected: tuple[ClassEntity, ...], ctx: CheckContext) -> tuple[Violation, ...]:
        return cycle_violations(
            Population(selected),
            rule=ctx.rule,
            severity=ctx.severity,
            expect_cycles=expect_cycles,
            cache=ctx.cache,
        )

    description = "form cyclic dependencies" if expect_cycles else "not form cyclic dependencies"
    return Condition(description, evaluate, negatable=False)
