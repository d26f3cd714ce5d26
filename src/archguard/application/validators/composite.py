"""Logical composition of rules.

    AND  all children must pass; reports every child violation
    OR   at least one child must pass; otherwise reports every child
         violation tagged with its branch
    NOT  the single child must fail; reports one violation if it passes
    XOR  exactly one child must pass

The composite's severity is stamped on every violation it reports.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import TYPE_CHECKING

from archguard.application.validators._base import BaseRule, rule_identity
from archguard.domain.exceptions.validation import RuleValidationError
from archguard.domain.model.enums import CompositeOperator, Severity
from archguard.domain.model.violation import Violation

if TYPE_CHECKING:
    from archguard.domain.model.population import Population
    from archguard.domain.ports.rule import ResultCachePort, RuleProtocol


@dataclass(frozen=True, slots=True)
class CompositeRule(BaseRule):
    """Rules combined with one logical operator.

    Attributes:
        rules: Child rules, evaluation order
        operator: AND/OR/NOT/XOR
        custom_description: Overrides the generated description
        severity: Severity of reported violations
    """

    rules: tuple[RuleProtocol, ...]
    operator: CompositeOperator
    custom_description: str | None = None
    severity: Severity = Severity.ERROR

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if not self.rules:
            raise RuleValidationError(self.operator.name, "composite rule needs at least one rule")
        if self.operator is CompositeOperator.NOT and len(self.rules) != 1:
            raise RuleValidationError("NOT", "NOT operator requires exactly one rule")

    @property
    def description(self) -> str:
        """Custom description, or children joined by the operator."""
        if self.custom_description:
            return self.custom_description
        parts = [rule.description for rule in self.rules]
        if self.operator is CompositeOperator.NOT:
            return f"NOT ({parts[0]})"
        return f"({f' {self.operator.name} '.join(parts)})"

    @property
    def cache_identity(self) -> str | None:
        """Operator, description and child identities; None if any child has none."""
        children: list[str] = []
        for rule in self.rules:
            identity = rule_identity(rule)
            if identity is None:
                return None
            children.append(identity)
        return f"{type(self).__qualname__}|{self.operator.name}|{self.description}|{children!r}"

    def check(
        self,
        population: Population,
        *,
        cache: ResultCachePort | None = None,
    ) -> tuple[Violation, ...]:
        """Evaluate every child, then combine by operator."""
        results = tuple(rule.check(population, cache=cache) for rule in self.rules)
        match self.operator:
            case CompositeOperator.AND:
                combined = self._and(results)
            case CompositeOperator.OR:
                combined = self._or(results)
            case CompositeOperator.NOT:
                combined = self._not(results[0])
            case CompositeOperator.XOR:
                combined = self._xor(results)
        return tuple(replace(v, severity=self.severity) for v in combined)

    def _and(self, results: tuple[tuple[Violation, ...], ...]) -> list[Violation]:
        return [v for violations in results for v in violations]

    def _or(self, results: tuple[tuple[Violation, ...], ...]) -> list[Violation]:
        if any(not violations for violations in results):
            return []
        description = self.description
        total = len(results)
        return [
            replace(
                v,
                message=f"[OR branch {i}/{total}] {v.message}",
                rule=f"{description} -> {rule.description}",
            )
            for i, (rule, violations) in enumerate(zip(self.rules, results, strict=True), start=1)
            for v in violations
        ]

    def _not(self, violations: tuple[Violation, ...]) -> list[Violation]:
        if violations:
            return []
        return [
            Violation(
                rule=self.description,
                message=f"Rule should have failed but passed: {self.rules[0].description}",
                expected="child rule fails",
                actual="child rule passed",
            )
        ]

    def _xor(self, results: tuple[tuple[Violation, ...], ...]) -> list[Violation]:
        passing = sum(1 for violations in results if not violations)
        if passing == 1:
            return []
        if passing == 0:
            message = f"XOR requires exactly one rule to pass, but all {len(results)} rules failed"
        else:
            message = f"XOR requires exactly one rule to pass, but {passing} rules passed"
        return [
            Violation(
                rule=self.description,
                message=message,
                expected="exactly one passing rule",
                actual=f"{passing} passing rules",
            )
        ]


def all_of(*rules: RuleProtocol, description: str | None = None) -> CompositeRule:
    """All rules must pass."""
    return CompositeRule(rules, CompositeOperator.AND, description)


def any_of(*rules: RuleProtocol, description: str | None = None) -> CompositeRule:
    """At least one rule must pass."""
    return CompositeRule(rules, CompositeOperator.OR, description)


def not_(rule: RuleProtocol, description: str | None = None) -> CompositeRule:
    """The rule must fail."""
    return CompositeRule((rule,), CompositeOperator.NOT, description)


def xor(*rules: RuleProtocol, description: str | None = None) -> CompositeRule:
    """Exactly one rule must pass."""
    return CompositeRule(rules, CompositeOperator.XOR, description)
