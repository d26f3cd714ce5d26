"""Base class for rules.

Concrete rules are frozen dataclasses with a `severity` field that
inherit from BaseRule (slots-compatible: BaseRule has no state).
"""

from __future__ import annotations

import dataclasses
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Self

from archguard.domain.exceptions.violation import ArchitectureViolationError
from archguard.domain.model.enums import Severity

if TYPE_CHECKING:
    from archguard.domain.model.population import Population
    from archguard.domain.model.violation import Violation
    from archguard.domain.ports.rule import ResultCachePort, RuleProtocol


class BaseRule(ABC):
    """Default implementation of RuleProtocol helpers.

    Concrete rules must:
    1. Declare a `severity: Severity` dataclass field
    2. Implement `description`
    3. Implement `check()`, stamping `self.severity` on every violation

    Example:
        @dataclass(frozen=True, slots=True)
        class NoGodClasses(BaseRule):
            limit: int
            severity: Severity = Severity.ERROR

            @property
            def description(self) -> str:
                return f"Classes should have at most {self.limit} methods"

            def check(self, population, *, cache=None):
                return tuple(
                    Violation(self.description, f"Class '{c.name}' is too big",
                              c.file_path, self.severity)
                    for c in population
                    if len(c.methods) > self.limit
                )
    """

    __slots__ = ()

    severity: Severity

    @property
    @abstractmethod
    def description(self) -> str:
        """Stable human-readable identity of the rule."""

    @abstractmethod
    def check(
        self,
        population: Population,
        *,
        cache: ResultCachePort | None = None,
    ) -> tuple[Violation, ...]:
        """Evaluate rule against population.

        Args:
            population: Classes to check
            cache: Optional result cache (tier 3)

        Returns:
            Violations in population order (empty if valid)
        """

    @property
    def cache_identity(self) -> str | None:
        """Key material for cached results; None disables result caching.

        Rules whose behavior is not fully captured by their description
        (custom predicates) must return None.
        """
        return f"{type(self).__qualname__}|{self.description}"

    def as_warning(self) -> Self:
        """Copy of this rule reporting WARNING violations."""
        return dataclasses.replace(self, severity=Severity.WARNING)

    def as_error(self) -> Self:
        """Copy of this rule reporting ERROR violations."""
        return dataclasses.replace(self, severity=Severity.ERROR)

    def is_valid(
        self,
        population: Population,
        *,
        cache: ResultCachePort | None = None,
    ) -> bool:
        """True if check() finds no violations of any severity."""
        return not self.check(population, cache=cache)

    def assert_check(
        self,
        population: Population,
        *,
        cache: ResultCachePort | None = None,
    ) -> None:
        """Run check() and raise on ERROR violations.

        Raises:
            ArchitectureViolationError: If any ERROR violation found
        """
        errors = tuple(v for v in self.check(population, cache=cache) if v.is_error)
        if errors:
            raise ArchitectureViolationError(errors)


def rule_identity(rule: RuleProtocol) -> str | None:
    """Cache identity of any rule; rules outside BaseRule use type and description."""
    if isinstance(rule, BaseRule):
        return rule.cache_identity
    return f"{type(rule).__qualname__}|{rule.description}"
