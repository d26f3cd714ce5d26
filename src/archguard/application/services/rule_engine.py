"""Rule engine: evaluates rules with the tier 3 result cache.

Example:
    engine = RuleEngine(CacheManager())
    result = engine.evaluate_all(rules, population)
    if not result.passed:
        print(f"Errors: {len(result.errors)}")
"""

from __future__ import annotations

import logging
import time
from collections.abc import Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING

from archguard.application.validators._base import rule_identity
from archguard.domain.exceptions.violation import ArchitectureViolationError
from archguard.domain.model.enums import Severity
from archguard.infrastructure.cache.fingerprint import population_fingerprint, rule_key

if TYPE_CHECKING:
    from archguard.domain.model.population import Population
    from archguard.domain.model.violation import Violation
    from archguard.domain.ports.rule import RuleProtocol
    from archguard.infrastructure.cache.manager import CacheManager

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class EvaluationResult:
    """Outcome of evaluating several rules.

    Attributes:
        violations: All violations, rule order then population order
        rules_evaluated: Number of rules run
        elapsed_ms: Wall time of the evaluation
    """

    violations: tuple[Violation, ...]
    rules_evaluated: int = 0
    elapsed_ms: float = 0.0

    @property
    def errors(self) -> tuple[Violation, ...]:
        """ERROR violations."""
        return tuple(v for v in self.violations if v.severity is Severity.ERROR)

    @property
    def warnings(self) -> tuple[Violation, ...]:
        """WARNING violations."""
        return tuple(v for v in self.violations if v.severity is Severity.WARNING)

    @property
    def passed(self) -> bool:
        """True when there is no ERROR violation (warnings allowed)."""
        return not self.errors


class RuleEngine:
    """Evaluates rules against populations.

    With a cache, a rule result is keyed by (rule identity, severity,
    population fingerprint) and reused until TTL expiry or clearing.
    Rules receive the same cache for their own intermediate results
    (dependency graphs).
    """

    def __init__(self, cache: CacheManager | None = None) -> None:
        """Initialize engine.

        Args:
            cache: Result cache. None disables caching.
        """
        self._cache = cache

    @property
    def cache(self) -> CacheManager | None:
        """Cache used for rule results."""
        return self._cache

    def evaluate(
        self,
        rule: RuleProtocol,
        population: Population,
        *,
        fingerprint: str | None = None,
    ) -> tuple[Violation, ...]:
        """Evaluate one rule, consulting tier 3 first.

        Args:
            rule: Rule to evaluate
            population: Classes to check
            fingerprint: Precomputed population fingerprint

        Returns:
            Violations of rule
        """
        if self._cache is None:
            return rule.check(population)

        identity = rule_identity(rule)
        if identity is None:
            logger.debug("Rule result not cached (custom predicate): %s", rule.description)
            return rule.check(population, cache=self._cache)

        if fingerprint is None:
            fingerprint = population_fingerprint(population)
        key = rule_key(identity, rule.severity, fingerprint)
        cached = self._cache.get_rule_result(key)
        if isinstance(cached, tuple):
            return cached

        violations = rule.check(population, cache=self._cache)
        self._cache.set_rule_result(key, violations)
        return violations

    def evaluate_all(
        self,
        rules: Sequence[RuleProtocol],
        population: Population,
    ) -> EvaluationResult:
        """Evaluate rules in order and aggregate their violations."""
        start = time.perf_counter()
        fingerprint = population_fingerprint(population) if self._cache is not None else None

        violations: list[Violation] = []
        for rule in rules:
            violations.extend(self.evaluate(rule, population, fingerprint=fingerprint))

        result = EvaluationResult(
            violations=tuple(violations),
            rules_evaluated=len(rules),
            elapsed_ms=(time.perf_counter() - start) * 1000,
        )
        logger.info(
            "Evaluated %d rule(s) on %d class(es): %d error(s), %d warning(s)",
            result.rules_evaluated,
            len(population),
            len(result.errors),
            len(result.warnings),
        )
        return result

    def assert_passes(
        self,
        rules: Sequence[RuleProtocol],
        population: Population,
    ) -> EvaluationResult:
        """Evaluate rules and raise on ERROR violations.

        Returns:
            Result (warnings only, or clean)

        Raises:
            ArchitectureViolationError: If any ERROR violation found
        """
        result = self.evaluate_all(rules, population)
        if not result.passed:
            raise ArchitectureViolationError(result.errors)
        return result
