"""Cycle detection rule.

Builds the dependency graph of the checked classes and reports one
violation per distinct cycle, attributed to the first class of the
cycle as discovered. The graph is shared through the rule-result cache
(tier 3) when one is given.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from archguard.application.static_analysis.graph_builder import build_dependency_graph
from archguard.application.validators._base import BaseRule
from archguard.domain.model.dependency_graph import DependencyGraph
from archguard.domain.model.enums import Severity
from archguard.domain.model.violation import Violation
from archguard.infrastructure.cache.fingerprint import graph_key, population_fingerprint

if TYPE_CHECKING:
    from archguard.domain.model.population import Population
    from archguard.domain.ports.rule import ResultCachePort

logger = logging.getLogger(__name__)

NO_CYCLES_DESCRIPTION = "Classes should not form cyclic dependencies"
CYCLES_DESCRIPTION = "Classes should form cyclic dependencies"


def dependency_graph_for(
    population: Population,
    cache: ResultCachePort | None = None,
) -> DependencyGraph:
    """Graph of population, reused from tier 3 when cached.

    A cached graph is only read, never mutated.
    """
    if cache is None:
        return build_dependency_graph(population)
    key = graph_key(population_fingerprint(population))
    cached = cache.get_rule_result(key)
    if isinstance(cached, DependencyGraph):
        return cached
    graph = build_dependency_graph(population)
    cache.set_rule_result(key, graph)
    return graph


def cycle_violations(
    population: Population,
    *,
    rule: str,
    severity: Severity,
    expect_cycles: bool = False,
    cache: ResultCachePort | None = None,
) -> tuple[Violation, ...]:
    """Check the population's dependency graph for cycles.

    Args:
        population: Classes forming the graph
        rule: Rule description stamped on violations
        severity: Severity stamped on violations
        expect_cycles: Invert the check (at least one cycle required)
        cache: Optional tier 3 cache for the graph

    Returns:
        One violation per cycle, or one violation when cycles were
        expected but none exist
    """
    graph = dependency_graph_for(population, cache)
    cycles = graph.find_cycles()

    if expect_cycles:
        if cycles:
            return ()
        return (
            Violation(
                rule=rule,
                message="No cyclic dependencies found, but cycles were expected",
                severity=severity,
                expected="at least one dependency cycle",
                actual="no cycles",
            ),
        )

    by_id = {entity.node_id: entity for entity in population}
    violations: list[Violation] = []
    for cycle in cycles:
        names = " -> ".join(by_id[node_id].name for node_id in cycle)
        first = by_id[cycle[0]]
        violations.append(
            Violation(
                rule=rule,
                message=f"Cyclic dependency detected: {names}",
                file_path=first.file_path,
                severity=severity,
                location=first.location,
                subject=first.name,
                expected="no dependency cycles",
                actual=f"cycle {names}",
            )
        )
    if violations:
        logger.debug("Found %d dependency cycle(s)", len(violations))
    return tuple(violations)


@dataclass(frozen=True, slots=True)
class CycleRule(BaseRule):
    """Whole-population cycle rule.

    Attributes:
        expect_cycles: Require cycles instead of forbidding them
        severity: Severity of produced violations
    """

    expect_cycles: bool = False
    severity: Severity = Severity.ERROR

    @property
    def description(self) -> str:
        """Rule description."""
        return CYCLES_DESCRIPTION if self.expect_cycles else NO_CYCLES_DESCRIPTION

    def check(
        self,
        population: Population,
        *,
        cache: ResultCachePort | None = None,
    ) -> tuple[Violation, ...]:
        """Report every dependency cycle in population."""
        return cycle_violations(
            population,
            rule=self.description,
            severity=self.severity,
            expect_cycles=self.expect_cycles,
            cache=cache,
        )


def no_cycles() -> CycleRule:
    """Rule: the population has no dependency cycles."""
    return CycleRule()
