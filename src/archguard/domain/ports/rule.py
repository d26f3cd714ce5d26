"""Rule and result-cache protocols."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from archguard.domain.model.enums import Severity
    from archguard.domain.model.population import Population
    from archguard.domain.model.violation import Violation


class ResultCachePort(Protocol):
    """Rule-result cache (tier 3) as seen by rules.

    Keys are caller-built strings that embed every invalidating input.
    """

    def get_rule_result(self, key: str) -> object | None: ...

    def set_rule_result(self, key: str, value: object) -> None: ...


class RuleProtocol(Protocol):
    """Contract for every rule: fluent, layered, cycle or composite.

    check() never raises for a well-formed population; the empty
    population yields no violations.
    """

    @property
    def description(self) -> str:
        """Stable human-readable identity of the rule."""
        ...

    @property
    def severity(self) -> Severity:
        """Severity stamped on produced violations."""
        ...

    def check(
        self,
        population: Population,
        *,
        cache: ResultCachePort | None = None,
    ) -> tuple[Violation, ...]:
        """Evaluate rule against population."""
        ...
