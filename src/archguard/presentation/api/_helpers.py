"""DRY helpers for DSL selectors and rules.

Internal module - not part of public API.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from typing import TYPE_CHECKING, TypeVar

if TYPE_CHECKING:
    from archguard.domain.model.violation import Violation


T = TypeVar("T")


def execute_checks(
    items: Iterable[T],
    checks: tuple[Callable[[T], Violation | None], ...],
) -> tuple[Violation, ...]:
    """Run checks on items and collect violations.

    Args:
        items: Items to check
        checks: Check functions (return Violation or None)

    Returns:
        Tuple of all violations, item-major order

    Complexity: O(N * C) where N=items, C=checks
    """
    violations: list[Violation] = []
    for item in items:
        for check in checks:
            violation = check(item)
            if violation is not None:
                violations.append(violation)
    return tuple(violations)


def quote_all(values: Iterable[str]) -> str:
    """'a', 'b' style list for descriptions."""
    return ", ".join(f"'{v}'" for v in values)


def join_clauses(clauses: tuple[str, ...], word: str) -> str:
    """Join description clauses with "and"/"or"."""
    return f" {word} ".join(clauses)
