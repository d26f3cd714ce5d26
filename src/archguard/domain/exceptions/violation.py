"""Architecture violation exception."""

from __future__ import annotations

from typing import TYPE_CHECKING

from archguard.domain.exceptions.base import ArchGuardError

if TYPE_CHECKING:
    from archguard.domain.model.violation import Violation


class ArchitectureViolationError(ArchGuardError):
    """Architecture rules violated.

    Raised only by explicit assert helpers, never by check().

    Attributes:
        violations: All found violations
    """

    def __init__(self, violations: tuple[Violation, ...]) -> None:
        if not violations:
            raise ValueError("ArchitectureViolationError requires at least one violation")

        self.violations = violations

        lines = [f"Found {len(violations)} architecture violation(s):"]
        lines.extend(str(v) for v in violations)
        super().__init__("\n".join(lines))
