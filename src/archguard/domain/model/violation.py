"""Rule violation entity."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from archguard.domain.model.enums import Severity

if TYPE_CHECKING:
    from archguard.domain.model.location import Location


@dataclass(frozen=True, slots=True)
class Violation:
    """One failure of a class (or cycle) to satisfy a rule.

    Created only by rule evaluation, never mutated.

    Attributes:
        rule: Description of the violated rule
        message: Human-readable message
        file_path: File of the offending class ("" when no single file applies)
        severity: ERROR/WARNING
        location: Position in file_path, if known
        subject: What violated (class name, cycle)
        expected: What was expected
        actual: What was found
    """

    rule: str
    message: str
    file_path: str = ""
    severity: Severity = Severity.ERROR
    location: Location | None = None
    subject: str | None = None
    expected: str | None = None
    actual: str | None = None

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if not self.rule:
            raise ValueError("rule must not be empty")
        if not self.message:
            raise ValueError("message must not be empty")

    @property
    def is_error(self) -> bool:
        """True for ERROR severity."""
        return self.severity is Severity.ERROR

    @property
    def position(self) -> str:
        """file:line:column, file, or "" when unknown."""
        if self.location is None:
            return self.file_path
        return f"{self.file_path}:{self.location}"

    def __str__(self) -> str:
        """Format violation for display."""
        lines = [f"[{self.severity.name}] {self.rule}: {self.message}"]
        if self.position:
            lines.append(f"  at {self.position}")
        if self.expected is not None:
            lines.append(f"  expected: {self.expected}")
        if self.actual is not None:
            lines.append(f"  actual: {self.actual}")
        return "\n".join(lines)
