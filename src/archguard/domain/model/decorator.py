"""Decorator (annotation) value object."""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Decorator:
    """Annotation applied to a class, method or property.

    Attributes:
        name: Decorator name as written (e.g. "dataclass", "Injectable")
        arguments: Arguments rendered as strings (e.g. ("frozen=True",))
    """

    name: str
    arguments: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if not self.name:
            raise ValueError("decorator name must not be empty")

    def __str__(self) -> str:
        """Format as @name(args)."""
        if not self.arguments:
            return f"@{self.name}"
        return f"@{self.name}({', '.join(self.arguments)})"
