"""Source position value object."""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Location:
    """Position inside a source file.

    The file itself is carried by the owner (entity or violation),
    so a Location is only the line/column pair.

    Attributes:
        line: Line number (1-based, must be > 0)
        column: Column number (0-based, must be >= 0)
        end_line: End line for multi-line spans
    """

    line: int
    column: int = 0
    end_line: int | None = None

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if self.line <= 0:
            raise ValueError(f"line must be > 0, got {self.line}")
        if self.column < 0:
            raise ValueError(f"column must be >= 0, got {self.column}")
        if self.end_line is not None and self.end_line < self.line:
            raise ValueError(f"end_line ({self.end_line}) must be >= line ({self.line})")

    def __str__(self) -> str:
        """Format as line:column."""
        return f"{self.line}:{self.column}"
