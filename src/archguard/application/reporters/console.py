"""Console reporter: violations (and cache stats) -> rich formatted string."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from io import StringIO
from typing import TYPE_CHECKING

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from archguard.domain.model.enums import Severity

if TYPE_CHECKING:
    from collections.abc import Sequence

    from archguard.domain.model.violation import Violation
    from archguard.infrastructure.cache.manager import CacheStats

_SEVERITY_STYLE = {
    Severity.ERROR: "bold red",
    Severity.WARNING: "yellow",
}


@dataclass(frozen=True, slots=True)
class ConsoleConfig:
    """Configuration for console reporter.

    Attributes:
        max_violations: Max violation rows. None = unlimited.
        group_by_rule: One table per rule instead of one table overall.
        color: Emit ANSI styles.
        width: Console width in characters.
    """

    max_violations: int | None = None
    group_by_rule: bool = False
    color: bool = True
    width: int = 120

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if self.max_violations is not None and self.max_violations < 0:
            raise ValueError(f"max_violations must be >= 0, got {self.max_violations}")
        if self.width < 40:
            raise ValueError(f"width must be >= 40, got {self.width}")


class ConsoleReporter:
    """Console reporter: outputs rich formatted text.

    Output is str, not print(). Caller decides destination.
    """

    def __init__(self, config: ConsoleConfig | None = None) -> None:
        """Initialize reporter.

        Args:
            config: Reporter configuration. Uses defaults if None.
        """
        self._config = config or ConsoleConfig()

    def report(
        self,
        violations: Sequence[Violation],
        stats: CacheStats | None = None,
    ) -> str:
        """Format violations as rich formatted string.

        Args:
            violations: Violations to render, in order
            stats: Optional cache statistics section

        Returns:
            Formatted string
        """
        output = StringIO()
        console = Console(
            file=output,
            force_terminal=self._config.color,
            no_color=not self._config.color,
            width=self._config.width,
        )

        self._render_header(console, violations)

        shown = tuple(violations)
        if self._config.max_violations is not None:
            shown = shown[: self._config.max_violations]

        if shown:
            if self._config.group_by_rule:
                self._render_by_rule(console, shown)
            else:
                console.print(self._violation_table(shown))
                console.print()
        if len(shown) < len(violations):
            console.print(f"[dim]... {len(violations) - len(shown)} more violation(s) hidden[/dim]")
            console.print()

        if stats is not None:
            self._render_stats(console, stats)

        return output.getvalue()

    def _render_header(self, console: Console, violations: Sequence[Violation]) -> None:
        """Render header with summary."""
        console.print()
        console.rule("[bold]ARCHITECTURE CHECK[/bold]")
        console.print()

        counts = Counter(v.severity for v in violations)
        if not violations:
            console.print("[bold green]PASSED[/bold green] no violations")
        else:
            failed = counts[Severity.ERROR] > 0
            status = "[bold red]FAILED[/bold red]" if failed else "[yellow]PASSED[/yellow]"
            console.print(
                f"{status} [bold]Errors:[/bold] {counts[Severity.ERROR]} "
                f"[bold]Warnings:[/bold] {counts[Severity.WARNING]}"
            )
        console.print()

    def _render_by_rule(self, console: Console, violations: tuple[Violation, ...]) -> None:
        """One section per rule, first-seen order."""
        by_rule: dict[str, list[Violation]] = {}
        for violation in violations:
            by_rule.setdefault(violation.rule, []).append(violation)
        for rule, items in by_rule.items():
            console.print(f"[bold]{escape(rule)}[/bold] ({len(items)})")
            console.print(self._violation_table(tuple(items), show_rule=False))
            console.print()

    def _violation_table(
        self,
        violations: tuple[Violation, ...],
        *,
        show_rule: bool = True,
    ) -> Table:
        """Create table of violations."""
        table = Table(show_header=True, header_style="bold", box=None)
        table.add_column("Severity")
        if show_rule:
            table.add_column("Rule", style="dim")
        table.add_column("Location", style="cyan")
        table.add_column("Message")

        for violation in violations:
            severity = violation.severity
            row = [f"[{_SEVERITY_STYLE[severity]}]{severity.name}[/{_SEVERITY_STYLE[severity]}]"]
            if show_rule:
                row.append(escape(violation.rule))
            row.extend([escape(violation.position or "-"), escape(violation.message)])
            table.add_row(*row)
        return table

    def _render_stats(self, console: Console, stats: CacheStats) -> None:
        """Render cache tier counters."""
        console.print("[bold]CACHE[/bold]")
        table = Table(show_header=True, header_style="bold", box=None)
        table.add_column("Tier", style="cyan")
        table.add_column("Hits", justify="right")
        table.add_column("Misses", justify="right")
        table.add_column("Hit rate", justify="right")
        table.add_column("Size", justify="right")
        for name, tier in stats.by_tier():
            table.add_row(
                name,
                str(tier.hits),
                str(tier.misses),
                f"{tier.hit_rate:.1%}",
                str(tier.size),
            )
        console.print(table)
        console.print()
