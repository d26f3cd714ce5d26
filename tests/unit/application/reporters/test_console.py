"""Tests for ConsoleReporter.

Tests:
- ConsoleConfig default values and validation
- ConsoleReporter report() output format
- Truncation, grouping and cache statistics sections
"""

import pytest

from archguard.application.reporters.console import ConsoleConfig, ConsoleReporter
from archguard.domain.model.enums import Severity
from archguard.domain.model.violation import Violation
from archguard.infrastructure.cache.manager import CacheManager


def plain() -> ConsoleReporter:
    return ConsoleReporter(ConsoleConfig(color=False))


class TestConsoleConfig:
    """Tests for ConsoleConfig."""

    def test_default_values(self) -> None:
        config = ConsoleConfig()
        assert config.max_violations is None
        assert config.group_by_rule is False
        assert config.color is True
        assert config.width == 120

    def test_negative_max_violations_raises(self) -> None:
        with pytest.raises(ValueError, match="max_violations"):
            ConsoleConfig(max_violations=-1)

    def test_narrow_width_raises(self) -> None:
        with pytest.raises(ValueError, match="width"):
            ConsoleConfig(width=10)


class TestConsoleReporter:
    """Tests for ConsoleReporter.report."""

    def test_returns_string(self) -> None:
        assert isinstance(ConsoleReporter().report(()), str)

    def test_header_and_pass(self) -> None:
        output = plain().report(())
        assert "ARCHITECTURE CHECK" in output
        assert "PASSED no violations" in output

    def test_failed_summary(self) -> None:
        violations = (
            Violation("no-cycles", "cycle A -> B", file_path="/src/a.py"),
            Violation("naming", "bad name", severity=Severity.WARNING),
        )
        output = plain().report(violations)
        assert "FAILED" in output
        assert "Errors: 1" in output
        assert "Warnings: 1" in output
        assert "cycle A -> B" in output
        assert "/src/a.py" in output

    def test_warnings_only_pass(self) -> None:
        output = plain().report((Violation("naming", "bad", severity=Severity.WARNING),))
        assert "PASSED" in output
        assert "FAILED" not in output

    def test_brackets_are_not_markup(self) -> None:
        output = plain().report((Violation("layers", "may not access [App]"),))
        assert "[App]" in output

    def test_truncation(self) -> None:
        violations = tuple(Violation("r", f"message {i}") for i in range(3))
        output = ConsoleReporter(ConsoleConfig(max_violations=1, color=False)).report(violations)
        assert "message 0" in output
        assert "message 2" not in output
        assert "... 2 more violation(s) hidden" in output

    def test_group_by_rule(self) -> None:
        violations = (Violation("rule-a", "one"), Violation("rule-b", "two"))
        output = ConsoleReporter(ConsoleConfig(group_by_rule=True, color=False)).report(violations)
        assert "rule-a (1)" in output
        assert "rule-b (1)" in output

    def test_cache_stats(self) -> None:
        cache = CacheManager()
        cache.set_rule_result("rule:x", ())
        cache.get_rule_result("rule:x")
        cache.get_rule_result("rule:y")

        output = plain().report((), cache.stats())

        assert "CACHE" in output
        assert "entities" in output
        assert "50.0%" in output

    def test_color_disabled_has_no_ansi(self) -> None:
        output = plain().report((Violation("r", "m"),))
        assert "\x1b[" not in output
