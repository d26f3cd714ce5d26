"""Tests for domain/model/violation.py."""

import pytest

from archguard.domain.model.enums import Severity
from archguard.domain.model.location import Location
from archguard.domain.model.violation import Violation


class TestViolationValidation:
    """Tests for Violation FAIL-FIRST validation."""

    def test_empty_rule_raises(self) -> None:
        with pytest.raises(ValueError, match="rule must not be empty"):
            Violation(rule="", message="m")

    def test_empty_message_raises(self) -> None:
        with pytest.raises(ValueError, match="message must not be empty"):
            Violation(rule="r", message="")


class TestViolationFormatting:
    """Tests for position and __str__."""

    def test_defaults(self) -> None:
        violation = Violation(rule="r", message="m")
        assert violation.severity is Severity.ERROR
        assert violation.is_error is True
        assert violation.position == ""

    def test_position_with_location(self) -> None:
        violation = Violation(rule="r", message="m", file_path="/src/a.py", location=Location(3, 1))
        assert violation.position == "/src/a.py:3:1"

    def test_position_file_only(self) -> None:
        assert Violation(rule="r", message="m", file_path="/src/a.py").position == "/src/a.py"

    def test_str_full(self) -> None:
        violation = Violation(
            rule="Classes should not form cyclic dependencies",
            message="Cyclic dependency detected: A -> B -> A",
            file_path="/src/a.py",
            severity=Severity.WARNING,
            expected="no dependency cycles",
            actual="cycle A -> B -> A",
        )
        assert str(violation) == (
            "[WARNING] Classes should not form cyclic dependencies: "
            "Cyclic dependency detected: A -> B -> A\n"
            "  at /src/a.py\n"
            "  expected: no dependency cycles\n"
            "  actual: cycle A -> B -> A"
        )

    def test_str_minimal(self) -> None:
        assert str(Violation(rule="r", message="m")) == "[ERROR] r: m"
