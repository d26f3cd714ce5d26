"""Tests for domain/model/layer.py."""

import pytest

from archguard.domain.model.enums import AccessMode
from archguard.domain.model.layer import AccessRule, Layer
from tests.factories import make_class


class TestLayer:
    """Tests for Layer membership and overlap."""

    def test_contains_by_substring(self) -> None:
        layer = Layer("Services", ("services",))
        assert layer.contains(make_class("UserService", "myapp.services.user")) is True
        assert layer.contains(make_class("User", "myapp.models.user")) is False

    def test_dotted_pattern(self) -> None:
        layer = Layer("Domain", ("myapp.domain",))
        assert layer.contains_module("myapp.domain.model") is True

    def test_empty_name_raises(self) -> None:
        with pytest.raises(ValueError, match="layer name"):
            Layer("", ("x",))

    def test_no_patterns_raises(self) -> None:
        with pytest.raises(ValueError, match="at least one pattern"):
            Layer("Domain", ())

    def test_empty_pattern_raises(self) -> None:
        with pytest.raises(ValueError, match="empty pattern"):
            Layer("Domain", ("domain", ""))

    def test_overlaps(self) -> None:
        domain = Layer("Domain", ("domain",))
        model = Layer("Model", ("domain.model",))
        assert domain.overlaps(model) == ("domain", "domain.model")

    def test_no_overlap(self) -> None:
        assert Layer("A", ("controllers",)).overlaps(Layer("B", ("models",))) is None


class TestAccessRule:
    """Tests for AccessRule."""

    def test_may_only(self) -> None:
        rule = AccessRule("App", ("Domain",), AccessMode.MAY_ONLY)
        assert rule.is_violated_by("Infra") is True
        assert rule.is_violated_by("Domain") is False

    def test_may_not(self) -> None:
        rule = AccessRule("Domain", ("App",), AccessMode.MAY_NOT)
        assert rule.is_violated_by("App") is True
        assert rule.is_violated_by("Domain") is False

    def test_describe(self) -> None:
        rule = AccessRule("Models", ("Services", "Controllers"), AccessMode.MAY_NOT)
        assert rule.describe() == "Layer 'Models' may not access layers [Services, Controllers]"

    def test_no_targets_raises(self) -> None:
        with pytest.raises(ValueError, match="at least one target"):
            AccessRule("Models", (), AccessMode.MAY_NOT)
