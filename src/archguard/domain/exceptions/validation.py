"""Rule validation exceptions."""

from archguard.domain.exceptions.base import ArchGuardError


class RuleValidationError(ArchGuardError):
    """Error in rule definition, raised at construction time.

    Attributes:
        rule_name: Name of invalid rule (must not be empty)
        reason: Why rule is invalid (must not be empty)
    """

    def __init__(self, rule_name: str, reason: str) -> None:
        # FAIL-FIRST validation
        if not rule_name:
            raise ValueError("rule_name must not be empty")
        if not reason:
            raise ValueError("reason must not be empty")

        self.rule_name = rule_name
        self.reason = reason
        super().__init__(f"Invalid rule '{rule_name}': {reason}")


class LayerNotDefinedError(RuleValidationError):
    """Access rule references a layer that was never defined.

    Attributes:
        layer: Undefined layer name
        defined: Layers defined so far, declaration order
    """

    def __init__(self, layer: str, defined: tuple[str, ...]) -> None:
        if not layer:
            raise ValueError("layer must not be empty")

        self.layer = layer
        self.defined = defined
        known = ", ".join(defined) if defined else "none"
        super().__init__(
            "layered_architecture",
            f"layer '{layer}' is not defined (defined: {known})",
        )


class LayerOverlapWarning(UserWarning):
    """Two layers have patterns that can match the same module.

    The first declared layer wins for such modules.
    """
