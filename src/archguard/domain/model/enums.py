"""Domain enumerations."""

from enum import Enum, auto


class Visibility(Enum):
    """Member visibility."""

    PUBLIC = auto()
    PROTECTED = auto()  # _name
    PRIVATE = auto()  # __name


class Severity(Enum):
    """Rule violation severity."""

    ERROR = auto()  # check fails
    WARNING = auto()  # check passes, warning shown


class NodeKind(Enum):
    """Kind of analyzed unit. Lowercase name is used in graph node ids."""

    CLASS = auto()
    INTERFACE = auto()
    FUNCTION = auto()
    MODULE = auto()

    @property
    def label(self) -> str:
        """Lowercase label (e.g. "class")."""
        return self.name.lower()


class DependencyType(Enum):
    """Type of dependency edge in the dependency graph."""

    IMPORT = auto()
    INHERITANCE = auto()
    IMPLEMENTATION = auto()
    USAGE = auto()


class Combinator(Enum):
    """Boolean combinator for accumulated filter predicates."""

    AND = auto()
    OR = auto()


class AccessMode(Enum):
    """Layer access rule mode."""

    MAY_ONLY = auto()  # dependencies outside targets are violations
    MAY_NOT = auto()  # dependencies inside targets are violations


class CompositeOperator(Enum):
    """Logical operator for rule composition."""

    AND = auto()
    OR = auto()
    NOT = auto()
    XOR = auto()


class EvictionPolicy(Enum):
    """Cache eviction order.

    INSERTION_ORDER evicts the oldest inserted entries.
    RECENCY moves an entry to the back on every hit (access order).
    """

    INSERTION_ORDER = auto()
    RECENCY = auto()
