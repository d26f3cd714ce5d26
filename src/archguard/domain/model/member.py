"""Class members: methods and properties."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from archguard.domain.model.enums import Visibility

if TYPE_CHECKING:
    from archguard.domain.model.decorator import Decorator


def visibility_of(name: str) -> Visibility:
    """Derive visibility from Python naming convention.

    Dunder names (__init__) are public; __name is private; _name is protected.
    """
    if name.startswith("__") and not name.endswith("__"):
        return Visibility.PRIVATE
    if name.startswith("_") and not name.startswith("__"):
        return Visibility.PROTECTED
    return Visibility.PUBLIC


@dataclass(frozen=True, slots=True)
class Method:
    """Method of an analyzed class.

    Attributes:
        name: Method name
        visibility: PUBLIC/PROTECTED/PRIVATE
        parameters: Parameter names (without self/cls)
        return_type: Return annotation as written, None if absent
        is_static: staticmethod/classmethod
        is_async: async def
        is_abstract: abstractmethod
        decorators: Applied decorators
    """

    name: str
    visibility: Visibility = Visibility.PUBLIC
    parameters: tuple[str, ...] = ()
    return_type: str | None = None
    is_static: bool = False
    is_async: bool = False
    is_abstract: bool = False
    decorators: tuple[Decorator, ...] = ()

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if not self.name:
            raise ValueError("method name must not be empty")

    @property
    def is_constructor(self) -> bool:
        """Is __init__ or __new__."""
        return self.name in ("__init__", "__new__")


@dataclass(frozen=True, slots=True)
class Property:
    """Attribute/field of an analyzed class.

    Attributes:
        name: Attribute name
        visibility: PUBLIC/PROTECTED/PRIVATE
        type_annotation: Annotation as written, None if absent
        is_readonly: Cannot be reassigned (frozen dataclass field, Final, property without setter)
        is_static: Class-level (ClassVar) attribute
        decorators: Applied decorators
    """

    name: str
    visibility: Visibility = Visibility.PUBLIC
    type_annotation: str | None = None
    is_readonly: bool = False
    is_static: bool = False
    decorators: tuple[Decorator, ...] = ()

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if not self.name:
            raise ValueError("property name must not be empty")
