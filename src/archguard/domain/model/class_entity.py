"""Class entity: one analyzed class, interface or function unit."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from archguard.domain.model.enums import NodeKind

if TYPE_CHECKING:
    from archguard.domain.model.decorator import Decorator
    from archguard.domain.model.location import Location
    from archguard.domain.model.member import Method, Property


@dataclass(frozen=True, slots=True)
class ClassEntity:
    """Analyzed class, produced by an external parser or a test builder.

    Immutable after creation. The engine never mutates entities.

    Attributes:
        name: Simple identifier
        module_path: Logical module path used for pattern matching
            (e.g. "myapp.services.user")
        file_path: Source file location
        decorators: Applied decorators in source order
        extends: Base type names (references, not resolved)
        implements: Implemented interface/protocol names
        dependencies: Referenced type names. Duplicates are kept:
            multiplicity-sensitive rules rely on them.
        is_abstract: Abstract class
        is_interface: Interface/Protocol
        methods: Methods
        properties: Attributes/fields
        is_function: Module-level function unit instead of a class
        is_exported: Part of the module's public surface
        location: Position of the definition in file_path
    """

    name: str
    module_path: str
    file_path: str
    decorators: tuple[Decorator, ...] = ()
    extends: tuple[str, ...] = ()
    implements: tuple[str, ...] = ()
    dependencies: tuple[str, ...] = ()
    is_abstract: bool = False
    is_interface: bool = False
    methods: tuple[Method, ...] = ()
    properties: tuple[Property, ...] = ()
    is_function: bool = False
    is_exported: bool = True
    location: Location | None = None

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if not self.name:
            raise ValueError("class name must not be empty")
        if not self.file_path:
            raise ValueError(f"file_path must not be empty for class '{self.name}'")
        if self.is_interface and self.is_function:
            raise ValueError(f"'{self.name}' cannot be both interface and function")

    @property
    def kind(self) -> NodeKind:
        """Node kind derived from flags."""
        if self.is_interface:
            return NodeKind.INTERFACE
        if self.is_function:
            return NodeKind.FUNCTION
        return NodeKind.CLASS

    @property
    def node_id(self) -> str:
        """Synthetic graph id: kind:module:name."""
        return f"{self.kind.label}:{self.module_path}:{self.name}"

    @property
    def qualified_name(self) -> str:
        """module_path.name, or name when module_path is empty."""
        if not self.module_path:
            return self.name
        return f"{self.module_path}.{self.name}"

    @property
    def decorator_names(self) -> tuple[str, ...]:
        """Decorator names in source order."""
        return tuple(d.name for d in self.decorators)

    @property
    def supertypes(self) -> tuple[str, ...]:
        """extends followed by implements."""
        return (*self.extends, *self.implements)
