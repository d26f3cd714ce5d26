"""Class predicates.

Factory functions returning pure ClassEntity -> bool closures.
Shared by the fluent DSL filters, DSL assertions and Population helpers.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from archguard.domain.model.enums import Combinator
from archguard.domain.predicates.package import matches_package

if TYPE_CHECKING:
    from collections.abc import Sequence

    from archguard.domain.model.class_entity import ClassEntity
    from archguard.domain.predicates.base import ClassPredicate


def _strip_at(name: str) -> str:
    return name[1:] if name.startswith("@") else name


def resides_in_package(pattern: str) -> ClassPredicate:
    """Create predicate: class module path or file path contains package.

    Args:
        pattern: Package pattern, dots or slashes

    Returns:
        Predicate function

    Raises:
        ValueError: If pattern is empty
    """
    if not pattern:
        raise ValueError("package pattern must not be empty")

    def predicate(cls: ClassEntity) -> bool:
        return matches_package(cls, pattern)

    return predicate


def resides_in_any_package(*patterns: str) -> ClassPredicate:
    """Create predicate: class resides in at least one package.

    Raises:
        ValueError: If no patterns given or any pattern is empty
    """
    if not patterns:
        raise ValueError("at least one package pattern required")
    if not all(patterns):
        raise ValueError("package pattern must not be empty")

    def predicate(cls: ClassEntity) -> bool:
        return any(matches_package(cls, p) for p in patterns)

    return predicate


def is_annotated_with(decorator: str) -> ClassPredicate:
    """Create predicate: class carries decorator (exact name, "@" optional).

    Args:
        decorator: Decorator name, e.g. "dataclass" or "@injectable"

    Returns:
        Predicate function
    """
    name = _strip_at(decorator)
    if not name:
        raise ValueError("decorator name must not be empty")

    def predicate(cls: ClassEntity) -> bool:
        return name in cls.decorator_names

    return predicate


def has_simple_name(name: str) -> ClassPredicate:
    """Create predicate: class name equals name."""

    def predicate(cls: ClassEntity) -> bool:
        return cls.name == name

    return predicate


def has_name_matching(pattern: str | re.Pattern[str]) -> ClassPredicate:
    """Create predicate: regex search over class name.

    Args:
        pattern: Regex source or compiled pattern (search semantics,
            anchor with ^...$ for a full match)

    Returns:
        Predicate function
    """
    compiled = re.compile(pattern) if isinstance(pattern, str) else pattern

    def predicate(cls: ClassEntity) -> bool:
        return compiled.search(cls.name) is not None

    return predicate


def has_name_ending_with(suffix: str) -> ClassPredicate:
    """Create predicate: class name ends with suffix."""

    def predicate(cls: ClassEntity) -> bool:
        return cls.name.endswith(suffix)

    return predicate


def has_name_starting_with(prefix: str) -> ClassPredicate:
    """Create predicate: class name starts with prefix."""

    def predicate(cls: ClassEntity) -> bool:
        return cls.name.startswith(prefix)

    return predicate


def is_assignable_to(type_name: str) -> ClassPredicate:
    """Create predicate: class is type_name or extends/implements it.

    Only direct supertypes are considered: references are not resolved.
    """

    def predicate(cls: ClassEntity) -> bool:
        return cls.name == type_name or type_name in cls.supertypes

    return predicate


def implements(interface: str) -> ClassPredicate:
    """Create predicate: class directly implements interface."""

    def predicate(cls: ClassEntity) -> bool:
        return interface in cls.implements

    return predicate


def extends(base: str) -> ClassPredicate:
    """Create predicate: class directly extends base."""

    def predicate(cls: ClassEntity) -> bool:
        return base in cls.extends

    return predicate


def is_interface() -> ClassPredicate:
    """Create predicate: class is an interface/Protocol."""

    def predicate(cls: ClassEntity) -> bool:
        return cls.is_interface

    return predicate


def is_abstract() -> ClassPredicate:
    """Create predicate: class is abstract."""

    def predicate(cls: ClassEntity) -> bool:
        return cls.is_abstract

    return predicate


def negate(inner: ClassPredicate) -> ClassPredicate:
    """Create predicate: logical NOT of inner."""

    def predicate(cls: ClassEntity) -> bool:
        return not inner(cls)

    return predicate


def combine(predicates: Sequence[ClassPredicate], combinator: Combinator) -> ClassPredicate:
    """Combine predicates with one combinator.

    AND keeps a class iff every predicate holds, OR iff any holds.
    No predicates selects every class.

    Args:
        predicates: Accumulated predicates
        combinator: AND or OR

    Returns:
        Combined predicate
    """
    frozen = tuple(predicates)
    if not frozen:
        return lambda _cls: True
    if combinator is Combinator.OR:
        return lambda cls: any(p(cls) for p in frozen)
    return lambda cls: all(p(cls) for p in frozen)
