"""Package matching for module paths and raw dependency names.

Two matching modes:

    matches_package           substring match on the module path or file path
                              ("services" matches "myapp.services.user" and
                              also "myapp.my-services-impl")
    matches_package_segments  consecutive path segments, "*" is one segment,
                              "**" any number of segments
                              ("services" matches "myapp.services.user" but
                              not "myapp.my_services")

Dots, slashes and backslashes are all treated as separators.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from archguard.domain.model.class_entity import ClassEntity

_SEPARATORS = re.compile(r"[./\\]+")


def to_path_form(text: str) -> str:
    """Normalize a dotted or backslashed path to slash form."""
    return text.replace("\\", "/").replace(".", "/")


def split_segments(text: str) -> tuple[str, ...]:
    """Split a module path or file path into non-empty segments."""
    return tuple(s for s in _SEPARATORS.split(text) if s)


def matches_package(entity: ClassEntity, pattern: str) -> bool:
    """Check entity resides in package (substring semantics).

    Pattern dots become slashes. Matches when the pattern occurs in the
    module path or in the file path.

    Args:
        entity: Class to test
        pattern: Package pattern (e.g. "services" or "myapp.services")

    Returns:
        True if pattern occurs in module path or file path
    """
    needle = to_path_form(pattern)
    if needle in to_path_form(entity.module_path):
        return True
    return needle in entity.file_path.replace("\\", "/")


def module_contains(module_path: str, pattern: str) -> bool:
    """Substring test of a pattern against a bare module path."""
    return to_path_form(pattern) in to_path_form(module_path)


def matches_package_segments(path: str, pattern: str) -> bool:
    """Check pattern segments appear consecutively in path segments.

    Args:
        path: Module path, file path or raw dependency name
        pattern: Package pattern, "*" = one segment, "**" = any segments

    Returns:
        True if pattern matches a consecutive run of segments
    """
    path_segments = split_segments(path)
    pattern_segments = split_segments(pattern)
    if not pattern_segments:
        return False
    return any(
        _match_from(path_segments, i, pattern_segments, 0) for i in range(len(path_segments))
    )


def _match_from(
    path: tuple[str, ...],
    i: int,
    pattern: tuple[str, ...],
    j: int,
) -> bool:
    """Match pattern[j:] against a prefix of path[i:]."""
    if j == len(pattern):
        return True
    segment = pattern[j]
    if segment == "**":
        return any(_match_from(path, k, pattern, j + 1) for k in range(i, len(path) + 1))
    if i >= len(path):
        return False
    if segment != "*" and segment != path[i]:
        return False
    return _match_from(path, i + 1, pattern, j + 1)
