"""Reusable class predicates."""

from archguard.domain.predicates.base import ClassPredicate
from archguard.domain.predicates.class_predicates import (
    combine,
    extends,
    has_name_ending_with,
    has_name_matching,
    has_name_starting_with,
    has_simple_name,
    implements,
    is_abstract,
    is_annotated_with,
    is_assignable_to,
    is_interface,
    negate,
    resides_in_any_package,
    resides_in_package,
)
from archguard.domain.predicates.package import (
    matches_package,
    matches_package_segments,
    module_contains,
)

__all__ = [
    "ClassPredicate",
    "combine",
    "extends",
    "has_name_ending_with",
    "has_name_matching",
    "has_name_starting_with",
    "has_simple_name",
    "implements",
    "is_abstract",
    "is_annotated_with",
    "is_assignable_to",
    "is_interface",
    "matches_package",
    "matches_package_segments",
    "module_contains",
    "negate",
    "resides_in_any_package",
    "resides_in_package",
]
