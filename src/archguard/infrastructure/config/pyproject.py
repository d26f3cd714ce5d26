"""Load [tool.archguard] from pyproject.toml.

Example:
    [tool.archguard]
    max_workers = 4

    [tool.archguard.cache]
    max_size = 1000
    ttl_seconds = 300
    eviction = "insertion"      # or "recency"

    [tool.archguard.layers]
    Controllers = ["controllers"]
    Models = ["models"]

    [[tool.archguard.access]]
    layer = "Models"
    may_not = ["Controllers"]    # or may_only = [...]
"""

from __future__ import annotations

import logging
import tomllib
from collections.abc import Mapping
from pathlib import Path
from types import MappingProxyType
from typing import Any

from archguard.domain.exceptions.configuration import ConfigurationError
from archguard.domain.model.configuration import ArchGuardConfig, CacheOptions
from archguard.domain.model.enums import AccessMode, EvictionPolicy
from archguard.domain.model.layer import AccessRule

logger = logging.getLogger(__name__)

_SECTION_KEYS = frozenset({"cache", "layers", "access", "max_workers"})
_CACHE_KEYS = frozenset({"max_size", "ttl_seconds", "eviction", "eviction_fraction"})
_EVICTION = {
    "insertion": EvictionPolicy.INSERTION_ORDER,
    "recency": EvictionPolicy.RECENCY,
}


def load_config(path: Path | str) -> ArchGuardConfig:
    """Read configuration from a pyproject.toml file.

    A file without [tool.archguard] yields the default configuration.

    Args:
        path: pyproject.toml

    Returns:
        Validated configuration

    Raises:
        ConfigurationError: If the file is unreadable, not TOML,
            or the section is malformed
    """
    path = Path(path)
    try:
        with path.open("rb") as f:
            data = tomllib.load(f)
    except OSError as exc:
        raise ConfigurationError(path, f"cannot read file: {exc}") from exc
    except tomllib.TOMLDecodeError as exc:
        raise ConfigurationError(path, f"invalid TOML: {exc}") from exc

    section = data.get("tool", {}).get("archguard")
    if section is None:
        logger.debug("No [tool.archguard] in %s, using defaults", path)
        return ArchGuardConfig()
    return parse_section(section, path)


def parse_section(section: Mapping[str, Any], path: Path) -> ArchGuardConfig:
    """Build configuration from an already parsed [tool.archguard] table.

    Raises:
        ConfigurationError: If the table is malformed
    """
    if not isinstance(section, Mapping):
        raise ConfigurationError(path, "[tool.archguard] must be a table")
    unknown = sorted(set(section) - _SECTION_KEYS)
    if unknown:
        raise ConfigurationError(path, f"unknown keys in [tool.archguard]: {', '.join(unknown)}")

    try:
        return ArchGuardConfig(
            cache=_parse_cache(section.get("cache", {}), path),
            layers=_parse_layers(section.get("layers", {}), path),
            access_rules=_parse_access(section.get("access", []), path),
            max_workers=section.get("max_workers"),
        )
    except ConfigurationError:
        raise
    except (TypeError, ValueError) as exc:
        raise ConfigurationError(path, str(exc)) from exc


def _parse_cache(table: Any, path: Path) -> CacheOptions:
    if not isinstance(table, Mapping):
        raise ConfigurationError(path, "[tool.archguard.cache] must be a table")
    unknown = sorted(set(table) - _CACHE_KEYS)
    if unknown:
        raise ConfigurationError(path, f"unknown cache keys: {', '.join(unknown)}")

    eviction = table.get("eviction", "insertion")
    if eviction not in _EVICTION:
        raise ConfigurationError(
            path, f"cache.eviction must be one of {sorted(_EVICTION)}, got {eviction!r}"
        )
    defaults = CacheOptions()
    return CacheOptions(
        max_size=table.get("max_size", defaults.max_size),
        ttl_seconds=float(table.get("ttl_seconds", defaults.ttl_seconds)),
        eviction_fraction=float(table.get("eviction_fraction", defaults.eviction_fraction)),
        eviction_policy=_EVICTION[eviction],
    )


def _parse_layers(table: Any, path: Path) -> Mapping[str, tuple[str, ...]]:
    if not isinstance(table, Mapping):
        raise ConfigurationError(path, "[tool.archguard.layers] must be a table")
    layers: dict[str, tuple[str, ...]] = {}
    for name, patterns in table.items():
        if isinstance(patterns, str):
            patterns = [patterns]
        if not isinstance(patterns, list) or not all(isinstance(p, str) for p in patterns):
            raise ConfigurationError(path, f"layer '{name}' must map to a list of strings")
        if not patterns:
            raise ConfigurationError(path, f"layer '{name}' must have at least one pattern")
        if not all(patterns):
            raise ConfigurationError(path, f"layer '{name}' has an empty pattern")
        layers[name] = tuple(patterns)
    return MappingProxyType(layers)


def _parse_access(items: Any, path: Path) -> tuple[AccessRule, ...]:
    if not isinstance(items, list):
        raise ConfigurationError(path, "[[tool.archguard.access]] must be an array of tables")
    rules: list[AccessRule] = []
    for index, item in enumerate(items):
        if not isinstance(item, Mapping) or "layer" not in item:
            raise ConfigurationError(path, f"access rule #{index + 1} needs a 'layer' key")
        has_only = "may_only" in item
        has_not = "may_not" in item
        if has_only == has_not:
            raise ConfigurationError(
                path, f"access rule #{index + 1} needs exactly one of 'may_only' or 'may_not'"
            )
        targets = item["may_only"] if has_only else item["may_not"]
        if isinstance(targets, str):
            targets = [targets]
        rules.append(
            AccessRule(
                source=item["layer"],
                targets=tuple(targets),
                mode=AccessMode.MAY_ONLY if has_only else AccessMode.MAY_NOT,
            )
        )
    return tuple(rules)
