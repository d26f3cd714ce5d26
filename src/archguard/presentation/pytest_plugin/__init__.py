"""pytest plugin for archguard.

Provides fixtures for architecture testing:
    arch_config: [tool.archguard] configuration
    arch_cache: Session CacheManager
    arch_population: Classes under test (override in conftest.py)
    arch_engine: RuleEngine sharing arch_cache
    arch_layers: LayeredArchitecture from configuration

Configuration (pytest.ini or pyproject.toml):
    archguard_config_file: TOML file holding [tool.archguard]
        (default: "pyproject.toml")
"""

from __future__ import annotations

from typing import TYPE_CHECKING

# Register fixtures from fixtures module
from archguard.presentation.pytest_plugin.fixtures import (
    CONFIG_FILE_OPTION,
    DEFAULT_CONFIG_FILE,
    arch_cache,
    arch_config,
    arch_engine,
    arch_layers,
    arch_population,
)

if TYPE_CHECKING:
    import pytest

# Export fixtures for pytest discovery
__all__ = [
    "arch_cache",
    "arch_config",
    "arch_engine",
    "arch_layers",
    "arch_population",
]


def pytest_addoption(parser: pytest.Parser) -> None:
    """Register ini options."""
    parser.addini(
        CONFIG_FILE_OPTION,
        help=f"TOML file holding [tool.archguard] (default: {DEFAULT_CONFIG_FILE})",
        default=DEFAULT_CONFIG_FILE,
    )


def pytest_configure(config: pytest.Config) -> None:
    """Configure pytest plugin with markers."""
    config.addinivalue_line(
        "markers",
        "arch: mark test as architecture test",
    )
