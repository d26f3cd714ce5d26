"""pytest fixtures for architecture testing.

Provides configuration, cache, population and engine fixtures.
User overrides arch_population in their conftest.py.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from archguard.application.services.rule_engine import RuleEngine
from archguard.application.validators.layered_architecture import (
    LayeredArchitecture,
    layered_architecture_from_config,
)
from archguard.domain.model.configuration import ArchGuardConfig
from archguard.domain.model.population import Population
from archguard.infrastructure.cache.manager import CacheManager
from archguard.infrastructure.config.pyproject import load_config

CONFIG_FILE_OPTION = "archguard_config_file"
DEFAULT_CONFIG_FILE = "pyproject.toml"


def _get_ini_value(config: pytest.Config, name: str, default: str) -> str:
    """Get ini value from pytest config with fallback.

    Args:
        config: pytest Config object
        name: ini option name
        default: default value if not set

    Returns:
        String value of ini option
    """
    value = config.getini(name)
    if value:
        return str(value)
    return default


def load_project_config(root_dir: Path, config_file: str = DEFAULT_CONFIG_FILE) -> ArchGuardConfig:
    """Configuration from root_dir/config_file, defaults if the file is absent.

    Raises:
        ConfigurationError: If the file exists but is malformed
    """
    path = root_dir / config_file
    if not path.is_file():
        return ArchGuardConfig()
    return load_config(path)


@pytest.fixture(scope="session")
def arch_config(request: pytest.FixtureRequest) -> ArchGuardConfig:
    """[tool.archguard] configuration of the project under test.

    Reads archguard_config_file (default: pyproject.toml) relative to
    rootdir. Missing file or missing section gives the defaults.

    Raises:
        ConfigurationError: If the section is malformed
    """
    config_file = _get_ini_value(request.config, CONFIG_FILE_OPTION, DEFAULT_CONFIG_FILE)
    return load_project_config(Path(request.config.rootpath), config_file)


@pytest.fixture(scope="session")
def arch_cache(arch_config: ArchGuardConfig) -> CacheManager:
    """Session cache sized by arch_config.cache."""
    return CacheManager(arch_config.cache)


@pytest.fixture(scope="session")
def arch_population() -> Population:
    """Classes under test.

    User overrides this fixture in their conftest.py, typically with
    PopulationLoader(parser, arch_cache).load(paths).

    Returns:
        Empty Population
    """
    return Population()


@pytest.fixture(scope="session")
def arch_engine(arch_cache: CacheManager) -> RuleEngine:
    """Rule engine sharing the session cache."""
    return RuleEngine(arch_cache)


@pytest.fixture(scope="session")
def arch_layers(arch_config: ArchGuardConfig) -> LayeredArchitecture:
    """Layered architecture declared in [tool.archguard].

    Skips the requesting test when no layers are configured.
    """
    if not arch_config.has_layers():
        pytest.skip("no [tool.archguard.layers] configured")
    return layered_architecture_from_config(arch_config)
