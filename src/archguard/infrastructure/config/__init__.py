"""Configuration loading."""

from archguard.infrastructure.config.pyproject import load_config, parse_section

__all__ = ["load_config", "parse_section"]
