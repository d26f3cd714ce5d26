"""Configuration loading exceptions."""

from __future__ import annotations

from typing import TYPE_CHECKING

from archguard.domain.exceptions.base import ArchGuardError

if TYPE_CHECKING:
    from pathlib import Path


class ConfigurationError(ArchGuardError, ValueError):
    """Malformed [tool.archguard] configuration.

    Attributes:
        path: Config file
        reason: What is wrong
    """

    def __init__(self, path: Path, reason: str) -> None:
        # FAIL-FIRST: validate required parameters
        if path is None:
            raise TypeError("path must not be None")
        if not reason:
            raise ValueError("reason must be non-empty string")

        self.path = path
        self.reason = reason
        super().__init__(f"Invalid configuration in {path}: {reason}")
