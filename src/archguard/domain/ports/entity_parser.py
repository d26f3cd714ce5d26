"""Entity parser port (interface)."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pathlib import Path

    from archguard.domain.model.class_entity import ClassEntity


class EntityParserPort(ABC):
    """Port for turning one source file into class entities.

    archguard does not ship a parser: an external analyzer (or a test
    double) provides the implementation.
    """

    @abstractmethod
    def parse_file(self, path: Path) -> tuple[ClassEntity, ...]:
        """Parse single source file.

        Args:
            path: Source file

        Returns:
            Entities in source order

        Raises:
            OSError: If file cannot be read
            ParsingError: If file cannot be parsed
        """
        ...
