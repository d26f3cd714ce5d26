"""Cached entity parser adapter.

Decorator pattern: wraps EntityParserPort with the tier 1 cache.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from archguard.domain.ports.entity_parser import EntityParserPort
from archguard.infrastructure.cache.fingerprint import file_fingerprint

if TYPE_CHECKING:
    from pathlib import Path

    from archguard.domain.model.class_entity import ClassEntity
    from archguard.infrastructure.cache.manager import CacheManager

logger = logging.getLogger(__name__)


class CachedEntityParser(EntityParserPort):
    """Parser with content-fingerprint caching.

    The file is read once per call: the same fingerprint validates the
    cached entry and tags a freshly parsed result. Unreadable files are
    never cached, so the inner parser sees them (and reports the error).
    """

    def __init__(self, inner: EntityParserPort, cache: CacheManager) -> None:
        """Initialize adapter.

        Args:
            inner: Wrapped parser implementation
            cache: Cache manager (tier 1 is used)

        Raises:
            TypeError: If inner or cache is None
        """
        if inner is None:
            raise TypeError("inner parser must not be None")
        if cache is None:
            raise TypeError("cache must not be None")
        self._inner = inner
        self._cache = cache

    @property
    def inner(self) -> EntityParserPort:
        """Wrapped parser."""
        return self._inner

    def parse_file(self, path: Path) -> tuple[ClassEntity, ...]:
        """Parse with cache lookup.

        Cache hit: cached entities if content fingerprint matches.
        Cache miss: parse with inner parser, cache result.

        Args:
            path: Source file

        Returns:
            Entities (cached or fresh)
        """
        fingerprint = file_fingerprint(path)
        cached = self._cache.get_entities(path, fingerprint)
        if cached is not None:
            return cached

        logger.debug("Parsing %s", path)
        entities = self._inner.parse_file(path)
        if fingerprint is not None:
            self._cache.set_entities(path, entities, fingerprint)
        return entities
