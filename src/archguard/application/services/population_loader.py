"""Population loader: parallel parse with tier 1 and tier 2 caching.

Per-file fingerprinting, cache lookup and parsing run on a thread pool.
Results are joined and reassembled in input order before the
population is returned, so graph building and rule evaluation always
see a complete population.
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import TYPE_CHECKING

from archguard.domain.exceptions.parsing import ParsingError
from archguard.domain.model.population import Population
from archguard.infrastructure.adapters.cached_parser import CachedEntityParser

if TYPE_CHECKING:
    from collections.abc import Sequence
    from pathlib import Path

    from archguard.domain.model.class_entity import ClassEntity
    from archguard.domain.ports.entity_parser import EntityParserPort
    from archguard.infrastructure.cache.manager import CacheManager

logger = logging.getLogger(__name__)


class PopulationLoader:
    """Builds a Population from source files through a parser port."""

    def __init__(
        self,
        parser: EntityParserPort,
        cache: CacheManager | None = None,
        max_workers: int | None = None,
    ) -> None:
        """Initialize loader.

        Args:
            parser: External parser implementation
            cache: Cache manager. Enables tier 1 (per file) and tier 2
                (per key) caching; None parses every time.
            max_workers: Thread pool size. None = executor default.

        Raises:
            TypeError: If parser is None
            ValueError: If max_workers < 1
        """
        if parser is None:
            raise TypeError("parser must not be None")
        if max_workers is not None and max_workers < 1:
            raise ValueError(f"max_workers must be >= 1, got {max_workers}")
        self._cache = cache
        self._max_workers = max_workers
        if cache is not None and not isinstance(parser, CachedEntityParser):
            parser = CachedEntityParser(parser, cache)
        self._parser = parser

    def load(self, paths: Sequence[Path], *, key: str | None = None) -> Population:
        """Parse paths into one population (input order preserved).

        Args:
            paths: Source files
            key: Tier 2 key (see population_key); None skips tier 2

        Returns:
            Population of every parsed entity

        Raises:
            ParsingError: If a file cannot be read or parsed
        """
        if key is not None and self._cache is not None:
            cached = self._cache.get_population(key)
            if cached is not None:
                logger.debug("Population cache hit for %s", key)
                return cached

        with ThreadPoolExecutor(max_workers=self._max_workers) as pool:
            per_file = list(pool.map(self._parse_one, paths))

        population = Population(tuple(entity for entities in per_file for entity in entities))
        logger.info("Loaded %d class(es) from %d file(s)", len(population), len(paths))

        if key is not None and self._cache is not None:
            self._cache.set_population(key, population)
        return population

    def _parse_one(self, path: Path) -> tuple[ClassEntity, ...]:
        try:
            return self._parser.parse_file(path)
        except OSError as exc:
            raise ParsingError(path, str(exc) or type(exc).__name__) from exc
