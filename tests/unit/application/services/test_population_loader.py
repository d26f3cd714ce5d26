"""Tests for application/services/population_loader.py."""

from pathlib import Path

import pytest

from archguard.application.services.population_loader import PopulationLoader
from archguard.domain.exceptions.parsing import ParsingError
from archguard.infrastructure.cache.fingerprint import population_key
from archguard.infrastructure.cache.manager import CacheManager
from tests.factories import FakeParser, make_class


def write_sources(tmp_path: Path, count: int) -> list[Path]:
    paths = []
    for i in range(count):
        path = tmp_path / f"m{i}.py"
        path.write_text(f"class C{i}: ...\n")
        paths.append(path)
    return paths


def parser_for(count: int) -> FakeParser:
    return FakeParser({f"m{i}.py": (make_class(f"C{i}", f"myapp.m{i}"),) for i in range(count)})


class TestPopulationLoaderInit:
    def test_none_parser_raises(self) -> None:
        with pytest.raises(TypeError, match="parser must not be None"):
            PopulationLoader(None)  # type: ignore[arg-type]

    def test_invalid_max_workers_raises(self) -> None:
        with pytest.raises(ValueError, match="max_workers"):
            PopulationLoader(FakeParser(), max_workers=0)


class TestPopulationLoaderLoad:
    """Tests for PopulationLoader.load."""

    def test_input_order_preserved(self, tmp_path: Path) -> None:
        paths = write_sources(tmp_path, 20)
        loader = PopulationLoader(parser_for(20), max_workers=8)

        population = loader.load(paths)

        assert [c.name for c in population] == [f"C{i}" for i in range(20)]

    def test_tier_1_avoids_reparse(self, tmp_path: Path) -> None:
        paths = write_sources(tmp_path, 3)
        parser = parser_for(3)
        cache = CacheManager()
        loader = PopulationLoader(parser, cache)

        loader.load(paths)
        loader.load(paths)

        assert len(parser.calls) == 3
        assert cache.stats().entities.hits == 3

    def test_tier_2_returns_cached_population(self, tmp_path: Path) -> None:
        paths = write_sources(tmp_path, 2)
        parser = parser_for(2)
        cache = CacheManager()
        loader = PopulationLoader(parser, cache)
        key = population_key(tmp_path, include=("*.py",))

        first = loader.load(paths, key=key)
        second = loader.load(paths, key=key)

        assert second is first
        assert cache.stats().populations.hits == 1
        assert len(parser.calls) == 2

    def test_missing_file_raises_parsing_error(self, tmp_path: Path) -> None:
        loader = PopulationLoader(FakeParser())
        with pytest.raises(ParsingError, match="missing.py"):
            loader.load([tmp_path / "missing.py"])

    def test_no_paths(self) -> None:
        assert PopulationLoader(FakeParser()).load([]).is_empty
