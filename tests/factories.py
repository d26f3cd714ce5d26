"""Test factories for creating domain objects.

Centralized factory functions to avoid duplication across test modules.
All factories follow the same pattern: accept simplified parameters,
return fully constructed domain objects.
"""

from pathlib import Path

from archguard.domain.model.class_entity import ClassEntity
from archguard.domain.model.decorator import Decorator
from archguard.domain.model.location import Location
from archguard.domain.model.member import Method, Property, visibility_of
from archguard.domain.model.population import Population
from archguard.domain.ports.entity_parser import EntityParserPort

# Default test file path - consistent across all tests
DEFAULT_TEST_FILE = "/test/file.py"


def make_class(
    name: str,
    module_path: str = "myapp",
    file_path: str | None = None,
    dependencies: tuple[str, ...] = (),
    decorators: tuple[str, ...] = (),
    extends: tuple[str, ...] = (),
    implements: tuple[str, ...] = (),
    methods: tuple[str, ...] = (),
    properties: tuple[Property, ...] = (),
    is_abstract: bool = False,
    is_interface: bool = False,
    line: int | None = None,
) -> ClassEntity:
    """Create a ClassEntity for tests.

    Args:
        name: Simple class name
        module_path: Dotted module path (default "myapp")
        file_path: Source file. Derived from module_path if None.
        dependencies: Raw dependency names
        decorators: Decorator names
        extends: Base class names
        implements: Interface names
        methods: Method names (visibility from naming convention)
        properties: Properties
        is_abstract: Abstract class flag
        is_interface: Interface flag
        line: Definition line (no location if None)

    Returns:
        ClassEntity instance
    """
    if file_path is None:
        file_path = f"/src/{module_path.replace('.', '/')}.py" if module_path else DEFAULT_TEST_FILE
    return ClassEntity(
        name=name,
        module_path=module_path,
        file_path=file_path,
        decorators=tuple(Decorator(d) for d in decorators),
        extends=extends,
        implements=implements,
        dependencies=dependencies,
        is_abstract=is_abstract,
        is_interface=is_interface,
        methods=tuple(Method(m, visibility=visibility_of(m)) for m in methods),
        properties=properties,
        location=Location(line) if line is not None else None,
    )


def make_population(*classes: ClassEntity) -> Population:
    """Create a Population from classes, keeping order."""
    return Population(classes)


def make_layered_population() -> Population:
    """Controller/Service/Repository/Model application without violations.

    Controllers -> Services -> Repositories -> Models.
    """
    return make_population(
        make_class(
            "UserController",
            "myapp.controllers.user_controller",
            dependencies=("UserService",),
        ),
        make_class(
            "UserService",
            "myapp.services.user_service",
            dependencies=("UserRepository", "User"),
        ),
        make_class(
            "UserRepository",
            "myapp.repositories.user_repository",
            dependencies=("User", "sqlalchemy.orm.Session"),
        ),
        make_class("User", "myapp.models.user"),
    )


class FakeParser(EntityParserPort):
    """Parser double: returns preset entities per file name and counts calls.

    Files not in the mapping parse to no entities. The file is read
    first, so missing files raise OSError like a real parser.
    """

    def __init__(self, entities: dict[str, tuple[ClassEntity, ...]] | None = None) -> None:
        self._entities = entities or {}
        self.calls: list[Path] = []

    def parse_file(self, path: Path) -> tuple[ClassEntity, ...]:
        self.calls.append(path)
        Path(path).read_bytes()
        return self._entities.get(Path(path).name, ())


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, start: float = 0.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds
