from pathlib import Path
from typing import Any

import pytest

from semibricks.bricks.object import ObjectBrick
from semibricks.factory import SemiBrickFactory
from semibricks.fields import field


class TestSchemaData:
    TESTS_DATA_DIR: Path = Path(__file__).parent / "data"
    SAMPLE_SCHEMA: Path = TESTS_DATA_DIR / "sample_schema.py"
    SAMPLE_CONFIG: Path = TESTS_DATA_DIR / "factory_config.yaml"


def resolve_person(_source: Any, args: dict[str, Any], _context: Any) -> dict[str, Any]:
    return {"id": args["id"], "name": "Ann"}


def declare_person(factory: SemiBrickFactory) -> ObjectBrick:
    """Declare ``Person{id: String!, name: String}`` and ``person(id: String!): Person!``."""
    person = factory.object_type(
        "Person",
        {
            "id": factory.string.non_nullable,
            "name": factory.string.nullable,
        },
    )
    factory.add_query_fields(
        {
            "person": field(
                person.non_nullable,
                args={"id": factory.string.non_nullable},
                resolve=resolve_person,
            ),
        }
    )
    return person


@pytest.fixture
def factory() -> SemiBrickFactory:
    return SemiBrickFactory()


@pytest.fixture
def person_factory(factory: SemiBrickFactory) -> SemiBrickFactory:
    declare_person(factory)
    return factory
