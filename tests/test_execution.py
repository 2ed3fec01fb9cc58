import asyncio
from typing import Any

import pytest
from ariadne import gql

from semibricks.bricks.enumeration import EnumValue
from semibricks.errors import InvalidFieldError, SchemaValidationError
from semibricks.factory import SemiBrickFactory
from semibricks.fields import field, input_field

PERSON_QUERY = gql(
    """
    query Person($id: String!) {
        person(id: $id) {
            id
            name
        }
    }
    """
)


def test_person_query(person_factory: SemiBrickFactory) -> None:
    result = person_factory.assemble_schema().execute_sync('{ person(id: "1") { name } }')

    assert result.errors is None
    assert result.data == {"person": {"name": "Ann"}}


def test_person_query_with_variables(person_factory: SemiBrickFactory) -> None:
    result = person_factory.assemble_schema().execute_sync(PERSON_QUERY, variables={"id": "42"})

    assert result.data == {"person": {"id": "42", "name": "Ann"}}


def test_async_resolvers(factory: SemiBrickFactory) -> None:
    async def resolve_greeting(_source: Any, args: dict[str, Any], _context: Any) -> str:
        await asyncio.sleep(0)
        return f"Hello, {args['name']}!"

    factory.add_query_fields(
        {"greeting": field(factory.string, args={"name": factory.string}, resolve=resolve_greeting)}
    )

    result = asyncio.run(factory.assemble_schema().execute('{ greeting(name: "Ann") }'))

    assert result.errors is None
    assert result.data == {"greeting": "Hello, Ann!"}


def test_deferred_values_are_called_by_pass_through(factory: SemiBrickFactory) -> None:
    counter = factory.object_type("Counter", {"value": factory.int, "label": factory.string.nullable})
    factory.add_query_fields(
        {"counter": field(counter, resolve=lambda _source, _args, _context: {"value": lambda: 3, "label": None})}
    )

    result = factory.assemble_schema().execute_sync("{ counter { value label } }")

    assert result.data == {"counter": {"value": 3, "label": None}}


def test_object_sources_are_read_by_attribute(factory: SemiBrickFactory) -> None:
    class Point:
        x = 1

        def y(self) -> int:
            return 2

    point = factory.object_type("Point", {"x": factory.int, "y": factory.int})
    factory.add_query_fields({"origin": field(point, resolve=lambda _source, _args, _context: Point())})

    result = factory.assemble_schema().execute_sync("{ origin { x y } }")

    assert result.data == {"origin": {"x": 1, "y": 2}}


def test_enum_arguments_and_results(factory: SemiBrickFactory) -> None:
    membership = factory.enum(
        "Membership",
        {"free": None, "paid": EnumValue(description="Paying member"), "legacy": EnumValue(deprecation_reason="Gone")},
    )
    factory.add_query_fields(
        {
            "upgrade": field(
                membership,
                args={"from": membership},
                resolve=lambda _source, args, _context: "paid" if args["from"] == "free" else args["from"],
            )
        }
    )

    assembled = factory.assemble_schema()
    result = assembled.execute_sync("{ upgrade(from: free) }")

    assert result.errors is None
    assert result.data == {"upgrade": "paid"}
    assert membership.values == {"free": "free", "paid": "paid", "legacy": "legacy"}
    assert '"""Paying member"""' in assembled.print_schema()


def test_empty_enum_is_rejected(factory: SemiBrickFactory) -> None:
    with pytest.raises(ValueError, match="at least one value"):
        factory.enum("Nothing", [])


def test_enum_values_cannot_be_a_string(factory: SemiBrickFactory) -> None:
    with pytest.raises(TypeError, match="not a string"):
        factory.enum("Letters", "abc")  # type: ignore[arg-type]

    assert "Letters" not in factory.semi_bricks


def test_input_objects_with_lists(factory: SemiBrickFactory) -> None:
    tag = factory.input_object("TagInput", {"name": factory.string, "weight": input_field(factory.int, default_value=1)})
    search = factory.input_object(
        "SearchInput",
        {"text": factory.string.nullable, "tags": factory.list_of(tag).non_nullable},
    )
    factory.add_query_fields(
        {
            "search": field(
                factory.list_of(factory.string).non_nullable,
                args={"filter": search},
                resolve=lambda _source, args, _context: [
                    f"{tag['name']}:{tag['weight']}" for tag in args["filter"]["tags"]
                ],
            )
        }
    )

    result = factory.assemble_schema().execute_sync(
        '{ search(filter: {tags: [{name: "a"}, {name: "b", weight: 5}]}) }'
    )

    assert result.errors is None
    assert result.data == {"search": ["a:1", "b:5"]}


def test_context_getter_supplies_default_context() -> None:
    factory = SemiBrickFactory(context_getter=lambda: {"user": "ann"})
    factory.add_query_fields(
        {"whoami": field(factory.string, resolve=lambda _source, _args, context: context["user"])}
    )
    assembled = factory.assemble_schema()

    assert assembled.execute_sync("{ whoami }").data == {"whoami": "ann"}
    assert assembled.execute_sync("{ whoami }", context={"user": "bob"}).data == {"whoami": "bob"}


def test_custom_scalar(factory: SemiBrickFactory) -> None:
    upper = factory.scalar(
        "Upper",
        serialize=lambda value: str(value).upper(),
        parse_value=lambda value: str(value).lower(),
        description="Shouted text",
    )
    factory.add_query_fields(
        {"echo": field(upper, args={"text": upper}, resolve=lambda _source, args, _context: args["text"] + "!")}
    )

    assembled = factory.assemble_schema()
    result = assembled.execute_sync("query Echo($text: Upper!) { echo(text: $text) }", variables={"text": "Hi"})

    assert result.errors is None
    assert result.data == {"echo": "HI!"}
    assert "scalar Upper" in assembled.print_schema()


def test_add_field_resolvers(factory: SemiBrickFactory) -> None:
    person = factory.object_type("Person", {"first": factory.string, "full": factory.string})
    person.add_field_resolvers({"full": lambda source, _args, _context: f"{source['first']} Smith"})
    factory.add_query_fields({"me": field(person, resolve=lambda _source, _args, _context: {"first": "Ann"})})

    result = factory.assemble_schema().execute_sync("{ me { first full } }")

    assert result.data == {"me": {"first": "Ann", "full": "Ann Smith"}}


def test_add_field_resolvers_rejects_unknown_field(factory: SemiBrickFactory) -> None:
    person = factory.object_type("Person", {"first": factory.string})

    with pytest.raises(InvalidFieldError, match="Person.last: no such field"):
        person.add_field_resolvers({"last": lambda _source, _args, _context: "Smith"})


def test_add_field_resolvers_after_fields_were_read(factory: SemiBrickFactory) -> None:
    person = factory.object_type("Person", {"first": factory.string})
    assert person.fields["first"].resolve is None

    person.add_field_resolvers({"first": lambda _source, _args, _context: "Ann"})

    assert person.fields["first"].resolve is not None


def test_add_field_resolvers_after_failed_assembly(factory: SemiBrickFactory) -> None:
    person = factory.object_type("Person", {"name": factory.string})
    with pytest.raises(SchemaValidationError):
        factory.assemble_schema()

    person.add_field_resolvers({"name": lambda source, _args, _context: source["name"].title()})
    factory.add_query_fields({"me": field(person, resolve=lambda _source, _args, _context: {"name": "ann"})})

    result = factory.assemble_schema().execute_sync("{ me { name } }")

    assert result.errors is None
    assert result.data == {"me": {"name": "Ann"}}


class TestFieldShapes:
    def test_input_object_cannot_be_an_output(self, factory: SemiBrickFactory) -> None:
        search = factory.input_object("SearchInput", {"text": factory.string})
        factory.add_query_fields({"search": search})

        with pytest.raises(InvalidFieldError, match="Query.search: input_object 'SearchInput'"):
            factory.assemble_schema()

    def test_object_cannot_be_an_argument(self, factory: SemiBrickFactory) -> None:
        person = factory.object_type("Person", {"name": factory.string})
        factory.add_query_fields({"find": field(factory.string, args={"who": person})})

        with pytest.raises(InvalidFieldError, match=r"Query.find\(who\): object 'Person'"):
            factory.assemble_schema()

    def test_object_cannot_be_an_input_field(self, factory: SemiBrickFactory) -> None:
        person = factory.object_type("Person", {"name": factory.string})
        factory.input_object("Wrapper", {"person": person})
        factory.add_query_fields({"name": factory.string})

        with pytest.raises(InvalidFieldError, match="Wrapper.person"):
            factory.assemble_schema()

    def test_input_field_cannot_be_an_output_field(self, factory: SemiBrickFactory) -> None:
        factory.add_query_fields({"name": input_field(factory.string)})

        with pytest.raises(InvalidFieldError, match="InputField cannot be used as an output field"):
            factory.assemble_schema()

    def test_required_input_without_default_cannot_be_deprecated(self, factory: SemiBrickFactory) -> None:
        factory.input_object("Filter", {"text": input_field(factory.string, deprecation_reason="Use query")})
        factory.add_query_fields({"name": factory.string})

        with pytest.raises(InvalidFieldError, match="cannot be deprecated"):
            factory.assemble_schema()

    def test_optional_input_may_be_deprecated(self, factory: SemiBrickFactory) -> None:
        filter_input = factory.input_object(
            "Filter",
            {
                "text": input_field(factory.string.nullable, deprecation_reason="Use query"),
                "query": factory.string.nullable,
            },
        )
        factory.add_query_fields({"find": field(factory.string.nullable, args={"filter": filter_input.nullable})})

        sdl = factory.assemble_schema().print_schema()

        assert 'text: String @deprecated(reason: "Use query")' in sdl
