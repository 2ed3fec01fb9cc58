from __future__ import annotations

from collections.abc import Iterator, Mapping
from typing import TYPE_CHECKING, Any

from graphql import GraphQLInputObjectType

from semibricks.bricks.base import SemiBrick, Shape
from semibricks.fields import InputField, resolve_input_fields
from semibricks.thunk import Thunk

if TYPE_CHECKING:
    from semibricks.factory import SemiBrickFactory


class InputObjectBrick(SemiBrick):
    """An input object; its fields accept only scalars, enums, input objects and lists of those."""

    shape = Shape.INPUT_OBJECT

    def __init__(self, name: str, fields: Mapping[str, Any], description: str | None = None) -> None:
        super().__init__(name, description)
        self.raw_fields: dict[str, Any] = dict(fields)
        self._fields = Thunk(lambda: resolve_input_fields(self.name, self.raw_fields))

    @property
    def fields(self) -> dict[str, InputField]:
        return self._fields()

    def references(self) -> Iterator[SemiBrick]:
        for input_field in self.fields.values():
            yield input_field.type.semi_brick

    def realize(self, factory: SemiBrickFactory) -> GraphQLInputObjectType:
        return GraphQLInputObjectType(
            self.name,
            fields=Thunk(
                lambda: {name: input_field.to_graphql_input_field(factory) for name, input_field in self.fields.items()}
            ),
            description=self.description,
        )
