from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from graphql import GraphQLScalarType

from semibricks.bricks.base import SemiBrick, Shape

if TYPE_CHECKING:
    from semibricks.factory import SemiBrickFactory


class ScalarBrick(SemiBrick):
    """A leaf type with its own serialize/parse functions.

    Built-in scalars pass graphql-core's own scalar object as ``graphql_type`` so the
    schema never holds two types named ``String``.
    """

    shape = Shape.SCALAR

    def __init__(
        self,
        name: str,
        description: str | None = None,
        serialize: Callable[[Any], Any] | None = None,
        parse_value: Callable[[Any], Any] | None = None,
        parse_literal: Callable[..., Any] | None = None,
        specified_by_url: str | None = None,
        graphql_type: GraphQLScalarType | None = None,
    ) -> None:
        super().__init__(name, description)
        self.serialize = serialize
        self.parse_value = parse_value
        self.parse_literal = parse_literal
        self.specified_by_url = specified_by_url
        self._graphql_type = graphql_type

    @classmethod
    def builtin(cls, graphql_type: GraphQLScalarType) -> ScalarBrick:
        return cls(graphql_type.name, description=graphql_type.description, graphql_type=graphql_type)

    @property
    def is_builtin(self) -> bool:
        return self._graphql_type is not None

    def realize(self, factory: SemiBrickFactory) -> GraphQLScalarType:
        if self._graphql_type is not None:
            return self._graphql_type
        return GraphQLScalarType(
            self.name,
            serialize=self.serialize,
            parse_value=self.parse_value,
            parse_literal=self.parse_literal,
            description=self.description,
            specified_by_url=self.specified_by_url,
        )
