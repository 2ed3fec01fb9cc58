from __future__ import annotations

from collections.abc import Iterator
from typing import TYPE_CHECKING

from graphql import GraphQLList

from semibricks.bricks.base import Brick, SemiBrick, Shape

if TYPE_CHECKING:
    from semibricks.factory import SemiBrickFactory


class ListBrick(SemiBrick):
    """A list of exactly one element view.

    The name only serves as the cache key; it never appears in the schema.
    ``[T]``, ``[T!]``, ``[T]!`` and ``[T!]!`` are the two list semibricks ``List<T>`` and
    ``List<T!>``, each with its own nullable and non-nullable view.
    """

    shape = Shape.LIST

    def __init__(self, of: Brick) -> None:
        super().__init__(self.name_for(of))
        self.of = of

    @staticmethod
    def name_for(of: Brick) -> str:
        return f"List<{of.type_ref}>"

    @property
    def is_input(self) -> bool:
        return self.of.semi_brick.is_input

    @property
    def is_output(self) -> bool:
        return self.of.semi_brick.is_output

    def references(self) -> Iterator[SemiBrick]:
        yield self.of.semi_brick

    def realize(self, factory: SemiBrickFactory) -> GraphQLList:
        return GraphQLList(self.of.graphql_type(factory))
