from __future__ import annotations

from collections.abc import Callable, Iterator, Mapping, Sequence
from typing import TYPE_CHECKING, Any

from graphql import GraphQLInterfaceType

from semibricks.bricks.base import Brick, SemiBrick, Shape, to_semi_brick
from semibricks.bricks.object import CompositeBrick
from semibricks.thunk import Thunk
from semibricks.type_resolution import TypenameResolver

if TYPE_CHECKING:
    from semibricks.factory import SemiBrickFactory


class InterfaceBrick(CompositeBrick):
    """An interface with an ordered set of implementing object types."""

    shape = Shape.INTERFACE

    def __init__(
        self,
        name: str,
        fields: Mapping[str, Any],
        implementors: Sequence[SemiBrick | Brick],
        description: str | None = None,
        resolve_type: Callable[[Any], str] | None = None,
        default_member: str | None = None,
    ) -> None:
        super().__init__(name, fields, description)
        self.implementors: list[SemiBrick] = [to_semi_brick(implementor) for implementor in implementors]
        self.resolve_type = resolve_type
        self.default_member = default_member

    @property
    def implementor_names(self) -> list[str]:
        return [implementor.name for implementor in self.implementors]

    def references(self) -> Iterator[SemiBrick]:
        yield from super().references()
        yield from self.implementors

    def realize(self, factory: SemiBrickFactory) -> GraphQLInterfaceType:
        return GraphQLInterfaceType(
            self.name,
            fields=Thunk(lambda: self.graphql_fields(factory)),
            resolve_type=TypenameResolver(
                self.name,
                lambda: self.implementor_names,
                factory.config,
                resolve_type=self.resolve_type,
                default_member=self.default_member,
            ),
            description=self.description,
        )
