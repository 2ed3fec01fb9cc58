from __future__ import annotations

from collections.abc import Callable, Iterator, Mapping
from typing import TYPE_CHECKING, Any

from graphql import GraphQLField, GraphQLObjectType, GraphQLResolveInfo

from semibricks.bricks.base import SemiBrick, Shape
from semibricks.errors import InvalidFieldError
from semibricks.fields import OutputField, Resolver, resolve_output_fields, resolve_pass_through
from semibricks.thunk import Thunk

if TYPE_CHECKING:
    from semibricks.factory import SemiBrickFactory


class CompositeBrick(SemiBrick):
    """Common part of object and interface types: a map of output fields.

    Field map values may be deferred producers, so a type can refer to itself or to types
    declared later. They are evaluated once, the first time ``fields`` is read.
    """

    def __init__(self, name: str, fields: Mapping[str, Any], description: str | None = None) -> None:
        super().__init__(name, description)
        self.raw_fields: dict[str, Any] = dict(fields)
        self._resolvers: dict[str, Resolver] = {}
        self._fields = Thunk(lambda: resolve_output_fields(self.name, self.raw_fields))

    @property
    def field_names(self) -> list[str]:
        return list(self.raw_fields)

    @property
    def fields(self) -> dict[str, OutputField]:
        """Field bindings with any resolvers attached through ``add_field_resolvers``."""
        return {
            name: output_field.with_resolver(self._resolvers[name]) if name in self._resolvers else output_field
            for name, output_field in self._fields().items()
        }

    def add_field_resolvers(self, resolvers: Mapping[str, Resolver]) -> None:
        """Attach resolvers to already declared fields, replacing pass-through reads."""
        self._ensure_open()
        for field_name in resolvers:
            if field_name not in self.raw_fields:
                raise InvalidFieldError(self.name, field_name, "no such field")
        self._resolvers.update(resolvers)

    def references(self) -> Iterator[SemiBrick]:
        for output_field in self.fields.values():
            yield output_field.type.semi_brick
            for arg in output_field.input_args.values():
                yield arg.type.semi_brick

    def graphql_fields(self, factory: SemiBrickFactory) -> dict[str, GraphQLField]:
        return {
            name: output_field.to_graphql_field(factory, resolve=self._late_bound_resolver(name))
            for name, output_field in self._fields().items()
        }

    def _late_bound_resolver(self, field_name: str) -> Callable[..., Any]:
        # Looked up on every call, so resolvers attached after a failed assembly reach the realized shell.
        def resolve_field(source: Any, info: GraphQLResolveInfo, **args: Any) -> Any:
            resolve = self._resolvers.get(field_name) or self._fields()[field_name].resolve
            if resolve is None:
                return resolve_pass_through(source, info)
            return resolve(source, args, info.context)

        return resolve_field


class ObjectBrick(CompositeBrick):
    shape = Shape.OBJECT

    def realize(self, factory: SemiBrickFactory) -> GraphQLObjectType:
        # The shell is returned (and cached by the factory) before either thunk runs.
        return GraphQLObjectType(
            self.name,
            fields=Thunk(lambda: self.graphql_fields(factory)),
            interfaces=Thunk(lambda: [factory.realize(interface) for interface in factory.interfaces_of(self)]),
            description=self.description,
        )
