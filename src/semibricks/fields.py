"""Field bindings: a declared field's type plus its optional arguments and resolver."""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Mapping
from dataclasses import dataclass
from dataclasses import field as dataclass_field
from typing import TYPE_CHECKING, Any

from graphql import (
    GraphQLArgument,
    GraphQLField,
    GraphQLInputField,
    GraphQLResolveInfo,
    Undefined,
)

from semibricks.bricks.base import Brick, SemiBrick, to_brick
from semibricks.errors import InvalidFieldError
from semibricks.thunk import unthunk

if TYPE_CHECKING:
    from semibricks.factory import SemiBrickFactory

Resolver = Callable[[Any, dict[str, Any], Any], Any | Awaitable[Any]]


@dataclass(frozen=True)
class InputField:
    type: Brick
    description: str | None = None
    deprecation_reason: str | None = None
    default_value: Any = Undefined

    def to_graphql_input_field(self, factory: SemiBrickFactory) -> GraphQLInputField:
        return GraphQLInputField(
            self.type.graphql_type(factory),  # type: ignore[arg-type]
            default_value=self.default_value,
            description=self.description,
            deprecation_reason=self.deprecation_reason,
        )

    def to_graphql_argument(self, factory: SemiBrickFactory) -> GraphQLArgument:
        return GraphQLArgument(
            self.type.graphql_type(factory),  # type: ignore[arg-type]
            default_value=self.default_value,
            description=self.description,
            deprecation_reason=self.deprecation_reason,
        )


@dataclass(frozen=True)
class OutputField:
    type: Brick
    args: Mapping[str, Any] = dataclass_field(default_factory=dict)
    resolve: Resolver | None = None
    description: str | None = None
    deprecation_reason: str | None = None

    @property
    def input_args(self) -> dict[str, InputField]:
        return {name: to_input_field(arg) for name, arg in self.args.items()}

    def with_resolver(self, resolve: Resolver) -> OutputField:
        return OutputField(
            type=self.type,
            args=self.args,
            resolve=resolve,
            description=self.description,
            deprecation_reason=self.deprecation_reason,
        )

    def to_graphql_field(self, factory: SemiBrickFactory, resolve: Callable[..., Any]) -> GraphQLField:
        """Build the graphql-core field; ``resolve`` takes graphql-core's ``(source, info, **args)``."""
        return GraphQLField(
            self.type.graphql_type(factory),  # type: ignore[arg-type]
            args={name: arg.to_graphql_argument(factory) for name, arg in self.input_args.items()},
            resolve=resolve,
            description=self.description,
            deprecation_reason=self.deprecation_reason,
        )


def field(
    type_: Brick | SemiBrick,
    *,
    args: Mapping[str, Any] | None = None,
    resolve: Resolver | None = None,
    description: str | None = None,
    deprecation_reason: str | None = None,
) -> OutputField:
    return OutputField(
        type=to_brick(type_),
        args=dict(args or {}),
        resolve=resolve,
        description=description,
        deprecation_reason=deprecation_reason,
    )


def input_field(
    type_: Brick | SemiBrick,
    *,
    description: str | None = None,
    deprecation_reason: str | None = None,
    default_value: Any = Undefined,
) -> InputField:
    return InputField(
        type=to_brick(type_),
        description=description,
        deprecation_reason=deprecation_reason,
        default_value=default_value,
    )


def to_output_field(value: Any) -> OutputField:
    """Normalize a field map value (possibly deferred) into an OutputField."""
    value = unthunk(value)
    if isinstance(value, OutputField):
        return value
    if isinstance(value, InputField):
        raise TypeError("InputField cannot be used as an output field")
    return OutputField(type=to_brick(value))


def to_input_field(value: Any) -> InputField:
    """Normalize an input field or argument map value (possibly deferred) into an InputField."""
    value = unthunk(value)
    if isinstance(value, InputField):
        return value
    if isinstance(value, OutputField):
        raise TypeError("OutputField cannot be used as an input field or argument")
    return InputField(type=to_brick(value))


def resolve_output_fields(owner: str, raw_fields: Mapping[str, Any]) -> dict[str, OutputField]:
    resolved: dict[str, OutputField] = {}
    for name, value in raw_fields.items():
        try:
            output_field = to_output_field(value)
            check_output_field(owner, name, output_field)
        except TypeError as e:
            raise InvalidFieldError(owner, name, str(e)) from e
        resolved[name] = output_field
    return resolved


def resolve_input_fields(owner: str, raw_fields: Mapping[str, Any]) -> dict[str, InputField]:
    resolved: dict[str, InputField] = {}
    for name, value in raw_fields.items():
        try:
            resolved[name] = to_input_field(value)
        except TypeError as e:
            raise InvalidFieldError(owner, name, str(e)) from e
        check_input_field(owner, name, resolved[name])
    return resolved


def check_output_field(owner: str, name: str, output_field: OutputField) -> None:
    if not output_field.type.semi_brick.is_output:
        raise InvalidFieldError(
            owner, name, f"{output_field.type.shape.value} '{output_field.type.name}' cannot be used as an output type"
        )
    for arg_name, arg in output_field.input_args.items():
        check_input_field(owner, f"{name}({arg_name})", arg)


def check_input_field(owner: str, name: str, input_field_: InputField) -> None:
    if not input_field_.type.semi_brick.is_input:
        raise InvalidFieldError(
            owner, name, f"{input_field_.type.shape.value} '{input_field_.type.name}' cannot be used as an input type"
        )
    if (
        input_field_.deprecation_reason
        and not input_field_.type.is_nullable
        and input_field_.default_value is Undefined
    ):
        raise InvalidFieldError(owner, name, "a required input field without a default cannot be deprecated")


def read_value(source: Any, key: str) -> Any:
    if isinstance(source, Mapping):
        return source.get(key)
    return getattr(source, key, None)


def resolve_pass_through(source: Any, info: GraphQLResolveInfo, **_args: Any) -> Any:
    """Read the field off the source object, calling it when it is a deferred producer."""
    value = read_value(source, info.field_name)
    return value() if callable(value) else value
