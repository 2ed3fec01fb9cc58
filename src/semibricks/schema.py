from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from graphql import (
    ExecutionResult,
    GraphQLNamedType,
    GraphQLSchema,
    graphql,
    graphql_sync,
    print_schema,
)

from semibricks.fields import Resolver


@dataclass
class AssembledSchema:
    """The execution-ready schema together with its named types and root resolvers.

    ``types`` holds every named type the factory realized (lists excluded), and
    ``resolvers`` maps each root operation type to its fields' resolvers.
    """

    schema: GraphQLSchema
    types: list[GraphQLNamedType] = field(default_factory=list)
    resolvers: dict[str, dict[str, Resolver | None]] = field(default_factory=dict)
    context_getter: Callable[[], Any] | None = None

    def get_type(self, name: str) -> GraphQLNamedType | None:
        return self.schema.get_type(name)

    def print_schema(self) -> str:
        return print_schema(self.schema)

    def _context(self, context: Any) -> Any:
        if context is None and self.context_getter is not None:
            return self.context_getter()
        return context

    async def execute(
        self,
        source: str,
        variables: dict[str, Any] | None = None,
        context: Any = None,
        operation_name: str | None = None,
        root_value: Any = None,
    ) -> ExecutionResult:
        return await graphql(
            self.schema,
            source,
            root_value=root_value,
            context_value=self._context(context),
            variable_values=variables,
            operation_name=operation_name,
        )

    def execute_sync(
        self,
        source: str,
        variables: dict[str, Any] | None = None,
        context: Any = None,
        operation_name: str | None = None,
        root_value: Any = None,
    ) -> ExecutionResult:
        return graphql_sync(
            self.schema,
            source,
            root_value=root_value,
            context_value=self._context(context),
            variable_values=variables,
            operation_name=operation_name,
        )
