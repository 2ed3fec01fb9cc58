from collections.abc import Callable, Iterable, Mapping, Sequence
from typing import Any

from graphql import (
    GraphQLBoolean,
    GraphQLFloat,
    GraphQLID,
    GraphQLInt,
    GraphQLNamedType,
    GraphQLScalarType,
    GraphQLSchema,
    GraphQLString,
    GraphQLType,
    validate_schema,
)

from semibricks import log
from semibricks.bricks.base import Brick, SemiBrick, to_brick
from semibricks.bricks.enumeration import EnumBrick, EnumValue
from semibricks.bricks.input_object import InputObjectBrick
from semibricks.bricks.interface import InterfaceBrick
from semibricks.bricks.list import ListBrick
from semibricks.bricks.object import ObjectBrick
from semibricks.bricks.scalar import ScalarBrick
from semibricks.bricks.union import UnionBrick, UnionMembers
from semibricks.config import FactoryConfig
from semibricks.errors import (
    FrozenFactoryError,
    NameConflictError,
    RealizationCycleError,
    SchemaValidationError,
    UnresolvedReferenceError,
)
from semibricks.schema import AssembledSchema
from semibricks.thunk import Thunk
from semibricks.utils.graphql_type import is_reserved_type_name
from semibricks.validation import ContractChecker


class SemiBrickFactory:
    """Registry of semibricks and the engine that realizes them into one GraphQL schema.

    Every semibrick is registered under a unique name and realized at most once; the
    realized type is cached before any of its deferred fields are evaluated, which is what
    lets types refer to themselves and to each other. Root query and mutation fields can be
    contributed from several places and are merged when the schema is assembled.
    """

    def __init__(
        self,
        config: FactoryConfig | None = None,
        context_getter: Callable[[], Any] | None = None,
    ) -> None:
        self.config = config or FactoryConfig()
        self.context_getter = context_getter
        self._semi_bricks: dict[str, SemiBrick] = {}
        self._graphql_types: dict[str, GraphQLType] = {}
        self._realizing: list[str] = []
        self._implementations: dict[str, list[InterfaceBrick]] = {}
        self._query_field_maps: list[dict[str, Any]] = []
        self._mutation_field_maps: list[dict[str, Any]] = []
        self._checker = ContractChecker()
        self._assembled: AssembledSchema | None = None

        self.id = self._register_builtin(GraphQLID)
        self.string = self._register_builtin(GraphQLString)
        self.int = self._register_builtin(GraphQLInt)
        self.float = self._register_builtin(GraphQLFloat)
        self.boolean = self._register_builtin(GraphQLBoolean)

    @property
    def is_frozen(self) -> bool:
        return self._assembled is not None

    @property
    def semi_bricks(self) -> dict[str, SemiBrick]:
        return dict(self._semi_bricks)

    @property
    def graphql_types(self) -> dict[str, GraphQLType]:
        return dict(self._graphql_types)

    # Registry
    # ----------
    def register(self, semi_brick: SemiBrick) -> SemiBrick:
        """Register a semibrick under its name and return the very same object."""
        self._ensure_not_frozen()
        if is_reserved_type_name(semi_brick.name):
            raise NameConflictError(semi_brick.name, semi_brick.shape.value)
        existing = self._semi_bricks.get(semi_brick.name)
        if existing is not None:
            raise NameConflictError(semi_brick.name, semi_brick.shape.value, existing)
        self._semi_bricks[semi_brick.name] = semi_brick
        log.debug(f"Registered {semi_brick.shape.value} '{semi_brick.name}'")
        return semi_brick

    def get(self, name: str) -> SemiBrick:
        try:
            return self._semi_bricks[name]
        except KeyError:
            raise UnresolvedReferenceError(name) from None

    def ref(self, name: str, nullable: bool = False) -> Thunk[Brick]:
        """Refer to a semibrick by name; the lookup happens when the field map is evaluated."""

        def lookup() -> Brick:
            semi_brick = self.get(name)
            return semi_brick.nullable if nullable else semi_brick.non_nullable

        return Thunk(lookup)

    def realize(self, semi_brick: SemiBrick) -> GraphQLType:
        """Return the concrete graphql-core type of a registered semibrick, building it once."""
        if self._semi_bricks.get(semi_brick.name) is not semi_brick:
            raise UnresolvedReferenceError(semi_brick.name, semi_brick.shape.value)

        cached = self._graphql_types.get(semi_brick.name)
        if cached is not None:
            return cached

        if semi_brick.name in self._realizing:
            raise RealizationCycleError([*self._realizing, semi_brick.name])

        self._realizing.append(semi_brick.name)
        try:
            fresh = semi_brick.realize(self)
        finally:
            self._realizing.pop()

        self._graphql_types[semi_brick.name] = fresh
        log.debug(f"Realized {semi_brick.shape.value} '{semi_brick.name}'")
        return fresh

    def interfaces_of(self, semi_brick: SemiBrick) -> list[InterfaceBrick]:
        return list(self._implementations.get(semi_brick.name, []))

    def named_types(self) -> list[GraphQLNamedType]:
        """All realized named types, in realization order. Lists are internal and left out."""
        return [
            graphql_type  # type: ignore[misc]
            for name, graphql_type in self._graphql_types.items()
            if not isinstance(self._semi_bricks[name], ListBrick)
        ]

    # Declarations
    # ----------
    def scalar(
        self,
        name: str,
        *,
        serialize: Callable[[Any], Any] | None = None,
        parse_value: Callable[[Any], Any] | None = None,
        parse_literal: Callable[..., Any] | None = None,
        description: str | None = None,
        specified_by_url: str | None = None,
    ) -> ScalarBrick:
        semi_brick = ScalarBrick(
            name,
            description=description,
            serialize=serialize,
            parse_value=parse_value,
            parse_literal=parse_literal,
            specified_by_url=specified_by_url,
        )
        self.register(semi_brick)
        return semi_brick

    def enum(
        self,
        name: str,
        values: Mapping[str, EnumValue | None] | Sequence[str],
        *,
        description: str | None = None,
    ) -> EnumBrick:
        semi_brick = EnumBrick(name, values, description=description)
        self.register(semi_brick)
        return semi_brick

    def object_type(self, name: str, fields: Mapping[str, Any], *, description: str | None = None) -> ObjectBrick:
        semi_brick = ObjectBrick(name, fields, description=description)
        self.register(semi_brick)
        return semi_brick

    def interface(
        self,
        name: str,
        fields: Mapping[str, Any],
        implementors: Sequence[SemiBrick | Brick],
        *,
        description: str | None = None,
        resolve_type: Callable[[Any], str] | None = None,
        default_member: str | None = None,
    ) -> InterfaceBrick:
        self._ensure_not_frozen()
        semi_brick = InterfaceBrick(
            name,
            fields,
            implementors,
            description=description,
            resolve_type=resolve_type,
            default_member=default_member,
        )
        self._checker.check_declaration(semi_brick)
        self.register(semi_brick)
        for implementor in semi_brick.implementors:
            self._implementations.setdefault(implementor.name, []).append(semi_brick)
        return semi_brick

    def union(
        self,
        name: str,
        members: UnionMembers,
        *,
        description: str | None = None,
        resolve_type: Callable[[Any], str] | None = None,
        default_member: str | None = None,
    ) -> UnionBrick:
        self._ensure_not_frozen()
        semi_brick = UnionBrick(
            name,
            members,
            description=description,
            resolve_type=resolve_type,
            default_member=default_member,
        )
        self._checker.check_declaration(semi_brick)
        self.register(semi_brick)
        return semi_brick

    def list_of(self, of: Brick | SemiBrick) -> ListBrick:
        """Return the list semibrick for an element view, registering it on first use."""
        element = to_brick(of)
        existing = self._semi_bricks.get(ListBrick.name_for(element))
        if isinstance(existing, ListBrick) and existing.of.semi_brick is element.semi_brick:
            return existing
        semi_brick = ListBrick(element)
        self.register(semi_brick)
        return semi_brick

    def input_object(
        self, name: str, fields: Mapping[str, Any], *, description: str | None = None
    ) -> InputObjectBrick:
        semi_brick = InputObjectBrick(name, fields, description=description)
        self.register(semi_brick)
        return semi_brick

    # Root operations
    # ----------
    def add_query_fields(self, fields: Mapping[str, Any]) -> None:
        self._ensure_not_frozen()
        self._query_field_maps.append(dict(fields))

    def add_mutation_fields(self, fields: Mapping[str, Any]) -> None:
        self._ensure_not_frozen()
        self._mutation_field_maps.append(dict(fields))

    def assemble_schema(self) -> AssembledSchema:
        """Realize every declared type and the root operations into one schema.

        The first successful call freezes the factory; later calls return the same result.
        Any failure aborts the attempt: the synthetic root types are dropped, while types realized
        so far stay cached so that a retry reuses them instead of building them twice.
        """
        if self._assembled is not None:
            return self._assembled

        log.info(f"Assembling schema from {len(self._semi_bricks)} declared types")
        roots = [ObjectBrick("Query", self._fold(self._query_field_maps, "Query"))]
        mutation_fields = self._fold(self._mutation_field_maps, "Mutation")
        if mutation_fields:
            roots.append(ObjectBrick("Mutation", mutation_fields))

        try:
            for root in roots:
                self._semi_bricks[root.name] = root
            self._check_references()
            semi_bricks = list(self._semi_bricks.values())

            self._checker.run(semi_bricks)
            for semi_brick in semi_bricks:
                self.realize(semi_brick)

            realized_roots = [self.realize(root) for root in roots]
            schema = GraphQLSchema(
                query=realized_roots[0],  # type: ignore[arg-type]
                mutation=realized_roots[1] if len(realized_roots) > 1 else None,  # type: ignore[arg-type]
                types=self.named_types(),
            )
            if self.config.validate_schema:
                schema_errors = validate_schema(schema)
                if schema_errors:
                    raise SchemaValidationError([error.message for error in schema_errors])
        except Exception:
            for root in roots:
                self._semi_bricks.pop(root.name, None)
                self._graphql_types.pop(root.name, None)
            raise

        for semi_brick in self._semi_bricks.values():
            semi_brick.seal()

        self._assembled = AssembledSchema(
            schema=schema,
            types=self.named_types(),
            resolvers={root.name: {name: binding.resolve for name, binding in root.fields.items()} for root in roots},
            context_getter=self.context_getter,
        )
        log.info(f"Successfully assembled schema with {len(self._assembled.types)} named types.")
        return self._assembled

    # Internals
    # ----------
    def _register_builtin(self, graphql_type: GraphQLScalarType) -> ScalarBrick:
        semi_brick = ScalarBrick.builtin(graphql_type)
        self._semi_bricks[semi_brick.name] = semi_brick
        return semi_brick

    def _ensure_not_frozen(self) -> None:
        if self.is_frozen:
            raise FrozenFactoryError("The schema was already assembled; the factory no longer accepts declarations")

    def _fold(self, field_maps: Iterable[dict[str, Any]], operation: str) -> dict[str, Any]:
        merged: dict[str, Any] = {}
        for contribution in field_maps:
            for name, value in contribution.items():
                if name in merged and self.config.warn_on_root_field_override:
                    log.warning(f"{operation} field '{name}' is declared more than once; the last declaration wins")
                merged[name] = value
        return merged

    def _check_references(self) -> None:
        # Evaluating deferred fields may register list semibricks, so walk until the registry stops growing.
        checked = 0
        while checked < len(self._semi_bricks):
            semi_brick = list(self._semi_bricks.values())[checked]
            checked += 1
            try:
                references = list(semi_brick.references())
            except UnresolvedReferenceError as e:
                if e.referrer is not None:
                    raise
                raise UnresolvedReferenceError(e.name, e.shape, referrer=semi_brick.name) from e
            for referenced in references:
                if self._semi_bricks.get(referenced.name) is not referenced:
                    raise UnresolvedReferenceError(referenced.name, referenced.shape.value, referrer=semi_brick.name)
