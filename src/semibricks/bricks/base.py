from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any, ClassVar

from graphql import GraphQLNonNull, GraphQLType

from semibricks.errors import FrozenFactoryError

if TYPE_CHECKING:
    from semibricks.factory import SemiBrickFactory


class Shape(str, Enum):
    SCALAR = "scalar"
    ENUM = "enum"
    OBJECT = "object"
    INTERFACE = "interface"
    UNION = "union"
    INPUT_OBJECT = "input_object"
    LIST = "list"


INPUT_SHAPES = frozenset({Shape.SCALAR, Shape.ENUM, Shape.INPUT_OBJECT})
OUTPUT_SHAPES = frozenset({Shape.SCALAR, Shape.ENUM, Shape.OBJECT, Shape.INTERFACE, Shape.UNION})


class SemiBrick:
    """A named, nullability-independent declaration of one schema type.

    Subclasses form a closed set, one per ``Shape``. A semibrick knows how to build its
    graphql-core counterpart but never does so by itself; the factory calls ``realize``
    exactly once and caches the result under ``name``.
    """

    shape: ClassVar[Shape]

    def __init__(self, name: str, description: str | None = None) -> None:
        self.name = name
        self.description = description
        self._sealed = False
        self._nullable = Brick(self, True)
        self._non_nullable = Brick(self, False)

    @property
    def nullable(self) -> Brick:
        return self._nullable

    @property
    def non_nullable(self) -> Brick:
        return self._non_nullable

    @property
    def is_input(self) -> bool:
        return self.shape in INPUT_SHAPES

    @property
    def is_output(self) -> bool:
        return self.shape in OUTPUT_SHAPES

    def realize(self, factory: SemiBrickFactory) -> GraphQLType:
        raise NotImplementedError

    def references(self) -> Iterable[SemiBrick]:
        """Yield the semibricks this one refers to. Deferred references are evaluated."""
        return ()

    def seal(self) -> None:
        self._sealed = True

    def _ensure_open(self) -> None:
        if self._sealed:
            raise FrozenFactoryError(f"{self.shape.value} '{self.name}' cannot be changed after the schema was assembled")

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.name!r}>"


@dataclass(frozen=True, eq=False, repr=False)
class Brick:
    """A nullable or non-nullable view of a semibrick.

    Each semibrick owns exactly one view of each kind, so ``brick.nullable`` and
    ``brick.non_nullable`` always hand back the sibling of the same semibrick.
    """

    semi_brick: SemiBrick
    is_nullable: bool = field(default=False)

    @property
    def name(self) -> str:
        return self.semi_brick.name

    @property
    def shape(self) -> Shape:
        return self.semi_brick.shape

    @property
    def nullable(self) -> Brick:
        return self.semi_brick.nullable

    @property
    def non_nullable(self) -> Brick:
        return self.semi_brick.non_nullable

    @property
    def type_ref(self) -> str:
        return self.name if self.is_nullable else f"{self.name}!"

    def graphql_type(self, factory: SemiBrickFactory) -> GraphQLType:
        realized = factory.realize(self.semi_brick)
        return realized if self.is_nullable else GraphQLNonNull(realized)  # type: ignore[arg-type]

    def __repr__(self) -> str:
        return f"<Brick {self.type_ref}>"


def to_brick(value: Any) -> Brick:
    """Accept a Brick or a bare SemiBrick (which stands for its non-nullable view)."""
    if isinstance(value, Brick):
        return value
    if isinstance(value, SemiBrick):
        return value.non_nullable
    raise TypeError(f"Expected a Brick or SemiBrick, got {type(value).__name__}")


def to_semi_brick(value: Any) -> SemiBrick:
    if isinstance(value, Brick):
        return value.semi_brick
    if isinstance(value, SemiBrick):
        return value
    raise TypeError(f"Expected a Brick or SemiBrick, got {type(value).__name__}")
