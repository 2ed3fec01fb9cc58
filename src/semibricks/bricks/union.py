from __future__ import annotations

from collections.abc import Callable, Iterator, Sequence
from typing import TYPE_CHECKING, Any

from graphql import GraphQLUnionType

from semibricks.bricks.base import Brick, SemiBrick, Shape, to_semi_brick
from semibricks.thunk import Thunk
from semibricks.type_resolution import TypenameResolver

if TYPE_CHECKING:
    from semibricks.factory import SemiBrickFactory

UnionMembers = Sequence[SemiBrick | Brick] | Callable[[], Sequence[SemiBrick | Brick]]


class UnionBrick(SemiBrick):
    """A union of two or more object types.

    Members may be given as a deferred producer when some of them are declared later.
    """

    shape = Shape.UNION

    def __init__(
        self,
        name: str,
        members: UnionMembers,
        description: str | None = None,
        resolve_type: Callable[[Any], str] | None = None,
        default_member: str | None = None,
    ) -> None:
        super().__init__(name, description)
        self.resolve_type = resolve_type
        self.default_member = default_member
        self._members_are_deferred = callable(members)
        self._members = Thunk(lambda: [to_semi_brick(member) for member in (members() if callable(members) else members)])

    @property
    def members_are_deferred(self) -> bool:
        return self._members_are_deferred

    @property
    def members(self) -> list[SemiBrick]:
        return self._members()

    @property
    def member_names(self) -> list[str]:
        return [member.name for member in self.members]

    def references(self) -> Iterator[SemiBrick]:
        yield from self.members

    def realize(self, factory: SemiBrickFactory) -> GraphQLUnionType:
        return GraphQLUnionType(
            self.name,
            types=Thunk(lambda: [factory.realize(member) for member in self.members]),
            resolve_type=TypenameResolver(
                self.name,
                lambda: self.member_names,
                factory.config,
                resolve_type=self.resolve_type,
                default_member=self.default_member,
            ),
            description=self.description,
        )
