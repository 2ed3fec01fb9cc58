from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING

from graphql import GraphQLEnumType, GraphQLEnumValue

from semibricks.bricks.base import SemiBrick, Shape

if TYPE_CHECKING:
    from semibricks.factory import SemiBrickFactory


@dataclass(frozen=True)
class EnumValue:
    description: str | None = None
    deprecation_reason: str | None = None


class EnumBrick(SemiBrick):
    """An enumeration whose keys are also its externally visible values."""

    shape = Shape.ENUM

    def __init__(
        self,
        name: str,
        values: Mapping[str, EnumValue | None] | Sequence[str],
        description: str | None = None,
    ) -> None:
        super().__init__(name, description)
        if isinstance(values, str):
            raise TypeError(f"Enum '{name}' values must be a sequence or mapping of keys, not a string")
        if isinstance(values, Mapping):
            self.values_config: dict[str, EnumValue] = {key: value or EnumValue() for key, value in values.items()}
        else:
            self.values_config = {key: EnumValue() for key in values}
        if not self.values_config:
            raise ValueError(f"Enum '{name}' must define at least one value")

    @property
    def values(self) -> dict[str, str]:
        return {key: key for key in self.values_config}

    def realize(self, factory: SemiBrickFactory) -> GraphQLEnumType:
        return GraphQLEnumType(
            self.name,
            {
                key: GraphQLEnumValue(
                    key,
                    description=value.description,
                    deprecation_reason=value.deprecation_reason,
                )
                for key, value in self.values_config.items()
            },
            description=self.description,
        )
