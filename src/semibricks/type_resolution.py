from collections.abc import Callable, Sequence
from typing import Any

from graphql import GraphQLAbstractType, GraphQLResolveInfo

from semibricks import log
from semibricks.config import FactoryConfig, TypeResolutionFallback
from semibricks.errors import RuntimeTypeResolutionError
from semibricks.fields import read_value


class TypenameResolver:
    """Pick the concrete object type of a union or interface value.

    Order of precedence: a custom ``resolve_type`` callable, the discriminant tag carried by
    the value, the declared ``default_member``, and finally the first member, which is only
    used when the config opts into ``TypeResolutionFallback.DEFAULT_MEMBER``.
    """

    def __init__(
        self,
        abstract_name: str,
        candidates: Callable[[], Sequence[str]],
        config: FactoryConfig,
        resolve_type: Callable[[Any], str] | None = None,
        default_member: str | None = None,
    ) -> None:
        self.abstract_name = abstract_name
        self.candidates = candidates
        self.config = config
        self.resolve_type = resolve_type
        self.default_member = default_member

    def __call__(self, value: Any, info: GraphQLResolveInfo, abstract_type: GraphQLAbstractType) -> str:
        names = list(self.candidates())

        if self.resolve_type is not None:
            return self._checked(self.resolve_type(value), names, "resolve_type returned")

        tag = read_value(value, self.config.typename_key)
        if tag is not None:
            return self._checked(tag, names, f"tag '{self.config.typename_key}'")

        if self.default_member is not None:
            return self.default_member

        if self.config.type_resolution_fallback == TypeResolutionFallback.DEFAULT_MEMBER and names:
            log.debug(f"No '{self.config.typename_key}' on {self.abstract_name} value, falling back to '{names[0]}'")
            return names[0]

        raise RuntimeTypeResolutionError(
            self.abstract_name,
            f"the value has no '{self.config.typename_key}' and no default member is configured",
        )

    def _checked(self, type_name: Any, names: list[str], source: str) -> str:
        if type_name not in names:
            raise RuntimeTypeResolutionError(
                self.abstract_name, f"{source} {type_name!r}, expected one of {', '.join(names)}"
            )
        return type_name
