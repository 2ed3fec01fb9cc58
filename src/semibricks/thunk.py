from collections.abc import Callable
from typing import Any, Generic, TypeVar

T = TypeVar("T")

_UNSET: Any = object()


class Thunk(Generic[T]):
    """A zero-argument producer that is evaluated at most once.

    Field maps, union members and interface lists are handed to graphql-core as thunks so
    that a type's shell can be cached before anything it refers to is realized.
    """

    def __init__(self, producer: Callable[[], T]) -> None:
        self._producer = producer
        self._value: T = _UNSET

    @property
    def evaluated(self) -> bool:
        return self._value is not _UNSET

    def __call__(self) -> T:
        if self._value is _UNSET:
            self._value = self._producer()
        return self._value


def is_thunk(value: Any) -> bool:
    return callable(value) and not isinstance(value, type)


def unthunk(value: Any) -> Any:
    """Evaluate ``value`` if it is a deferred producer, otherwise return it unchanged."""
    return value() if is_thunk(value) else value
