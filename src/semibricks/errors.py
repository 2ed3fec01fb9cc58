"""Errors raised while declaring, assembling and resolving semibricks schemas.

Every declaration-time and assembly-time error is fatal for the schema being built:
there is no partial or degraded schema. ``RuntimeTypeResolutionError`` is the exception,
it is raised inside a query and graphql-core reports it as a per-field error.
"""

from typing import Any


class SemiBrickError(ValueError):
    """Base class for all semibricks errors."""


class NameConflictError(SemiBrickError):
    """Raised when a name is already taken in the factory, or is reserved."""

    def __init__(self, name: str, shape: str, existing: Any | None = None) -> None:
        self.name = name
        self.shape = shape
        self.existing = existing
        if existing is None:
            message = f"Cannot register {shape} '{name}': the name is reserved."
        else:
            message = (
                f"Cannot register {shape} '{name}': the name is already taken by {existing!r}. "
                "Try a different name."
            )
        super().__init__(message)


class UnresolvedReferenceError(SemiBrickError):
    """Raised when a type is referenced that was never registered with the factory."""

    def __init__(self, name: str, shape: str | None = None, referrer: str | None = None) -> None:
        self.name = name
        self.shape = shape
        self.referrer = referrer
        subject = f"{shape} '{name}'" if shape else f"'{name}'"
        message = f"{subject} is not registered with this factory"
        if referrer:
            message += f" (referenced from '{referrer}')"
        super().__init__(message + ".")


class InterfaceContractError(SemiBrickError):
    """Raised when an implementor does not structurally satisfy its interface."""

    def __init__(self, interface: str, problems: list[str]) -> None:
        self.interface = interface
        self.problems = problems
        super().__init__(f"Interface '{interface}' contract violated: " + "; ".join(problems))


class UnionShapeError(SemiBrickError):
    """Raised when a union has too few members or a member that is not an object type."""

    def __init__(self, union: str, problems: list[str]) -> None:
        self.union = union
        self.problems = problems
        super().__init__(f"Union '{union}' is malformed: " + "; ".join(problems))


class InvalidFieldError(SemiBrickError):
    """Raised when a field binding does not fit the type that owns it."""

    def __init__(self, owner: str, field_name: str, reason: str) -> None:
        self.owner = owner
        self.field_name = field_name
        self.reason = reason
        super().__init__(f"{owner}.{field_name}: {reason}")


class RealizationCycleError(SemiBrickError):
    """Raised when a type asks for its own concrete form before its shell exists."""

    def __init__(self, chain: list[str]) -> None:
        self.chain = chain
        super().__init__("Cyclic realization without a shell: " + " -> ".join(chain))


class FrozenFactoryError(SemiBrickError):
    """Raised on structural changes after the schema was assembled."""


class SchemaValidationError(SemiBrickError):
    """Raised when graphql-core rejects the assembled schema."""

    def __init__(self, problems: list[str]) -> None:
        self.problems = problems
        super().__init__(f"Found {len(problems)} schema validation error(s): " + "; ".join(problems))


class RuntimeTypeResolutionError(SemiBrickError):
    """Raised when the concrete type of a union or interface value cannot be determined."""

    def __init__(self, abstract_type: str, reason: str) -> None:
        self.abstract_type = abstract_type
        self.reason = reason
        super().__init__(f"Cannot resolve the runtime type of '{abstract_type}': {reason}")
