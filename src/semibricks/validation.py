from collections.abc import Iterable

from semibricks.bricks.base import Brick, SemiBrick, Shape
from semibricks.bricks.interface import InterfaceBrick
from semibricks.bricks.list import ListBrick
from semibricks.bricks.union import UnionBrick
from semibricks.errors import InterfaceContractError, UnionShapeError


def is_valid_implementation(implementor_type: Brick, interface_type: Brick) -> bool:
    """Check that an implementor's field type may stand in for the interface's field type.

    Non-null may narrow a nullable interface field, lists compare element-wise, and an
    object may stand in for an interface it implements or a union it belongs to.
    """
    if implementor_type.is_nullable and not interface_type.is_nullable:
        return False

    implementor, interface = implementor_type.semi_brick, interface_type.semi_brick
    if isinstance(implementor, ListBrick) or isinstance(interface, ListBrick):
        if not (isinstance(implementor, ListBrick) and isinstance(interface, ListBrick)):
            return False
        return is_valid_implementation(implementor.of, interface.of)

    if implementor is interface:
        return True
    if isinstance(interface, InterfaceBrick):
        return implementor in interface.implementors
    if isinstance(interface, UnionBrick):
        return implementor in interface.members
    return False


class ContractChecker:
    """Checks the structural contracts of interfaces and unions.

    Field names and member shapes are known at declaration time; field types may sit behind
    deferred producers, so type compatibility is only checked once the schema is assembled.
    """

    def check_implementor_names(self, interface: InterfaceBrick) -> list[str]:
        errors = []
        for implementor in interface.implementors:
            if implementor.shape != Shape.OBJECT:
                errors.append(f"{implementor.shape.value} '{implementor.name}' is not an object type")
                continue
            missing = [name for name in interface.field_names if name not in implementor.field_names]  # type: ignore[attr-defined]
            if missing:
                errors.append(f"'{implementor.name}' is missing field(s): {', '.join(missing)}")
        if interface.default_member is not None and interface.default_member not in interface.implementor_names:
            errors.append(f"default member '{interface.default_member}' is not an implementor")
        return errors

    def check_implementor_types(self, interface: InterfaceBrick) -> list[str]:
        errors = []
        for implementor in interface.implementors:
            implementor_fields = implementor.fields  # type: ignore[attr-defined]
            for name, interface_field in interface.fields.items():
                implementor_field = implementor_fields[name]
                if not is_valid_implementation(implementor_field.type, interface_field.type):
                    errors.append(
                        f"{implementor.name}.{name} has type {implementor_field.type.type_ref}, "
                        f"which is not compatible with {interface_field.type.type_ref}"
                    )
                missing_args = [arg for arg in interface_field.args if arg not in implementor_field.args]
                if missing_args:
                    errors.append(f"{implementor.name}.{name} is missing argument(s): {', '.join(missing_args)}")
        return errors

    def check_union_members(self, union: UnionBrick) -> list[str]:
        errors = []
        members = union.members
        if len(members) < 2:
            errors.append(f"expected at least 2 members, got {len(members)}")
        for member in members:
            if member.shape != Shape.OBJECT:
                errors.append(f"{member.shape.value} '{member.name}' is not an object type")
        if len(set(union.member_names)) != len(members):
            errors.append("members must be unique")
        if union.default_member is not None and union.default_member not in union.member_names:
            errors.append(f"default member '{union.default_member}' is not a member")
        return errors

    def check_declaration(self, semi_brick: SemiBrick) -> None:
        if isinstance(semi_brick, InterfaceBrick):
            errors = self.check_implementor_names(semi_brick)
            if errors:
                raise InterfaceContractError(semi_brick.name, errors)
        elif isinstance(semi_brick, UnionBrick) and not semi_brick.members_are_deferred:
            errors = self.check_union_members(semi_brick)
            if errors:
                raise UnionShapeError(semi_brick.name, errors)

    def run(self, semi_bricks: Iterable[SemiBrick]) -> None:
        for semi_brick in semi_bricks:
            if isinstance(semi_brick, InterfaceBrick):
                errors = self.check_implementor_names(semi_brick) or self.check_implementor_types(semi_brick)
                if errors:
                    raise InterfaceContractError(semi_brick.name, errors)
            elif isinstance(semi_brick, UnionBrick):
                errors = self.check_union_members(semi_brick)
                if errors:
                    raise UnionShapeError(semi_brick.name, errors)
