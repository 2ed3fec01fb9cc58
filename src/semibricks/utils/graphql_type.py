ROOT_TYPE_NAMES = frozenset({"Query", "Mutation", "Subscription"})


def is_introspection_type(type_name: str) -> bool:
    return type_name.startswith("__")


def is_root_type(type_name: str) -> bool:
    return type_name in ROOT_TYPE_NAMES


def is_reserved_type_name(type_name: str) -> bool:
    return is_introspection_type(type_name) or is_root_type(type_name)
