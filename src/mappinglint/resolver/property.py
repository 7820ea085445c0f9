from ..errors import UnsupportedPropertyKindError
from ..model import Property, PropertyKind, TypeReference

_ACCESSOR_PREFIXES = ("get", "is")


def property_type(prop: Property) -> TypeReference | None:
    """Gets the declared type of a field, or the return type of an accessor."""
    if prop.kind is PropertyKind.FIELD or prop.kind is PropertyKind.ACCESSOR:
        return prop.type
    raise UnsupportedPropertyKindError(
        f"Property '{prop.name}' has unsupported kind {prop.kind!r}. "
        f"Only fields and accessors describe properties."
    )


def property_name(prop: Property) -> str:
    """Gets the canonical name of a property.

    Field names are returned verbatim. Accessor names follow the JavaBeans
    convention: a "get" or "is" prefix is stripped and the remainder is
    decapitalized, so `getParent` and `isActive` become `parent` and `active`.
    Accessors without a conventional prefix keep their own name.

    Raises:
        UnsupportedPropertyKindError: If the property is neither a field nor an accessor
    """
    if prop.kind is PropertyKind.FIELD:
        return prop.name
    if prop.kind is PropertyKind.ACCESSOR:
        for prefix in _ACCESSOR_PREFIXES:
            if prop.name.startswith(prefix):
                return decapitalize(prop.name[len(prefix) :])
        return prop.name
    raise UnsupportedPropertyKindError(
        f"Property '{prop.name}' has unsupported kind {prop.kind!r}. "
        f"Only fields and accessors have property names."
    )


def decapitalize(name: str) -> str:
    # acronyms stay as they are: "URL" is not turned into "uRL"
    if len(name) > 1 and name[0].isupper() and name[1].isupper():
        return name
    return name[:1].lower() + name[1:]
