from ..catalog import TypeCatalog
from ..model import Model, TypeReference


def collection_element_type(
    model: Model, catalog: TypeCatalog, type_: TypeReference | None
) -> TypeReference | None:
    """Gets the element type of a parameterized collection type.

    Only the type arguments of `type_` itself are inspected. A type that fixes
    the element type through a supertype (`class Children(Collection[Child])`)
    carries no arguments of its own and is treated as a non-collection.

    Args:
        model: the model used to decide assignability to the collection type
        catalog: the catalog holding the collection type of the session
        type_: a possibly parameterized collection type

    Returns:
        The first type argument, or None if `type_` is not a parameterized collection
    """
    if type_ is None or not model.is_assignable(type_, catalog.collection):
        return None
    if not type_.arguments:
        return None
    return type_.arguments[0]
