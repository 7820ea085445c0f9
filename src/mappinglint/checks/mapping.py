import logging

from ..context import AnalysisContext
from ..errors import MappingContractError
from ..model import Declaration, Property, PropertyKind, TypeReference
from ..resolver.annotation import attribute_value, find_annotation
from ..resolver.collection import collection_element_type
from ..resolver.property import property_name, property_type

logger = logging.getLogger(__name__)

NO_MATCHING_MANY_TO_ONE = "No matching @ManyToOne annotation on {child}"
MISSING_MAPPED_BY = "Missing mappedBy attribute"
WRONG_MAPPED_BY = "mappedBy attribute should be {expected}"


def check_bidirectional_mapping(context: AnalysisContext, child_property: Property) -> None:
    """Verifies that a one-to-many property is mapped back by its element type.

    The element type of the collection must declare a many-to-one property
    typed with the owner of `child_property`, and the one-to-many annotation
    must name that property through its mappedBy attribute. At most one
    diagnostic is reported per call; the first failing step wins.

    Args:
        context: the analysis context of the running session
        child_property: the field or accessor in the parent declaration,
            annotated with the one-to-many marker

    Raises:
        MappingContractError: If the property type is not a parameterized collection,
            if the property does not belong to any declaration, or if the property
            is not annotated with the one-to-many marker
    """
    catalog = context.catalog

    child_element_type = collection_element_type(
        context.model, catalog, property_type(child_property)
    )
    if child_element_type is None:
        raise MappingContractError(
            f"One-to-many property '{child_property.name}' must be typed as a parameterized "
            f"collection, got {child_property.type}"
        )
    if child_property.owner is None:
        raise MappingContractError(
            f"Property '{child_property.name}' does not belong to any declaration"
        )

    one_to_many = find_annotation(child_property, catalog.one_to_many)
    if one_to_many is None:
        raise MappingContractError(
            f"Property '{child_property.name}' is not annotated with @{catalog.one_to_many}"
        )

    child_declaration = context.model.declaration(child_element_type.qualified_name)
    parent_type = child_property.owner.type

    parent_reference = find_parent_reference(context, parent_type, child_declaration)
    if parent_reference is None:
        context.error(
            NO_MATCHING_MANY_TO_ONE.format(child=child_element_type.simple_name),
            child_property,
            one_to_many,
        )
        return

    mapped_by = attribute_value(one_to_many, context.options.mapped_by_attribute)
    if mapped_by is None:
        context.error(MISSING_MAPPED_BY, child_property, one_to_many)
        return

    expected = property_name(parent_reference)
    if mapped_by.as_string() != expected:
        context.error(
            WRONG_MAPPED_BY.format(expected=expected), child_property, one_to_many, mapped_by
        )


def find_parent_reference(
    context: AnalysisContext, parent_type: TypeReference, child: Declaration | None
) -> Property | None:
    """Finds the many-to-one property of `child` typed with `parent_type`.

    Returns:
        The first matching field or accessor in declaration order, or None. A
        child type unknown to the model has no properties and never matches.
    """
    if child is None:
        return None
    for prop in child.properties:
        if prop.kind not in (PropertyKind.FIELD, PropertyKind.ACCESSOR):
            continue
        if find_annotation(prop, context.catalog.many_to_one) is not None and (
            property_type(prop) == parent_type
        ):
            return prop
    return None
