from ..model import AnnotationInstance, AttributeValue, Element, TypeReference


def find_annotation(element: Element, annotation_type: TypeReference) -> AnnotationInstance | None:
    """Finds an annotation of a given type on a declaration or property.

    Annotations are scanned in declaration order and the first one of the
    same type as `annotation_type` wins.

    Returns:
        The annotation, or None if the element carries no annotation of that type
    """
    for annotation in element.annotations:
        if annotation.type == annotation_type:
            return annotation
    return None


def attribute_value(annotation: AnnotationInstance, attribute_name: str) -> AttributeValue | None:
    """Gets the value of a named attribute, or None if the attribute was omitted."""
    return annotation.attributes.get(attribute_name)
