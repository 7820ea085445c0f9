from typing import Any, TYPE_CHECKING
from typing_extensions import Self

from ..model import AnnotationInstance, Model, Property, PropertyKind, TypeReference


if TYPE_CHECKING:
    from .core import DeclarationConfiguration


class PropertyConfiguration:
    def __init__(
        self,
        name: str,
        kind: PropertyKind,
        type_: TypeReference,
        declaration_configuration: "DeclarationConfiguration",
    ):
        self._name = name
        self._kind = kind
        self._type = type_
        self._declaration_configuration = declaration_configuration
        self._annotations: list[AnnotationInstance] = []

    @property
    def name(self) -> str:
        return self._name

    @property
    def type(self) -> TypeReference:
        return self._type

    def annotated(self, annotation_type: str | TypeReference, **attributes: Any) -> Self:
        self._annotations.append(AnnotationInstance.of(annotation_type, **attributes))
        return self

    def field(self, name: str, type_: TypeReference) -> "PropertyConfiguration":
        return self._declaration_configuration.field(name, type_)

    def accessor(self, name: str, returns: TypeReference) -> "PropertyConfiguration":
        return self._declaration_configuration.accessor(name, returns)

    def declaration(self, qualified_name: str) -> "DeclarationConfiguration":
        return self._declaration_configuration.declaration(qualified_name)

    def build(self) -> Model:
        return self._declaration_configuration.build()

    def _create_property(self) -> Property:
        return Property(self._name, self._kind, self._type, self._annotations)
