from typing import Any

from typing_extensions import Self

from ..configuration import MarkerNames
from ..model import (
    AnnotationInstance,
    Constructor,
    Declaration,
    Model,
    PropertyKind,
    TypeReference,
    ref,
)
from .property import PropertyConfiguration

# standard collection types and the collection capability they satisfy
_COLLECTION_TYPES = ("builtins.list", "builtins.set", "builtins.frozenset", "builtins.tuple")


class ModelBuilder:
    """Fluent API for assembling a declaration model"""

    def __init__(self) -> None:
        self._declaration_configs: dict[str, DeclarationConfiguration] = {}

    def declaration(self, qualified_name: str) -> "DeclarationConfiguration":
        if qualified_name not in self._declaration_configs:
            self._declaration_configs[qualified_name] = DeclarationConfiguration(
                qualified_name, self
            )
        return self._declaration_configs[qualified_name]

    def with_persistence_types(self, names: MarkerNames | None = None) -> Self:
        """Declares the marker annotations and the standard collection types.

        Hosts analyzing plain models call this once so the session can resolve
        its well-known types; the resulting declarations carry no annotations
        and are never checked themselves.

        Args:
            names: the marker names to declare. Defaults to `MarkerNames()`.
        """
        names = names or MarkerNames()
        for marker in names.all():
            self.declaration(marker)
        for collection_type in _COLLECTION_TYPES:
            self.declaration(collection_type).extends(ref(names.collection))
        return self

    def build(self) -> Model:
        return Model(config._create_declaration() for config in self._declaration_configs.values())


class DeclarationConfiguration:

    def __init__(self, qualified_name: str, builder: ModelBuilder):
        if not qualified_name:
            raise ValueError("Declarations must have a qualified name")
        self._qualified_name = qualified_name
        self._builder = builder
        self._constructors: list[Constructor] = []
        self._properties: dict[str, PropertyConfiguration] = {}
        self._annotations: list[AnnotationInstance] = []
        self._supertypes: list[TypeReference] = []

    @property
    def type(self) -> TypeReference:
        return TypeReference(self._qualified_name)

    def constructor(self, parameter_count: int = 0) -> Self:
        """Declares an explicit constructor.

        A declaration without explicit constructors receives the implicit
        no-argument constructor when the model is built.
        """
        if parameter_count < 0:
            raise ValueError(
                f"Constructor of {self._qualified_name} cannot take {parameter_count} parameters"
            )
        self._constructors.append(Constructor(parameter_count))
        return self

    def extends(self, *supertypes: TypeReference) -> Self:
        self._supertypes.extend(supertypes)
        return self

    def annotated(self, annotation_type: str | TypeReference, **attributes: Any) -> Self:
        """Applies an annotation to the declaration.

        Args:
            annotation_type: qualified name or reference of the annotation type
            attributes: annotation attributes, e.g. `mappedBy="parent"`
        """
        self._annotations.append(AnnotationInstance.of(annotation_type, **attributes))
        return self

    def field(self, name: str, type_: TypeReference) -> PropertyConfiguration:
        return self._property(name, PropertyKind.FIELD, type_)

    def accessor(self, name: str, returns: TypeReference) -> PropertyConfiguration:
        return self._property(name, PropertyKind.ACCESSOR, returns)

    def declaration(self, qualified_name: str) -> "DeclarationConfiguration":
        return self._builder.declaration(qualified_name)

    def build(self) -> Model:
        return self._builder.build()

    def _property(
        self, name: str, kind: PropertyKind, type_: TypeReference
    ) -> PropertyConfiguration:
        if name in self._properties:
            raise ValueError(
                f"Property '{name}' is already declared on {self._qualified_name}. "
                f"Declared properties: {', '.join(self._properties.keys())}"
            )
        prop_config = PropertyConfiguration(name, kind, type_, self)
        self._properties[name] = prop_config
        return prop_config

    def _create_declaration(self) -> Declaration:
        """Creates the declaration and its properties.

        The declaration takes ownership of its properties and fills in the
        implicit constructor when no constructor was declared.
        """
        return Declaration(
            self._qualified_name,
            constructors=self._constructors,
            properties=[config._create_property() for config in self._properties.values()],
            annotations=self._annotations,
            supertypes=self._supertypes,
        )
