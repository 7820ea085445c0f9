from enum import Enum
from typing import Any, Iterable, Iterator, Union

from attrs import define, field


class PropertyKind(str, Enum):
    FIELD = "field"
    ACCESSOR = "accessor"


class AttributeKind(str, Enum):
    STRING = "string"
    CLASS = "class"
    OTHER = "other"


@define(frozen=True)
class TypeReference:
    """A resolved type identity, optionally parameterized.

    Two references denote the same type when their qualified names and their
    type arguments are equal. The raw form of a reference drops its arguments.
    """

    qualified_name: str
    arguments: tuple["TypeReference", ...] = field(default=(), converter=tuple)

    @property
    def simple_name(self) -> str:
        return self.qualified_name.rsplit(".", 1)[-1]

    @property
    def raw(self) -> "TypeReference":
        if not self.arguments:
            return self
        return TypeReference(self.qualified_name)

    def __str__(self) -> str:
        if not self.arguments:
            return self.qualified_name
        args = ", ".join(str(arg) for arg in self.arguments)
        return f"{self.qualified_name}[{args}]"


def ref(qualified_name: str, *arguments: TypeReference) -> TypeReference:
    """Shorthand for building a (possibly parameterized) type reference.

    Example:
        >>> str(ref("builtins.set", ref("shop.Child")))
        'builtins.set[shop.Child]'
    """
    return TypeReference(qualified_name, arguments)


@define(frozen=True)
class AttributeValue:
    """The value of a single annotation attribute.

    Values are strings, class references (a `TypeReference`) or anything else
    the source model supplies; `kind` tells them apart.
    """

    value: Any

    @property
    def kind(self) -> AttributeKind:
        if isinstance(self.value, str):
            return AttributeKind.STRING
        if isinstance(self.value, TypeReference):
            return AttributeKind.CLASS
        return AttributeKind.OTHER

    def as_string(self) -> str | None:
        return self.value if self.kind is AttributeKind.STRING else None

    def __str__(self) -> str:
        if self.kind is AttributeKind.STRING:
            return f'"{self.value}"'
        if self.kind is AttributeKind.CLASS:
            return f"{self.value}.class"
        return repr(self.value)


def _to_attribute_values(attributes: dict[str, Any]) -> dict[str, AttributeValue]:
    return {
        name: value if isinstance(value, AttributeValue) else AttributeValue(value)
        for name, value in attributes.items()
    }


@define(frozen=True, eq=False)
class AnnotationInstance:
    """An annotation applied to a declaration or a property."""

    type: TypeReference = field(converter=lambda t: t.raw)
    attributes: dict[str, AttributeValue] = field(factory=dict, converter=_to_attribute_values)

    @classmethod
    def of(
        cls, annotation_type: "str | TypeReference", **attributes: Any
    ) -> "AnnotationInstance":
        if isinstance(annotation_type, str):
            annotation_type = TypeReference(annotation_type)
        return cls(annotation_type, attributes)

    def __str__(self) -> str:
        if not self.attributes:
            return f"@{self.type}"
        rendered = ", ".join(f"{name}={value}" for name, value in self.attributes.items())
        return f"@{self.type}({rendered})"


@define(frozen=True)
class Constructor:
    parameter_count: int = 0


@define(eq=False)
class Property:
    """A field or accessor belonging to a declaration.

    `type` is the declared type of a field or the return type of an accessor.
    `owner` is set by the owning `Declaration` and is never owned by the property.
    """

    name: str
    kind: PropertyKind
    type: TypeReference | None
    annotations: list[AnnotationInstance] = field(factory=list, converter=list)
    owner: "Declaration | None" = field(default=None, repr=False)

    def __str__(self) -> str:
        if self.kind is PropertyKind.ACCESSOR:
            return f"{self.name}()"
        return self.name


@define(eq=False)
class Declaration:
    """A named class-like unit of the analyzed model.

    A declaration without explicit constructors receives the implicit
    zero-argument constructor on construction.
    """

    qualified_name: str
    constructors: list[Constructor] = field(factory=list, converter=list)
    properties: list[Property] = field(factory=list, converter=list)
    annotations: list[AnnotationInstance] = field(factory=list, converter=list)
    supertypes: list[TypeReference] = field(factory=list, converter=list)

    def __attrs_post_init__(self) -> None:
        if not self.constructors:
            self.constructors.append(Constructor(0))
        for prop in self.properties:
            prop.owner = self

    @property
    def simple_name(self) -> str:
        return self.qualified_name.rsplit(".", 1)[-1]

    @property
    def type(self) -> TypeReference:
        return TypeReference(self.qualified_name)

    def __str__(self) -> str:
        return self.simple_name


Element = Union[Declaration, Property]


class Model:
    """The read-only set of declarations visible to one validation session.

    The model doubles as the type source of the session: well-known types are
    resolved against the declarations it holds.
    """

    def __init__(self, declarations: Iterable[Declaration]):
        self._declarations: dict[str, Declaration] = {}
        for declaration in declarations:
            if declaration.qualified_name in self._declarations:
                raise ValueError(
                    f"Declaration {declaration.qualified_name} is defined more than once "
                    f"in the model"
                )
            self._declarations[declaration.qualified_name] = declaration

    def __iter__(self) -> Iterator[Declaration]:
        return iter(self._declarations.values())

    def __len__(self) -> int:
        return len(self._declarations)

    def declaration(self, qualified_name: str) -> Declaration | None:
        return self._declarations.get(qualified_name)

    def resolve(self, qualified_name: str) -> TypeReference | None:
        declaration = self._declarations.get(qualified_name)
        return declaration.type if declaration else None

    def is_assignable(self, source: TypeReference, target: TypeReference) -> bool:
        """Checks whether `source` can be assigned to `target`.

        Supertypes are walked as declared; type parameters are never substituted,
        so a parameterized target only matches a supertype written with the very
        same arguments. A raw target matches any parameterization.
        """
        seen: set[str] = set()
        pending = [source]
        while pending:
            current = pending.pop()
            if current.qualified_name == target.qualified_name and (
                not target.arguments or current.arguments == target.arguments
            ):
                return True
            if current.qualified_name in seen:
                continue
            seen.add(current.qualified_name)
            declaration = self._declarations.get(current.qualified_name)
            if declaration is not None:
                pending.extend(declaration.supertypes)
        return False

    def annotated_declarations(self, marker: TypeReference) -> list[Declaration]:
        return [d for d in self if any(a.type == marker for a in d.annotations)]

    def annotated_properties(self, marker: TypeReference) -> list[Property]:
        return [
            prop
            for declaration in self
            for prop in declaration.properties
            if any(a.type == marker for a in prop.annotations)
        ]
