import inspect as pyinspect
import logging
from typing import Any

from sqlalchemy import inspect
from sqlalchemy.orm import MANYTOONE, ONETOMANY, Mapper, RelationshipProperty, registry

from ..builder.core import ModelBuilder
from ..configuration import MarkerNames
from ..model import Model, TypeReference, ref

logger = logging.getLogger(__name__)

_REQUIRED_KINDS = (
    pyinspect.Parameter.POSITIONAL_ONLY,
    pyinspect.Parameter.POSITIONAL_OR_KEYWORD,
    pyinspect.Parameter.KEYWORD_ONLY,
)


def model_from_sqlalchemy(
    *classes: type[Any], names: MarkerNames | None = None, mapped_by_attribute: str = "mappedBy"
) -> Model:
    """Builds a declaration model from SQLAlchemy mapped classes.

    Every mapped class becomes an entity-annotated declaration. Its constructor
    takes as many parameters as `__init__` requires, so the declarative default
    constructor (keyword arguments only) counts as a no-argument constructor.
    Relationships become fields:
        - one-to-many relationships are typed `collection_class[Target]` and
          annotated with the one-to-many marker, with the mapped-by attribute
          taken from `back_populates` or a string `backref`
        - scalar one-to-one relationships (`uselist=False`) are ignored
        - many-to-one relationships are typed `Target` and annotated with the
          many-to-one marker
        - many-to-many relationships are ignored

    Example:
        >>> model = model_from_sqlalchemy(User, Post)
        >>> MappingValidator(LoggingSink()).initialize(model).process()
        False

    Args:
        classes: the mapped classes to analyze
        names: the marker names to annotate the model with. Defaults to `MarkerNames()`.
        mapped_by_attribute: the annotation attribute holding the back-reference name.
            Must match `ValidatorOptions.mapped_by_attribute` of the validating session.

    Raises:
        ValueError: If one of the classes is not mapped
    """
    names = names or MarkerNames()
    builder = ModelBuilder().with_persistence_types(names)

    mappers: list[Mapper[Any]] = []
    for cls in classes:
        mapper = inspect(cls, raiseerr=False)
        if not isinstance(mapper, Mapper):
            raise ValueError(
                f"{cls.__name__} is not a mapped class. "
                f"Only classes mapped with SQLAlchemy can be analyzed."
            )
        mappers.append(mapper)

    # relationship directions and backrefs are only known once mappers are configured
    for reg in {id(m.registry): m.registry for m in mappers}.values():
        reg.configure()

    for mapper in mappers:
        _add_mapped_class(builder, mapper, names, mapped_by_attribute)

    return builder.build()


def model_from_registry(
    reg: registry, names: MarkerNames | None = None, mapped_by_attribute: str = "mappedBy"
) -> Model:
    """Builds a declaration model from every class mapped in a registry.

    Use `Base.registry` for declarative base classes.
    """
    classes = sorted((m.class_ for m in reg.mappers), key=qualified_name)
    return model_from_sqlalchemy(*classes, names=names, mapped_by_attribute=mapped_by_attribute)


def qualified_name(cls: type[Any]) -> str:
    return f"{cls.__module__}.{cls.__qualname__}"


def _add_mapped_class(
    builder: ModelBuilder, mapper: Mapper[Any], names: MarkerNames, mapped_by_attribute: str
) -> None:
    cls = mapper.class_
    config = builder.declaration(qualified_name(cls))
    config.annotated(names.entity).constructor(_required_parameters(cls))

    for rel in mapper.relationships:
        # inherited relationships are declared by the superclass
        if rel.parent is not mapper:
            continue

        target = ref(qualified_name(rel.mapper.class_))
        if rel.direction is ONETOMANY and not rel.uselist:
            logger.debug(
                "Skipping %s.%s: scalar one-to-one relationships are not supported",
                cls.__name__,
                rel.key,
            )
        elif rel.direction is ONETOMANY:
            collection_type = _collection_type(builder, rel, names)
            if collection_type is None:
                logger.debug(
                    "Skipping %s.%s: keyed collections are not supported", cls.__name__, rel.key
                )
                continue
            mapped_by = _mapped_by(rel)
            attributes = {mapped_by_attribute: mapped_by} if mapped_by else {}
            config.field(rel.key, ref(collection_type.qualified_name, target)).annotated(
                names.one_to_many, **attributes
            )
        elif rel.direction is MANYTOONE:
            config.field(rel.key, target).annotated(names.many_to_one)
        else:
            logger.debug("Skipping %s.%s: %s", cls.__name__, rel.key, rel.direction.name)


def _required_parameters(cls: type[Any]) -> int:
    signature = pyinspect.signature(cls.__init__)
    # the first parameter is the instance itself
    parameters = list(signature.parameters.values())[1:]
    return sum(1 for p in parameters if p.kind in _REQUIRED_KINDS and p.default is p.empty)


def _collection_type(
    builder: ModelBuilder, rel: RelationshipProperty[Any], names: MarkerNames
) -> TypeReference | None:
    collection_class = rel.collection_class or list
    if not isinstance(collection_class, type) or issubclass(collection_class, dict):
        return None

    name = qualified_name(collection_class)
    if collection_class.__module__ != "builtins":
        builder.declaration(name).extends(ref(names.collection))
    return ref(name)


def _mapped_by(rel: RelationshipProperty[Any]) -> str | None:
    if rel.back_populates:
        return rel.back_populates
    if isinstance(rel.backref, str):
        return rel.backref
    if isinstance(rel.backref, tuple):
        return rel.backref[0]
    return None