import logging
from typing import Protocol

from .configuration import MarkerNames
from .errors import CatalogResolutionError
from .model import TypeReference

logger = logging.getLogger(__name__)


class TypeSource(Protocol):
    """Anything that can turn a qualified type name into a type reference."""

    def resolve(self, qualified_name: str) -> TypeReference | None:
        """Resolves a qualified name.

        Returns:
            The raw type reference, or None when the name is unknown to the source
        """
        ...


class TypeCatalog:
    """Memoized well-known types of a validation session.

    The four marker types are resolved once, on construction. A name the source
    cannot resolve means the analyzed environment lacks the persistence
    framework types, which is fatal for the session.
    """

    def __init__(self, source: TypeSource, names: MarkerNames | None = None):
        self._source = source
        names = names or MarkerNames()
        self._cache: dict[str, TypeReference] = {}

        self.entity, self.one_to_many, self.many_to_one, self.collection = (
            self.resolve(name) for name in names.all()
        )

    def resolve(self, qualified_name: str) -> TypeReference:
        cached = self._cache.get(qualified_name)
        if cached is not None:
            return cached

        resolved = self._source.resolve(qualified_name)
        if resolved is None:
            raise CatalogResolutionError(qualified_name)

        logger.debug("Resolved well-known type %s", qualified_name)
        self._cache[qualified_name] = resolved.raw
        return self._cache[qualified_name]
