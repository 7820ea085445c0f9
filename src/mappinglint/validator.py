import logging
from typing import Any, Iterable

from typing_extensions import Self

from .catalog import TypeCatalog
from .checks.constructor import check_no_arg_constructor
from .checks.mapping import check_bidirectional_mapping
from .configuration import ValidatorOptions
from .context import AnalysisContext
from .diagnostics import DiagnosticSink
from .model import Declaration, Model, Property

logger = logging.getLogger(__name__)


class MappingValidator:
    """Validates the entity and relationship mappings of a declaration model.

    A validator is initialized once per session with the model it analyzes,
    which also declares the well-known marker types. Every violation found is
    reported to the sink; only configuration problems raise.

    Example:
        >>> sink = CollectingSink()
        >>> validator = MappingValidator(sink).initialize(model)
        >>> validator.process()
        False
        >>> [d.message for d in sink.diagnostics]
        ['Missing mappedBy attribute']
    """

    def __init__(self, sink: DiagnosticSink, options: ValidatorOptions | None = None):
        self._sink = sink
        self._options = options or ValidatorOptions()
        self._context: AnalysisContext | None = None

    @classmethod
    def from_configuration(cls, configuration: dict[str, Any]) -> "MappingValidator":
        """Creates a validator from a `ValidatorConfiguration.build()` result.

        The validator is initialized right away when the configuration names a model.
        """
        validator = cls(configuration["sink"], configuration.get("options"))
        model = configuration.get("model")
        if model is not None:
            validator.initialize(model)
        return validator

    @property
    def context(self) -> AnalysisContext:
        if self._context is None:
            raise RuntimeError(
                "MappingValidator has not been initialized. "
                "Call initialize() with the analyzed model first."
            )
        return self._context

    def initialize(self, model: Model) -> Self:
        """Starts a session over `model` and resolves its marker types.

        Args:
            model: the analyzed model

        Raises:
            CatalogResolutionError: If a marker type cannot be resolved
        """
        catalog = TypeCatalog(model, self._options.markers)
        self._context = AnalysisContext(catalog, model, self._sink, self._options)
        logger.debug("Initialized validation session with %d declarations", len(model))
        return self

    def run_checks(
        self, entity_marked: Iterable[Declaration], one_to_many_marked: Iterable[Property]
    ) -> bool:
        """Runs every check over the given elements.

        Entity declarations are checked for a no-argument constructor, then
        one-to-many properties for a consistent many-to-one counterpart. Every
        element is checked regardless of earlier violations.

        Returns:
            False, since other validators may process the same elements
        """
        context = self.context
        declarations = list(entity_marked)
        properties = list(one_to_many_marked)

        if self._options.check_constructors:
            for declaration in declarations:
                check_no_arg_constructor(context, declaration)

        if self._options.check_mappings:
            for prop in properties:
                check_bidirectional_mapping(context, prop)

        logger.debug(
            "Checked %d entity declarations and %d one-to-many properties",
            len(declarations),
            len(properties),
        )
        return False

    def process(self) -> bool:
        """Runs every check over the marker-annotated elements of the session model."""
        catalog = self.context.catalog
        model = self.context.model
        return self.run_checks(
            model.annotated_declarations(catalog.entity),
            model.annotated_properties(catalog.one_to_many),
        )
