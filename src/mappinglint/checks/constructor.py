import logging

from ..context import AnalysisContext
from ..errors import MappingContractError
from ..model import Declaration
from ..resolver.annotation import find_annotation

logger = logging.getLogger(__name__)

MISSING_NO_ARG_CONSTRUCTOR = "missing no argument constructor"


def check_no_arg_constructor(context: AnalysisContext, declaration: Declaration) -> None:
    """Verifies that an entity declaration has a no-argument constructor.

    The implicit default constructor of a declaration without explicit
    constructors counts as a no-argument constructor.

    Args:
        context: the analysis context of the running session
        declaration: a declaration annotated with the entity marker
    """
    if any(constructor.parameter_count == 0 for constructor in declaration.constructors):
        return

    entity_annotation = find_annotation(declaration, context.catalog.entity)
    if entity_annotation is None:
        raise MappingContractError(
            f"Declaration {declaration.qualified_name} is not annotated with "
            f"@{context.catalog.entity} and cannot be checked as an entity"
        )

    logger.debug("%s has no no-argument constructor", declaration.qualified_name)
    context.error(MISSING_NO_ARG_CONSTRUCTOR, declaration, entity_annotation)
