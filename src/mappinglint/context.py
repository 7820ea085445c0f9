from attrs import define

from .catalog import TypeCatalog
from .configuration import ValidatorOptions
from .diagnostics import Anchor, DiagnosticSink, Severity
from .model import Model


@define(frozen=True)
class AnalysisContext:
    """Everything a check needs during one validation session.

    The context is created once per session by `MappingValidator.initialize()`
    and handed to every check. The catalog and the model are read-only; the
    sink is the only side effect a check may have.
    """

    catalog: TypeCatalog
    model: Model
    sink: DiagnosticSink
    options: ValidatorOptions

    def error(self, message: str, *anchors: Anchor) -> None:
        self.sink.report(Severity.ERROR, message, *anchors)
