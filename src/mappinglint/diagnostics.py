import logging
from enum import Enum
from typing import Protocol, Union

from attrs import define

from .model import AnnotationInstance, AttributeValue, Element

logger = logging.getLogger(__name__)

Anchor = Union[Element, AnnotationInstance, AttributeValue]


class Severity(str, Enum):
    ERROR = "error"
    WARNING = "warning"
    NOTE = "note"


_LOG_LEVELS: dict[Severity, int] = {
    Severity.ERROR: logging.ERROR,
    Severity.WARNING: logging.WARNING,
    Severity.NOTE: logging.INFO,
}


class DiagnosticSink(Protocol):
    """Receives the violations found by a validation session.

    Anchors are given from the most general to the most specific: the offending
    declaration or property, the annotation instance on it and, optionally, the
    attribute value inside that annotation.
    """

    def report(self, severity: Severity, message: str, *anchors: Anchor) -> None: ...


@define(frozen=True)
class Diagnostic:
    severity: Severity
    message: str
    element: Element
    annotation: AnnotationInstance | None = None
    value: AttributeValue | None = None

    @classmethod
    def from_anchors(cls, severity: Severity, message: str, *anchors: Anchor) -> "Diagnostic":
        if not anchors:
            raise ValueError(f"Diagnostic '{message}' must be anchored to an element")
        if len(anchors) > 3:
            raise ValueError(
                f"Diagnostic '{message}' accepts at most 3 anchors, got {len(anchors)}"
            )
        element, *rest = anchors
        annotation = rest[0] if len(rest) > 0 else None
        value = rest[1] if len(rest) > 1 else None
        return cls(severity, message, element, annotation, value)  # type: ignore[arg-type]

    def __str__(self) -> str:
        location = str(self.element)
        if self.annotation is not None:
            location = f"{location} {self.annotation}"
        if self.value is not None:
            location = f"{location} [{self.value}]"
        return f"{self.severity.value}: {self.message} ({location})"


class CollectingSink:
    """Keeps every reported diagnostic in memory, in report order."""

    def __init__(self) -> None:
        self.diagnostics: list[Diagnostic] = []

    def report(self, severity: Severity, message: str, *anchors: Anchor) -> None:
        self.diagnostics.append(Diagnostic.from_anchors(severity, message, *anchors))

    def messages(self) -> list[str]:
        return [d.message for d in self.diagnostics]

    def clear(self) -> None:
        self.diagnostics.clear()

    def __len__(self) -> int:
        return len(self.diagnostics)


class LoggingSink:
    """Writes diagnostics to a logger at the level matching their severity."""

    def __init__(self, log: logging.Logger | None = None):
        self._logger = log or logger

    def report(self, severity: Severity, message: str, *anchors: Anchor) -> None:
        diagnostic = Diagnostic.from_anchors(severity, message, *anchors)
        self._logger.log(_LOG_LEVELS[severity], str(diagnostic))
