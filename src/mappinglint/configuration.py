from typing import Any, TYPE_CHECKING

from pydantic import BaseModel, ConfigDict, Field

if TYPE_CHECKING:
    from .model import Model
    from .diagnostics import DiagnosticSink


class MarkerNames(BaseModel):
    """Qualified names of the well-known types a session resolves on startup."""

    model_config = ConfigDict(frozen=True)

    entity: str = Field(default="persistence.Entity")
    one_to_many: str = Field(default="persistence.OneToMany")
    many_to_one: str = Field(default="persistence.ManyToOne")
    collection: str = Field(default="collections.abc.Collection")

    def all(self) -> tuple[str, str, str, str]:
        return (self.entity, self.one_to_many, self.many_to_one, self.collection)


class ValidatorOptions(BaseModel):

    model_config = ConfigDict(frozen=True)

    markers: MarkerNames = Field(default_factory=MarkerNames)
    mapped_by_attribute: str = Field(default="mappedBy", min_length=1)
    check_constructors: bool = Field(default=True)
    check_mappings: bool = Field(default=True)


class ValidatorConfiguration:
    """Manages configuration for MappingValidator instances"""

    def __init__(self) -> None:
        self._model: "Model | None" = None
        self._sink: "DiagnosticSink | None" = None
        self._options: dict[str, Any] = {}

    def with_model(self, model: "Model") -> "ValidatorConfiguration":
        self._model = model
        return self

    def with_sink(self, sink: "DiagnosticSink") -> "ValidatorConfiguration":
        self._sink = sink
        return self

    def with_options(self, **options: Any) -> "ValidatorConfiguration":
        self._options.update(options)
        return self

    def build(self) -> dict[str, Any]:
        if self._sink is None:
            raise ValueError("Your configuration doesn't specify a diagnostic sink")
        return {
            "model": self._model,
            "sink": self._sink,
            "options": ValidatorOptions(**self._options),
        }
