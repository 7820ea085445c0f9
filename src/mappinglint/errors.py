class MappingLintError(Exception):
    """Base class for fatal mappinglint errors.

    Fatal errors abort a validation session. Mapping violations found in the
    model are never raised; they are reported to a diagnostic sink instead.
    """


class CatalogResolutionError(MappingLintError, LookupError):
    """A well-known type could not be resolved while initializing a session."""

    def __init__(self, name: str):
        super().__init__(
            f"Cannot resolve type '{name}'. "
            f"The analyzed model does not declare the expected persistence framework types."
        )
        self.name = name


class UnsupportedPropertyKindError(MappingLintError, TypeError):
    """A property of a kind other than field or accessor reached a resolver."""


class MappingContractError(MappingLintError, ValueError):
    """An input element violates the contract of the check it was passed to."""
