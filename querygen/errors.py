"""Exception hierarchy for the query generator.

Configuration problems abort a run before any generation work starts,
synthesis problems abort it before anything reaches the output sink.
"""

from __future__ import annotations


class GeneratorError(Exception):
    """Base class for every error raised by querygen."""


class ConfigurationError(GeneratorError):
    """A required setting is missing, blank or malformed."""

    def __init__(self, message: str, fields: tuple[str, ...] = ()) -> None:
        super().__init__(message)
        self.fields = fields


class SchemaResolutionError(ConfigurationError):
    """The schema container identity could not be resolved to a live container."""


class SchemaError(ConfigurationError):
    """The schema description or container does not have the expected shape."""


class SynthesisError(GeneratorError):
    """The generated structure cannot be rendered into valid source."""


class OutputError(GeneratorError):
    """The rendered source could not be written to its target location."""

    def __init__(self, message: str, path: str = "") -> None:
        super().__init__(message)
        self.path = path
