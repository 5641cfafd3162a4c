"""
Custom exceptions for the forge compiler.
"""

from dataclasses import dataclass


class ForgeError(Exception):
    """Base exception for all forge errors."""

    pass


class ParserError(ForgeError):
    """Base exception for all errors raised while reading a definition."""

    pass


class DefinitionSyntaxError(ParserError):
    """Raised when the definition source is not valid Python."""

    pass


class StructuralError(ParserError):
    """
    Raised when a definition violates a structural constraint.

    Wrong number of components or constructors, disallowed receivers,
    async or generic operations. Always fatal.
    """

    def __init__(self, message: str, operation: str | None = None) -> None:
        super().__init__(message)
        self.operation = operation
        self.errors: list[ForgeError] = [self]


class AnnotationConflictError(ParserError):
    """Raised when markers on an operation or handler cannot be combined."""

    def __init__(
        self, message: str, operation: str | None = None, annotation: str | None = None
    ) -> None:
        super().__init__(message)
        self.operation = operation
        self.annotation = annotation
        self.errors: list[ForgeError] = [self]


class ConfigurationError(ForgeError):
    """Raised when the project configuration or target selection is invalid."""

    pass


class OutputGenerationError(ForgeError):
    """Raised when a generated artifact cannot be rendered or written."""

    pass


@dataclass(frozen=True)
class ResolutionWarning:
    """
    Non-fatal diagnostic for a name the type resolver could not qualify.

    Collected into the compiled model instead of being raised, so one bad
    reference never blocks unrelated operations.
    """

    operation: str | None
    expression: str
    name: str
    message: str = "unknown type name"

    def __str__(self) -> str:
        where = f" in '{self.operation}'" if self.operation else ""
        return f"{self.message} '{self.name}'{where} (from '{self.expression}')"
