"""
Parser Module

Front end and middle end of the forge compiler: reading a definition,
extracting and validating its operations, and resolving their types.
Stages live in the ``parsers``, ``processing`` and ``analysis`` subpackages.
"""

from .shared import (
    AnnotationConflictError,
    ConfigurationError,
    DefinitionSyntaxError,
    ForgeError,
    OutputGenerationError,
    ParserError,
    ResolutionWarning,
    StructuralError,
)

__all__ = [
    "AnnotationConflictError",
    "ConfigurationError",
    "DefinitionSyntaxError",
    "ForgeError",
    "OutputGenerationError",
    "ParserError",
    "ResolutionWarning",
    "StructuralError",
]
