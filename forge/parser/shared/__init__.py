"""
Shared exceptions and constants for the parser module.
"""

from .constants import *
from .exceptions import *

__all__ = [
    # Exceptions
    "ForgeError",
    "ParserError",
    "DefinitionSyntaxError",
    "StructuralError",
    "AnnotationConflictError",
    "ConfigurationError",
    "OutputGenerationError",
    "ResolutionWarning",
    # Constants
    "DEFAULT_CONFIG_FILE",
    "GENERATION_TARGETS",
    "TARGET_WRAPPERS",
    "TARGET_DATA_DRIVER",
    "HANDLER_ROLES",
    "BUILTIN_TYPE_NAMES",
]
