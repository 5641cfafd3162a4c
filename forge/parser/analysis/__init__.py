"""
Validation and resolution of extracted definitions.
"""

from .handler_relocator import HandlerRelocator
from .type_resolver import TypeResolver
from .validator import DefinitionValidator

__all__ = ["DefinitionValidator", "HandlerRelocator", "TypeResolver"]
