"""
Parsers for definition sources and type annotations.
"""

from .definition_parser import DefinitionParser
from .type_parser import dotted_name, parse_type_expression, parse_type_text

__all__ = [
    "DefinitionParser",
    "dotted_name",
    "parse_type_expression",
    "parse_type_text",
]
