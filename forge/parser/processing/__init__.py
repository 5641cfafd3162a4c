"""
Processing stages that turn a syntax tree into candidate operations.
"""

from .emission_scanner import EmissionScanner
from .import_table import ImportTableBuilder, collect_import_statements
from .signature_extractor import SignatureExtractor, decorator_name, has_empty_body

__all__ = [
    "EmissionScanner",
    "ImportTableBuilder",
    "SignatureExtractor",
    "collect_import_statements",
    "decorator_name",
    "has_empty_body",
]
