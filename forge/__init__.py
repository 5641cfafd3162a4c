"""
forge

An interface compiler: derives boundary wrappers, a schema and dispatch
tables from one annotated component definition.
"""

from .compiler import CompilationError, build_project, compile_definition, compile_file
from .markers import (
    MutRef,
    Ref,
    custom,
    decode_input,
    decode_output,
    encode_input,
    expose,
    feeds,
    view,
)

__version__ = "0.1.0"

__all__ = [
    "CompilationError",
    "build_project",
    "compile_definition",
    "compile_file",
    "MutRef",
    "Ref",
    "custom",
    "decode_input",
    "decode_output",
    "encode_input",
    "expose",
    "feeds",
    "view",
]
