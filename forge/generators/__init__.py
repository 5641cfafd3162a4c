"""
Code generation backends consuming a compiled model.
"""

from .base import BaseGenerator
from .loader import load_generated_module
from .dispatch_generator import DispatchGenerator
from .schema_generator import SchemaGenerator, unique_events
from .wrapper_generator import WrapperGenerator

__all__ = [
    "BaseGenerator",
    "DispatchGenerator",
    "SchemaGenerator",
    "WrapperGenerator",
    "load_generated_module",
    "unique_events",
]
