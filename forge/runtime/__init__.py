"""
Runtime support imported by generated modules.
"""

from .errors import DispatchError, DispatchErrorKind
from .protocols import BoundaryRuntime, Codec

__all__ = ["BoundaryRuntime", "Codec", "DispatchError", "DispatchErrorKind"]
