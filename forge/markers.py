"""
Marker decorators for component definitions.

The compiler reads these syntactically and never imports the definition,
so at runtime they only tag the decorated object. They exist so a
definition module stays importable and testable as ordinary Python.
"""

from collections.abc import Callable
from typing import Generic, TypeVar

T = TypeVar("T")
F = TypeVar("F", bound=Callable)


class Ref(Generic[T]):
    """Annotates a parameter taken, or a value returned, by shared reference."""


class MutRef(Generic[T]):
    """Annotates a parameter taken by mutable reference."""


def _tag(obj, key: str, value) -> None:
    markers = dict(getattr(obj, "__forge_markers__", {}))
    markers[key] = value
    obj.__forge_markers__ = markers


def custom(fn: F) -> F:
    """Opt an operation out of generated dispatch code."""
    _tag(fn, "custom", True)
    return fn


def view(fn: F) -> F:
    """Mark an operation as only reading the component state."""
    _tag(fn, "view", True)
    return fn


def feeds(payload_type) -> Callable[[F], F]:
    """Declare the type of the items a streaming operation feeds, e.g. ``feeds("tuple[A, B]")``."""

    def decorator(fn: F) -> F:
        _tag(fn, "feeds", payload_type)
        return fn

    return decorator


def expose(*names):
    """Whitelist the methods of a trait implementation that become operations."""
    if len(names) == 1 and isinstance(names[0], (list, tuple)):
        names = tuple(names[0])

    def decorator(cls):
        _tag(cls, "expose", tuple(names))
        return cls

    return decorator


def _handler(role: str):
    def binding(target: str) -> Callable[[F], F]:
        def decorator(fn: F) -> F:
            _tag(fn, role, target)
            return fn

        return decorator

    binding.__name__ = role
    binding.__doc__ = f"Bind the decorated function as the {role} handler of ``target``."
    return binding


encode_input = _handler("encode_input")
decode_input = _handler("decode_input")
decode_output = _handler("decode_output")
