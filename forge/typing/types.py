"""
Type expressions.

A closed set of variants for the type annotations found in a definition.
Every stage that consumes a type expression handles each variant
explicitly and raises on anything else.
"""

from collections.abc import Callable
from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True)
class TypePath:
    """A dotted name such as ``int`` or ``bridge.types.Deposit``."""

    segments: tuple[str, ...]

    @property
    def dotted(self) -> str:
        return ".".join(self.segments)

    def render(self) -> str:
        return self.dotted


@dataclass(frozen=True)
class TypeGeneric:
    """A subscripted type such as ``list[T]`` or ``typing.Optional[T]``."""

    base: "TypeExpr"
    args: tuple["TypeExpr", ...]

    def render(self) -> str:
        return f"{self.base.render()}[{', '.join(arg.render() for arg in self.args)}]"


@dataclass(frozen=True)
class TypeTuple:
    """A fixed-size tuple, written ``tuple[A, B]`` or ``(A, B)``."""

    elements: tuple["TypeExpr", ...]

    def render(self) -> str:
        if not self.elements:
            return "tuple[()]"
        return f"tuple[{', '.join(element.render() for element in self.elements)}]"


@dataclass(frozen=True)
class TypeUnion:
    """``A | B``"""

    options: tuple["TypeExpr", ...]

    def render(self) -> str:
        return " | ".join(option.render() for option in self.options)


@dataclass(frozen=True)
class TypeNone:
    """The absence of a value."""

    def render(self) -> str:
        return "None"


@dataclass(frozen=True)
class TypeRef:
    """A ``Ref[T]`` or ``MutRef[T]`` marker wrapping a value type."""

    inner: "TypeExpr"
    mutable: bool = False

    def render(self) -> str:
        return self.inner.render()


@dataclass(frozen=True)
class TypeOpaque:
    """Any annotation outside the recognised shapes, kept as source text."""

    text: str

    def render(self) -> str:
        return self.text


TypeExpr = Union[TypePath, TypeGeneric, TypeTuple, TypeUnion, TypeNone, TypeRef, TypeOpaque]


def map_paths(expr: TypeExpr, rewrite: Callable[[TypePath], TypePath]) -> TypeExpr:
    """Return a copy of ``expr`` with every ``TypePath`` passed through ``rewrite``."""
    if isinstance(expr, TypePath):
        return rewrite(expr)
    if isinstance(expr, TypeGeneric):
        return TypeGeneric(
            base=map_paths(expr.base, rewrite),
            args=tuple(map_paths(arg, rewrite) for arg in expr.args),
        )
    if isinstance(expr, TypeTuple):
        return TypeTuple(tuple(map_paths(element, rewrite) for element in expr.elements))
    if isinstance(expr, TypeUnion):
        return TypeUnion(tuple(map_paths(option, rewrite) for option in expr.options))
    if isinstance(expr, TypeRef):
        return TypeRef(map_paths(expr.inner, rewrite), expr.mutable)
    if isinstance(expr, (TypeNone, TypeOpaque)):
        return expr
    raise TypeError(f"Unsupported type expression: {expr!r}")
