"""
Lowers annotation syntax into type expressions.
"""

import ast

from forge.parser.shared.constants import MUT_REF_MARKER, REF_MARKER, TUPLE_NAMES
from forge.typing.types import (
    TypeExpr,
    TypeGeneric,
    TypeNone,
    TypeOpaque,
    TypePath,
    TypeRef,
    TypeTuple,
    TypeUnion,
)


def dotted_name(node: ast.expr) -> list[str] | None:
    """Segments of a ``Name``/``Attribute`` chain, or None for any other expression."""
    segments: list[str] = []
    while isinstance(node, ast.Attribute):
        segments.append(node.attr)
        node = node.value
    if not isinstance(node, ast.Name):
        return None
    segments.append(node.id)
    return list(reversed(segments))


def parse_type_text(text: str) -> TypeExpr:
    """Parse a type written as a string, e.g. a forward reference or a ``feeds`` argument."""
    try:
        node = ast.parse(text.strip(), mode="eval").body
    except SyntaxError:
        return TypeOpaque(text)
    return parse_type_expression(node)


def parse_type_expression(node: ast.expr) -> TypeExpr:
    """Lower one annotation expression."""
    if isinstance(node, ast.Constant):
        if node.value is None:
            return TypeNone()
        if isinstance(node.value, str):
            return parse_type_text(node.value)
        return TypeOpaque(ast.unparse(node))

    segments = dotted_name(node)
    if segments is not None:
        if segments == ["None"]:
            return TypeNone()
        return TypePath(tuple(segments))

    if isinstance(node, ast.Subscript):
        return _parse_subscript(node)

    if isinstance(node, ast.BinOp) and isinstance(node.op, ast.BitOr):
        options: list[TypeExpr] = []
        for side in (node.left, node.right):
            parsed = parse_type_expression(side)
            if isinstance(parsed, TypeUnion):
                options.extend(parsed.options)
            else:
                options.append(parsed)
        return TypeUnion(tuple(options))

    if isinstance(node, ast.Tuple):
        return TypeTuple(tuple(parse_type_expression(element) for element in node.elts))

    return TypeOpaque(ast.unparse(node))


def _parse_subscript(node: ast.Subscript) -> TypeExpr:
    base = parse_type_expression(node.value)
    raw_args = node.slice.elts if isinstance(node.slice, ast.Tuple) else [node.slice]

    if isinstance(base, TypePath):
        head = base.segments[-1]
        if head in (REF_MARKER, MUT_REF_MARKER) and len(raw_args) == 1:
            return TypeRef(parse_type_expression(raw_args[0]), mutable=head == MUT_REF_MARKER)
        has_ellipsis = any(
            isinstance(arg, ast.Constant) and arg.value is Ellipsis for arg in raw_args
        )
        if head in TUPLE_NAMES and not has_ellipsis:
            # tuple[()] is the empty tuple
            if len(raw_args) == 1 and isinstance(raw_args[0], ast.Tuple) and not raw_args[0].elts:
                return TypeTuple(())
            return TypeTuple(tuple(parse_type_expression(arg) for arg in raw_args))

    return TypeGeneric(base, tuple(parse_type_expression(arg) for arg in raw_args))
