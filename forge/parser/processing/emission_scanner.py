"""
Finds calls to the ``emit`` and ``feed`` primitives inside operation bodies.

Matching is purely syntactic: a call is recorded wherever it appears in the
body, whatever branch or loop it sits in. Calls through any other name
(an alias of the primitive, a helper method) are not seen, and neither are
calls inside nested functions, lambdas or classes, which are not part of
the operation's own body.

Arguments are bound by the primitive's parameter names, so
``emit(topic="x", payload=p)`` is read like ``emit("x", p)``. A call whose
arguments cannot be bound is reported as a structural error.
"""

import ast
import logging

from forge.parser.parsers.type_parser import dotted_name
from forge.parser.shared.constants import (
    EMIT_PARAMETERS,
    EMIT_PRIMITIVE,
    FEED_PARAMETERS,
    FEED_PRIMITIVE,
    RUNTIME_NAMESPACE,
)
from forge.parser.shared.exceptions import ForgeError, StructuralError
from forge.typing.model import EmissionKind, EmissionSite, OperationSignature, TopicKind
from forge.typing.types import TypeExpr, TypeNone, TypeOpaque, TypePath, TypeTuple

logger = logging.getLogger(__name__)

_LITERAL_TYPES = (bool, int, float, complex, str, bytes)

_PRIMITIVES = {
    EmissionKind.EMIT: (EMIT_PRIMITIVE, EMIT_PARAMETERS),
    EmissionKind.FEED: (FEED_PRIMITIVE, FEED_PARAMETERS),
}


def _primitive_kind(func: ast.expr) -> EmissionKind | None:
    segments = dotted_name(func)
    if segments == [EMIT_PRIMITIVE] or segments == [RUNTIME_NAMESPACE, EMIT_PRIMITIVE]:
        return EmissionKind.EMIT
    if segments == [FEED_PRIMITIVE] or segments == [RUNTIME_NAMESPACE, FEED_PRIMITIVE]:
        return EmissionKind.FEED
    return None


def bind_arguments(node: ast.Call, parameters: tuple[str, ...]) -> dict[str, ast.expr] | None:
    """Map a call's arguments onto ``parameters``, None if they do not fit exactly."""
    if len(node.args) > len(parameters):
        return None
    if any(isinstance(arg, ast.Starred) for arg in node.args):
        return None
    bound = dict(zip(parameters, node.args))
    for keyword in node.keywords:
        if keyword.arg not in parameters or keyword.arg in bound:
            return None
        bound[keyword.arg] = keyword.value
    if len(bound) != len(parameters):
        return None
    return bound


def payload_type_of(node: ast.expr) -> TypeExpr:
    """Best guess at the type of a payload expression."""
    if isinstance(node, ast.Call):
        segments = dotted_name(node.func)
        return TypePath(tuple(segments)) if segments else TypeNone()
    segments = dotted_name(node)
    if segments is not None:
        # Capitalised paths name a type or constant; anything else is a variable
        if segments[-1][:1].isupper():
            return TypePath(tuple(segments))
        return TypeOpaque(".".join(segments))
    if isinstance(node, ast.Tuple):
        return TypeTuple(tuple(_element_type(element) for element in node.elts))
    if isinstance(node, ast.Constant) and isinstance(node.value, _LITERAL_TYPES):
        return TypePath((type(node.value).__name__,))
    return TypeNone()


def _element_type(node: ast.expr) -> TypeExpr:
    element = payload_type_of(node)
    if isinstance(element, TypeNone):
        return TypeOpaque(ast.unparse(node))
    return element


def payload_shape(node: ast.expr) -> bool | None:
    """True for a tuple literal, False for a value that is clearly not one, None if unknown."""
    if isinstance(node, ast.Tuple):
        return True
    if isinstance(node, (ast.Call, ast.Constant, ast.Dict, ast.List, ast.Set)):
        return False
    return None


class _EmissionVisitor(ast.NodeVisitor):
    def __init__(self, operation: str) -> None:
        self.operation = operation
        self.sites: list[EmissionSite] = []
        self.errors: list[ForgeError] = []

    def visit_FunctionDef(self, node: ast.FunctionDef) -> None:
        pass

    def visit_AsyncFunctionDef(self, node: ast.AsyncFunctionDef) -> None:
        pass

    def visit_Lambda(self, node: ast.Lambda) -> None:
        pass

    def visit_ClassDef(self, node: ast.ClassDef) -> None:
        pass

    def visit_Call(self, node: ast.Call) -> None:
        kind = _primitive_kind(node.func)
        if kind is not None:
            name, parameters = _PRIMITIVES[kind]
            arguments = bind_arguments(node, parameters)
            if arguments is None:
                self.errors.append(
                    StructuralError(
                        f"Operation '{self.operation}' calls {name} on line {node.lineno} "
                        f"with arguments that do not match {name}({', '.join(parameters)})",
                        operation=self.operation,
                    )
                )
            elif kind is EmissionKind.EMIT:
                self._record_emit(node, arguments["topic"], arguments["payload"])
            else:
                self._record_feed(node, arguments["item"])
        self.generic_visit(node)

    def _record_feed(self, node: ast.Call, payload: ast.expr) -> None:
        self.sites.append(
            EmissionSite(
                owning_operation=self.operation,
                topic=None,
                topic_kind=None,
                payload_type=payload_type_of(payload),
                kind=EmissionKind.FEED,
                payload_is_tuple=payload_shape(payload),
                lineno=node.lineno,
            )
        )

    def _record_emit(self, node: ast.Call, topic_node: ast.expr, payload: ast.expr) -> None:
        if isinstance(topic_node, ast.Constant) and isinstance(topic_node.value, str):
            topic, topic_kind = topic_node.value, TopicKind.LITERAL
        else:
            segments = dotted_name(topic_node)
            if segments is None:
                logger.debug(
                    f"Skipping emit in '{self.operation}' on line {node.lineno}: "
                    f"topic '{ast.unparse(topic_node)}' is neither a literal nor a constant path"
                )
                return
            topic, topic_kind = ".".join(segments), TopicKind.PATH

        self.sites.append(
            EmissionSite(
                owning_operation=self.operation,
                topic=topic,
                topic_kind=topic_kind,
                payload_type=payload_type_of(payload),
                kind=EmissionKind.EMIT,
                payload_is_tuple=payload_shape(payload),
                lineno=node.lineno,
            )
        )


class EmissionScanner:
    """Collects emission sites for each operation."""

    def __init__(self) -> None:
        self.errors: list[ForgeError] = []

    def scan(self, operation: OperationSignature) -> list[EmissionSite]:
        if operation.node is None:
            return []
        visitor = _EmissionVisitor(operation.name)
        for statement in operation.node.body:
            visitor.visit(statement)
        self.errors.extend(visitor.errors)
        return visitor.sites

    def scan_all(self, operations: list[OperationSignature]) -> dict[str, list[EmissionSite]]:
        sites = {}
        for operation in operations:
            sites[operation.name] = self.scan(operation)
            if sites[operation.name]:
                logger.debug(
                    f"Found {len(sites[operation.name])} emission sites in '{operation.name}'"
                )
        return sites
