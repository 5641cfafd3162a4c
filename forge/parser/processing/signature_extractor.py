"""
Extracts candidate operations from a definition's syntax tree.

The component is the single public ``@dataclass`` class of the definition.
Its own body, and any module-local base class without bases of its own,
form the inherent blocks whose public methods are exported. A module-local
base class that itself subclasses a trait is a trait-implementation block:
only the methods whitelisted by ``@expose(...)`` on that class are exported.
"""

import ast
import logging
from dataclasses import dataclass

from forge.parser.parsers.type_parser import (
    dotted_name,
    parse_type_expression,
    parse_type_text,
)
from forge.parser.shared.constants import (
    HANDLER_ROLES,
    MARKER_CUSTOM,
    MARKER_EXPOSE,
    MARKER_FEEDS,
    MARKER_VIEW,
    SELF_TYPE_NAMES,
)
from forge.parser.shared.exceptions import (
    AnnotationConflictError,
    ForgeError,
    StructuralError,
)
from forge.typing.model import (
    Annotations,
    ExtractedDefinition,
    HandlerRole,
    OperationSignature,
    Parameter,
    ReceiverKind,
    Visibility,
)
from forge.typing.types import TypeExpr, TypeNone, TypeRef

logger = logging.getLogger(__name__)

FunctionNode = ast.FunctionDef | ast.AsyncFunctionDef


@dataclass
class _Block:
    cls: ast.ClassDef
    trait: TypeExpr | None = None
    expose: list[str] | None = None

    @property
    def is_trait_impl(self) -> bool:
        return self.trait is not None


def decorator_name(node: ast.expr) -> str | None:
    """Last segment of a decorator's name, with or without a call."""
    target = node.func if isinstance(node, ast.Call) else node
    segments = dotted_name(target)
    return segments[-1] if segments else None


def has_empty_body(node: FunctionNode) -> bool:
    """True for bodies made only of a docstring, ``...`` and ``pass``."""
    for statement in node.body:
        if isinstance(statement, ast.Pass):
            continue
        if isinstance(statement, ast.Expr) and isinstance(statement.value, ast.Constant):
            if statement.value.value is Ellipsis or isinstance(statement.value.value, str):
                continue
        return False
    return True


def _is_dataclass(cls: ast.ClassDef) -> bool:
    return any(decorator_name(dec) == "dataclass" for dec in cls.decorator_list)


def _top_level_constants(module: ast.Module) -> set[str]:
    names: set[str] = set()
    for node in module.body:
        targets: list[ast.expr] = []
        if isinstance(node, ast.Assign):
            targets = node.targets
        elif isinstance(node, (ast.AnnAssign, ast.AugAssign)):
            targets = [node.target]
        elif isinstance(node, ast.TypeAlias):
            targets = [node.name]
        names.update(target.id for target in targets if isinstance(target, ast.Name))
    return names


class SignatureExtractor:
    """Walks the component and its blocks into ``OperationSignature`` records."""

    def extract(self, module: ast.Module) -> ExtractedDefinition:
        classes = {node.name: node for node in module.body if isinstance(node, ast.ClassDef)}
        structures = tuple(
            name for name, cls in classes.items() if not name.startswith("_") and _is_dataclass(cls)
        )
        local_names = frozenset(set(classes) | _top_level_constants(module))

        errors: list[ForgeError] = []
        operations: list[OperationSignature] = []
        constructors: list[OperationSignature] = []

        if len(structures) == 1:
            component = classes[structures[0]]
            for block in self._blocks(component, classes, errors):
                self._extract_block(block, component.name, operations, constructors, errors)

        handlers = self._extract_module_functions(module, errors)

        logger.debug(
            f"Extracted {len(operations)} candidate operations, "
            f"{len(constructors)} constructors, {len(handlers)} handlers"
        )
        return ExtractedDefinition(
            structures=structures,
            constructors=tuple(constructors),
            operations=tuple(operations),
            handlers=tuple(handlers),
            local_names=local_names,
            errors=tuple(errors),
        )

    def _blocks(
        self,
        component: ast.ClassDef,
        classes: dict[str, ast.ClassDef],
        errors: list[ForgeError],
    ) -> list[_Block]:
        """Component body first, then inherent mixins, then trait implementations."""
        inherent = [_Block(component)]
        traits: list[_Block] = []
        for base in component.bases:
            segments = dotted_name(base)
            if not segments or len(segments) != 1 or segments[0] not in classes:
                continue
            mixin = classes[segments[0]]
            expose = self._read_expose(mixin, errors)
            if mixin.bases:
                traits.append(_Block(mixin, parse_type_expression(mixin.bases[0]), expose))
            elif expose is not None:
                errors.append(
                    StructuralError(
                        f"'{mixin.name}' uses @expose but does not implement a trait"
                    )
                )
            else:
                inherent.append(_Block(mixin))
        return inherent + traits

    def _read_expose(self, cls: ast.ClassDef, errors: list[ForgeError]) -> list[str] | None:
        for dec in cls.decorator_list:
            if decorator_name(dec) != MARKER_EXPOSE:
                continue
            args: list[ast.expr] = []
            if isinstance(dec, ast.Call):
                args = list(dec.args)
                if len(args) == 1 and isinstance(args[0], (ast.List, ast.Tuple)):
                    args = list(args[0].elts)
            names = [
                arg.value
                for arg in args
                if isinstance(arg, ast.Constant) and isinstance(arg.value, str)
            ]
            if not isinstance(dec, ast.Call) or len(names) != len(args):
                errors.append(
                    AnnotationConflictError(
                        f"@expose on '{cls.name}' expects method names as string literals",
                        annotation=MARKER_EXPOSE,
                    )
                )
            return names
        return None

    def _extract_block(
        self,
        block: _Block,
        component_name: str,
        operations: list[OperationSignature],
        constructors: list[OperationSignature],
        errors: list[ForgeError],
    ) -> None:
        methods = [node for node in block.cls.body if isinstance(node, FunctionNode)]

        for node in methods:
            if not block.is_trait_impl and self._is_constructor(node, component_name):
                constructors.append(
                    self._signature(node, block.cls.name, Visibility.INTERNAL, errors)
                )
                continue

            if block.is_trait_impl:
                exported = block.expose is not None and node.name in block.expose
            else:
                decorators = {decorator_name(dec) for dec in node.decorator_list}
                exported = not node.name.startswith("_") and not (
                    decorators & {"property", "setter", "getter", "deleter"}
                )

            visibility = Visibility.EXPORTED if exported else Visibility.INTERNAL
            operations.append(
                self._signature(
                    node,
                    block.cls.name,
                    visibility,
                    errors,
                    trait=block.trait,
                    is_default_stub=block.is_trait_impl and exported and has_empty_body(node),
                )
            )

        if block.expose:
            defined = {node.name for node in methods}
            for name in block.expose:
                if name not in defined:
                    errors.append(
                        StructuralError(
                            f"'{name}' is listed in expose on '{block.cls.name}' but not found",
                            operation=name,
                        )
                    )

    def _is_constructor(self, node: FunctionNode, component_name: str) -> bool:
        decorators = {decorator_name(dec) for dec in node.decorator_list}
        if "staticmethod" in decorators:
            positional = node.args.posonlyargs + node.args.args
        elif "classmethod" in decorators:
            positional = (node.args.posonlyargs + node.args.args)[1:]
        else:
            return False
        if positional or node.args.vararg or node.args.kwarg or node.args.kwonlyargs:
            return False
        if node.returns is None:
            return False

        returns = node.returns
        if isinstance(returns, ast.Constant) and isinstance(returns.value, str):
            name = returns.value.strip()
        else:
            segments = dotted_name(returns)
            name = segments[-1] if segments else None
        return name == component_name or name in SELF_TYPE_NAMES

    def _extract_module_functions(
        self, module: ast.Module, errors: list[ForgeError]
    ) -> list[OperationSignature]:
        handlers = []
        for node in module.body:
            if not isinstance(node, FunctionNode):
                continue
            annotations = self._read_annotations(node)
            if annotations.handler_bindings:
                handlers.append(
                    self._signature(
                        node, "<module>", Visibility.INTERNAL, errors, module_level=True
                    )
                )
            elif annotations.is_marked or annotations.malformed:
                errors.append(
                    StructuralError(
                        f"Module-level function '{node.name}' carries markers "
                        "but no handler binding",
                        operation=node.name,
                    )
                )
        return handlers

    def _signature(
        self,
        node: FunctionNode,
        block_name: str,
        visibility: Visibility,
        errors: list[ForgeError],
        trait: TypeExpr | None = None,
        is_default_stub: bool = False,
        module_level: bool = False,
    ) -> OperationSignature:
        annotations = self._read_annotations(node)
        decorators = {decorator_name(dec) for dec in node.decorator_list}

        if module_level or "staticmethod" in decorators:
            receiver = ReceiverKind.NONE
        elif "classmethod" in decorators:
            receiver = ReceiverKind.CLASS
        elif annotations.view:
            receiver = ReceiverKind.READ_ONLY
        else:
            receiver = ReceiverKind.MUTABLE

        positional = node.args.posonlyargs + node.args.args
        if receiver is not ReceiverKind.NONE:
            if not positional:
                errors.append(
                    StructuralError(
                        f"Method '{node.name}' does not take a receiver parameter",
                        operation=node.name,
                    )
                )
            positional = positional[1:]

        parameters = []
        missing = []
        for arg in positional:
            if arg.annotation is None:
                missing.append(arg.arg)
                parameters.append(Parameter(arg.arg, None))
                continue
            parsed = parse_type_expression(arg.annotation)
            if isinstance(parsed, TypeRef):
                parameters.append(Parameter(arg.arg, parsed.inner, True, parsed.mutable))
            else:
                parameters.append(Parameter(arg.arg, parsed))

        return_type = None
        returns_reference = False
        if node.returns is not None:
            return_type = parse_type_expression(node.returns)
            if isinstance(return_type, TypeRef):
                return_type = return_type.inner
                returns_reference = True
            if isinstance(return_type, TypeNone):
                return_type = None

        return OperationSignature(
            name=node.name,
            doc=ast.get_docstring(node),
            receiver_kind=receiver,
            parameters=tuple(parameters),
            return_type=return_type,
            returns_reference=returns_reference,
            visibility=visibility,
            annotations=annotations,
            block=block_name,
            trait=trait,
            is_default_stub=is_default_stub,
            is_async=isinstance(node, ast.AsyncFunctionDef),
            has_type_params=bool(getattr(node, "type_params", None)),
            has_variadic=bool(node.args.vararg or node.args.kwarg or node.args.kwonlyargs),
            missing_annotations=tuple(missing),
            lineno=node.lineno,
            node=node,
        )

    def _read_annotations(self, node: FunctionNode) -> Annotations:
        custom = False
        view = False
        feeds = None
        feeds_text = None
        bindings: list[tuple[HandlerRole, str]] = []
        malformed: list[str] = []

        for dec in node.decorator_list:
            name = decorator_name(dec)
            if name == MARKER_CUSTOM:
                custom = True
            elif name == MARKER_VIEW:
                view = True
            elif name == MARKER_FEEDS:
                if isinstance(dec, ast.Call) and len(dec.args) == 1 and not dec.keywords:
                    arg = dec.args[0]
                    if isinstance(arg, ast.Constant) and isinstance(arg.value, str):
                        feeds_text = arg.value
                        feeds = parse_type_text(arg.value)
                    else:
                        feeds_text = ast.unparse(arg)
                        feeds = parse_type_expression(arg)
                else:
                    malformed.append("feeds expects exactly one type argument")
            elif name in HANDLER_ROLES:
                if (
                    isinstance(dec, ast.Call)
                    and len(dec.args) == 1
                    and not dec.keywords
                    and isinstance(dec.args[0], ast.Constant)
                    and isinstance(dec.args[0].value, str)
                ):
                    bindings.append((HandlerRole(name), dec.args[0].value))
                else:
                    malformed.append(f"{name} expects the target function name as a string")
            elif name == MARKER_EXPOSE:
                malformed.append("expose applies to implementation classes, not functions")

        return Annotations(
            custom=custom,
            feeds=feeds,
            feeds_text=feeds_text,
            handler_bindings=tuple(bindings),
            view=view,
            malformed=tuple(malformed),
        )
