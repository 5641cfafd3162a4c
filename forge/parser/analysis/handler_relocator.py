"""
Moves hand-written handler functions into the generated dispatch module.

A relocated handler loses the definition's imports, so it should only refer
to fully-qualified module paths. Whole-module references are re-imported in
the dispatch module; short names bound by ``from ... import`` and names
local to the definition are reported as diagnostics.
"""

import ast
import builtins
import copy
import logging

from forge.parser.parsers.type_parser import dotted_name
from forge.parser.shared.constants import DISPATCH_NAMESPACE_NAMES
from forge.parser.shared.exceptions import ResolutionWarning
from forge.typing.model import HandlerFunction, ImportAlias, OperationSignature

logger = logging.getLogger(__name__)

_BUILTIN_NAMES = set(dir(builtins))


def _bound_names(node: ast.FunctionDef | ast.AsyncFunctionDef) -> set[str]:
    names = {arg.arg for arg in ast.walk(node.args) if isinstance(arg, ast.arg)}
    for child in ast.walk(node):
        if isinstance(child, ast.Name) and isinstance(child.ctx, (ast.Store, ast.Del)):
            names.add(child.id)
        elif isinstance(child, (ast.FunctionDef, ast.AsyncFunctionDef, ast.ClassDef)):
            names.add(child.name)
        elif isinstance(child, (ast.Import, ast.ImportFrom)):
            names.update((alias.asname or alias.name).split(".")[0] for alias in child.names)
        elif isinstance(child, ast.ExceptHandler) and child.name:
            names.add(child.name)
    return names


class HandlerRelocator:
    """Turns handler signatures into relocatable ``HandlerFunction`` records."""

    def __init__(self, imports: list[ImportAlias], local_names: frozenset[str]) -> None:
        self._aliases = {alias.short_name: alias for alias in imports}
        self._local_names = local_names
        self.diagnostics: list[ResolutionWarning] = []

    def relocate(self, handler: OperationSignature) -> HandlerFunction:
        node = copy.deepcopy(handler.node)
        node.decorator_list = []
        source = ast.unparse(node)

        bound = _bound_names(node)
        attribute_roots = set()
        for child in ast.walk(node):
            if isinstance(child, ast.Attribute):
                segments = dotted_name(child)
                if segments:
                    attribute_roots.add(segments[0])

        module_imports: list[str] = []
        for child in ast.walk(node):
            if not isinstance(child, ast.Name) or not isinstance(child.ctx, ast.Load):
                continue
            name = child.id
            if name in bound or name in _BUILTIN_NAMES or name in DISPATCH_NAMESPACE_NAMES:
                continue
            if name in module_imports:
                continue

            alias = self._aliases.get(name)
            if alias is not None and alias.resolved_path == name:
                module_imports.append(name)
            elif name in self._local_names:
                self._warn(handler.name, name, "handler refers to a name local to the definition")
            elif alias is not None:
                self._warn(
                    handler.name,
                    name,
                    f"handler refers to short name for '{alias.resolved_path}'",
                )
            elif name in attribute_roots:
                module_imports.append(name)
            else:
                self._warn(handler.name, name, "handler refers to an unknown name")

        role, target = handler.annotations.handler_bindings[0]
        logger.debug(f"Relocated handler '{handler.name}' ({role.value} for '{target}')")
        return HandlerFunction(
            name=handler.name,
            role=role,
            target=target,
            source=source,
            imports=tuple(module_imports),
        )

    def _warn(self, handler: str, name: str, message: str) -> None:
        warning = ResolutionWarning(operation=handler, expression=name, name=name, message=message)
        if warning not in self.diagnostics:
            logger.warning(str(warning))
            self.diagnostics.append(warning)
