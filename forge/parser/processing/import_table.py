"""
Builds the import alias table of a definition.
"""

import ast
import logging

from forge.parser.parsers.type_parser import dotted_name
from forge.parser.shared.exceptions import StructuralError
from forge.typing.model import ImportAlias

logger = logging.getLogger(__name__)


def _is_type_checking_guard(node: ast.stmt) -> bool:
    if not isinstance(node, ast.If):
        return False
    segments = dotted_name(node.test)
    return segments is not None and segments[-1] == "TYPE_CHECKING"


def collect_import_statements(module: ast.Module) -> list[ast.Import | ast.ImportFrom]:
    """Top-level imports, including those guarded by ``if TYPE_CHECKING:``."""
    statements: list[ast.Import | ast.ImportFrom] = []
    for node in module.body:
        if isinstance(node, (ast.Import, ast.ImportFrom)):
            statements.append(node)
        elif _is_type_checking_guard(node):
            statements.extend(
                child for child in node.body if isinstance(child, (ast.Import, ast.ImportFrom))
            )
    return statements


class ImportTableBuilder:
    """
    Maps every short name bound by an import to its fully-qualified path.

    ``from a.b import C`` binds ``C -> a.b.C``; ``from a.b import C as D``
    binds ``D -> a.b.C``; ``import a.b as x`` binds ``x -> a.b`` and a bare
    ``import a.b`` binds ``a -> a``. Importing a namespace (``from a import
    events``) needs no special casing: later references such as
    ``events.Paused`` resolve by prefix match.
    """

    def build(self, module: ast.Module) -> list[ImportAlias]:
        """
        Build the alias table.

        Raises:
            StructuralError: On glob or relative imports, or when one short
                name is bound to two different paths
        """
        table: dict[str, ImportAlias] = {}
        for statement in collect_import_statements(module):
            for alias in self._aliases_for(statement):
                existing = table.get(alias.short_name)
                if existing is not None and existing.resolved_path != alias.resolved_path:
                    raise StructuralError(
                        f"Import name '{alias.short_name}' is bound to both "
                        f"'{existing.resolved_path}' and '{alias.resolved_path}'"
                    )
                table.setdefault(alias.short_name, alias)

        logger.debug(f"Import table: {len(table)} aliases")
        return list(table.values())

    def _aliases_for(self, statement: ast.Import | ast.ImportFrom) -> list[ImportAlias]:
        if isinstance(statement, ast.Import):
            aliases = []
            for name in statement.names:
                if name.asname:
                    aliases.append(ImportAlias(name.asname, name.name, name.name))
                else:
                    root = name.name.split(".")[0]
                    aliases.append(ImportAlias(root, root, root))
            return aliases

        if statement.level:
            raise StructuralError(
                f"Relative import on line {statement.lineno} cannot be resolved; "
                "use an absolute module path"
            )
        module_path = statement.module or ""
        if module_path == "__future__":
            return []

        aliases = []
        for name in statement.names:
            if name.name == "*":
                raise StructuralError(
                    f"Glob import from '{module_path}' on line {statement.lineno} "
                    "cannot be resolved; import names explicitly"
                )
            short_name = name.asname or name.name
            aliases.append(ImportAlias(short_name, f"{module_path}.{name.name}", module_path))
        return aliases
