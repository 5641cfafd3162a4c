"""
Reads a definition module into a syntax tree.

The definition is never imported or executed; every later stage works on
the tree returned here.
"""

import ast
import logging
from pathlib import Path

from forge.parser.shared.exceptions import DefinitionSyntaxError

logger = logging.getLogger(__name__)


class DefinitionParser:
    """Parses definition source text with the ``ast`` module."""

    def parse(self, content: str, file_path: str | Path | None = None) -> ast.Module:
        """
        Parse definition source.

        Args:
            content: Python source of the definition
            file_path: Optional file path, used in error messages

        Returns:
            The parsed module

        Raises:
            DefinitionSyntaxError: If the source is not valid Python
        """
        filename = str(file_path) if file_path else "<definition>"
        try:
            tree = ast.parse(content, filename=filename)
        except SyntaxError as e:
            raise DefinitionSyntaxError(
                f"Invalid definition {filename} (line {e.lineno}): {e.msg}"
            ) from e

        logger.debug(f"Parsed definition {filename}: {len(tree.body)} top-level statements")
        return tree
