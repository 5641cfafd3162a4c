"""
Unit tests for the import alias table.
"""

import ast
import textwrap

import pytest

from forge.parser.processing import ImportTableBuilder
from forge.parser.shared.exceptions import StructuralError
from forge.typing.model import ImportAlias


def _build(source: str) -> list[ImportAlias]:
    return ImportTableBuilder().build(ast.parse(textwrap.dedent(source)))


def _table(source: str) -> dict[str, str]:
    return {alias.short_name: alias.resolved_path for alias in _build(source)}


class TestImportTableBuilder:
    """Test cases for ImportTableBuilder."""

    def test_simple_import(self):
        aliases = _build("from bridge.types import Deposit\n")
        assert aliases == [ImportAlias("Deposit", "bridge.types.Deposit", "bridge.types")]

    def test_renamed_import(self):
        assert _table("from bridge.types import SetU64 as SetLimit\n") == {
            "SetLimit": "bridge.types.SetU64"
        }

    def test_namespace_import(self):
        assert _table("from bridge import events\n") == {"events": "bridge.events"}

    def test_module_imports(self):
        table = _table(
            """
            import json
            import bridge.codecs
            import bridge.types as bt
            """
        )
        assert table == {"json": "json", "bridge": "bridge", "bt": "bridge.types"}

    def test_type_checking_imports_are_included(self):
        table = _table(
            """
            from typing import TYPE_CHECKING

            if TYPE_CHECKING:
                from bridge.types import Deposit
            """
        )
        assert table["Deposit"] == "bridge.types.Deposit"

    def test_future_imports_are_ignored(self):
        assert _table("from __future__ import annotations\n") == {}

    def test_nested_imports_are_ignored(self):
        table = _table(
            """
            def helper():
                from bridge.types import Deposit
            """
        )
        assert table == {}

    def test_multiple_aliases_may_share_a_path(self):
        table = _table(
            """
            from bridge.types import Deposit
            from bridge.types import Deposit as D
            """
        )
        assert table == {"Deposit": "bridge.types.Deposit", "D": "bridge.types.Deposit"}

    def test_rebinding_a_short_name_is_rejected(self):
        with pytest.raises(StructuralError, match="'Deposit' is bound to both"):
            _build(
                """
                from bridge.types import Deposit
                from other.types import Deposit
                """
            )

    def test_glob_import_is_rejected(self):
        with pytest.raises(StructuralError, match="Glob import from 'bridge.types'"):
            _build("from bridge.types import *\n")

    def test_relative_import_is_rejected(self):
        with pytest.raises(StructuralError, match="Relative import"):
            _build("from .types import Deposit\n")
