"""
Unit tests for handler relocation.
"""

import ast
import textwrap

from forge.parser.analysis import HandlerRelocator
from forge.parser.processing import ImportTableBuilder, SignatureExtractor
from forge.typing.model import HandlerRole


def _relocate(source: str):
    tree = ast.parse(textwrap.dedent(source))
    imports = ImportTableBuilder().build(tree)
    definition = SignatureExtractor().extract(tree)
    relocator = HandlerRelocator(imports, definition.local_names)
    handlers = [relocator.relocate(handler) for handler in definition.handlers]
    return handlers, relocator.diagnostics


class TestHandlerRelocator:
    """Test cases for HandlerRelocator."""

    def test_decorators_are_stripped(self):
        (handler,), diagnostics = _relocate(
            """
            from forge import decode_output

            @decode_output("extra_data")
            def decode_extra(data: bytes) -> str:
                return json.dumps(list(data))
            """
        )
        assert handler.name == "decode_extra"
        assert handler.role is HandlerRole.DECODE_OUTPUT
        assert handler.target == "extra_data"
        assert handler.source.startswith("def decode_extra(data: bytes) -> str:")
        assert "@" not in handler.source
        assert handler.imports == ()
        assert diagnostics == []

    def test_fully_qualified_modules_are_imported(self):
        (handler,), diagnostics = _relocate(
            """
            import decimal
            import bridge.codecs
            from forge import encode_input

            @encode_input("amount")
            def encode_amount(text):
                value = decimal.Decimal(text)
                return bridge.codecs.pack(str(value))
            """
        )
        assert handler.imports == ("decimal", "bridge")
        assert diagnostics == []

    def test_unimported_module_roots_are_imported(self):
        (handler,), _ = _relocate(
            """
            from forge import encode_input

            @encode_input("amount")
            def encode_amount(text):
                return struct.pack("<q", int(text))
            """
        )
        assert handler.imports == ("struct",)

    def test_short_names_are_reported(self):
        (handler,), diagnostics = _relocate(
            """
            from bridge.codecs import pack
            from forge import encode_input

            LIMIT = 10

            @encode_input("amount")
            def encode_amount(text):
                return pack(min(int(text), LIMIT))
            """
        )
        assert [d.name for d in diagnostics] == ["pack", "LIMIT"]
        assert "short name for 'bridge.codecs.pack'" in str(diagnostics[0])
        assert "local to the definition" in str(diagnostics[1])

    def test_locals_and_comprehensions_are_not_reported(self):
        _, diagnostics = _relocate(
            """
            from forge import decode_output

            @decode_output("items")
            def decode_items(data):
                values = [byte for byte in data]
                try:
                    total = sum(values)
                except ValueError as error:
                    raise TypeError(str(error))
                return json_to_binary("int", str(total))
            """
        )
        assert diagnostics == []
