"""
Unit tests for definition validation.
"""

import ast
import textwrap

import pytest

from conftest import BRIDGE_SOURCE, make_definition
from forge.parser.analysis import DefinitionValidator
from forge.parser.processing import EmissionScanner, SignatureExtractor
from forge.parser.shared.exceptions import AnnotationConflictError, StructuralError


def _validate(source: str) -> None:
    definition = SignatureExtractor().extract(ast.parse(source))
    scanner = EmissionScanner()
    sites = scanner.scan_all(list(definition.exported))
    DefinitionValidator().validate(definition, sites, scanner.errors)


def _errors(source: str):
    definition = SignatureExtractor().extract(ast.parse(source))
    scanner = EmissionScanner()
    sites = scanner.scan_all(list(definition.exported))
    return DefinitionValidator().collect_errors(definition, sites, scanner.errors)


class TestStructure:
    """Test cases for component-level checks."""

    def test_valid_definition_passes(self):
        _validate(BRIDGE_SOURCE)

    def test_no_component(self):
        with pytest.raises(StructuralError, match="no public @dataclass component"):
            _validate("class Plain:\n    pass\n")

    def test_two_components(self):
        source = textwrap.dedent(
            """
            from dataclasses import dataclass

            @dataclass
            class A:
                pass

            @dataclass
            class B:
                pass
            """
        )
        with pytest.raises(StructuralError, match="more than one @dataclass component: A, B"):
            _validate(source)

    def test_missing_constructor(self):
        source = "from dataclasses import dataclass\n\n@dataclass\nclass A:\n    x: int = 0\n"
        with pytest.raises(StructuralError, match="Component 'A' has no constructor"):
            _validate(source)

    def test_duplicate_constructor(self):
        source = make_definition(
            """
            @classmethod
            def other(cls) -> "Widget":
                return cls()
            """
        )
        with pytest.raises(StructuralError, match="more than one constructor: new, other"):
            _validate(source)


class TestOperationShape:
    """Test cases for per-operation structural checks."""

    @pytest.mark.parametrize(
        "body, message",
        [
            ("async def fetch(self) -> int:\n    return 1\n", "must not be async"),
            ("def pick[T](self, item: T) -> T:\n    return item\n", "must not declare type parameters"),
            ("@classmethod\ndef kind(cls) -> str:\n    return ''\n", "not the class"),
            ("@staticmethod\ndef helper(x: int) -> int:\n    return x\n", "has no receiver"),
            ("def spread(self, *items: int) -> None:\n    pass\n", "only take positional"),
            ("def opts(self, *, flag: bool) -> None:\n    pass\n", "only take positional"),
            ("def untyped(self, value) -> None:\n    pass\n", "has no type annotation"),
            ("def init(self) -> int:\n    return 0\n", "'init' must not return a value"),
            ("@view\ndef init(self) -> None:\n    pass\n", "'init' must take a mutable receiver"),
        ],
    )
    def test_structural_violations(self, body, message):
        with pytest.raises(StructuralError, match=message) as exc_info:
            _validate(make_definition(body))
        assert exc_info.value.operation is not None

    def test_internal_methods_are_not_checked(self):
        _validate(make_definition("async def _poll(self):\n    pass\n"))

    def test_duplicate_exported_names(self):
        source = textwrap.dedent(
            """
            from dataclasses import dataclass

            class Extra:
                def ping(self) -> None:
                    pass

            @dataclass
            class Widget(Extra):
                @staticmethod
                def new() -> "Widget":
                    return Widget()

                def ping(self) -> None:
                    pass
            """
        )
        with pytest.raises(StructuralError, match="'ping' is exported more than once"):
            _validate(source)

    def test_all_errors_are_collected_in_order(self):
        source = make_definition(
            """
            async def first(self) -> None:
                pass

            @classmethod
            def second(cls) -> None:
                pass
            """
        )
        with pytest.raises(StructuralError) as exc_info:
            _validate(source)
        assert [e.operation for e in exc_info.value.errors] == ["first", "second"]


class TestAnnotations:
    """Test cases for marker conflicts."""

    def test_custom_with_feeds(self):
        source = make_definition(
            """
            @custom
            @feeds("int")
            def stream(self) -> None:
                abi.feed(1)
            """
        )
        with pytest.raises(AnnotationConflictError, match="combines custom with feeds") as exc_info:
            _validate(source)
        assert exc_info.value.operation == "stream"
        assert exc_info.value.annotation == "custom"

    def test_feed_without_feeds_annotation(self):
        source = make_definition(
            """
            def stream(self) -> None:
                abi.feed(1)
            """
        )
        with pytest.raises(AnnotationConflictError, match="calls feed but has no @feeds"):
            _validate(source)

    @pytest.mark.parametrize(
        "body",
        [
            "@feeds('int')\ndef stream(self) -> None:\n    pass\n",
            "@feeds('int')\ndef stream(self) -> None:\n    abi.feed(1)\n    abi.feed(2)\n",
        ],
    )
    def test_feeds_requires_exactly_one_feed(self, body):
        with pytest.raises(AnnotationConflictError, match="exactly one is required"):
            _validate(make_definition(body))

    def test_feeds_tuple_shape_mismatch(self):
        source = make_definition(
            """
            @feeds("(int, str)")
            def stream(self) -> None:
                abi.feed(Item())
            """
        )
        with pytest.raises(AnnotationConflictError, match="feeds a single value"):
            _validate(source)

    def test_feeds_single_value_shape_mismatch(self):
        source = make_definition(
            """
            @feeds("Item")
            def stream(self) -> None:
                abi.feed((1, 2))
            """
        )
        with pytest.raises(AnnotationConflictError, match="expected a single value"):
            _validate(source)

    def test_feeds_with_unknown_shape_passes(self):
        _validate(
            make_definition(
                """
                @feeds("(int, str)")
                def stream(self) -> None:
                    for pair in self.pairs:
                        abi.feed(pair)
                """
            )
        )

    def test_feed_with_unknown_keyword_is_reported_first(self):
        source = make_definition(
            """
            @feeds("Item")
            def stream(self) -> None:
                abi.feed(data=Item())
            """
        )
        with pytest.raises(StructuralError, match=r"do not match feed\(item\)") as exc_info:
            _validate(source)
        assert exc_info.value.operation == "stream"
        assert len(exc_info.value.errors) == 2

    def test_feed_by_keyword_passes(self):
        _validate(
            make_definition(
                """
                @feeds("Item")
                def stream(self) -> None:
                    abi.feed(item=Item())
                """
            )
        )

    def test_malformed_feeds(self):
        source = make_definition(
            """
            @feeds
            def stream(self) -> None:
                pass
            """
        )
        with pytest.raises(AnnotationConflictError, match="feeds expects exactly one type"):
            _validate(source)

    def test_binding_on_a_method(self):
        source = make_definition(
            """
            @encode_input("other")
            def convert(self, value: int) -> None:
                pass
            """
        )
        with pytest.raises(AnnotationConflictError, match="belong on module-level functions"):
            _validate(source)


class TestHandlers:
    """Test cases for handler bindings."""

    def _with_handlers(self, handlers: str) -> str:
        return make_definition("def ping(self) -> None:\n    pass\n") + textwrap.dedent(handlers)

    def test_duplicate_bindings_name_both_handlers(self):
        source = self._with_handlers(
            """

            @encode_input("ping")
            @decode_output("ping")
            def first(value):
                return value


            @encode_input("ping")
            @decode_output("ping")
            def second(value):
                return value
            """
        )
        with pytest.raises(AnnotationConflictError) as exc_info:
            _validate(source)
        message = str(exc_info.value)
        assert "encode_input for 'ping' is bound by both 'first' and 'second'" == message
        messages = [str(e) for e in exc_info.value.errors]
        assert "decode_output for 'ping' is bound by both 'first' and 'second'" in messages

    def test_distinct_roles_for_one_target(self):
        _validate(
            self._with_handlers(
                """

                @encode_input("ping")
                def encode_ping(value):
                    return b""


                @decode_input("ping")
                def decode_ping_input(data):
                    return "null"


                @decode_output("ping")
                def decode_ping_output(data):
                    return "null"
                """
            )
        )

    def test_one_handler_with_two_roles(self):
        source = self._with_handlers(
            """

            @encode_input("ping")
            @decode_output("ping")
            def both(value):
                return value
            """
        )
        with pytest.raises(AnnotationConflictError, match="binds more than one role"):
            _validate(source)

    def test_custom_handler(self):
        source = self._with_handlers(
            """

            @custom
            @decode_output("ping")
            def decode_ping(data):
                return "null"
            """
        )
        with pytest.raises(AnnotationConflictError, match="combines custom with a handler binding"):
            _validate(source)

    def test_handler_arity(self):
        source = self._with_handlers(
            """

            @decode_output("ping")
            def decode_ping(data, extra):
                return "null"
            """
        )
        with pytest.raises(StructuralError, match="exactly one positional parameter"):
            _validate(source)

    def test_handler_may_target_data_driver_only_name(self):
        _validate(
            self._with_handlers(
                """

                @encode_input("extra_data")
                def encode_extra(value):
                    return b""
                """
            )
        )

    def test_errors_are_logged(self, caplog):
        with pytest.raises(StructuralError):
            _validate("class Plain:\n    pass\n")
        assert "no public @dataclass component" in caplog.text
