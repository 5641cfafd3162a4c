"""
Dispatch table generation.

Renders a Python module that converts between JSON text and the binary
encoding for every function and event of a component. Each role is a
name-keyed table of converters: the default codec call for the operation's
type, a relocated handler when one is bound, or ``None`` when the operation
is custom and nothing overrides it.
"""

import logging
from dataclasses import dataclass

from forge.parser.shared.constants import DEFAULT_CODEC_MODULE, OUTPUT_FILES, TARGET_DATA_DRIVER
from forge.typing.model import CompiledModel, HandlerRole, TopicKind

from .base import BaseGenerator
from .schema_generator import SchemaGenerator, unique_events
from .wrapper_generator import type_literal

logger = logging.getLogger(__name__)


@dataclass
class TableEntry:
    key: str
    value: str


class DispatchGenerator(BaseGenerator):
    output_file = OUTPUT_FILES[TARGET_DATA_DRIVER]

    def __init__(self, model: CompiledModel, codec_module: str = DEFAULT_CODEC_MODULE) -> None:
        super().__init__(model)
        self.codec_module = codec_module

    def function_names(self) -> list[str]:
        """Exported operations followed by names that only exist as handler targets."""
        names = list(self.model.operation_names)
        names.extend(target for target in self.model.handler_targets if target not in names)
        return names

    def generate(self) -> str:
        topic_imports, events = self._event_entries()
        handler_imports = sorted(
            {module for handler in self.model.handlers for module in handler.imports}
        )
        logger.debug(
            f"Rendering dispatch module for {self.model.component_name}: "
            f"{len(self.function_names())} functions, {len(events)} events"
        )
        return self.render_template(
            "data_driver.py.j2",
            component=self.model.component_name,
            module=self.model.module_path,
            codec=self.codec_module,
            schema_literal=repr(SchemaGenerator(self.model).to_json()),
            functions=self.function_names(),
            handler_imports=handler_imports,
            topic_imports=topic_imports,
            handlers=self.model.handlers,
            encode_input=self._table(HandlerRole.ENCODE_INPUT),
            decode_input=self._table(HandlerRole.DECODE_INPUT),
            decode_output=self._table(HandlerRole.DECODE_OUTPUT),
            events=events,
            diagnostics=[str(warning) for warning in self.model.diagnostics],
        )

    def _table(self, role: HandlerRole) -> list[TableEntry]:
        bindings = self.model.handler_bindings
        entries = []
        for name in self.function_names():
            handler = bindings.get((name, role))
            operation = self.model.get_operation(name)
            if handler is not None:
                value = handler
            elif operation is None or operation.is_custom:
                value = "None"
            elif role is HandlerRole.ENCODE_INPUT:
                value = f"_encoder({type_literal(operation.input_type)})"
            elif role is HandlerRole.DECODE_INPUT:
                value = f"_decoder({type_literal(operation.input_type)})"
            else:
                value = f"_decoder({type_literal(operation.output_type)})"
            entries.append(TableEntry(repr(name), value))
        return entries

    def _event_entries(self) -> tuple[list[tuple[str, str, str]], list[TableEntry]]:
        imports: list[tuple[str, str, str]] = []
        aliases: dict[tuple[str, str], str] = {}
        entries = []

        for site in unique_events(self.model):
            if site.topic_kind is TopicKind.LITERAL:
                key = repr(site.topic)
            elif site.topic_module and site.topic.startswith(f"{site.topic_module}."):
                first, _, rest = site.topic[len(site.topic_module) + 1 :].partition(".")
                alias = aliases.get((site.topic_module, first))
                if alias is None:
                    alias = f"_topic_{len(aliases)}"
                    aliases[(site.topic_module, first)] = alias
                    imports.append((site.topic_module, first, alias))
                key = f"{alias}.{rest}" if rest else alias
            else:
                logger.debug(f"Topic '{site.topic}' is not a constant; not decodable by topic")
                continue
            entries.append(TableEntry(key, f"_decoder({type_literal(site.payload_type)})"))
        return imports, entries
