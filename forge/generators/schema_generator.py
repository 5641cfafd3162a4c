"""
Schema generation for compiled components.
"""

import json
import logging
from typing import Literal

import yaml

from forge.parser.shared.constants import OUTPUT_FILES
from forge.typing.model import CompiledModel, EmissionSite
from forge.typing.schema import SchemaDescriptor, SchemaEvent, SchemaFunction, SchemaImport

from .base import BaseGenerator

logger = logging.getLogger(__name__)

SchemaFormat = Literal["json", "yaml"]


def unique_events(model: CompiledModel) -> list[EmissionSite]:
    """Emit sites of all operations in order, keeping the first site per topic."""
    seen: set[str] = set()
    events = []
    for operation in model.operations:
        for site in operation.events:
            if site.topic is None or site.topic in seen:
                continue
            seen.add(site.topic)
            events.append(site)
    return events


class SchemaGenerator(BaseGenerator):
    """Describes every exported operation and event of a component."""

    def __init__(self, model: CompiledModel, format: SchemaFormat = "json") -> None:
        super().__init__(model)
        self.format = format
        self.output_file = OUTPUT_FILES[f"schema_{format}"]

    def build(self) -> SchemaDescriptor:
        imports: list[SchemaImport] = [
            {"short_name": alias.short_name, "resolved_path": alias.resolved_path}
            for alias in self.model.imports
        ]
        functions: list[SchemaFunction] = [
            {
                "name": operation.name,
                "doc": operation.doc,
                "input_type": operation.input_type.render(),
                "output_type": operation.output_type.render(),
                "is_custom": operation.is_custom,
            }
            for operation in self.model.operations
        ]
        events: list[SchemaEvent] = [
            {"topic": site.topic, "payload_type": site.payload_type.render()}
            for site in unique_events(self.model)
        ]
        logger.debug(f"Schema for {self.model.component_name}: {len(functions)} functions, {len(events)} events")
        return {
            "name": self.model.component_name,
            "imports": imports,
            "functions": functions,
            "events": events,
        }

    def to_json(self) -> str:
        return json.dumps(self.build(), indent=2, ensure_ascii=False) + "\n"

    def to_yaml(self) -> str:
        return yaml.safe_dump(
            self.build(), sort_keys=False, allow_unicode=True, default_flow_style=False
        )

    def generate(self) -> str:
        if self.format == "yaml":
            return self.to_yaml()
        return self.to_json()
