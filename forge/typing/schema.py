"""
Type definitions for the generated schema.
"""

from typing import TypedDict


class SchemaImport(TypedDict):
    short_name: str
    resolved_path: str


class SchemaFunction(TypedDict):
    """One exported operation as seen by client tooling."""

    name: str
    doc: str | None
    input_type: str
    output_type: str
    is_custom: bool


class SchemaEvent(TypedDict):
    topic: str
    payload_type: str


class SchemaDescriptor(TypedDict):
    """
    Type definition for the schema of a component.

    Field order is part of the format: serialised output keeps insertion order
    so two runs over the same definition produce identical text.
    """

    name: str
    imports: list[SchemaImport]
    functions: list[SchemaFunction]
    events: list[SchemaEvent]
