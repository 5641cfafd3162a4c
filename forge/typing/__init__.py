"""
Type definitions for the forge compiler.
"""

from .model import (
    Annotations,
    CompiledModel,
    EmissionKind,
    EmissionSite,
    ExtractedDefinition,
    HandlerFunction,
    HandlerRole,
    ImportAlias,
    OperationSignature,
    Parameter,
    ReceiverKind,
    ResolvedOperation,
    TopicKind,
    Visibility,
)
from .schema import SchemaDescriptor, SchemaEvent, SchemaFunction, SchemaImport
from .types import (
    TypeExpr,
    TypeGeneric,
    TypeNone,
    TypeOpaque,
    TypePath,
    TypeRef,
    TypeTuple,
    TypeUnion,
)

__all__ = [
    "Annotations",
    "CompiledModel",
    "EmissionKind",
    "EmissionSite",
    "ExtractedDefinition",
    "HandlerFunction",
    "HandlerRole",
    "ImportAlias",
    "OperationSignature",
    "Parameter",
    "ReceiverKind",
    "ResolvedOperation",
    "TopicKind",
    "Visibility",
    "SchemaDescriptor",
    "SchemaEvent",
    "SchemaFunction",
    "SchemaImport",
    "TypeExpr",
    "TypeGeneric",
    "TypeNone",
    "TypeOpaque",
    "TypePath",
    "TypeRef",
    "TypeTuple",
    "TypeUnion",
]
