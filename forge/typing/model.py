"""
Data model threaded through the compilation pipeline.

Every record here is built once by one stage and handed, unchanged, to the
next one.
"""

import ast
from dataclasses import dataclass, field
from enum import Enum

from forge.parser.shared.exceptions import ForgeError, ResolutionWarning

from .types import TypeExpr


class ReceiverKind(str, Enum):
    """How an operation receives the component state."""

    NONE = "none"
    READ_ONLY = "read-only"
    MUTABLE = "mutable"
    CLASS = "class"


class Visibility(str, Enum):
    EXPORTED = "exported"
    INTERNAL = "internal"


class HandlerRole(str, Enum):
    """Dispatch roles a handler function can take over."""

    ENCODE_INPUT = "encode_input"
    DECODE_INPUT = "decode_input"
    DECODE_OUTPUT = "decode_output"


class EmissionKind(str, Enum):
    EMIT = "emit"
    FEED = "feed"


class TopicKind(str, Enum):
    LITERAL = "literal"
    PATH = "path"


@dataclass(frozen=True)
class ImportAlias:
    """A short name bound by an import statement and the path it stands for."""

    short_name: str
    resolved_path: str
    source_module: str


@dataclass(frozen=True)
class Parameter:
    name: str
    type: TypeExpr | None
    is_reference: bool = False
    is_mutable_reference: bool = False


@dataclass(frozen=True)
class Annotations:
    """Recognised markers on one function."""

    custom: bool = False
    feeds: TypeExpr | None = None
    feeds_text: str | None = None
    handler_bindings: tuple[tuple[HandlerRole, str], ...] = ()
    view: bool = False
    # Problems found while reading marker arguments, reported by the validator
    malformed: tuple[str, ...] = ()

    @property
    def is_marked(self) -> bool:
        return bool(self.custom or self.feeds is not None or self.handler_bindings or self.view)


@dataclass(frozen=True)
class OperationSignature:
    """One candidate operation (or handler function) as written in the definition."""

    name: str
    doc: str | None
    receiver_kind: ReceiverKind
    parameters: tuple[Parameter, ...]
    return_type: TypeExpr | None
    returns_reference: bool
    visibility: Visibility
    annotations: Annotations
    block: str
    trait: TypeExpr | None = None
    is_default_stub: bool = False
    is_async: bool = False
    has_type_params: bool = False
    has_variadic: bool = False
    missing_annotations: tuple[str, ...] = ()
    lineno: int = 0
    node: ast.FunctionDef | ast.AsyncFunctionDef | None = field(
        default=None, compare=False, repr=False
    )

    @property
    def is_exported(self) -> bool:
        return self.visibility is Visibility.EXPORTED


@dataclass(frozen=True)
class EmissionSite:
    """A syntactic call to ``emit`` or ``feed`` inside an operation body."""

    owning_operation: str
    topic: str | None
    topic_kind: TopicKind | None
    payload_type: TypeExpr
    kind: EmissionKind
    payload_is_tuple: bool | None = None
    # Module to import so a path topic can be evaluated, set by the resolver
    topic_module: str | None = None
    lineno: int = 0


@dataclass(frozen=True)
class ExtractedDefinition:
    """Output of the signature extractor."""

    structures: tuple[str, ...]
    constructors: tuple[OperationSignature, ...]
    operations: tuple[OperationSignature, ...]
    handlers: tuple[OperationSignature, ...]
    local_names: frozenset[str]
    errors: tuple[ForgeError, ...] = ()

    @property
    def component_name(self) -> str | None:
        return self.structures[0] if len(self.structures) == 1 else None

    @property
    def exported(self) -> tuple[OperationSignature, ...]:
        return tuple(op for op in self.operations if op.is_exported)


@dataclass(frozen=True)
class ResolvedOperation:
    """An exported operation after type resolution."""

    name: str
    doc: str | None
    receiver_kind: ReceiverKind
    parameters: tuple[Parameter, ...]
    input_type: TypeExpr
    output_type: TypeExpr
    returns_reference: bool
    events: tuple[EmissionSite, ...]
    feed: EmissionSite | None = None
    is_custom: bool = False
    trait: str | None = None
    is_default_stub: bool = False

    @property
    def is_tuple_input(self) -> bool:
        return len(self.parameters) > 1

    @property
    def is_read_only(self) -> bool:
        return self.receiver_kind is ReceiverKind.READ_ONLY


@dataclass(frozen=True)
class HandlerFunction:
    """A hand-written dispatch handler, relocated into the generated module."""

    name: str
    role: HandlerRole
    target: str
    source: str
    imports: tuple[str, ...] = ()


@dataclass(frozen=True)
class CompiledModel:
    """The immutable artifact every generator consumes."""

    component_name: str
    module_path: str
    constructor: str
    imports: tuple[ImportAlias, ...]
    operations: tuple[ResolvedOperation, ...]
    handlers: tuple[HandlerFunction, ...] = ()
    diagnostics: tuple[ResolutionWarning, ...] = ()

    @property
    def handler_bindings(self) -> dict[tuple[str, HandlerRole], str]:
        return {(handler.target, handler.role): handler.name for handler in self.handlers}

    @property
    def operation_names(self) -> list[str]:
        return [op.name for op in self.operations]

    @property
    def handler_targets(self) -> list[str]:
        """Targets bound by handlers, in first-seen order."""
        targets: list[str] = []
        for handler in self.handlers:
            if handler.target not in targets:
                targets.append(handler.target)
        return targets

    def get_operation(self, name: str) -> ResolvedOperation | None:
        for op in self.operations:
            if op.name == name:
                return op
        return None
