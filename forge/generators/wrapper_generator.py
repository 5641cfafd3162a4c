"""
Boundary wrapper generation.

Renders a Python module with one trampoline per exported operation. Each
trampoline has the fixed boundary signature ``(arg_len) -> result_len`` and
hands the actual decoding and encoding to the boundary runtime's
``wrap_call``.
"""

import logging
from dataclasses import dataclass

from forge.parser.shared.constants import DEFAULT_BOUNDARY_MODULE, OUTPUT_FILES, TARGET_WRAPPERS
from forge.typing.model import CompiledModel, ReceiverKind, ResolvedOperation
from forge.typing.types import TypeNone

from .base import BaseGenerator

logger = logging.getLogger(__name__)


@dataclass
class WrapperContext:
    """Template view of one trampoline."""

    name: str
    input_type: str
    readonly: bool
    body: list[str]


def type_literal(expr) -> str:
    """Python literal passed to the runtime for a type, ``None`` for no value."""
    if isinstance(expr, TypeNone):
        return "None"
    return repr(expr.render())


class WrapperGenerator(BaseGenerator):
    output_file = OUTPUT_FILES[TARGET_WRAPPERS]

    def __init__(self, model: CompiledModel, boundary_module: str = DEFAULT_BOUNDARY_MODULE) -> None:
        super().__init__(model)
        self.boundary_module = boundary_module

    def generate(self) -> str:
        operations = [self._wrapper_context(operation) for operation in self.model.operations]
        logger.debug(f"Rendering {len(operations)} wrappers for {self.model.component_name}")
        return self.render_template(
            "wrappers.py.j2",
            component=self.model.component_name,
            module=self.model.module_path,
            constructor=self.model.constructor,
            boundary=self.boundary_module,
            imports=self._module_imports(),
            needs_copy=any(op.returns_reference for op in self.model.operations),
            operations=operations,
            diagnostics=[str(warning) for warning in self.model.diagnostics],
        )

    def _module_imports(self) -> list[str]:
        modules = [self.model.module_path]
        for operation in self.model.operations:
            if operation.is_default_stub and operation.trait and "." in operation.trait:
                module = operation.trait.rsplit(".", 1)[0]
                if module not in modules:
                    modules.append(module)
        return modules

    def _wrapper_context(self, operation: ResolvedOperation) -> WrapperContext:
        # Tuple inputs are passed by index, never bound to parameter names
        body = []
        if operation.is_tuple_input:
            args = [f"arg[{index}]" for index in range(len(operation.parameters))]
        elif operation.parameters:
            args = ["arg"]
        else:
            args = []

        if operation.is_default_stub and operation.trait:
            if operation.receiver_kind is not ReceiverKind.NONE:
                args = ["_STATE", *args]
            target = f"{operation.trait}.{operation.name}({', '.join(args)})"
        else:
            target = f"_STATE.{operation.name}({', '.join(args)})"

        if operation.returns_reference:
            body.append(f"return _copy.deepcopy({target})")
        else:
            body.append(f"return {target}")

        return WrapperContext(
            name=operation.name,
            input_type=type_literal(operation.input_type),
            readonly=operation.is_read_only,
            body=body,
        )
