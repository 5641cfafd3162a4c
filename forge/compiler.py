"""
forge Compiler - Compiles a component definition into its interface artifacts.

This module handles the compilation workflow:
1. Parse the definition source
2. Build the import alias table
3. Extract candidate operations
4. Scan operation bodies for emit and feed calls
5. Validate the definition
6. Resolve types and relocate handlers into a CompiledModel
7. Generate the schema and the selected target module
"""

import logging
from pathlib import Path
from typing import Any

from forge.config import ForgeConfig, load_config
from forge.generators import DispatchGenerator, SchemaGenerator, WrapperGenerator
from forge.generators.base import BaseGenerator
from forge.parser.analysis import DefinitionValidator, HandlerRelocator, TypeResolver
from forge.parser.parsers import DefinitionParser
from forge.parser.processing import EmissionScanner, ImportTableBuilder, SignatureExtractor
from forge.parser.shared.constants import TARGET_WRAPPERS
from forge.parser.shared.exceptions import ForgeError
from forge.typing.model import CompiledModel

logger = logging.getLogger(__name__)


class CompilationError(ForgeError):
    """Exception raised when compilation fails unexpectedly."""

    pass


def compile_definition(
    source: str,
    module_path: str | None = None,
    file_path: str | Path | None = None,
) -> CompiledModel:
    """
    Compile definition source into a CompiledModel.

    Args:
        source: Python source of the definition
        module_path: Dotted import path of the definition module. Defaults to
            the file stem, or "definition" without a file
        file_path: Optional file path, used in error messages

    Returns:
        The compiled model

    Raises:
        DefinitionSyntaxError: If the source does not parse
        StructuralError: On a structural violation
        AnnotationConflictError: On conflicting markers
        CompilationError: On any unexpected failure
    """
    if module_path is None:
        module_path = Path(file_path).stem if file_path else "definition"

    try:
        logger.info(f"Compiling definition {file_path or module_path}")

        tree = DefinitionParser().parse(source, file_path)
        imports = ImportTableBuilder().build(tree)
        definition = SignatureExtractor().extract(tree)

        exported = list(definition.exported)
        scanner = EmissionScanner()
        sites = scanner.scan_all(exported)

        DefinitionValidator().validate(definition, sites, scanner.errors)

        resolver = TypeResolver(imports, definition.local_names, module_path)
        operations = tuple(
            resolver.resolve_operation(operation, sites[operation.name]) for operation in exported
        )
        relocator = HandlerRelocator(imports, definition.local_names)
        handlers = tuple(relocator.relocate(handler) for handler in definition.handlers)

        model = CompiledModel(
            component_name=definition.component_name,
            module_path=module_path,
            constructor=definition.constructors[0].name,
            imports=tuple(imports),
            operations=operations,
            handlers=handlers,
            diagnostics=tuple(resolver.diagnostics + relocator.diagnostics),
        )
        logger.info(
            f"Compiled {model.component_name}: {len(operations)} operations, "
            f"{len(handlers)} handlers, {len(model.diagnostics)} diagnostics"
        )
        return model

    except ForgeError:
        raise
    except Exception as e:
        raise CompilationError(f"Compilation of {file_path or module_path} failed: {e}") from e


def compile_file(file_path: str | Path, module_path: str | None = None) -> CompiledModel:
    """Compile a definition file."""
    path = Path(file_path)
    if not path.exists():
        raise FileNotFoundError(f"Definition file not found: {path}")
    return compile_definition(path.read_text(encoding="utf-8"), module_path, path)


def target_generator(model: CompiledModel, config: ForgeConfig) -> BaseGenerator:
    """The generator for the configured target."""
    if config.target == TARGET_WRAPPERS:
        return WrapperGenerator(model, boundary_module=config.boundary)
    return DispatchGenerator(model, codec_module=config.codec)


def build_project(
    project_folder: str | Path,
    wrappers: bool = False,
    data_driver: bool = False,
) -> dict[str, Any]:
    """
    Compile a project and write its artifacts.

    The target is selected before anything is compiled, so a bad selection
    never leaves partial output behind.

    Args:
        project_folder: Path to the folder containing forge.toml
        wrappers: Build the boundary wrapper module
        data_driver: Build the dispatch module

    Returns:
        Dictionary with build results

    Raises:
        ConfigurationError: If the configuration or target selection is invalid
    """
    config = load_config(project_folder, wrappers=wrappers, data_driver=data_driver)
    target = config.target

    model = compile_file(config.definition, config.module)

    schema_path = SchemaGenerator(model, format=config.schema_format).write(config.output_path)
    module_path = target_generator(model, config).write(config.output_path)

    return {
        "component": model.component_name,
        "target": target,
        "operations_count": len(model.operations),
        "handlers_count": len(model.handlers),
        "diagnostics": [str(warning) for warning in model.diagnostics],
        "schema_path": schema_path,
        "module_path": module_path,
        "output_folder": config.output_path,
    }
