"""
Schema command implementation.
"""

from typing import Literal

import typer

from forge.cli.context import CommandContext
from forge.cli.utils import print_diagnostics
from forge.compiler import compile_file
from forge.generators import SchemaGenerator

OutputFormat = Literal["json", "yaml"]


def cmd_schema(
    definition: str,
    module: str | None = None,
    format: OutputFormat = "json",
    verbose: bool = False,
) -> None:
    """
    Print the schema of a definition.

    Args:
        definition: Path to the definition file
        module: Dotted import path of the definition
        format: Output format ("json" or "yaml")
        verbose: Enable verbose output
    """
    ctx = CommandContext(verbose=verbose)

    try:
        model = compile_file(definition, module)
        typer.echo(SchemaGenerator(model, format=format).generate(), nl=False)
        print_diagnostics(model)
    except Exception as e:
        ctx.handle_error(e)
