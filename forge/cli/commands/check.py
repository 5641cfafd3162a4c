"""
Check command implementation.
"""

import typer

from forge.cli.context import CommandContext
from forge.cli.utils import print_diagnostics
from forge.compiler import compile_file
from forge.generators import unique_events


def cmd_check(
    definition: str,
    module: str | None = None,
    verbose: bool = False,
) -> None:
    """
    Compile a definition and report what it exports, without writing anything.

    Args:
        definition: Path to the definition file
        module: Dotted import path of the definition (defaults to the file stem)
        verbose: Enable verbose output
    """
    ctx = CommandContext(verbose=verbose)

    try:
        model = compile_file(definition, module)

        typer.echo(f"✅ {model.component_name} ({model.module_path}) is valid")
        typer.echo(f"   Constructor: {model.constructor}")
        typer.echo(f"   Operations: {len(model.operations)}")
        for operation in model.operations:
            flags = " [custom]" if operation.is_custom else ""
            typer.echo(
                f"     {operation.name}: {operation.input_type.render()} -> "
                f"{operation.output_type.render()}{flags}"
            )
        events = unique_events(model)
        typer.echo(f"   Events: {len(events)}")
        for site in events:
            typer.echo(f"     {site.topic}: {site.payload_type.render()}")
        if model.handlers:
            typer.echo(f"   Handlers: {len(model.handlers)}")
            for handler in model.handlers:
                typer.echo(f"     {handler.name}: {handler.role.value} for {handler.target}")
        print_diagnostics(model)

    except Exception as e:
        typer.echo(f"❌ Check failed: {e}", err=True)
        ctx.handle_error(e)
