"""
Build command implementation.
"""

import typer

from forge.cli.context import CommandContext
from forge.compiler import CompilationError, build_project


def cmd_build(
    project_folder: str,
    wrappers: bool = False,
    data_driver: bool = False,
    verbose: bool = False,
) -> None:
    """
    Build a forge project.

    This command:
    1. Loads forge.toml and selects the generation target
    2. Compiles the component definition
    3. Writes the schema
    4. Writes the wrapper or dispatch module

    Args:
        project_folder: Path to the folder containing forge.toml
        wrappers: Build boundary wrappers (overrides forge.toml)
        data_driver: Build dispatch tables (overrides forge.toml)
        verbose: Enable verbose output
    """
    ctx = CommandContext(verbose=verbose, project_folder=project_folder)

    try:
        typer.echo(f"Building project: {project_folder}")

        results = build_project(
            project_folder=str(ctx.project_path),
            wrappers=wrappers,
            data_driver=data_driver,
        )

        typer.echo("\n✅ Build complete!")
        typer.echo(f"   Component: {results['component']}")
        typer.echo(f"   Target: {results['target']}")
        typer.echo(f"   Operations: {results['operations_count']}")
        typer.echo(f"   Handlers: {results['handlers_count']}")
        typer.echo(f"   Schema: {results['schema_path']}")
        typer.echo(f"   Module: {results['module_path']}")
        for warning in results["diagnostics"]:
            typer.echo(f"   ⚠️  {warning}")

    except CompilationError as e:
        typer.echo(f"\n❌ Build failed: {e}", err=True)
        ctx.handle_error(e)
    except Exception as e:
        typer.echo(f"\n❌ Build failed: {e}", err=True)
        ctx.handle_error(e)
