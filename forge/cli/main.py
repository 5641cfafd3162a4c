"""
forge CLI Main Module

Command-line interface for the forge interface compiler.
"""

from typing import Any, Literal

import typer

from forge.cli.commands import cmd_build, cmd_call, cmd_check, cmd_expand, cmd_schema
from forge.parser.shared.constants import DEFAULT_BOUNDARY_MODULE, DEFAULT_CODEC_MODULE

OutputFormat = Literal["json", "yaml"]


class AlphabeticalOrderGroup(typer.core.TyperGroup):
    """Custom Typer Group that lists commands in alphabetical order."""

    def list_commands(self, ctx: typer.Context) -> list[str]:
        return sorted(self.commands.keys())


def validate_format(value: str) -> OutputFormat:
    """Validate format option (json or yaml)."""
    if value not in ["json", "yaml"]:
        raise typer.BadParameter(
            typer.style("Error: ", fg=typer.colors.RED, bold=True)
            + f"Invalid format '{value}'. Must be 'json' or 'yaml'."
        )
    return value  # type: ignore[return-value]


app = typer.Typer(
    name="forge",
    help="forge - derive boundary wrappers, schema and dispatch tables from one definition",
    add_completion=False,
    rich_markup_mode="rich",
    cls=AlphabeticalOrderGroup,
    invoke_without_command=True,
)


@app.callback()
def main_callback(ctx: typer.Context) -> None:
    """Main CLI callback - shows help when no command is provided."""
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()


# Common option definitions to reduce duplication
DEFINITION_ARG = typer.Argument(None, help="Path to the component definition (.py)")
MODULE_OPTION = typer.Option(
    None, "-m", "--module", help="Dotted import path of the definition (default: file stem)"
)
VERBOSE_OPTION = typer.Option(False, "-v", "--verbose", help="Enable verbose output")
CODEC_OPTION = typer.Option(
    DEFAULT_CODEC_MODULE, "--codec", help="Module providing json_to_binary/binary_to_json"
)


def _check_required_argument(ctx: typer.Context, arg_name: str, arg_value: Any) -> None:
    """Check if a required argument is provided, show help if not."""
    if arg_value is None:
        typer.echo(ctx.get_help())
        raise typer.Exit(0)


@app.command()
def check(
    ctx: typer.Context,
    definition: str | None = DEFINITION_ARG,
    module: str | None = MODULE_OPTION,
    verbose: bool = VERBOSE_OPTION,
) -> None:
    """Validate a definition and list its operations and events."""
    _check_required_argument(ctx, "definition", definition)
    cmd_check(definition=definition, module=module, verbose=verbose)


@app.command()
def schema(
    ctx: typer.Context,
    definition: str | None = DEFINITION_ARG,
    module: str | None = MODULE_OPTION,
    format: str = typer.Option(
        "json", "-f", "--format", help="Output format: json or yaml", callback=validate_format
    ),
    verbose: bool = VERBOSE_OPTION,
) -> None:
    """Print the schema of a definition."""
    _check_required_argument(ctx, "definition", definition)
    cmd_schema(definition=definition, module=module, format=format, verbose=verbose)


@app.command()
def expand(
    ctx: typer.Context,
    definition: str | None = DEFINITION_ARG,
    module: str | None = MODULE_OPTION,
    data_driver: bool = typer.Option(
        False, "--data-driver", help="Expand the dispatch module instead of the wrappers"
    ),
    boundary: str = typer.Option(
        DEFAULT_BOUNDARY_MODULE, "--boundary", help="Module providing wrap_call"
    ),
    codec: str = CODEC_OPTION,
    verbose: bool = VERBOSE_OPTION,
) -> None:
    """Print the generated wrapper or dispatch module."""
    _check_required_argument(ctx, "definition", definition)
    cmd_expand(
        definition=definition,
        module=module,
        data_driver=data_driver,
        boundary=boundary,
        codec=codec,
        verbose=verbose,
    )


@app.command()
def build(
    ctx: typer.Context,
    project_folder: str | None = typer.Argument(
        None, help="Path to the project folder containing forge.toml"
    ),
    wrappers: bool = typer.Option(False, "--wrappers", help="Build boundary wrappers"),
    data_driver: bool = typer.Option(False, "--data-driver", help="Build dispatch tables"),
    verbose: bool = VERBOSE_OPTION,
) -> None:
    """Compile a project and write the schema and the selected target."""
    _check_required_argument(ctx, "project_folder", project_folder)
    cmd_build(
        project_folder=project_folder,
        wrappers=wrappers,
        data_driver=data_driver,
        verbose=verbose,
    )


@app.command()
def call(
    ctx: typer.Context,
    definition: str | None = DEFINITION_ARG,
    function: str | None = typer.Argument(None, help="Function to encode input for"),
    input: str | None = typer.Argument(None, help="JSON input"),
    module: str | None = MODULE_OPTION,
    codec: str = CODEC_OPTION,
    verbose: bool = VERBOSE_OPTION,
) -> None:
    """Encode a function's JSON input and print it as hex."""
    _check_required_argument(ctx, "definition", definition)
    _check_required_argument(ctx, "function", function)
    _check_required_argument(ctx, "input", input)
    cmd_call(
        definition=definition,
        function=function,
        input=input,
        module=module,
        codec=codec,
        verbose=verbose,
    )


def main() -> None:
    """Main CLI entry point."""
    app()


if __name__ == "__main__":
    main()
