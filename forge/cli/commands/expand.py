"""
Expand command implementation.
"""

import typer

from forge.cli.context import CommandContext
from forge.cli.utils import print_diagnostics
from forge.compiler import compile_file
from forge.generators import DispatchGenerator, WrapperGenerator
from forge.parser.shared.constants import DEFAULT_BOUNDARY_MODULE, DEFAULT_CODEC_MODULE


def cmd_expand(
    definition: str,
    module: str | None = None,
    data_driver: bool = False,
    boundary: str = DEFAULT_BOUNDARY_MODULE,
    codec: str = DEFAULT_CODEC_MODULE,
    verbose: bool = False,
) -> None:
    """
    Print the generated module for a definition.

    Shows the boundary wrappers by default, or the dispatch module with
    ``data_driver``.

    Args:
        definition: Path to the definition file
        module: Dotted import path of the definition
        data_driver: Expand the dispatch module instead of the wrappers
        boundary: Module the wrappers import ``wrap_call`` from
        codec: Module the dispatch tables import the codec from
        verbose: Enable verbose output
    """
    ctx = CommandContext(verbose=verbose)

    try:
        model = compile_file(definition, module)
        if data_driver:
            generator = DispatchGenerator(model, codec_module=codec)
        else:
            generator = WrapperGenerator(model, boundary_module=boundary)
        typer.echo(generator.generate(), nl=False)
        print_diagnostics(model)
    except Exception as e:
        ctx.handle_error(e)
