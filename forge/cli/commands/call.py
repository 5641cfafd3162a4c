"""
Call command implementation.
"""

import typer

from forge.cli.context import CommandContext
from forge.compiler import compile_file
from forge.generators import DispatchGenerator, load_generated_module
from forge.parser.shared.constants import DEFAULT_CODEC_MODULE
from forge.runtime import DispatchError


def cmd_call(
    definition: str,
    function: str,
    input: str,
    module: str | None = None,
    codec: str = DEFAULT_CODEC_MODULE,
    verbose: bool = False,
) -> None:
    """
    Encode the JSON input of a function and print the bytes as hex.

    The dispatch module is generated and loaded in memory, so the codec
    module must be importable.

    Args:
        definition: Path to the definition file
        function: Name of the function to encode input for
        input: JSON text of the input
        module: Dotted import path of the definition
        codec: Module providing json_to_binary and binary_to_json
        verbose: Enable verbose output
    """
    ctx = CommandContext(verbose=verbose)

    try:
        model = compile_file(definition, module)
        source = DispatchGenerator(model, codec_module=codec).generate()
        dispatch = load_generated_module(source, f"{model.module_path}_data_driver")

        result = dispatch.encode_input(function, input)
        if isinstance(result, DispatchError):
            raise ValueError(str(result))
        typer.echo(result.hex())
    except Exception as e:
        ctx.handle_error(e)
