"""
CLI utility functions.

Pure, stateless utility functions used across CLI commands.
"""

import logging

import typer

from forge.typing.model import CompiledModel


def setup_logging(verbose: bool = False) -> None:
    """
    Set up logging configuration.

    Args:
        verbose: If True, set logging level to DEBUG, otherwise INFO
    """
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(level=level, format="%(levelname)s - %(name)s - %(message)s")


def print_diagnostics(model: CompiledModel) -> None:
    """Print resolution warnings collected during compilation."""
    if not model.diagnostics:
        return
    prefix = typer.style("Warning: ", fg=typer.colors.YELLOW, bold=True)
    for warning in model.diagnostics:
        typer.echo(f"{prefix}{warning}", err=True)
