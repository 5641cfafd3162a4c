"""
Command context for shared setup across CLI commands.
"""

import traceback
from pathlib import Path

import typer

from forge.config import ForgeConfig, load_config

from .utils import setup_logging


class CommandContext:
    """
    Shared context for CLI commands.

    Sets up logging, loads project configuration on demand and reports
    errors consistently.
    """

    def __init__(self, verbose: bool = False, project_folder: str | None = None):
        """
        Initialize command context from parameters.

        Args:
            verbose: Enable verbose output
            project_folder: Optional path to a folder containing forge.toml
        """
        self.verbose = verbose
        setup_logging(self.verbose)

        self.project_path = Path(project_folder).resolve() if project_folder else None
        self.config: ForgeConfig | None = None

    def load_config(self, wrappers: bool = False, data_driver: bool = False) -> ForgeConfig:
        """Load forge.toml from the project folder; CLI target flags override the file."""
        self.config = load_config(self.project_path, wrappers=wrappers, data_driver=data_driver)
        return self.config

    def handle_error(self, error: Exception, show_traceback: bool | None = None) -> None:
        """
        Handle errors consistently across commands.

        Args:
            error: The exception that occurred
            show_traceback: Whether to show traceback (defaults to verbose mode)
        """
        if show_traceback is None:
            show_traceback = self.verbose

        error_prefix = typer.style("Error: ", fg=typer.colors.RED, bold=True)
        typer.echo(f"{error_prefix}{error}", err=True)
        for other in getattr(error, "errors", [error])[1:]:
            typer.echo(f"{error_prefix}{other}", err=True)
        if show_traceback:
            traceback.print_exc()
        raise typer.Exit(1)
