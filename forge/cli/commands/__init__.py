"""
CLI command implementations.
"""

from forge.cli.commands.build import cmd_build
from forge.cli.commands.call import cmd_call
from forge.cli.commands.check import cmd_check
from forge.cli.commands.expand import cmd_expand
from forge.cli.commands.schema import cmd_schema

__all__ = ["cmd_build", "cmd_call", "cmd_check", "cmd_expand", "cmd_schema"]
