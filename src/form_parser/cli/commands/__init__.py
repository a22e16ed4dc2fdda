"""
CLI command modules for form_parser.

Each command module defines a single Typer-compatible command function.
"""

from form_parser.cli.commands.export import export_command
from form_parser.cli.commands.load import load_command
from form_parser.cli.commands.stats import stats_command
from form_parser.cli.commands.validate import validate_command

__all__ = [
    "export_command",
    "load_command",
    "stats_command",
    "validate_command",
]
