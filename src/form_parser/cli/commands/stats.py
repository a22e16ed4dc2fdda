from __future__ import annotations

from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from form_parser.cli.utils import count_nodes, load_form_or_exit

console = Console()


def stats_command(
    definition: Path = typer.Argument(..., exists=True, readable=True),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable rich logging",
    ),
):
    """
    Show summary statistics for a form definition file.
    """
    _, tree = load_form_or_exit(definition, verbose=verbose)
    counts = count_nodes(tree)

    table = Table(title=f"Form '{tree.root.get('name', definition.stem)}'")
    table.add_column("Item", style="bold")
    table.add_column("Count", justify="right")

    table.add_row("Groups", str(counts["groups"]))
    table.add_row("Questions", str(counts["questions"]))
    table.add_row("Sub-questions", str(counts["subquestions"]))
    table.add_row("Answers", str(counts["answers"]))
    table.add_row("Deferred validations", str(counts["deferred_validations"]))

    console.print(table)
