from __future__ import annotations

from pathlib import Path

import typer
from rich.console import Console

from form_parser.cli.utils import count_nodes, load_form_or_exit

console = Console()


def validate_command(
    definition: Path = typer.Argument(..., exists=True, readable=True),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable rich logging",
    ),
):
    """
    Validate a form definition file and report every problem found.
    """
    _, tree = load_form_or_exit(definition, verbose=verbose)

    counts = count_nodes(tree)
    console.print(
        f"[green]OK[/green] {definition}: "
        f"{counts['groups']} groups, {counts['questions']} questions, "
        f"{counts['answers']} answers, {counts['subquestions']} sub-questions",
        soft_wrap=True,
    )
