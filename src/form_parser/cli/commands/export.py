from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console

from form_parser.cli.utils import load_form_or_exit, tree_to_dict, write_json

console = Console(stderr=True)


def export_command(
    definition: Path = typer.Argument(..., exists=True, readable=True, help="Form definition (.yml)"),
    out: Optional[Path] = typer.Option(None, "--out", "-o", help="Output file (default: stdout)"),
    pretty: bool = typer.Option(False, "--pretty", help="Indent the JSON"),
    summary: bool = typer.Option(
        False,
        "--summary",
        help="Only counts and deferred validations, without the form tree",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log timing to stderr"),
):
    """
    Validate a definition and export the resulting form tree as JSON.
    """
    loaded, tree = load_form_or_exit(definition, verbose=verbose)

    data = tree_to_dict(tree, loaded)
    if summary:
        data.pop("form")

    write_json(data, out=out, pretty=pretty)

    if verbose:
        console.log(f"Exported form {tree.root.code!r} ({len(tree.registry)} nodes)")
