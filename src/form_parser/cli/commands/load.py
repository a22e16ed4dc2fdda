from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console

from form_parser.core.exceptions import FormParserError
from form_parser.core.pipeline import FormPipeline
from form_parser.store import FormStore

console = Console()


def load_command(
    code: str = typer.Argument(..., help="Form code (definition file name without .yml)"),
    forms_dir: Optional[Path] = typer.Option(
        None,
        "--forms-dir",
        help="Directory holding definition files (default from config)",
    ),
    store_dir: Optional[Path] = typer.Option(
        None,
        "--store-dir",
        help="Directory holding built forms (default from config)",
    ),
    force: bool = typer.Option(
        False,
        "--force",
        "-f",
        help="Rebuild even if the definition is unchanged",
    ),
):
    """
    Load a form by code, rebuilding it only if its definition changed.
    """
    store = FormStore(store_dir) if store_dir else None
    pipeline = FormPipeline(forms_dir=forms_dir, store=store)

    try:
        tree = pipeline.load(code, force=force)
    except FormParserError as exc:
        console.print(str(exc), style="red", markup=False, highlight=False, soft_wrap=True)
        raise typer.Exit(code=1)

    console.print(
        f"[green]{pipeline.last_load}[/green] form {code!r}: "
        f"{len(tree.registry)} nodes, {len(tree.registry.validations)} deferred validation(s)",
        soft_wrap=True,
    )
