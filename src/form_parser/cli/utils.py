from __future__ import annotations

import json
import time
from collections import Counter
from pathlib import Path
from typing import Any, Dict, Tuple

import typer
from rich.console import Console

from form_parser.core.exceptions import DefinitionValidationError, StructuralError
from form_parser.definition.builder import FormTree, build_form
from form_parser.definition.nodes import Answer, Question, node_to_dict
from form_parser.loader import LoadedDefinition, load_definition, resolve_input_path

console = Console()
err_console = Console(stderr=True)


def load_form_file(path: Path, *, verbose: bool = False) -> Tuple[LoadedDefinition, FormTree]:
    """
    Parse and validate one definition file.

    The form code is the file name without its suffix.
    """
    path = resolve_input_path(path)
    t0 = time.perf_counter()

    definition = load_definition(path)
    tree = build_form(definition.document, form_code=path.stem, source=str(path))

    elapsed = time.perf_counter() - t0

    if verbose:
        console.log(f"Validated {path} in {elapsed:.3f}s")

    return definition, tree


def load_form_or_exit(path: Path, *, verbose: bool = False) -> Tuple[LoadedDefinition, FormTree]:
    """
    ``load_form_file`` for commands: print the error report and exit 1 on a
    bad definition instead of raising.
    """
    try:
        return load_form_file(path, verbose=verbose)
    except DefinitionValidationError as exc:
        message = exc.report
    except StructuralError as exc:
        message = str(exc)

    err_console.print(message, style="red", markup=False, highlight=False, soft_wrap=True)
    raise typer.Exit(code=1)


def count_nodes(tree: FormTree) -> Dict[str, int]:
    """Node counts by kind; questions under an answer count as sub-questions."""
    counts: Counter = Counter()
    for node in tree.iter_nodes():
        counts[node.kind] += 1
        if isinstance(node, Answer):
            counts["subquestion"] += len(node.children)
    counts["question"] -= counts["subquestion"]
    counts["validation"] = len(tree.registry.validations)
    return {
        "groups": counts["group"],
        "questions": counts["question"],
        "subquestions": counts["subquestion"],
        "answers": counts["answer"],
        "deferred_validations": counts["validation"],
    }


def tree_to_dict(tree: FormTree, definition: LoadedDefinition) -> Dict[str, Any]:
    return {
        "code": tree.root.code,
        "source": str(definition.path),
        "fingerprint": definition.fingerprint,
        "counts": count_nodes(tree),
        "validations": [
            {"identifier": q.identifier, "hooks": q.validation_hooks}
            for q in tree.registry.validations
            if isinstance(q, Question)
        ],
        "form": node_to_dict(tree.root),
    }


def write_json(
    data: Dict[str, Any],
    *,
    out: Path | None,
    pretty: bool,
):
    """
    Write JSON to stdout or file.
    """
    if pretty:
        payload = json.dumps(data, indent=2, ensure_ascii=False, default=str)
    else:
        payload = json.dumps(data, separators=(",", ":"), ensure_ascii=False, default=str)

    if out:
        out.write_text(payload, encoding="utf-8")
    else:
        print(payload)
