from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Union

import yaml

from form_parser.core.exceptions import StructuralError
from form_parser.identity.fingerprint import fingerprint_bytes
from form_parser.logging import get_logger

log = get_logger(__name__)


@dataclass(frozen=True)
class LoadedDefinition:
    """
    A parsed definition file.

    Attributes:
        path: Absolute file path.
        document: Result of ``yaml.safe_load``.
        fingerprint: SHA1 of the file bytes, used for staleness checks.
    """
    path: Path
    document: Any
    fingerprint: str


def load_definition(path: Union[str, Path]) -> LoadedDefinition:
    """
    Read and parse a YAML definition file.

    Raises:
        FileNotFoundError: if ``path`` does not exist.
        StructuralError: if the file is empty or is not valid YAML.
    """
    file_path = Path(path)
    if not file_path.is_file():
        raise FileNotFoundError(f"Definition file not found: {file_path}")

    raw = file_path.read_bytes()
    try:
        document = yaml.safe_load(raw.decode("utf-8", errors="replace"))
    except yaml.YAMLError as exc:
        log.error(f"YAML parse failed for {file_path}: {exc}")
        raise StructuralError(f"{file_path} could not be parsed: {exc}") from exc

    if document is None or document == {} or document == []:
        raise StructuralError(f"{file_path} is blank nothing to do")

    log.debug(f"Loaded definition file: {file_path} ({len(raw)} bytes)")
    return LoadedDefinition(path=file_path, document=document, fingerprint=fingerprint_bytes(raw))
