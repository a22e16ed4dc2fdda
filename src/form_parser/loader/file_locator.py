"""
File Locator

Resolves form codes and user supplied paths to validated definition files.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Union

from form_parser.core.exceptions import FormNotFoundError
from form_parser.logging import get_logger
from form_parser.utils import resolve_project_path

log = get_logger(__name__)

DEFINITION_SUFFIX = ".yml"


def form_file_name(code: str, forms_dir: Union[str, Path]) -> Path:
    """Return ``<forms_dir>/<code>.yml``; relative dirs resolve from the project root."""
    return resolve_project_path(forms_dir) / f"{code}{DEFINITION_SUFFIX}"


def resolve_form_path(code: str, forms_dir: Union[str, Path]) -> Path:
    """
    Locate the definition file for a form code.

    Raises:
        FormNotFoundError: no such file.
    """
    path = form_file_name(code, forms_dir)
    log.debug(f"Resolving form {code!r}: {path}")

    if not path.is_file():
        log.error(f"Form configuration file not found: {path}")
        raise FormNotFoundError(f"Form configuration file {path} not found.")

    return path


def resolve_input_path(path: Union[str, Path]) -> Path:
    """
    Convert a user-provided path into an absolute validated file path.
    """
    abs_path = Path(os.path.abspath(path))
    log.debug(f"Resolving input file: {abs_path}")

    if not abs_path.exists():
        log.error(f"Input file does not exist: {abs_path}")
        raise FormNotFoundError(f"Input file not found: {abs_path}")

    if not abs_path.is_file():
        log.error(f"Input path is not a file: {abs_path}")
        raise ValueError(f"Input path is not a file: {abs_path}")

    return abs_path
