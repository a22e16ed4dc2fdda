# src/form_parser/loader/__init__.py

"""
Public interface for the definition source loader.

    from form_parser.loader import (
        LoadedDefinition,
        load_definition,
        resolve_form_path,
        resolve_input_path,
    )
"""

from __future__ import annotations

from .file_loader import LoadedDefinition, load_definition
from .file_locator import form_file_name, resolve_form_path, resolve_input_path

__all__ = [
    "LoadedDefinition",
    "form_file_name",
    "load_definition",
    "resolve_form_path",
    "resolve_input_path",
]
