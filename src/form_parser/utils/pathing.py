# src/form_parser/utils/pathing.py

from __future__ import annotations

from pathlib import Path
from typing import Union

# <project_root>/src/form_parser/utils/pathing.py
_PROJECT_ROOT = Path(__file__).resolve().parents[3]


def project_root() -> Path:
    """Directory holding src/, tests/, config/ and forms/."""
    return _PROJECT_ROOT


def resolve_project_path(path: Union[str, Path]) -> Path:
    """
    Anchor a configured path at the project root.

    Absolute paths are returned unchanged, so config values and CLI options
    may point anywhere on disk.

    Examples:
        resolve_project_path("forms")           -> <root>/forms
        resolve_project_path("/srv/form_store") -> /srv/form_store
    """
    candidate = Path(path)
    if candidate.is_absolute():
        return candidate
    return project_root() / candidate


def tests_data_path(*parts: Union[str, Path]) -> Path:
    """Absolute path of a fixture under tests/data/, e.g. ``tests_data_path("blank.yml")``."""
    return resolve_project_path(Path("tests", "data", *parts))
