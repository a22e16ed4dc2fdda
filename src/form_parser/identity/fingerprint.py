# src/form_parser/identity/fingerprint.py
from __future__ import annotations

import hashlib
from pathlib import Path
from typing import Union


# -----------------------------
# Core deterministic hashing
# -----------------------------

def _stable_hash(data: bytes) -> str:
    # SHA1 is fine for change detection (not security).
    return hashlib.sha1(data).hexdigest()


def fingerprint_bytes(data: bytes) -> str:
    return _stable_hash(data)


def fingerprint_file(path: Union[str, Path]) -> str:
    """
    Fingerprint of a definition file's raw bytes.

    Stored alongside a built form so a later load can tell whether the file
    changed and the form must be rebuilt.
    """
    return fingerprint_bytes(Path(path).read_bytes())


__all__ = [
    "fingerprint_bytes",
    "fingerprint_file",
]
