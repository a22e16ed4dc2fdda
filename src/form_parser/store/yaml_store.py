"""
yaml_store.py
File-backed persistence for validated form trees.

One YAML file per form code:

    code: testform
    fingerprint: <sha1 of the definition file>
    saved_at: '2026-01-01T00:00:00+00:00'
    form: { ...node_to_dict(root)... }

Definitions are read with ``yaml.safe_load``, so every field value in a built
tree (dates, integer mapping keys, ...) is something ``yaml.safe_dump`` can
write and ``yaml.safe_load`` reads back unchanged.

Only declared fields and children are written. The identifier registry and
deferred validation list are rebuilt by ``rehydrate`` after every load.
"""

from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml

from form_parser.core.exceptions import StructuralError
from form_parser.definition.nodes import FormRoot, node_from_dict, node_to_dict
from form_parser.logging import get_logger

log = get_logger(__name__)

STORE_SUFFIX = ".yml"


class FormStore:
    """Save, load and fingerprint-check built forms under ``store_dir``."""

    def __init__(self, store_dir: Union[str, Path]):
        self.store_dir = Path(store_dir)

    def path_for(self, code: str) -> Path:
        return self.store_dir / f"{code}{STORE_SUFFIX}"

    def _read(self, code: str) -> Optional[Dict[str, Any]]:
        path = self.path_for(code)
        if not path.is_file():
            return None

        with path.open("r", encoding="utf-8") as f:
            try:
                payload = yaml.safe_load(f)
            except yaml.YAMLError as exc:
                log.error("Stored form %s is corrupt: %s", path, exc)
                raise StructuralError(f"Stored form {path} is corrupt: {exc}") from exc

        if not isinstance(payload, dict):
            raise StructuralError(f"Stored form {path} is corrupt: expected a mapping")
        return payload

    def save(self, root: FormRoot, *, code: str, fingerprint: Optional[str] = None) -> Path:
        path = self.path_for(code)
        path.parent.mkdir(parents=True, exist_ok=True)

        payload = {
            "code": code,
            "fingerprint": fingerprint,
            "saved_at": datetime.now(timezone.utc).isoformat(),
            "form": node_to_dict(root),
        }

        with path.open("w", encoding="utf-8") as f:
            yaml.safe_dump(payload, f, sort_keys=False, allow_unicode=True)

        log.info("Saved form %r to %s (size=%d bytes)", code, path, path.stat().st_size)
        return path

    def load(self, code: str) -> Optional[FormRoot]:
        """
        Return the stored FormRoot for ``code``, or None if nothing is stored.

        The returned tree has no lookup structures yet; pass it to
        ``rehydrate`` before use.
        """
        payload = self._read(code)
        if payload is None:
            return None

        root = node_from_dict(payload.get("form") or {})
        if not isinstance(root, FormRoot):
            raise StructuralError(f"Stored form {self.path_for(code)} does not start with a form node")

        log.debug("Loaded stored form %r from %s", code, self.path_for(code))
        return root

    def fingerprint(self, code: str) -> Optional[str]:
        payload = self._read(code)
        if payload is None:
            return None
        return payload.get("fingerprint")

    def delete(self, code: str) -> bool:
        path = self.path_for(code)
        if not path.is_file():
            return False
        path.unlink()
        log.info("Deleted stored form %r (%s)", code, path)
        return True
